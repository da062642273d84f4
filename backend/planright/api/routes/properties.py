"""Sample property endpoints."""

from fastapi import APIRouter

from planright.data.sample_properties import (
    SampleProperty,
    get_sample_property,
    list_sample_properties,
)
from planright.engine.zones import classify_zone
from planright.models.schemas.assessment import SamplePropertyResponse

router = APIRouter()


def _to_response(sample: SampleProperty) -> SamplePropertyResponse:
    group = classify_zone(sample.zone_text)
    return SamplePropertyResponse(
        **sample.to_dict(),
        zone_group=group.value if group else None,
    )


@router.get("", response_model=list[SamplePropertyResponse])
async def list_properties() -> list[SamplePropertyResponse]:
    return [_to_response(p) for p in list_sample_properties()]


@router.get("/{property_id}", response_model=SamplePropertyResponse)
async def get_property(property_id: str) -> SamplePropertyResponse:
    """Get one sample property; unknown ids return 404."""
    return _to_response(get_sample_property(property_id))
