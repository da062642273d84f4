"""Input validation for proposals.

Two passes run before any rule: a completeness pass that short-circuits on
missing required fields, and a sanity pass that accumulates every numeric or
domain problem it finds. A non-empty result means the proposal cannot be
assessed.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from planright.engine.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from planright.engine.types import FieldError, StructureType
from planright.engine.zones import is_recognized_zone, normalize_zone
from planright.engine.proposal import Proposal

logger = logging.getLogger(__name__)

MISSING = "Missing required field"

STRUCTURE_TYPES = tuple(t.value for t in StructureType)


def build_proposal(raw: Union[Proposal, Mapping[str, Any]]) -> tuple[Optional[Proposal], list[FieldError]]:
    """Build a Proposal from raw input, reporting structural problems as field errors."""
    if isinstance(raw, Proposal):
        return raw, []
    if not isinstance(raw, Mapping):
        return None, [FieldError(field="proposal", message="Proposal must be an object")]

    try:
        return Proposal.model_validate(dict(raw)), []
    except ValidationError as e:
        errors = [
            FieldError(
                field=".".join(str(part) for part in err["loc"]) or "proposal",
                message=err["msg"],
            )
            for err in e.errors()
        ]
        return None, errors


def front_setback_required(proposal: Proposal) -> bool:
    return proposal.location.behind_building_line_bool is False


def check_completeness(proposal: Proposal) -> list[FieldError]:
    """Report required fields that are absent."""
    required: list[tuple[str, Any]] = [
        ("structure.type", proposal.structure.type),
        ("dimensions.height_m", proposal.dimensions.height_m),
        ("location.setback_side_m", proposal.location.setback_side_m),
        ("location.setback_rear_m", proposal.location.setback_rear_m),
    ]
    if front_setback_required(proposal):
        required.append(("location.setback_front_m", proposal.location.setback_front_m))

    return [FieldError(field=path, message=MISSING) for path, value in required if value is None]


def _number_errors(
    field: str,
    label: str,
    value: Optional[float],
    *,
    required: bool = False,
    positive: bool = False,
    upper: Optional[float] = None,
    unit: str = "m",
) -> list[FieldError]:
    if value is None:
        if required:
            return [FieldError(field=field, message=f"{label} must be greater than 0")]
        return []
    if not math.isfinite(value):
        return [FieldError(field=field, message=f"{label} must be a finite number")]
    if positive and value <= 0:
        return [FieldError(field=field, message=f"{label} must be greater than 0")]
    if value < 0:
        return [FieldError(field=field, message=f"{label} cannot be negative")]
    if upper is not None and value > upper:
        return [FieldError(field=field, message=f"{label} {value:g}{unit} exceeds reasonable maximum of {upper:g}{unit}")]
    return []


def check_sanity(proposal: Proposal, config: ThresholdConfig = DEFAULT_THRESHOLDS) -> list[FieldError]:
    """Report numeric and domain problems, accumulating all of them."""
    errors: list[FieldError] = []
    prop = proposal.property
    dims = proposal.dimensions
    loc = proposal.location

    if not is_recognized_zone(prop.zone_text, config):
        errors.append(
            FieldError(
                field="property.zone_text",
                message=(
                    f"Unknown zone '{normalize_zone(prop.zone_text, config) or prop.zone_text}'. "
                    f"Must be one of: {', '.join(config.recognized_zones)}"
                ),
            )
        )

    if proposal.structure.kind is None:
        errors.append(
            FieldError(
                field="structure.type",
                message=(
                    f"Invalid structure type: {proposal.structure.type}. "
                    f"Must be one of: {', '.join(STRUCTURE_TYPES)}"
                ),
            )
        )

    errors += _number_errors(
        "dimensions.height_m", "Height", dims.height_m,
        required=True, positive=True, upper=config.sane_height_max_m,
    )
    errors += _number_errors(
        "dimensions.area_m2", "Area", dims.area_m2,
        required=True, positive=True, upper=config.sane_area_max_m2, unit="m²",
    )
    errors += _number_errors("dimensions.length_m", "Length", dims.length_m)
    errors += _number_errors("dimensions.width_m", "Width", dims.width_m)

    errors += _number_errors(
        "location.setback_front_m", "Front setback", loc.setback_front_m,
        upper=config.sane_setback_max_m,
    )
    errors += _number_errors(
        "location.setback_side_m", "Side setback", loc.setback_side_m,
        upper=config.sane_setback_max_m,
    )
    errors += _number_errors(
        "location.setback_rear_m", "Rear setback", loc.setback_rear_m,
        upper=config.sane_setback_max_m,
    )

    errors += _number_errors(
        "property.lot_size_m2", "Lot size", prop.lot_size_m2,
        required=proposal.structure.kind == StructureType.CARPORT, positive=True,
    )
    errors += _number_errors("property.frontage_m", "Frontage", prop.frontage_m)

    return errors


def validate_proposal(proposal: Proposal, config: ThresholdConfig = DEFAULT_THRESHOLDS) -> list[FieldError]:
    """Run both validation passes; an empty list means the proposal is assessable."""
    missing = check_completeness(proposal)
    if missing:
        logger.debug(f"Proposal incomplete: {[e.field for e in missing]}")
        return missing

    errors = check_sanity(proposal, config)
    if errors:
        logger.debug(f"Proposal rejected: {[e.field for e in errors]}")
    return errors
