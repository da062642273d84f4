"""Proposal input schemas.

Numeric fields arrive from forms as numbers or numeric strings. They are
coerced here; whether a value is present, finite and in range is decided
later by the validation layer so problems can be reported together.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from planright.engine.types import StructureType


def coerce_optional_number(v: Any) -> Optional[float]:
    """Coerce a number or numeric string; empty values become None."""
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("must be a number, not a boolean")
    if isinstance(v, (int, float)):
        try:
            return float(v)
        except OverflowError:
            raise ValueError("must be a number within range")
    if isinstance(v, str):
        text = v.strip()
        if not text:
            return None
        try:
            return float(text)
        except (ValueError, OverflowError):
            raise ValueError(f"must be a number, got {v!r}")
    raise ValueError(f"must be a number, got {type(v).__name__}")


def coerce_flag(v: Any) -> Any:
    return False if v is None else v


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class PropertyDetails(_Section):
    """The lot the structure is proposed on."""

    id: str = ""
    lot_size_m2: Optional[float] = None
    zone_text: str = ""
    frontage_m: Optional[float] = None
    corner_lot_bool: bool = False
    easement_bool: bool = False

    @field_validator("lot_size_m2", "frontage_m", mode="before")
    @classmethod
    def numeric(cls, v: Any) -> Optional[float]:
        return coerce_optional_number(v)

    @field_validator("id", "zone_text", mode="before")
    @classmethod
    def text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("corner_lot_bool", "easement_bool", mode="before")
    @classmethod
    def flags(cls, v: Any) -> Any:
        return coerce_flag(v)


class StructureDetails(_Section):
    type: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, StructureType):
            return v.value
        text = str(v).strip().lower()
        return text or None

    @property
    def kind(self) -> Optional[StructureType]:
        """The structure type, or None when unset or not recognised."""
        try:
            return StructureType(self.type)
        except ValueError:
            return None


class Dimensions(_Section):
    length_m: Optional[float] = None
    width_m: Optional[float] = None
    height_m: Optional[float] = None
    area_m2: Optional[float] = None

    @field_validator("length_m", "width_m", "height_m", "area_m2", mode="before")
    @classmethod
    def numeric(cls, v: Any) -> Optional[float]:
        return coerce_optional_number(v)


class Location(_Section):
    """Boundary distances.

    An absent front setback means the structure sits behind the building
    line. ``behind_building_line_bool`` is the legacy explicit flag; when it
    is False the front setback becomes required.
    """

    setback_front_m: Optional[float] = None
    setback_side_m: Optional[float] = None
    setback_rear_m: Optional[float] = None
    behind_building_line_bool: Optional[bool] = None

    @field_validator("setback_front_m", "setback_side_m", "setback_rear_m", mode="before")
    @classmethod
    def numeric(cls, v: Any) -> Optional[float]:
        return coerce_optional_number(v)

    @property
    def is_behind_building_line(self) -> bool:
        return self.setback_front_m is None


class Siting(_Section):
    on_easement_bool: bool = False
    over_sewer_bool: bool = False
    attached_to_dwelling_bool: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def flags(cls, v: Any) -> Any:
        return coerce_flag(v)


class SiteContext(_Section):
    heritage_item_bool: bool = False
    conservation_area_bool: bool = False
    flood_prone_bool: bool = False
    bushfire_bool: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def flags(cls, v: Any) -> Any:
        return coerce_flag(v)


class Proposal(_Section):
    """A proposed shed, patio or carport and the lot it sits on."""

    property: PropertyDetails = Field(default_factory=PropertyDetails)
    structure: StructureDetails = Field(default_factory=StructureDetails)
    dimensions: Dimensions = Field(default_factory=Dimensions)
    location: Location = Field(default_factory=Location)
    siting: Siting = Field(default_factory=Siting)
    context: SiteContext = Field(default_factory=SiteContext)

    @field_validator("property", "structure", "dimensions", "location", "siting", "context", mode="before")
    @classmethod
    def empty_section(cls, v: Any) -> Any:
        return {} if v is None else v
