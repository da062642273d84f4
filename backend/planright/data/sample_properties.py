"""Sample Albury lots for demos and tests."""

from dataclasses import dataclass, field
from typing import Any, Optional

from planright.core.exceptions import SamplePropertyNotFoundError

# Flag name -> proposal section and field it sets
FLAG_FIELDS = {
    "corner_lot": ("property", "corner_lot_bool"),
    "easement": ("property", "easement_bool"),
    "heritage_item": ("context", "heritage_item_bool"),
    "conservation_area": ("context", "conservation_area_bool"),
    "flood_prone": ("context", "flood_prone_bool"),
    "bushfire": ("context", "bushfire_bool"),
}


@dataclass(frozen=True)
class SampleProperty:
    id: str
    label: str
    lot_size_m2: float
    zone_text: str
    flags: tuple[str, ...] = field(default_factory=tuple)

    def _flag_section(self, section: str) -> dict[str, bool]:
        return {
            name: flag in self.flags
            for flag, (target, name) in FLAG_FIELDS.items()
            if target == section
        }

    def to_property_section(self) -> dict[str, Any]:
        """The proposal ``property`` section for this lot."""
        return {
            "id": self.id,
            "lot_size_m2": self.lot_size_m2,
            "zone_text": self.zone_text,
            **self._flag_section("property"),
        }

    def to_context_section(self) -> dict[str, bool]:
        """The proposal ``context`` section for this lot."""
        return self._flag_section("context")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "lot_size_m2": self.lot_size_m2,
            "zone_text": self.zone_text,
            "flags": list(self.flags),
        }


def _albury(number: str, street: str) -> str:
    return f"{number} {street}, Albury NSW 2640"


SAMPLE_PROPERTIES: tuple[SampleProperty, ...] = (
    SampleProperty("ALB-001", _albury("12", "Jarrah St"), 310, "R2"),
    SampleProperty("ALB-002", _albury("5", "Riverbend Ave"), 420, "R2", ("flood_prone",)),
    SampleProperty("ALB-003", _albury("9", "Regent Pl"), 780, "R1", ("bushfire",)),
    SampleProperty("ALB-004", _albury("23", "Heritage Way"), 450, "R2", ("heritage_item",)),
    SampleProperty("ALB-005", _albury("7", "Conservation Cres"), 600, "R1", ("conservation_area",)),
    SampleProperty("ALB-006", _albury("15", "Corner St"), 350, "R2", ("corner_lot",)),
    SampleProperty("ALB-007", _albury("31", "Easement Rd"), 400, "R2", ("easement",)),
    SampleProperty("ALB-008", _albury("42", "Rural View"), 1200, "RU1"),
    SampleProperty("ALB-009", _albury("18", "Mixed Zone Ave"), 500, "R3"),
    SampleProperty(
        "ALB-010", _albury("55", "Complex St"), 380, "R2", ("flood_prone", "bushfire", "easement")
    ),
)


def list_sample_properties() -> list[SampleProperty]:
    return list(SAMPLE_PROPERTIES)


def find_sample_property(property_id: str) -> Optional[SampleProperty]:
    key = property_id.strip().upper()
    return next((p for p in SAMPLE_PROPERTIES if p.id == key), None)


def get_sample_property(property_id: str) -> SampleProperty:
    """Get a sample property by id, case-insensitively.

    Raises:
        SamplePropertyNotFoundError: If no sample has that id.
    """
    sample = find_sample_property(property_id)
    if sample is None:
        raise SamplePropertyNotFoundError(property_id)
    return sample
