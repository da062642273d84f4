"""Threshold tables for SEPP (Exempt Development) 2008 Part 2.

All limits are grouped in a single frozen ``ThresholdConfig`` that is passed
into the registry and orchestrator. Nothing in the engine reads a threshold
from anywhere else.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from planright.engine.types import StructureType, ZoneGroup


class SetbackMinimums(BaseModel):
    """Minimum boundary distances for one zone group, in metres."""

    model_config = ConfigDict(frozen=True)

    front: float
    side: float
    rear: float


class AreaCaps(BaseModel):
    """Floor area caps for one structure type, in square metres.

    ``small_lot`` replaces both caps when the lot is at or below the
    large-lot threshold.
    """

    model_config = ConfigDict(frozen=True)

    residential: float
    rural: float
    small_lot: Optional[float] = None


class ThresholdConfig(BaseModel):
    """Immutable set of regulatory and sanity thresholds."""

    model_config = ConfigDict(frozen=True)

    height_max_m: float = 3.0

    residential_setbacks: SetbackMinimums = SetbackMinimums(front=0.9, side=0.9, rear=0.9)
    rural_setbacks: SetbackMinimums = SetbackMinimums(front=5.0, side=5.0, rear=5.0)

    shed_area: AreaCaps = AreaCaps(residential=20.0, rural=50.0)
    patio_area: AreaCaps = AreaCaps(residential=25.0, rural=25.0)
    carport_area: AreaCaps = AreaCaps(residential=25.0, rural=50.0, small_lot=20.0)
    large_lot_threshold_m2: float = 300.0

    carport_front_offset_m: float = 1.0
    roof_clearance_m: float = 0.5
    easement_clearance_m: float = 1.0
    area_tolerance_m2: float = 0.02

    # Sanity bounds applied before any rule runs
    sane_height_max_m: float = 10.0
    sane_area_max_m2: float = 200.0
    sane_setback_max_m: float = 50.0

    recognized_zones: tuple[str, ...] = (
        "R1", "R2", "R3", "R4", "R5",
        "RU1", "RU2", "RU3", "RU4", "RU5", "RU6",
    )
    rural_prefix: str = "RU"
    large_lot_residential_zones: tuple[str, ...] = ("R5",)
    zone_aliases: tuple[tuple[str, str], ...] = (
        ("RESIDENTIAL", "R2"),
        ("RURAL", "RU1"),
        ("FARMING", "RU1"),
    )

    def setbacks_for(self, group: ZoneGroup) -> SetbackMinimums:
        return self.rural_setbacks if group == ZoneGroup.RURAL else self.residential_setbacks

    def area_caps_for(self, structure: StructureType) -> AreaCaps:
        return {
            StructureType.SHED: self.shed_area,
            StructureType.PATIO: self.patio_area,
            StructureType.CARPORT: self.carport_area,
        }[structure]


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class StructureLimits:
    """Thresholds resolved for one structure type, zone group and lot."""

    height_max: float
    area_max: float
    front_min: float
    side_min: float
    rear_min: float
    roof_clearance: float
    easement_clearance: float
    area_tolerance: float


def resolve_area_cap(
    structure: StructureType,
    group: ZoneGroup,
    lot_size_m2: Optional[float],
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> float:
    caps = config.area_caps_for(structure)
    if (
        caps.small_lot is not None
        and lot_size_m2 is not None
        and lot_size_m2 <= config.large_lot_threshold_m2
    ):
        return caps.small_lot
    return caps.rural if group == ZoneGroup.RURAL else caps.residential


def limits_for(
    structure: StructureType,
    group: ZoneGroup,
    lot_size_m2: Optional[float],
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> StructureLimits:
    """Resolve every threshold a rule may need for one assessment."""
    setbacks = config.setbacks_for(group)

    front_min = setbacks.front
    if structure == StructureType.CARPORT:
        front_min = max(front_min, config.carport_front_offset_m)

    return StructureLimits(
        height_max=config.height_max_m,
        area_max=resolve_area_cap(structure, group, lot_size_m2, config),
        front_min=front_min,
        side_min=setbacks.side,
        rear_min=setbacks.rear,
        roof_clearance=config.roof_clearance_m,
        easement_clearance=config.easement_clearance_m,
        area_tolerance=config.area_tolerance_m2,
    )
