"""Invariant assertions for the rules engine.

These raise ``EngineInvariantError`` instead of accumulating errors, for
callers that want to stop at the first problem. Bounds come from the same
``ThresholdConfig`` the validation layer uses, so both agree on what is
invalid.
"""

import math
from typing import Optional

from planright.engine.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from planright.engine.validation import STRUCTURE_TYPES, validate_proposal
from planright.engine.zones import is_recognized_zone
from planright.engine.proposal import Proposal

VALIDATION_RULE_ID = "VALIDATION"
GENERAL_CITATION = "2.6(1)/2.9(1)/2.10(1)"


class EngineInvariantError(Exception):
    """A broken engine invariant, tagged with the rule and clause it concerns."""

    def __init__(
        self,
        rule_id: str,
        citation: str,
        message: str,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.rule_id = rule_id
        self.citation = citation
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Optional[str]]:
        return {
            "rule_id": self.rule_id,
            "clause_ref": self.citation,
            "message": self.message,
            "field": self.field,
        }


def _fail(message: str, field: Optional[str] = None) -> None:
    raise EngineInvariantError(VALIDATION_RULE_ID, GENERAL_CITATION, message, field)


def assert_finite(value: float, field: str) -> None:
    if not math.isfinite(value):
        _fail(f"{field} must be a finite number: {value}", field)


def assert_non_negative(value: float, field: str) -> None:
    if value < 0:
        _fail(f"{field} cannot be negative: {value}", field)


def assert_positive(value: float, field: str) -> None:
    if value <= 0:
        _fail(f"{field} must be positive: {value}", field)


def assert_height_valid(
    height: float,
    rule_id: str = VALIDATION_RULE_ID,
    citation: str = GENERAL_CITATION,
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    assert_finite(height, "dimensions.height_m")
    assert_positive(height, "dimensions.height_m")
    if height > config.sane_height_max_m:
        raise EngineInvariantError(
            rule_id,
            citation,
            f"Height {height:g}m exceeds reasonable maximum of {config.sane_height_max_m:g}m",
            "dimensions.height_m",
        )


def assert_area_valid(
    area: float,
    rule_id: str = VALIDATION_RULE_ID,
    citation: str = GENERAL_CITATION,
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    assert_finite(area, "dimensions.area_m2")
    assert_positive(area, "dimensions.area_m2")
    if area > config.sane_area_max_m2:
        raise EngineInvariantError(
            rule_id,
            citation,
            f"Area {area:g}m² exceeds reasonable maximum of {config.sane_area_max_m2:g}m²",
            "dimensions.area_m2",
        )


def assert_setback_valid(
    setback: float,
    field: str,
    rule_id: str = VALIDATION_RULE_ID,
    citation: str = GENERAL_CITATION,
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    assert_finite(setback, field)
    assert_non_negative(setback, field)
    if setback > config.sane_setback_max_m:
        raise EngineInvariantError(
            rule_id,
            citation,
            f"{field} {setback:g}m exceeds reasonable maximum of {config.sane_setback_max_m:g}m",
            field,
        )


def assert_zone_valid(zone_text: str, config: ThresholdConfig = DEFAULT_THRESHOLDS) -> None:
    if not is_recognized_zone(zone_text, config):
        _fail(
            f"Unknown zone '{zone_text}'. Must be one of: {', '.join(config.recognized_zones)}",
            "property.zone_text",
        )


def assert_structure_type_valid(structure_type: Optional[str]) -> None:
    if structure_type not in STRUCTURE_TYPES:
        _fail(
            f"Invalid structure type: {structure_type}. Must be one of: {', '.join(STRUCTURE_TYPES)}",
            "structure.type",
        )


def assert_area_reconciles(
    length: float,
    width: float,
    area: float,
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    """Declared area must match length x width within the configured tolerance."""
    calculated = length * width
    difference = abs(area - calculated)
    if round(difference, 6) > config.area_tolerance_m2:
        raise EngineInvariantError(
            "G-AREA-1",
            "2.6(1)(b)/2.9(1)(b)/2.10(1)(b)",
            f"Area calculation mismatch: calculated={calculated:.2f}m² vs input={area:.2f}m² "
            f"(difference={difference:.2f}m² > tolerance={config.area_tolerance_m2:g}m²)",
            "dimensions.area_m2",
        )


def assert_behind_building_line(
    front_setback: Optional[float],
    min_front_setback: float,
    rule_id: str,
    citation: str,
) -> None:
    if front_setback is not None and front_setback < min_front_setback:
        raise EngineInvariantError(
            rule_id,
            citation,
            f"Structure not behind building line but front setback {front_setback:g}m "
            f"< required {min_front_setback:g}m",
            "location.setback_front_m",
        )


def assert_easement_clearance(
    easement_exists: bool,
    side_setback: float,
    rear_setback: float,
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    clearance = config.easement_clearance_m
    if easement_exists and min(side_setback, rear_setback) < clearance:
        raise EngineInvariantError(
            "G-EASEMENT-1",
            "2.6(1)(e)/2.9(1)(e)/2.10(1)(e)",
            f"Easement exists but structure within {clearance:g}m clearance: "
            f"side={side_setback:g}m, rear={rear_setback:g}m",
        )


def assert_heritage_compliance(heritage_item: bool, conservation_area: bool) -> None:
    if heritage_item or conservation_area:
        raise EngineInvariantError(
            "G-HERITAGE-1",
            "2.6(2)/2.9(2)/2.10(2)",
            f"Development not exempt: heritage_item={heritage_item}, "
            f"conservation_area={conservation_area}",
        )


def assert_not_on_easement(on_easement: bool) -> None:
    if on_easement:
        raise EngineInvariantError(
            "G-SITING-1",
            "2.6(1)(e)/2.9(1)(e)/2.10(1)(e)",
            "Structure cannot be located on easement",
            "siting.on_easement_bool",
        )


def assert_not_over_sewer(over_sewer: bool, rule_id: str, citation: str) -> None:
    if over_sewer:
        raise EngineInvariantError(
            rule_id, citation, "Structure cannot be located over sewer main", "siting.over_sewer_bool"
        )


def assert_shed_detached(attached_to_dwelling: bool) -> None:
    if attached_to_dwelling:
        raise EngineInvariantError(
            "S-ATTACH-1",
            "2.9(1)(f)",
            "Shed must be detached from dwelling",
            "siting.attached_to_dwelling_bool",
        )


def assert_area_within_limits(area: float, max_area: float, rule_id: str, citation: str) -> None:
    if area > max_area:
        raise EngineInvariantError(
            rule_id, citation, f"Area {area:.1f}m² exceeds maximum {max_area:g}m²", "dimensions.area_m2"
        )


def assert_height_within_limits(height: float, max_height: float, rule_id: str, citation: str) -> None:
    if height > max_height:
        raise EngineInvariantError(
            rule_id, citation, f"Height {height:g}m exceeds maximum {max_height:g}m", "dimensions.height_m"
        )


def assert_setback_meets_minimum(
    setback: float,
    min_setback: float,
    field: str,
    rule_id: str,
    citation: str,
) -> None:
    if setback < min_setback:
        raise EngineInvariantError(
            rule_id, citation, f"{field} {setback:g}m is less than minimum {min_setback:g}m", field
        )


def assert_proposal_valid(proposal: Proposal, config: ThresholdConfig = DEFAULT_THRESHOLDS) -> None:
    """Raise for the first problem the validation layer would report."""
    errors = validate_proposal(proposal, config)
    if errors:
        first = errors[0]
        _fail(first.message, first.field)

    # Same checks through the assertion helpers
    assert_structure_type_valid(proposal.structure.type)
    assert_zone_valid(proposal.property.zone_text, config)
    assert_height_valid(proposal.dimensions.height_m, config=config)
    assert_area_valid(proposal.dimensions.area_m2, config=config)
    assert_setback_valid(proposal.location.setback_side_m, "location.setback_side_m", config=config)
    assert_setback_valid(proposal.location.setback_rear_m, "location.setback_rear_m", config=config)
    if proposal.location.setback_front_m is not None:
        assert_setback_valid(proposal.location.setback_front_m, "location.setback_front_m", config=config)


def assert_killer_preconditions(proposal: Proposal, config: ThresholdConfig = DEFAULT_THRESHOLDS) -> None:
    """Raise if any killer rule would fail for ``proposal``."""
    assert_heritage_compliance(
        proposal.context.heritage_item_bool, proposal.context.conservation_area_bool
    )
    assert_not_on_easement(proposal.siting.on_easement_bool)
    assert_easement_clearance(
        proposal.property.easement_bool,
        proposal.location.setback_side_m,
        proposal.location.setback_rear_m,
        config,
    )

