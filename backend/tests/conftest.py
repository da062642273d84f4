"""Pytest fixtures for rules engine testing."""

from typing import Any, Callable, Optional

import pytest

from planright.engine.rules import RuleRegistry, get_rule_registry
from planright.engine.types import RuleCheck, RuleResult


def _base_sections(structure: Optional[str]) -> dict[str, dict[str, Any]]:
    return {
        "property": {
            "id": "TEST-001",
            "lot_size_m2": 450,
            "zone_text": "R2",
            "corner_lot_bool": False,
            "easement_bool": False,
        },
        "structure": {"type": structure},
        "dimensions": {"length_m": 4, "width_m": 4, "height_m": 2.4, "area_m2": 16},
        "location": {"setback_side_m": 1.0, "setback_rear_m": 1.0},
        "siting": {
            "on_easement_bool": False,
            "over_sewer_bool": False,
            "attached_to_dwelling_bool": False,
        },
        "context": {
            "heritage_item_bool": False,
            "conservation_area_bool": False,
            "flood_prone_bool": False,
            "bushfire_bool": False,
        },
    }


@pytest.fixture
def make_proposal() -> Callable[..., dict[str, Any]]:
    """Factory for a raw proposal that passes every rule unless overridden.

    A 4 x 4 m, 2.4 m high structure behind the building line on a 450 m² R2
    lot, 1 m from the side and rear boundaries. Section keyword arguments are
    merged over the defaults.
    """

    def _make(structure: Optional[str] = "shed", **sections: dict[str, Any]) -> dict[str, Any]:
        proposal = _base_sections(structure)
        for name, values in sections.items():
            proposal[name] = {**proposal.get(name, {}), **values}
        return proposal

    return _make


@pytest.fixture
def registry() -> RuleRegistry:
    return get_rule_registry()


@pytest.fixture
def find_check() -> Callable[[RuleResult, str], RuleCheck]:
    """Look up one check in a result by rule id."""

    def _find(result: RuleResult, rule_id: str) -> RuleCheck:
        matches = [c for c in result.checks if c.rule_id == rule_id]
        assert matches, f"{rule_id} not evaluated; got {[c.rule_id for c in result.checks]}"
        return matches[0]

    return _find
