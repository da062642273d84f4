"""Integration tests for run_rules_assessment."""

import pytest

from planright.data.sample_properties import get_sample_property
from planright.engine.assessment import run_rules_assessment
from planright.engine.proposal import Proposal
from planright.engine.thresholds import ThresholdConfig
from planright.engine.types import Decision


class TestLiteralScenarios:
    def test_rural_shed_exempt(self, make_proposal):
        raw = make_proposal(
            "shed",
            property={"zone_text": "RU2", "lot_size_m2": 2000},
            dimensions={"length_m": 8, "width_m": 5, "area_m2": 40, "height_m": 2.8},
            location={"setback_front_m": 6, "setback_side_m": 6, "setback_rear_m": 6},
        )
        result = run_rules_assessment(raw)
        assert result.decision == Decision.LIKELY_EXEMPT
        assert result.errors == ()
        assert all(c.passed for c in result.checks)

    def test_rural_shed_without_lot_size_exempt(self, make_proposal):
        raw = make_proposal(
            "shed",
            property={"zone_text": "RU2", "lot_size_m2": None},
            dimensions={"length_m": 8, "width_m": 5, "area_m2": 40, "height_m": 2.8},
            location={"setback_front_m": 6, "setback_side_m": 6, "setback_rear_m": 6},
        )
        result = run_rules_assessment(raw)
        assert result.decision == Decision.LIKELY_EXEMPT
        assert result.errors == ()
        assert len(result.checks) == 15

    def test_tall_shed_not_exempt(self, make_proposal, find_check):
        raw = make_proposal(
            "shed",
            dimensions={"length_m": 6, "width_m": 4, "area_m2": 24, "height_m": 3.01},
        )
        result = run_rules_assessment(raw)
        assert result.decision == Decision.LIKELY_NOT_EXEMPT
        height = find_check(result, "S-HEIGHT-1")
        assert height.passed is False
        assert "3.01" in height.note and "3" in height.note

    def test_shed_too_close_to_side(self, make_proposal, find_check):
        raw = make_proposal("shed", property={"zone_text": "R3"}, location={"setback_side_m": 0.85})
        result = run_rules_assessment(raw)
        assert result.decision == Decision.LIKELY_NOT_EXEMPT
        side = find_check(result, "S-SIDE-1")
        assert side.passed is False
        assert "0.85" in side.note and "0.9" in side.note

    def test_heritage_item(self, make_proposal, find_check):
        result = run_rules_assessment(make_proposal(context={"heritage_item_bool": True}))
        assert result.decision == Decision.LIKELY_NOT_EXEMPT
        heritage = find_check(result, "G-HERITAGE-1")
        assert heritage.passed is False
        assert heritage.killer is True

    def test_invalid_zone(self, make_proposal):
        result = run_rules_assessment(make_proposal(property={"zone_text": "INVALID_ZONE"}))
        assert result.decision == Decision.CANNOT_ASSESS
        assert result.checks == ()
        assert [e.field for e in result.errors] == ["property.zone_text"]


class TestBoundaries:
    @pytest.mark.parametrize("structure", ["shed", "patio", "carport"])
    def test_height_at_limit_exempt(self, make_proposal, structure):
        result = run_rules_assessment(make_proposal(structure, dimensions={"height_m": 3.0}))
        assert result.decision == Decision.LIKELY_EXEMPT

    def test_setbacks_at_minimum_exempt(self, make_proposal):
        raw = make_proposal(location={"setback_side_m": 0.9, "setback_rear_m": 0.9, "setback_front_m": 0.9})
        assert run_rules_assessment(raw).decision == Decision.LIKELY_EXEMPT

    def test_shed_area_at_cap(self, make_proposal):
        at_cap = make_proposal(dimensions={"length_m": 5, "width_m": 4, "area_m2": 20})
        assert run_rules_assessment(at_cap).decision == Decision.LIKELY_EXEMPT

        over = make_proposal(dimensions={"length_m": None, "width_m": None, "area_m2": 20.01})
        assert run_rules_assessment(over).decision == Decision.LIKELY_NOT_EXEMPT

    def test_rural_front_setback(self, make_proposal):
        raw = make_proposal(
            property={"zone_text": "RU1"},
            location={"setback_front_m": 5.0, "setback_side_m": 5.0, "setback_rear_m": 5.0},
        )
        assert run_rules_assessment(raw).decision == Decision.LIKELY_EXEMPT

    def test_rural_thresholds_for_large_lot_residential(self, make_proposal, find_check):
        raw = make_proposal(property={"zone_text": "R5"})
        result = run_rules_assessment(raw)
        assert find_check(result, "S-SIDE-1").passed is False


class TestResultShape:
    @pytest.mark.parametrize("structure,count", [("shed", 15), ("patio", 12), ("carport", 13)])
    def test_check_counts(self, make_proposal, structure, count):
        result = run_rules_assessment(make_proposal(structure))
        assert len(result.checks) == count
        assert len({c.rule_id for c in result.checks}) == count

    def test_no_early_exit(self, make_proposal):
        raw = make_proposal(
            context={"heritage_item_bool": True},
            dimensions={"height_m": 3.5},
        )
        result = run_rules_assessment(raw)
        assert len(result.checks) == 15
        assert {c.rule_id for c in result.failed_checks} == {"G-HERITAGE-1", "S-HEIGHT-1"}

    def test_deterministic(self, make_proposal):
        raw = make_proposal("carport", location={"setback_front_m": 0.5})
        assert run_rules_assessment(raw).to_dict() == run_rules_assessment(raw).to_dict()

    @pytest.mark.parametrize("overrides", [
        {},
        {"structure": None},
        {"property": {"zone_text": "B4"}},
        {"dimensions": {"height_m": -2}},
        {"dimensions": {"height_m": 3.2}},
        {"siting": {"on_easement_bool": True}},
    ])
    def test_errors_and_checks_exclusive(self, make_proposal, overrides):
        result = run_rules_assessment(make_proposal(**overrides))
        if result.decision == Decision.CANNOT_ASSESS:
            assert result.errors and not result.checks
        else:
            assert result.checks and not result.errors

    def test_accepts_proposal_model(self, make_proposal):
        proposal = Proposal.model_validate(make_proposal("patio"))
        assert run_rules_assessment(proposal).decision == Decision.LIKELY_EXEMPT

    def test_non_object_input(self):
        result = run_rules_assessment("shed")
        assert result.decision == Decision.CANNOT_ASSESS
        assert result.errors[0].field == "proposal"

    def test_serialisation(self, make_proposal):
        data = run_rules_assessment(make_proposal()).to_dict()
        assert data["decision"] == "Likely Exempt"
        assert set(data["checks"][0]) == {"rule_id", "clause_ref", "pass", "note", "killer"}
        assert data["errors"] == []


class TestInputHandling:
    def test_out_of_range_height_cannot_assess(self, make_proposal):
        result = run_rules_assessment(make_proposal(dimensions={"height_m": 10**400}))
        assert result.decision == Decision.CANNOT_ASSESS
        assert [e.field for e in result.errors] == ["dimensions.height_m"]

    def test_carport_without_lot_size_cannot_assess(self, make_proposal):
        result = run_rules_assessment(make_proposal("carport", property={"lot_size_m2": None}))
        assert result.decision == Decision.CANNOT_ASSESS
        assert [e.field for e in result.errors] == ["property.lot_size_m2"]

    @pytest.mark.parametrize("structure", ["shed", "patio"])
    def test_lot_size_optional_outside_carports(self, make_proposal, structure):
        result = run_rules_assessment(make_proposal(structure, property={"lot_size_m2": None}))
        assert result.decision == Decision.LIKELY_EXEMPT


class TestKillerRules:
    def test_on_easement(self, make_proposal):
        result = run_rules_assessment(make_proposal(siting={"on_easement_bool": True}))
        assert result.decision == Decision.LIKELY_NOT_EXEMPT
        assert [c.rule_id for c in result.killer_failures] == ["G-SITING-1"]

    def test_easement_clearance(self, make_proposal):
        raw = make_proposal(property={"easement_bool": True}, location={"setback_rear_m": 0.95})
        result = run_rules_assessment(raw)
        assert [c.rule_id for c in result.killer_failures] == ["G-EASEMENT-1"]

    def test_non_killer_failure_still_not_exempt(self, make_proposal):
        result = run_rules_assessment(make_proposal(siting={"over_sewer_bool": True}))
        assert result.decision == Decision.LIKELY_NOT_EXEMPT
        assert result.killer_failures == []


class TestSiteContext:
    def test_flood_and_bushfire_still_exempt(self, make_proposal):
        raw = make_proposal(context={"flood_prone_bool": True, "bushfire_bool": True})
        assert run_rules_assessment(raw).decision == Decision.LIKELY_EXEMPT

    def test_conservation_area(self, make_proposal, find_check):
        result = run_rules_assessment(
            make_proposal(context={"conservation_area_bool": True}, location={"setback_front_m": 3})
        )
        assert find_check(result, "G-HERITAGE-1").passed is False
        assert find_check(result, "X-CONSERVATION-1").passed is False


class TestSampleProperties:
    def _on_sample(self, make_proposal, property_id, structure="shed", **sections):
        sample = get_sample_property(property_id)
        return make_proposal(
            structure,
            property=sample.to_property_section(),
            context=sample.to_context_section(),
            **sections,
        )

    def test_heritage_lot(self, make_proposal):
        result = run_rules_assessment(self._on_sample(make_proposal, "ALB-004"))
        assert result.decision == Decision.LIKELY_NOT_EXEMPT

    def test_complex_lot_with_clearance(self, make_proposal):
        result = run_rules_assessment(self._on_sample(make_proposal, "ALB-010"))
        assert result.decision == Decision.LIKELY_EXEMPT

    def test_rural_lot_needs_rural_setbacks(self, make_proposal, find_check):
        result = run_rules_assessment(self._on_sample(make_proposal, "ALB-008"))
        assert find_check(result, "S-SIDE-1").passed is False
        assert "5m" in find_check(result, "S-SIDE-1").note

    def test_small_lot_carport(self, make_proposal, find_check):
        raw = self._on_sample(
            make_proposal,
            "ALB-001",
            "carport",
            dimensions={"length_m": 5, "width_m": 4.4, "area_m2": 22},
        )
        result = run_rules_assessment(raw)
        assert find_check(result, "C-AREA-1").passed is True


class TestCustomConfig:
    def test_stricter_height(self, make_proposal, find_check):
        result = run_rules_assessment(
            make_proposal(dimensions={"height_m": 2.8}),
            ThresholdConfig(height_max_m=2.5),
        )
        assert result.decision == Decision.LIKELY_NOT_EXEMPT
        assert find_check(result, "S-HEIGHT-1").passed is False
