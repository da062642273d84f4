"""Rule registry for SEPP (Exempt Development) 2008 Part 2.

Subdivision 6 covers patios, 9 sheds and 10 carports. Every rule is a pure
predicate over a validated proposal plus a note generator quoting the values
that were compared.
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Optional, Union

from planright.engine.thresholds import (
    DEFAULT_THRESHOLDS,
    StructureLimits,
    ThresholdConfig,
    limits_for,
)
from planright.engine.types import RuleCategory, RuleCheck, StructureType, ZoneGroup
from planright.engine.zones import classify_zone
from planright.engine.proposal import Proposal

ANY_STRUCTURE = "*"

GENERAL_EXCLUSION_CITATION = "2.6(2)/2.9(2)/2.10(2)"
GENERAL_SITING_CITATION = "2.6(1)(e)/2.9(1)(e)/2.10(1)(e)"
GENERAL_AREA_CITATION = "2.6(1)(b)/2.9(1)(b)/2.10(1)(b)"
GENERAL_OVERLAY_CITATION = "2.6(3)/2.9(3)/2.10(3)"

SUBDIVISIONS = {
    StructureType.PATIO: "2.6",
    StructureType.SHED: "2.9",
    StructureType.CARPORT: "2.10",
}

PREFIXES = {
    StructureType.SHED: "S",
    StructureType.PATIO: "P",
    StructureType.CARPORT: "C",
}


@dataclass(frozen=True)
class RuleContext:
    """Per-assessment values shared by every rule.

    The zone is classified once and every size or setback rule reads its
    thresholds from ``limits``.
    """

    structure: StructureType
    zone_group: ZoneGroup
    limits: StructureLimits


Check = Callable[[Proposal, RuleContext], bool]
Explain = Callable[[Proposal, RuleContext, bool], str]


@dataclass(frozen=True)
class RuleDefinition:
    """A single exempt development rule that can be evaluated."""

    rule_id: str
    citation: str
    description: str
    killer: bool
    category: RuleCategory
    check: Check
    explain: Explain
    applies_to: Union[StructureType, str] = ANY_STRUCTURE

    def applies(self, structure: StructureType) -> bool:
        return self.applies_to == ANY_STRUCTURE or self.applies_to == structure

    def passes(self, proposal: Proposal, ctx: RuleContext) -> bool:
        """Evaluate the rule; rules for another structure type pass vacuously."""
        if not self.applies(ctx.structure):
            return True
        return self.check(proposal, ctx)

    def evaluate(self, proposal: Proposal, ctx: RuleContext) -> RuleCheck:
        passed = self.passes(proposal, ctx)
        return RuleCheck(
            rule_id=self.rule_id,
            citation=self.citation,
            passed=passed,
            note=self.explain(proposal, ctx, passed),
            killer=self.killer,
        )

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "citation": self.citation,
            "description": self.description,
            "killer": self.killer,
            "category": self.category.value,
            "applies_to": (
                self.applies_to.value
                if isinstance(self.applies_to, StructureType)
                else self.applies_to
            ),
        }


def _m(value: float) -> str:
    return f"{value:g}"


def _yn(flag: bool) -> str:
    return "yes" if flag else "no"


def _le(passed: bool) -> str:
    return "≤" if passed else ">"


def _ge(passed: bool) -> str:
    return "≥" if passed else "<"


class RuleRegistry:
    """Ordered, read-only collection of every exempt development rule."""

    def __init__(self, config: ThresholdConfig = DEFAULT_THRESHOLDS):
        self.config = config
        self._rules: dict[str, RuleDefinition] = {}
        self._register_all_rules()
        self.rules = MappingProxyType(self._rules)

    def _add(self, rule: RuleDefinition) -> None:
        if rule.rule_id in self._rules:
            raise ValueError(f"Duplicate rule id: {rule.rule_id}")
        self._rules[rule.rule_id] = rule

    def _register_all_rules(self):
        """Register general, structure-specific and context rules."""
        self._register_general_rules()
        for structure in (StructureType.SHED, StructureType.PATIO, StructureType.CARPORT):
            self._register_structure_rules(structure)
        self._register_shed_only_rules()
        self._register_carport_only_rules()
        self._register_context_rules()

    def _register_general_rules(self):
        """Exclusions that apply to every structure."""

        self._add(RuleDefinition(
            rule_id="G-HERITAGE-1",
            citation=GENERAL_EXCLUSION_CITATION,
            description="No heritage/conservation restrictions",
            killer=True,
            category=RuleCategory.GENERAL,
            check=lambda p, ctx: not (p.context.heritage_item_bool or p.context.conservation_area_bool),
            explain=lambda p, ctx, passed: (
                f"Heritage item = {_yn(p.context.heritage_item_bool)}, "
                f"conservation area = {_yn(p.context.conservation_area_bool)}"
                + ("" if passed else " (exemption unavailable)")
            ),
        ))

        self._add(RuleDefinition(
            rule_id="G-SITING-1",
            citation=GENERAL_SITING_CITATION,
            description="Not on easement",
            killer=True,
            category=RuleCategory.GENERAL,
            check=lambda p, ctx: not p.siting.on_easement_bool,
            explain=lambda p, ctx, passed: f"On easement = {_yn(p.siting.on_easement_bool)}",
        ))

        self._add(RuleDefinition(
            rule_id="G-EASEMENT-1",
            citation=GENERAL_SITING_CITATION,
            description="Clearance from a registered easement",
            killer=True,
            category=RuleCategory.GENERAL,
            check=self._check_easement_clearance,
            explain=self._explain_easement_clearance,
        ))

        self._add(RuleDefinition(
            rule_id="G-AREA-1",
            citation=GENERAL_AREA_CITATION,
            description="Area tolerance check",
            killer=False,
            category=RuleCategory.GENERAL,
            check=self._check_area_reconciles,
            explain=self._explain_area_reconciles,
        ))

    def _register_structure_rules(self, structure: StructureType):
        """Register the constraints every structure type has its own clause for."""
        prefix = PREFIXES[structure]
        sub = SUBDIVISIONS[structure]

        self._add(RuleDefinition(
            rule_id=f"{prefix}-HEIGHT-1",
            citation=f"{sub}(1)(a)",
            description=f"Maximum height {_m(self.config.height_max_m)}m",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=structure,
            check=lambda p, ctx: p.dimensions.height_m <= ctx.limits.height_max,
            explain=lambda p, ctx, passed: (
                f"Height {_m(p.dimensions.height_m)}m {_le(passed)} {_m(ctx.limits.height_max)}m (maximum)"
            ),
        ))

        self._add(RuleDefinition(
            rule_id=f"{prefix}-AREA-1",
            citation=f"{sub}(1)(b)",
            description=f"Maximum floor area for a {structure.value}",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=structure,
            check=lambda p, ctx: p.dimensions.area_m2 <= ctx.limits.area_max,
            explain=self._explain_area_cap,
        ))

        self._add(RuleDefinition(
            rule_id=f"{prefix}-FRONT-1",
            citation=f"{sub}(1)(c)",
            description="Behind the building line, or front setback ≥ minimum",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=structure,
            check=self._check_building_line,
            explain=self._explain_building_line,
        ))

        self._add(RuleDefinition(
            rule_id=f"{prefix}-SIDE-1",
            citation=f"{sub}(1)(d)",
            description="Minimum side setback",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=structure,
            check=lambda p, ctx: p.location.setback_side_m >= ctx.limits.side_min,
            explain=lambda p, ctx, passed: (
                f"Side setback {_m(p.location.setback_side_m)}m {_ge(passed)} "
                f"{_m(ctx.limits.side_min)}m (minimum for {ctx.zone_group.value} zones)"
            ),
        ))

        self._add(RuleDefinition(
            rule_id=f"{prefix}-REAR-1",
            citation=f"{sub}(1)(d)",
            description="Minimum rear setback",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=structure,
            check=lambda p, ctx: p.location.setback_rear_m >= ctx.limits.rear_min,
            explain=lambda p, ctx, passed: (
                f"Rear setback {_m(p.location.setback_rear_m)}m {_ge(passed)} "
                f"{_m(ctx.limits.rear_min)}m (minimum for {ctx.zone_group.value} zones)"
            ),
        ))

        self._add(RuleDefinition(
            rule_id=f"{prefix}-SEWER-1",
            citation=f"{sub}(1)(e)",
            description="Not over sewer",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=structure,
            check=lambda p, ctx: not p.siting.over_sewer_bool,
            explain=lambda p, ctx, passed: f"Over sewer = {_yn(p.siting.over_sewer_bool)}",
        ))

    def _register_shed_only_rules(self):
        """Shed clauses with no patio or carport counterpart."""

        self._add(RuleDefinition(
            rule_id="S-ATTACH-1",
            citation="2.9(1)(f)",
            description="Detached from dwelling",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=StructureType.SHED,
            check=lambda p, ctx: not p.siting.attached_to_dwelling_bool,
            explain=lambda p, ctx, passed: (
                f"Attached to dwelling = {_yn(p.siting.attached_to_dwelling_bool)} "
                f"(sheds must be detached)"
            ),
        ))

        # The proposal does not capture container use or existing shed count.
        self._add(RuleDefinition(
            rule_id="S-SHIPPING-1",
            citation="2.9(1)(g)",
            description="Not a shipping container",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=StructureType.SHED,
            check=lambda p, ctx: True,
            explain=lambda p, ctx, passed: "Shipping container use not captured; not assessed",
        ))

        self._add(RuleDefinition(
            rule_id="S-COUNT-1",
            citation="2.9(1)(h)",
            description="Maximum number of sheds per lot",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=StructureType.SHED,
            check=lambda p, ctx: True,
            explain=lambda p, ctx, passed: "Number of existing sheds not captured; not assessed",
        ))

    def _register_carport_only_rules(self):
        self._add(RuleDefinition(
            rule_id="C-ROOF-1",
            citation="2.10(1)(d)",
            description=f"Roof at least {_m(self.config.roof_clearance_m)}m from any boundary",
            killer=False,
            category=RuleCategory.STRUCTURE,
            applies_to=StructureType.CARPORT,
            check=lambda p, ctx: p.location.setback_side_m >= ctx.limits.roof_clearance,
            explain=lambda p, ctx, passed: (
                f"Roof clearance {_m(p.location.setback_side_m)}m {_ge(passed)} "
                f"{_m(ctx.limits.roof_clearance)}m (side setback used as roof edge distance)"
            ),
        ))

    def _register_context_rules(self):
        """Overlay rules driven by planning attributes of the lot."""

        self._add(RuleDefinition(
            rule_id="X-CONSERVATION-1",
            citation=GENERAL_EXCLUSION_CITATION,
            description="Rear-yard siting in a conservation area",
            killer=False,
            category=RuleCategory.CONTEXT,
            check=self._check_conservation_siting,
            explain=self._explain_conservation_siting,
        ))

        # Needs construction material and distance to dwelling, which the
        # proposal does not capture.
        self._add(RuleDefinition(
            rule_id="X-BUSHFIRE-1",
            citation=GENERAL_OVERLAY_CITATION,
            description="Non-combustible construction on bushfire prone land",
            killer=False,
            category=RuleCategory.CONTEXT,
            check=lambda p, ctx: True,
            explain=lambda p, ctx, passed: (
                "Bushfire prone: non-combustible construction not captured; not assessed"
                if p.context.bushfire_bool
                else "Bushfire prone = no"
            ),
        ))

    def _check_easement_clearance(self, p: Proposal, ctx: RuleContext) -> bool:
        if not p.property.easement_bool:
            return True
        nearest = min(p.location.setback_side_m, p.location.setback_rear_m)
        return nearest >= ctx.limits.easement_clearance

    def _explain_easement_clearance(self, p: Proposal, ctx: RuleContext, passed: bool) -> str:
        if not p.property.easement_bool:
            return "No easement on the lot"
        return (
            f"Easement on lot: side {_m(p.location.setback_side_m)}m, "
            f"rear {_m(p.location.setback_rear_m)}m {_ge(passed)} "
            f"{_m(ctx.limits.easement_clearance)}m clearance"
        )

    @staticmethod
    def _declared_footprint(p: Proposal) -> Optional[float]:
        length = p.dimensions.length_m or 0
        width = p.dimensions.width_m or 0
        if length == 0 or width == 0:
            return None
        return length * width

    def _check_area_reconciles(self, p: Proposal, ctx: RuleContext) -> bool:
        calculated = self._declared_footprint(p)
        if calculated is None:
            return True
        return round(abs(p.dimensions.area_m2 - calculated), 6) <= ctx.limits.area_tolerance

    def _explain_area_reconciles(self, p: Proposal, ctx: RuleContext, passed: bool) -> str:
        calculated = self._declared_footprint(p)
        if calculated is None:
            return "Length or width not given; area tolerance not checked"
        return (
            f"Area tolerance: calc={calculated:.2f}m² vs input={p.dimensions.area_m2:.2f}m² "
            f"({'within' if passed else 'outside'} {_m(ctx.limits.area_tolerance)}m²)"
        )

    def _explain_area_cap(self, p: Proposal, ctx: RuleContext, passed: bool) -> str:
        caps = self.config.area_caps_for(ctx.structure)
        small_lot = (
            caps.small_lot is not None
            and p.property.lot_size_m2 is not None
            and p.property.lot_size_m2 <= self.config.large_lot_threshold_m2
        )
        basis = (
            f"lot ≤ {_m(self.config.large_lot_threshold_m2)}m²"
            if small_lot
            else f"{ctx.zone_group.value} zones"
        )
        return (
            f"Area {_m(p.dimensions.area_m2)}m² {_le(passed)} {_m(ctx.limits.area_max)}m² "
            f"(maximum for a {ctx.structure.value}, {basis})"
        )

    def _check_building_line(self, p: Proposal, ctx: RuleContext) -> bool:
        if p.location.is_behind_building_line:
            return True
        return p.location.setback_front_m >= ctx.limits.front_min

    def _explain_building_line(self, p: Proposal, ctx: RuleContext, passed: bool) -> str:
        if p.location.is_behind_building_line:
            return "No front setback given; structure is behind the building line"
        return (
            f"Front setback {_m(p.location.setback_front_m)}m {_ge(passed)} "
            f"{_m(ctx.limits.front_min)}m (minimum forward of the building line)"
        )

    def _check_conservation_siting(self, p: Proposal, ctx: RuleContext) -> bool:
        if not p.context.conservation_area_bool:
            return True
        return (
            p.location.is_behind_building_line
            and p.location.setback_rear_m >= ctx.limits.rear_min
        )

    def _explain_conservation_siting(self, p: Proposal, ctx: RuleContext, passed: bool) -> str:
        if not p.context.conservation_area_bool:
            return "Conservation area = no"
        front = (
            "behind building line"
            if p.location.is_behind_building_line
            else f"front setback {_m(p.location.setback_front_m)}m"
        )
        return (
            f"Conservation area: rear-yard siting {'pass' if passed else 'fail'} "
            f"({front}, rear setback {_m(p.location.setback_rear_m)}m, "
            f"minimum {_m(ctx.limits.rear_min)}m)"
        )

    def build_context(self, proposal: Proposal) -> RuleContext:
        """Classify the zone once and resolve thresholds for a validated proposal."""
        structure = proposal.structure.kind
        zone_group = classify_zone(proposal.property.zone_text, self.config)
        if structure is None or zone_group is None:
            raise ValueError("build_context requires a validated proposal")

        return RuleContext(
            structure=structure,
            zone_group=zone_group,
            limits=limits_for(structure, zone_group, proposal.property.lot_size_m2, self.config),
        )

    def rules_for(self, structure: StructureType) -> list[RuleDefinition]:
        """General rules, then the structure's own rules, then context rules."""
        ordered = []
        for category in (RuleCategory.GENERAL, RuleCategory.STRUCTURE, RuleCategory.CONTEXT):
            ordered.extend(
                rule
                for rule in self.rules.values()
                if rule.category == category and rule.applies(structure)
            )
        return ordered

    def rule_ids_for(self, structure: StructureType) -> list[str]:
        return [rule.rule_id for rule in self.rules_for(structure)]

    def evaluate(self, proposal: Proposal, ctx: RuleContext) -> list[RuleCheck]:
        """Evaluate every applicable rule; there is no early exit on failure."""
        return [rule.evaluate(proposal, ctx) for rule in self.rules_for(ctx.structure)]

    def catalogue(self) -> list[dict]:
        return [rule.to_dict() for rule in self.rules.values()]


@lru_cache
def get_rule_registry(config: ThresholdConfig = DEFAULT_THRESHOLDS) -> RuleRegistry:
    """Get the shared registry for ``config``; built once per config."""
    return RuleRegistry(config)
