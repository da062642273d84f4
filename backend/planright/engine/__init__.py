"""Rules engine for NSW exempt development of sheds, patios and carports.

Provides zone classification, threshold tables, input validation, the rule
registry and the assessment entry points.
"""

from planright.engine.types import (
    ClauseInfo,
    Decision,
    FieldError,
    RuleCheck,
    RuleResult,
    StructureType,
    ZoneGroup,
)
from planright.engine.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig, limits_for
from planright.engine.zones import classify_zone, normalize_zone
from planright.engine.proposal import Proposal
from planright.engine.validation import validate_proposal
from planright.engine.invariants import EngineInvariantError
from planright.engine.rules import RuleDefinition, RuleRegistry, get_rule_registry
from planright.engine.assessment import run_rules_assessment
from planright.engine.clauses import lookup_clause

__all__ = [
    "ClauseInfo",
    "Decision",
    "FieldError",
    "RuleCheck",
    "RuleResult",
    "StructureType",
    "ZoneGroup",
    "DEFAULT_THRESHOLDS",
    "ThresholdConfig",
    "limits_for",
    "classify_zone",
    "normalize_zone",
    "Proposal",
    "validate_proposal",
    "EngineInvariantError",
    "RuleDefinition",
    "RuleRegistry",
    "get_rule_registry",
    "run_rules_assessment",
    "lookup_clause",
]
