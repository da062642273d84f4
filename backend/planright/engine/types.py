"""Type definitions for the rules engine.

Contains enums and data classes used throughout the engine module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StructureType(str, Enum):
    """Minor structures covered by the exempt development rules."""

    SHED = "shed"
    PATIO = "patio"
    CARPORT = "carport"


class ZoneGroup(str, Enum):
    """Zone groupings that drive threshold selection."""

    RESIDENTIAL = "residential"
    RURAL = "rural"


class Decision(str, Enum):
    """Outcome of an assessment."""

    LIKELY_EXEMPT = "Likely Exempt"
    LIKELY_NOT_EXEMPT = "Likely Not Exempt"
    CANNOT_ASSESS = "Cannot assess"


class RuleCategory(str, Enum):
    """Where a rule sits in the evaluation order."""

    GENERAL = "general"
    STRUCTURE = "structure"
    CONTEXT = "context"


@dataclass(frozen=True)
class FieldError:
    """A user-correctable problem with one input field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class RuleCheck:
    """Result of evaluating a single rule against a proposal."""

    rule_id: str
    citation: str
    passed: bool
    note: str
    killer: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "clause_ref": self.citation,
            "pass": self.passed,
            "note": self.note,
            "killer": self.killer,
        }


@dataclass(frozen=True)
class RuleResult:
    """Complete outcome of one assessment call.

    ``errors`` and ``checks`` are mutually exclusive: a result either carries
    validation errors (``Cannot assess``) or the evaluated rule checks.
    """

    decision: Decision
    checks: tuple[RuleCheck, ...] = field(default_factory=tuple)
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @classmethod
    def cannot_assess(cls, errors: list[FieldError]) -> "RuleResult":
        return cls(decision=Decision.CANNOT_ASSESS, checks=(), errors=tuple(errors))

    @property
    def failed_checks(self) -> list[RuleCheck]:
        return [c for c in self.checks if not c.passed]

    @property
    def killer_failures(self) -> list[RuleCheck]:
        return [c for c in self.checks if c.killer and not c.passed]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "decision": self.decision.value,
            "checks": [c.to_dict() for c in self.checks],
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(frozen=True)
class ClauseInfo:
    """Display text for a regulatory clause."""

    title: str
    summary: str
    found: bool = True
