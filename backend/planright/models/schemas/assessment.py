"""Assessment, clause and rule catalogue response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckResponse(BaseModel):
    """One evaluated rule."""

    model_config = ConfigDict(populate_by_name=True)

    rule_id: str
    clause_ref: str
    passed: bool = Field(..., alias="pass")
    note: str
    killer: bool = False


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class AssessmentResponse(BaseModel):
    """Outcome of an assessment.

    ``checks`` is empty whenever ``errors`` is not.
    """

    decision: str
    checks: list[CheckResponse] = Field(default_factory=list)
    errors: list[FieldErrorResponse] = Field(default_factory=list)


class ClauseResponse(BaseModel):
    citation: str
    title: str
    summary: str
    found: bool


class RuleSummary(BaseModel):
    """Catalogue entry for a registered rule."""

    rule_id: str
    citation: str
    description: str
    killer: bool
    category: str
    applies_to: str


class SamplePropertyResponse(BaseModel):
    id: str
    label: str
    lot_size_m2: float
    zone_text: str
    flags: list[str] = Field(default_factory=list)
    zone_group: Optional[str] = None
