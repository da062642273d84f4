"""Assessment endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from planright.api.deps import get_thresholds
from planright.core.exceptions import InvariantViolationError
from planright.engine.assessment import run_rules_assessment
from planright.engine.invariants import (
    GENERAL_CITATION,
    VALIDATION_RULE_ID,
    EngineInvariantError,
    assert_proposal_valid,
)
from planright.engine.thresholds import ThresholdConfig
from planright.engine.validation import build_proposal
from planright.models.schemas.assessment import AssessmentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AssessmentResponse)
async def create_assessment(
    proposal: dict[str, Any] = Body(..., description="Proposal sections as submitted by the form"),
    strict: bool = Query(False, description="Reject invalid input with 400 instead of 'Cannot assess'"),
    config: ThresholdConfig = Depends(get_thresholds),
) -> AssessmentResponse:
    """Assess a proposed structure.

    Invalid input is reported in ``errors`` with decision ``Cannot assess``
    unless ``strict`` is set.
    """
    if strict:
        built, errors = build_proposal(proposal)
        if built is None:
            first = errors[0]
            logger.warning(f"Strict assessment rejected: {first.field}: {first.message}")
            raise InvariantViolationError(VALIDATION_RULE_ID, GENERAL_CITATION, f"{first.field}: {first.message}")
        try:
            assert_proposal_valid(built, config)
        except EngineInvariantError as e:
            logger.warning(f"Strict assessment rejected: {e.message}")
            raise InvariantViolationError(e.rule_id, e.citation, e.message)

    result = run_rules_assessment(proposal, config)
    return AssessmentResponse.model_validate(result.to_dict())
