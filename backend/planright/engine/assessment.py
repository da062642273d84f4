"""Assessment orchestrator.

Validates a proposal, classifies its zone once and evaluates every applicable
rule. Validation problems are returned as a ``Cannot assess`` result, never
raised.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from planright.engine.rules import get_rule_registry
from planright.engine.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from planright.engine.types import Decision, RuleResult
from planright.engine.validation import build_proposal, validate_proposal
from planright.engine.proposal import Proposal

logger = logging.getLogger(__name__)


def run_rules_assessment(
    proposal: Union[Proposal, Mapping[str, Any]],
    config: Optional[ThresholdConfig] = None,
) -> RuleResult:
    """Assess a proposed shed, patio or carport against the exempt rules.

    Args:
        proposal: A ``Proposal`` or the raw mapping submitted by a form.
        config: Threshold set to assess against; defaults to the SEPP values.

    Returns:
        ``Cannot assess`` with field errors when the input is unusable,
        otherwise ``Likely Exempt`` or ``Likely Not Exempt`` with one check
        per applicable rule.
    """
    config = config or DEFAULT_THRESHOLDS

    built, errors = build_proposal(proposal)
    if built is None:
        logger.info(f"Cannot assess: {len(errors)} input error(s)")
        return RuleResult.cannot_assess(errors)

    errors = validate_proposal(built, config)
    if errors:
        logger.info(f"Cannot assess proposal {built.property.id!r}: {len(errors)} validation error(s)")
        return RuleResult.cannot_assess(errors)

    registry = get_rule_registry(config)
    ctx = registry.build_context(built)
    checks = registry.evaluate(built, ctx)

    for check in checks:
        logger.debug(f"{check.rule_id} [{check.citation}] {'pass' if check.passed else 'FAIL'}: {check.note}")

    failed = [c for c in checks if not c.passed]
    decision = Decision.LIKELY_NOT_EXEMPT if failed else Decision.LIKELY_EXEMPT

    logger.info(
        f"Assessed {ctx.structure.value} in {ctx.zone_group.value} zone: {decision.value} "
        f"({len(checks) - len(failed)}/{len(checks)} checks passed)"
    )
    return RuleResult(decision=decision, checks=tuple(checks), errors=())
