"""Rule catalogue endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from planright.api.deps import get_registry
from planright.engine.rules import RuleRegistry
from planright.engine.types import StructureType
from planright.models.schemas.assessment import RuleSummary

router = APIRouter()


@router.get("", response_model=list[RuleSummary])
async def list_rules(
    structure: Optional[StructureType] = None,
    registry: RuleRegistry = Depends(get_registry),
) -> list[RuleSummary]:
    """List registered rules, optionally only those evaluated for one structure."""
    rules = registry.rules_for(structure) if structure else list(registry.rules.values())
    return [RuleSummary.model_validate(rule.to_dict()) for rule in rules]
