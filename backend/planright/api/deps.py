"""Dependency injection for routes."""

from fastapi import Depends

from planright.engine.rules import RuleRegistry, get_rule_registry
from planright.engine.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig


def get_thresholds() -> ThresholdConfig:
    return DEFAULT_THRESHOLDS


def get_registry(
    config: ThresholdConfig = Depends(get_thresholds),
) -> RuleRegistry:
    return get_rule_registry(config)
