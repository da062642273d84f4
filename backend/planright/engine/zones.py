"""Zone code normalisation and classification."""

from typing import Optional

from planright.engine.thresholds import DEFAULT_THRESHOLDS, ThresholdConfig
from planright.engine.types import ZoneGroup

ZONE_PREFIX = "ZONE "


def normalize_zone(zone_text: Optional[str], config: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    """Return the canonical zone code for ``zone_text``.

    Trims, upper-cases, drops a leading "Zone " and resolves the explicit
    aliases. Unknown codes come back normalised but otherwise unchanged.
    """
    code = (zone_text or "").strip().upper()
    if code.startswith(ZONE_PREFIX):
        code = code[len(ZONE_PREFIX):].strip()
    return dict(config.zone_aliases).get(code, code)


def is_recognized_zone(zone_text: Optional[str], config: ThresholdConfig = DEFAULT_THRESHOLDS) -> bool:
    return normalize_zone(zone_text, config) in config.recognized_zones


def classify_zone(
    zone_text: Optional[str],
    config: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> Optional[ZoneGroup]:
    """Classify a zone code as rural or residential.

    Returns None for codes outside the recognised set so callers can report
    them instead of assessing against a guessed threshold set.
    """
    code = normalize_zone(zone_text, config)
    if code not in config.recognized_zones:
        return None
    if code.startswith(config.rural_prefix) or code in config.large_lot_residential_zones:
        return ZoneGroup.RURAL
    return ZoneGroup.RESIDENTIAL
