"""
Review interval resolution.

Turns the free-form review cadence a user writes in frontmatter
("weekly", "2w", "10 days", 14) into a day count.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from paralens.models.location import Location

NAMED_INTERVALS: dict[str, int] = {
    "daily": 1,
    "weekly": 7,
    "monthly": 30,
    "quarterly": 90,
}

UNIT_MULTIPLIERS: dict[str, int] = {
    "d": 1,
    "w": 7,
    "m": 30,
}

_UNIT_RE = re.compile(r"^(\d+)\s*([a-z]+)$")


def resolve_interval(raw: Any) -> float | None:
    """
    Resolve a raw review cadence to days.

    Args:
        raw: Metadata value (None, number or string)

    Returns:
        Positive day count, or None when missing, non-positive or unparseable

    Examples:
        >>> resolve_interval("2w")
        14
        >>> resolve_interval("monthly")
        30
        >>> resolve_interval(-5) is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, int | float):
        if math.isfinite(raw) and raw > 0:
            return raw
        return None

    if not isinstance(raw, str):
        return None

    text = raw.strip().lower()
    if not text:
        return None

    if text in NAMED_INTERVALS:
        return NAMED_INTERVALS[text]

    match = _UNIT_RE.match(text)
    if match:
        multiplier = UNIT_MULTIPLIERS.get(match.group(2)[0])
        if multiplier is None:
            return None
        days = int(match.group(1)) * multiplier
        return days if days > 0 else None

    try:
        days = int(text)
    except ValueError:
        return None
    return days if days > 0 else None


def resolve_target_days(
    location: Location,
    override: float | None,
    defaults: Mapping[Location, float],
) -> float | None:
    """
    Pick the review target for a note: its own cadence, else the location default.

    Returns:
        Target in days, or None when neither is available
    """
    if override is not None and override > 0:
        return override
    return defaults.get(location)
