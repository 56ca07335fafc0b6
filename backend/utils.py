"""Utility helpers used across backend modules."""

from __future__ import annotations

import re
from datetime import datetime, timezone

# Leading numeric prefix of user input. ``"80kg"`` reads as 80 and
# ``"8.5"`` reads as 8 reps, the same way the set inputs always behaved.
_DECIMAL_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_weight(value: str | None) -> float:
    """Return the decimal value of ``value`` or ``0.0`` when it has none."""

    if not value:
        return 0.0
    match = _DECIMAL_PREFIX.match(str(value))
    if not match:
        return 0.0
    try:
        return float(match.group(1))
    except (OverflowError, ValueError):
        return 0.0


def parse_reps(value: str | None) -> int:
    """Return the integer value of ``value`` or ``0`` when it has none."""

    if not value:
        return 0
    match = _INTEGER_PREFIX.match(str(value))
    if not match:
        return 0
    return int(match.group(1))


def utc_timestamp(now: datetime | None = None) -> str:
    """Return ``now`` (default: current time) as an ISO-8601 UTC string."""

    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
