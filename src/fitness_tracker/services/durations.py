"""Parsing helpers for free-text workout durations."""

import math
import re

from fitness_tracker.domain.events import Duration

_LEADING_DURATION = re.compile(
    r"^\s*(\d+(?:\.\d+)?)(?:\s*(hours?|hrs?|h|minutes?|mins?|m)\b)?", re.IGNORECASE
)
_LEADING_INTEGER = re.compile(r"^\s*(\d+)")


def parse_duration(text: str | None) -> Duration | None:
    """Parse text like "30 minutes" or "1.5 hours" into a Duration."""
    if not text:
        return None
    match = _LEADING_DURATION.match(text)
    if match is None:
        return None
    amount = float(match.group(1))
    # Only the token right after the number names the unit.
    token = (match.group(2) or "").lower()
    if token.startswith("h"):
        unit: str | None = "hours"
    elif token.startswith("m"):
        unit = "minutes"
    else:
        unit = None
    return Duration(amount=amount, unit=unit)


def duration_minutes(text: str | None) -> float:
    """Return the duration in minutes, or 0 when it can't be parsed."""
    duration = parse_duration(text)
    if duration is None:
        return 0.0
    minutes = duration.minutes
    if not math.isfinite(minutes) or minutes <= 0:
        return 0.0
    return minutes


def leading_count(text: str | None) -> int | None:
    """Return the leading integer of a duration field, used as a rep count."""
    if not text:
        return None
    match = _LEADING_INTEGER.match(text)
    if match is None:
        return None
    return int(match.group(1))
