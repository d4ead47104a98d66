#  Copyright (c) 2025 Tom Villani, Ph.D.
"""ISO-8601 durations as used by schema.org recipe times."""

from __future__ import annotations

import re
from typing import Optional

# Calendar units are approximated; recipe times never use them in practice
_SECONDS = {
    "years": 365 * 86400,
    "months": 30 * 86400,
    "weeks": 7 * 86400,
    "days": 86400,
    "hours": 3600,
    "minutes": 60,
    "seconds": 1,
}

_DURATION_PATTERN = re.compile(
    r"^P(?!$)"
    r"(?:(?P<years>\d+(?:\.\d+)?)Y)?"
    r"(?:(?P<months>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<weeks>\d+(?:\.\d+)?)W)?"
    r"(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?=\d)"
    r"(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
    r")?$",
    re.IGNORECASE,
)


def parse_iso_duration(value: str) -> Optional[int]:
    """Return the length of an ISO-8601 duration in seconds.

    Returns None when ``value`` is not a valid duration.

    Examples
    --------
        >>> parse_iso_duration("PT1H30M")
        5400
        >>> parse_iso_duration("30 minutes") is None
        True

    """
    match = _DURATION_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        return None
    total = 0.0
    for unit, amount in match.groupdict().items():
        if amount:
            total += float(amount) * _SECONDS[unit]
    return int(total)


def format_duration(seconds: int) -> str:
    """Format a duration as hours and minutes, e.g. ``"1 hr 30 mins"``.

    Whole hours are shown first; the remaining seconds are rounded to the
    nearest minute. Zero parts are omitted.
    """
    remainder = seconds % 3600
    hours = (seconds - remainder) // 3600
    minutes = round(remainder / 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours} hr")
    if minutes > 0:
        parts.append(f"{minutes} mins")
    return " ".join(parts)


def readable_duration(value: str) -> Optional[str]:
    """Parse and format an ISO-8601 duration; None when it is invalid."""
    seconds = parse_iso_duration(value)
    if seconds is None:
        return None
    return format_duration(seconds)


__all__ = ["format_duration", "parse_iso_duration", "readable_duration"]
