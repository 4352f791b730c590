"""Duration parsing utilities."""

import re

from slotkit.types import Duration

_DURATION_PATTERN = re.compile(r"^(\d+)(ms|s|m|h|d)$")
_UNITS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(duration: Duration) -> float:
    """Parse a duration to milliseconds. Numbers pass through unchanged."""
    if isinstance(duration, bool):
        raise ValueError(f"Invalid duration: {duration!r}")

    if isinstance(duration, (int, float)):
        if duration < 0:
            raise ValueError(f"Invalid duration: {duration!r}")
        return duration

    match = _DURATION_PATTERN.match(duration)
    if not match:
        raise ValueError(f"Invalid duration: {duration!r}")

    value, unit = match.groups()
    return int(value) * _UNITS[unit]


def to_seconds(duration: Duration) -> float:
    """Convert a duration to seconds, the unit asyncio timers use."""
    return parse_duration(duration) / 1000
