"""
Duration formatting and parsing.

Renders remaining times compactly for progress lines and parses the same
notation back, so config files can say ``period_duration: 500ms``.

Example Usage:
    >>> delta_str(3661.5)
    '1h1m1s'
    >>> delta_str(9.123)
    '9.123s'
    >>> delta_to_secs('1m30s')
    90.0
"""

import datetime
import math
import re

from .exceptions import EtaError

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60
MILLISECONDS_PER_SECOND = 1000
MICROSECONDS_PER_SECOND = 1_000_000

# unit -> (multiplier, divisor) to seconds
_UNIT_SCALE = {
    "d": (SECONDS_PER_DAY, 1),
    "h": (SECONDS_PER_HOUR, 1),
    "m": (SECONDS_PER_MINUTE, 1),
    "s": (1, 1),
    "ms": (1, MILLISECONDS_PER_SECOND),
    "μs": (1, MICROSECONDS_PER_SECOND),
}

# Longer units first so "ms" is not read as "m" followed by "s"
_COMPONENT_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|μs|d|h|m|s)")


class InvalidDurationError(EtaError, ValueError):
    """Raised when an invalid duration value or string is provided."""

    pass


def _validate(secs: float) -> None:
    if not isinstance(secs, (int, float)) or isinstance(secs, bool):
        raise InvalidDurationError(
            f"Duration must be a number, got {type(secs).__name__}"
        )
    if math.isnan(secs):
        raise InvalidDurationError("Duration cannot be NaN")
    if math.isinf(secs):
        raise InvalidDurationError("Duration cannot be infinite")
    if secs < 0:
        raise InvalidDurationError(f"Duration cannot be negative, got {secs}")


def _sub_second_str(secs: float) -> str:
    """Format a duration below one second as ms or μs."""
    usecs = round(secs * MICROSECONDS_PER_SECOND)
    if usecs < 1000:
        return f"{usecs}μs"

    msecs = secs * MILLISECONDS_PER_SECOND
    if msecs < 10:
        return f"{msecs:.3f}".rstrip("0").rstrip(".") + "ms"

    rounded = round(msecs)
    if rounded >= 1000:
        return "1s"
    return f"{rounded}ms"


def _seconds_str(isecs: int, msecs: int) -> str:
    """Format a whole-seconds part below one minute; decimals only under 10s."""
    if msecs > 0 and isecs < 10:
        return f"{isecs}.{msecs:03d}s"
    return f"{isecs}s"


def delta_str(secs: float | None) -> str:
    """
    Format a duration in seconds as a compact human-readable string.

    Args:
        secs: Duration in seconds (None gives an empty string)

    Returns:
        Formatted duration string

    Raises:
        InvalidDurationError: If secs is negative, NaN, infinite or not a number

    Format rules:
        - Durations >= 60s show every unit down to whole seconds: "1m0s", "1h1m5s"
        - Seconds < 10 keep 3 decimals when there is a fraction: "9.123s"
        - Seconds >= 10 drop the fraction: "10s", "59s"
        - Milliseconds are fractional below 10ms: "9.123ms", "15ms"
        - Below 1ms, microseconds: "123μs"

    Examples:
        >>> delta_str(60)
        '1m0s'
        >>> delta_str(0.015)
        '15ms'
        >>> delta_str(0)
        '0s'
    """
    if secs is None:
        return ""

    _validate(secs)

    if secs == 0:
        return "0s"
    if secs < 1:
        return _sub_second_str(secs)

    # Round once at millisecond precision so carries reach the higher units
    total_ms = round(secs * MILLISECONDS_PER_SECOND)
    isecs, msecs = divmod(total_ms, MILLISECONDS_PER_SECOND)
    days, isecs = divmod(isecs, SECONDS_PER_DAY)
    hours, isecs = divmod(isecs, SECONDS_PER_HOUR)
    minutes, isecs = divmod(isecs, SECONDS_PER_MINUTE)

    # Once a higher unit is shown every lower unit follows, without fractions
    result = ""
    if days:
        result += f"{days}d"
    if days or hours:
        result += f"{hours}h"
    if days or hours or minutes:
        return f"{result}{minutes}m{isecs}s"

    return _seconds_str(isecs, msecs)


def td_str(td: datetime.timedelta | None) -> str:
    """
    Format a timedelta with delta_str().

    Examples:
        >>> td_str(datetime.timedelta(minutes=2, seconds=3))
        '2m3s'
        >>> td_str(None)
        ''
    """
    if td is None:
        return ""
    return delta_str(td.total_seconds())


def delta_to_secs(duration_str: str) -> float:
    """
    Parse a duration string back to seconds.

    Supports the units produced by delta_str(): d, h, m, s, ms, μs.

    Args:
        duration_str: Duration string to parse, e.g. "1h30m" or "250ms"

    Returns:
        Duration in seconds as float

    Raises:
        InvalidDurationError: If the string is empty, malformed, or repeats a unit

    Examples:
        >>> delta_to_secs('1h30m')
        5400.0
        >>> delta_to_secs('250ms')
        0.25
    """
    if not isinstance(duration_str, str) or not duration_str.strip():
        raise InvalidDurationError("Duration string cannot be empty")

    compact = duration_str.strip().replace(" ", "")
    matches = _COMPONENT_RE.findall(compact)
    if not matches:
        raise InvalidDurationError(f"Could not parse duration string: '{duration_str}'")

    if "".join(f"{val}{unit}" for val, unit in matches) != compact:
        raise InvalidDurationError(
            f"Invalid characters in duration string: '{duration_str}'"
        )

    total = 0.0
    seen: set[str] = set()
    for value, unit in matches:
        if unit in seen:
            raise InvalidDurationError(f"Duplicate unit '{unit}' in duration string")
        seen.add(unit)
        mult, div = _UNIT_SCALE[unit]
        total += float(value) * mult / div

    return total


__all__ = [
    "delta_str",
    "td_str",
    "delta_to_secs",
    "InvalidDurationError",
]
