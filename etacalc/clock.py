"""
Wall-clock helpers for period bucketing.

Boundaries are measured from ``ZERO_TIME`` (the first instant of year 1, UTC),
so truncating to any period that divides a day lines up with calendar seconds,
minutes and hours.

Example:
    >>> import datetime
    >>> ts = datetime.datetime(2025, 1, 1, 12, 0, 7, 250000, tzinfo=datetime.UTC)
    >>> truncate(ts, datetime.timedelta(seconds=5))
    datetime.datetime(2025, 1, 1, 12, 0, 5, tzinfo=datetime.timezone.utc)
"""

import datetime
from collections.abc import Callable

# Zero value of the timestamp type
ZERO_TIME = datetime.datetime(1, 1, 1, tzinfo=datetime.UTC)

Clock = Callable[[], datetime.datetime]


def utc_now() -> datetime.datetime:
    """Get the current wall-clock time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.UTC)


def truncate(ts: datetime.datetime, period: datetime.timedelta) -> datetime.datetime:
    """
    Round a timestamp down to a multiple of period since ZERO_TIME.

    Args:
        ts: Aware timestamp to truncate
        period: Bucket width

    Returns:
        The start of the period containing ts, or ts itself if period <= 0.
    """
    if period <= datetime.timedelta(0):
        return ts
    offset = ts - ZERO_TIME
    return ZERO_TIME + (offset // period) * period


__all__ = ["ZERO_TIME", "Clock", "utc_now", "truncate"]
