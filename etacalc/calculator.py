"""
ETA (Estimated Time of Arrival) calculator with period-bucketed throughput.

Completed work is reported with increment(). Throughput is bucketed into
fixed-width periods, and five projections of the completion time are derived
from the overall average and from the retained period history.

No projection raises. When there is nothing to estimate from (no progress
yet, empty or all-zero history, a result outside the datetime range) the
query returns UNKNOWN, the zero timestamp.

Example:
    >>> from etacalc import Calculator, is_unknown
    >>>
    >>> calc = Calculator(total_count=1000)
    >>> for batch in batches:
    ...     process(batch)
    ...     calc.increment(len(batch))
    ...     eta = calc.average()
    ...     if not is_unknown(eta):
    ...         print(f"{calc.percent():.1f}% - done at {eta:%H:%M:%S}")
"""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .clock import ZERO_TIME, Clock, truncate, utc_now
from .log import Logger, create_logger
from .rwlock import RWLock

if TYPE_CHECKING:
    from .config import EtaConfig

DEFAULT_PERIOD_DURATION = datetime.timedelta(seconds=1)
DEFAULT_PERIOD_COUNT = 60
LOGGER_NAME = "/etacalc"

# Returned by every projection that has nothing to estimate from
UNKNOWN = ZERO_TIME


def is_unknown(ts: datetime.datetime) -> bool:
    """Check whether a projection result is the UNKNOWN sentinel."""
    return ts == UNKNOWN


class EstimateKind(enum.Enum):
    """Selects one of the calculator projections."""

    ETA = "eta"
    LAST = "last"
    AVERAGE = "average"
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"


@dataclass(frozen=True)
class Estimates:
    """All five projections computed against the same instant."""

    now: datetime.datetime
    eta: datetime.datetime
    last: datetime.datetime
    average: datetime.datetime
    optimistic: datetime.datetime
    pessimistic: datetime.datetime

    def get(self, kind: EstimateKind) -> datetime.datetime:
        """Get the projection for kind."""
        return getattr(self, kind.value)  # type: ignore[no-any-return]


class Calculator:
    """
    Thread-safe ETA calculator.

    One producer typically calls increment() while any number of consumers
    query projections. increment() holds the write side of a read/write lock;
    each query holds the read side for its whole body.
    """

    def __init__(
        self,
        total_count: int,
        period_duration: datetime.timedelta = DEFAULT_PERIOD_DURATION,
        period_count: int = DEFAULT_PERIOD_COUNT,
        *,
        clock: Clock | None = None,
        lg: Logger | None = None,
    ) -> None:
        """
        Initialize the calculator.

        Args:
            total_count: Expected number of work units
            period_duration: Width of one throughput bucket
            period_count: Number of closed buckets to retain
            clock: Callable returning the current aware datetime (default: UTC wall clock)
            lg: Logger for rollover and projection diagnostics (optional)
        """
        self._clock: Clock = clock or utc_now
        self._lg = lg

        now = self._clock()
        self._start_time = now
        self._total_count = total_count
        self._period_count = period_count
        self._period_duration = period_duration

        self._processed = 0
        self._current_period = truncate(now, period_duration)
        self._current_processed = 0
        # Closed bucket counts, most recent first
        self._stats: list[int] = []

        self._lock = RWLock()

    @classmethod
    def from_config(
        cls,
        config: EtaConfig,
        *,
        clock: Clock | None = None,
        lg: Logger | None = None,
    ) -> Calculator:
        """
        Create a calculator from an EtaConfig.

        Without an explicit lg, a console logger named LOGGER_NAME is set up at
        config.log_level.
        """
        if lg is None:
            lg = create_logger(LOGGER_NAME, level=config.log_level)
        return cls(
            config.total_count,
            config.period_duration,
            config.period_count,
            clock=clock,
            lg=lg,
        )

    # -------------------------------------------------------------------------
    # Progress reporting

    def increment(self, n: int) -> None:
        """
        Report n more completed units.

        Non-positive n is ignored. When a period boundary has been crossed
        since the previous call, the open bucket is closed and a new, empty
        one is opened; the n of the crossing call counts toward processed
        but not toward any bucket.

        Args:
            n: Number of units completed since the last call
        """
        if n <= 0:
            return

        now = self._clock()

        with self._lock.write():
            self._processed += n

            period = truncate(now, self._period_duration)
            if period == self._current_period:
                self._current_processed += n
                return

            closed = self._current_processed
            self._stats.insert(0, closed)
            self._current_processed = 0
            self._current_period = period
            del self._stats[max(self._period_count, 0) :]
            buckets = len(self._stats)

        # Outside the lock; handlers may query the calculator
        if self._lg is not None:
            self._lg.trace(
                "period closed", extra={"closed": closed, "buckets": buckets}
            )

    # -------------------------------------------------------------------------
    # Projections

    def eta(self) -> datetime.datetime:
        """ETA from the average cycle time since the calculator was created."""
        with self._lock.read():
            return self._eta(self._clock())

    def last(self) -> datetime.datetime:
        """ETA from the speed of the most recently closed period."""
        with self._lock.read():
            return self._last(self._clock())

    def average(self) -> datetime.datetime:
        """ETA from the average speed over all retained periods."""
        with self._lock.read():
            return self._average(self._clock())

    def optimistic(self) -> datetime.datetime:
        """ETA from the fastest observed period speed."""
        with self._lock.read():
            return self._optimistic(self._clock())

    def pessimistic(self) -> datetime.datetime:
        """ETA from the slowest observed period speed, penalized by empty periods."""
        with self._lock.read():
            return self._pessimistic(self._clock())

    def estimate(self, kind: EstimateKind) -> datetime.datetime:
        """Compute the projection selected by kind."""
        with self._lock.read():
            return self._projection(kind, self._clock())

    def snapshot(self) -> Estimates:
        """Compute all projections against one instant under one lock hold."""
        with self._lock.read():
            now = self._clock()
            return Estimates(
                now=now,
                eta=self._eta(now),
                last=self._last(now),
                average=self._average(now),
                optimistic=self._optimistic(now),
                pessimistic=self._pessimistic(now),
            )

    def remaining(
        self, kind: EstimateKind = EstimateKind.ETA
    ) -> datetime.timedelta | None:
        """
        Time left until the selected projection.

        Returns:
            Time from now to the estimate, or None if the estimate is UNKNOWN.
        """
        with self._lock.read():
            now = self._clock()
            ts = self._projection(kind, now)
        if is_unknown(ts):
            return None
        return ts - now

    def percent(self) -> float:
        """
        Get completion percentage.

        Returns:
            processed / total_count * 100, or 0.0 if total_count is not positive.
        """
        with self._lock.read():
            if self._total_count <= 0:
                return 0.0
            return (self._processed / self._total_count) * 100.0

    # -------------------------------------------------------------------------
    # Read-only state

    @property
    def start_time(self) -> datetime.datetime:
        return self._start_time

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def period_count(self) -> int:
        return self._period_count

    @property
    def period_duration(self) -> datetime.timedelta:
        return self._period_duration

    @property
    def processed(self) -> int:
        with self._lock.read():
            return self._processed

    @property
    def stats(self) -> tuple[int, ...]:
        """Closed bucket counts, most recent first."""
        with self._lock.read():
            return tuple(self._stats)

    # -------------------------------------------------------------------------
    # Lock-held helpers; callers pass the "now" they read once

    def _projection(
        self, kind: EstimateKind, now: datetime.datetime
    ) -> datetime.datetime:
        if kind is EstimateKind.LAST:
            return self._last(now)
        if kind is EstimateKind.AVERAGE:
            return self._average(now)
        if kind is EstimateKind.OPTIMISTIC:
            return self._optimistic(now)
        if kind is EstimateKind.PESSIMISTIC:
            return self._pessimistic(now)
        return self._eta(now)

    def _project(
        self,
        kind: EstimateKind,
        now: datetime.datetime,
        cycle: datetime.timedelta,
        factor: int = 1,
    ) -> datetime.datetime:
        """now + cycle * remaining units * factor, or UNKNOWN if out of range."""
        remaining = self._total_count - self._processed
        try:
            return now + cycle * (remaining * factor)
        except OverflowError:
            if self._lg is not None:
                self._lg.debug(
                    "projection out of range", extra={"kind": kind.value}
                )
            return UNKNOWN

    def _eta(self, now: datetime.datetime) -> datetime.datetime:
        if self._processed == 0:
            return UNKNOWN

        cycle = (now - self._start_time) // self._processed
        return self._project(EstimateKind.ETA, now, cycle)

    def _last(self, now: datetime.datetime) -> datetime.datetime:
        if self._processed == 0 or not self._stats or self._stats[0] == 0:
            return UNKNOWN

        cycle = self._period_duration // self._stats[0]
        return self._project(EstimateKind.LAST, now, cycle)

    def _average(self, now: datetime.datetime) -> datetime.datetime:
        if not self._stats:
            return self._eta(now)

        processed = sum(self._stats)
        if processed == 0:
            return UNKNOWN

        span = self._period_duration * len(self._stats)
        return self._project(EstimateKind.AVERAGE, now, span // processed)

    def _scanned_buckets(self) -> tuple[int, list[int]]:
        """
        Buckets compared by optimistic() and pessimistic().

        The newest closed bucket seeds the comparison and the scan continues
        from the third newest; the second newest is never examined.
        """
        return self._stats[0], self._stats[2:]

    def _optimistic(self, now: datetime.datetime) -> datetime.datetime:
        if not self._stats:
            return self._eta(now)

        newest, older = self._scanned_buckets()
        counts = [c for c in (newest, *older) if c > 0]
        if not counts:
            return UNKNOWN

        cycle = min(self._period_duration // c for c in counts)
        return self._project(EstimateKind.OPTIMISTIC, now, cycle)

    def _pessimistic(self, now: datetime.datetime) -> datetime.datetime:
        if not self._stats:
            return self._eta(now)

        newest, older = self._scanned_buckets()
        counts = [c for c in (newest, *older) if c > 0]
        if not counts:
            return UNKNOWN

        empty_periods = sum(1 for c in older if c == 0)
        cycle = max(self._period_duration // c for c in counts)
        return self._project(
            EstimateKind.PESSIMISTIC, now, cycle, factor=1 + empty_periods
        )

    def __repr__(self) -> str:
        return (
            f"Calculator(total_count={self._total_count}, "
            f"processed={self._processed}, "
            f"period_duration={self._period_duration}, "
            f"period_count={self._period_count})"
        )


__all__ = [
    "Calculator",
    "Estimates",
    "EstimateKind",
    "UNKNOWN",
    "is_unknown",
    "DEFAULT_PERIOD_DURATION",
    "DEFAULT_PERIOD_COUNT",
    "LOGGER_NAME",
]
