"""Stopwatch accumulating elapsed time into named timing buckets."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from unit_test_runner.models.result import TimingBucket, TimingBuckets

TICKS_PER_SECOND = 1_000_000_000


def ticks_to_ms(ticks: float) -> float:
    """Convert clock ticks to milliseconds."""
    return ticks * 1000.0 / TICKS_PER_SECOND


@dataclass(kw_only=True)
class Stopwatch:
    """Measures consecutive intervals and charges each to exactly one bucket."""

    clock: Callable[[], int] = time.perf_counter_ns
    buckets: TimingBuckets = field(default_factory=TimingBuckets)
    _started: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        """Start the first interval."""
        self.restart()

    def restart(self) -> None:
        """Start a new interval, discarding the time elapsed so far."""
        self._started = self.clock()

    def add(self, bucket: TimingBucket) -> None:
        """Charge the running interval to ``bucket`` and start the next one."""
        now = self.clock()
        self.buckets.add(bucket, max(0, now - self._started))
        self._started = now
