"""Tests for the timing stopwatch."""

import pytest

from unit_test_runner.models.result import TimingBucket, TimingBuckets
from unit_test_runner.testing.clock import StepClock
from unit_test_runner.timing import TICKS_PER_SECOND, Stopwatch, ticks_to_ms


def test_add_charges_elapsed_interval_to_bucket() -> None:
    """Charges the time since the last reading to the named bucket."""
    stopwatch = Stopwatch(clock=StepClock(step=5))

    stopwatch.add(TimingBucket.BODY)

    assert stopwatch.buckets == TimingBuckets(lifecycle=0, fixture=0, body=5)


def test_add_restarts_interval() -> None:
    """Consecutive intervals are charged once each, without gaps."""
    stopwatch = Stopwatch(clock=StepClock(step=3))

    stopwatch.add(TimingBucket.FIXTURE)
    stopwatch.add(TimingBucket.BODY)
    stopwatch.add(TimingBucket.FIXTURE)

    assert stopwatch.buckets.fixture == 6
    assert stopwatch.buckets.body == 3
    assert stopwatch.buckets.total == 9


def test_restart_discards_elapsed_time() -> None:
    """Time before a restart is not charged to any bucket."""
    clock = StepClock(step=10)
    stopwatch = Stopwatch(clock=clock)
    clock.now += 1000

    stopwatch.restart()
    stopwatch.add(TimingBucket.LIFECYCLE)

    assert stopwatch.buckets.lifecycle == 10


def test_backwards_clock_never_decreases_buckets() -> None:
    """A clock reading earlier than the interval start charges nothing."""
    readings = iter([100, 50])
    stopwatch = Stopwatch(clock=lambda: next(readings))

    stopwatch.add(TimingBucket.BODY)

    assert stopwatch.buckets.body == 0


def test_buckets_reject_negative_ticks() -> None:
    """Refuses to charge negative durations."""
    with pytest.raises(ValueError, match="negative"):
        TimingBuckets().add(TimingBucket.BODY, -1)


def test_buckets_sum() -> None:
    """Adding bucket sets sums them bucket by bucket."""
    total = TimingBuckets(lifecycle=1, fixture=2, body=3) + TimingBuckets(
        lifecycle=10, fixture=20, body=30
    )

    assert total == TimingBuckets(lifecycle=11, fixture=22, body=33)


@pytest.mark.parametrize(
    ("ticks", "expected"),
    [
        (0, 0.0),
        (TICKS_PER_SECOND, 1000.0),
        (1_500_000, 1.5),
    ],
)
def test_ticks_to_ms(ticks: int, expected: float) -> None:
    """Converts clock ticks to milliseconds."""
    assert ticks_to_ms(ticks) == pytest.approx(expected)
