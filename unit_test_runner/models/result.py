"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

CONSTRUCTOR = "constructor"
STATIC_INIT = "static_init"
STATIC_CLEANUP = "static_cleanup"


class Outcome(StrEnum):
    """Classified outcome of a single test method invocation."""

    PASS = "pass"
    SKIP = "skip"
    FAIL = "fail"


class TimingBucket(StrEnum):
    """Named accumulator that a stopwatch interval is charged to."""

    LIFECYCLE = "lifecycle"
    FIXTURE = "fixture"
    BODY = "body"


@dataclass(frozen=True, kw_only=True)
class FailureLink:
    """One entry of a failure's cause chain."""

    type_tag: str
    message: str
    trace: Sequence[str] = ()


@dataclass(kw_only=True)
class TimingBuckets:
    """Elapsed clock ticks per timing bucket.

    Values only ever grow while a class executes; the executor starts a fresh
    instance for every class.
    """

    lifecycle: int = 0
    fixture: int = 0
    body: int = 0

    def add(self, bucket: TimingBucket, ticks: int) -> None:
        """Charge ``ticks`` to ``bucket``."""
        if ticks < 0:
            raise ValueError(f"Cannot charge negative ticks: {ticks}")
        setattr(self, bucket.value, getattr(self, bucket.value) + ticks)

    @property
    def total(self) -> int:
        """Sum of all buckets."""
        return self.lifecycle + self.fixture + self.body

    def __add__(self, other: "TimingBuckets") -> "TimingBuckets":
        """Bucket-wise sum of two timings."""
        return TimingBuckets(
            lifecycle=self.lifecycle + other.lifecycle,
            fixture=self.fixture + other.fixture,
            body=self.body + other.body,
        )


@dataclass(frozen=True, kw_only=True)
class InvocationResult:
    """Outcome of one (method, argument set) invocation."""

    __test__ = False

    label: str
    outcome: Outcome
    chain: Sequence[FailureLink] = ()


@dataclass(frozen=True, kw_only=True)
class HookFailure:
    """A failure raised by a construction or static lifecycle hook."""

    hook: str
    chain: Sequence[FailureLink] = ()


@dataclass(frozen=True, kw_only=True)
class ClassResult:
    """Counts and timings for one executed test class."""

    name: str
    module_file: str = ""
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    timings: TimingBuckets = field(default_factory=TimingBuckets)
    invocations: Sequence[InvocationResult] = ()
    hook_failures: Sequence[HookFailure] = ()

    @property
    def total(self) -> int:
        """Number of enumerated invocations."""
        return self.passed + self.failed + self.skipped

    @property
    def exit_failures(self) -> int:
        """Failures this class contributes to the process exit status.

        Failed invocations plus static cleanup failures; a failing static init
        already surfaces through the invocations it prevented.
        """
        return self.failed + sum(
            1 for failure in self.hook_failures if failure.hook == STATIC_CLEANUP
        )


@dataclass(frozen=True, kw_only=True)
class RunResult:
    """Aggregated result of a whole test run."""

    results: Sequence[ClassResult] = ()
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    timings: TimingBuckets = field(default_factory=TimingBuckets)
    exit_failures: int = 0
    hook_failures: int = 0

    @property
    def total(self) -> int:
        """Number of invocations across all classes."""
        return self.passed + self.failed + self.skipped

    @property
    def total_ticks(self) -> int:
        """Elapsed ticks summed over every class and bucket."""
        return self.timings.total
