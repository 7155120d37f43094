"""Aggregation of per-class results into run totals."""

import sys
from collections.abc import Iterable

from unit_test_runner.models.result import ClassResult, RunResult, TimingBuckets


def ratio(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or 0 for a (near) zero denominator."""
    if abs(denominator) < sys.float_info.epsilon:
        return 0.0
    return numerator / denominator


def aggregate(results: Iterable[ClassResult]) -> RunResult:
    """Sum counts and timings over all class results, keeping their order."""
    ordered = list(results)
    timings = TimingBuckets()
    for result in ordered:
        timings += result.timings

    return RunResult(
        results=ordered,
        passed=sum(result.passed for result in ordered),
        failed=sum(result.failed for result in ordered),
        skipped=sum(result.skipped for result in ordered),
        timings=timings,
        exit_failures=sum(result.exit_failures for result in ordered),
        hook_failures=sum(len(result.hook_failures) for result in ordered),
    )
