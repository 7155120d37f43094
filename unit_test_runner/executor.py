"""Execution of one test class through its lifecycle."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from unit_test_runner.classifier import Classification, InvocationError, classify
from unit_test_runner.discovery import enumerate_invocations
from unit_test_runner.models.discovery import TestClassInfo, TestMethodInvocation
from unit_test_runner.models.result import (
    CONSTRUCTOR,
    STATIC_CLEANUP,
    STATIC_INIT,
    ClassResult,
    HookFailure,
    InvocationResult,
    Outcome,
    TimingBucket,
)
from unit_test_runner.timing import Stopwatch

log = logging.getLogger(__name__)

INIT_HOOK = "init"
CLEANUP_HOOK = "cleanup"


class ExecutionListener(Protocol):
    """Receives progress notifications while a test class executes."""

    def class_started(self, test_class: TestClassInfo) -> None:
        """Called before anything of ``test_class`` runs."""

    def invocation_started(self, invocation: TestMethodInvocation) -> None:
        """Called before an invocation's hooks and body run."""

    def invocation_finished(
        self, invocation: TestMethodInvocation, result: InvocationResult
    ) -> None:
        """Called once an invocation's outcome is known."""

    def hook_failed(self, test_class: TestClassInfo, failure: HookFailure) -> None:
        """Called when construction or a static hook raised."""


class NullListener:
    """Listener ignoring all notifications."""

    def class_started(self, test_class: TestClassInfo) -> None:
        """Ignore the class start."""

    def invocation_started(self, invocation: TestMethodInvocation) -> None:
        """Ignore the invocation start."""

    def invocation_finished(
        self, invocation: TestMethodInvocation, result: InvocationResult
    ) -> None:
        """Ignore the invocation result."""

    def hook_failed(self, test_class: TestClassInfo, failure: HookFailure) -> None:
        """Ignore the hook failure."""


@dataclass(kw_only=True)
class _ClassRun:
    """Mutable state of one class execution."""

    test_class: TestClassInfo
    stopwatch: Stopwatch
    instance: Any = None
    setup: Classification | None = None
    hook_failures: list[HookFailure] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class TestExecutor:
    """Runs test classes one at a time, strictly sequentially."""

    __test__ = False

    listener: ExecutionListener = field(default_factory=NullListener)
    clock: Callable[[], int] = time.perf_counter_ns
    rethrow_failures: bool = False

    def execute(self, test_class: TestClassInfo) -> ClassResult:
        """Run every invocation of ``test_class`` and collect the results.

        Construction and static hook failures are reported per class: when
        construction or ``static_init`` fails, every invocation of the class
        fails without running. ``static_cleanup`` always runs once the class
        was constructed.
        """
        log.info("Executing test class %s", test_class.name)
        self.listener.class_started(test_class)

        run = _ClassRun(test_class=test_class, stopwatch=Stopwatch(clock=self.clock))
        if not test_class.skip:
            self._set_up(run)

        invocations = enumerate_invocations(test_class)
        results = [self._run_invocation(run, invocation) for invocation in invocations]

        if run.instance is not None:
            # time since the last invocation finished is not charged
            run.stopwatch.restart()
            failure = self._call_static_hook(run, STATIC_CLEANUP)
            if failure is not None and failure.outcome is Outcome.FAIL:
                self._record_hook_failure(run, STATIC_CLEANUP, failure)

        result = ClassResult(
            name=test_class.name,
            module_file=test_class.module_file,
            passed=_count(results, Outcome.PASS),
            failed=_count(results, Outcome.FAIL),
            skipped=_count(results, Outcome.SKIP),
            timings=run.stopwatch.buckets,
            invocations=results,
            hook_failures=run.hook_failures,
        )
        log.info(
            "Finished test class %s: passed=%d skipped=%d failed=%d",
            test_class.name,
            result.passed,
            result.skipped,
            result.failed,
        )
        return result

    def _set_up(self, run: _ClassRun) -> None:
        run.stopwatch.restart()
        try:
            run.instance = run.test_class.cls()
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            run.setup = classify(_wrap(exc, f"Cannot construct {run.test_class.name}"))
        finally:
            run.stopwatch.add(TimingBucket.LIFECYCLE)

        if run.setup is None:
            run.setup = self._call_static_hook(run, STATIC_INIT)

        if run.setup is not None and run.setup.outcome is Outcome.FAIL:
            hook = STATIC_INIT if run.instance is not None else CONSTRUCTOR
            self._record_hook_failure(run, hook, run.setup)

    def _call_static_hook(self, run: _ClassRun, name: str) -> Classification | None:
        hook = getattr(run.instance, name, None)
        try:
            if callable(hook):
                hook()
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            return classify(_wrap(exc, f"{name} of {run.test_class.name} raised"))
        finally:
            run.stopwatch.add(TimingBucket.LIFECYCLE)
        return None

    def _record_hook_failure(
        self, run: _ClassRun, hook: str, classification: Classification
    ) -> None:
        failure = HookFailure(hook=hook, chain=classification.chain)
        log.error(
            "%s of test class %s failed: %s",
            hook,
            run.test_class.name,
            "; ".join(link.message for link in failure.chain),
        )
        run.hook_failures.append(failure)
        self.listener.hook_failed(run.test_class, failure)

    def _run_invocation(
        self, run: _ClassRun, invocation: TestMethodInvocation
    ) -> InvocationResult:
        self.listener.invocation_started(invocation)

        if invocation.skip or run.test_class.skip:
            classification = Classification(outcome=Outcome.SKIP)
        elif run.setup is not None:
            classification = run.setup
        else:
            # progress rendering since the previous phase is not charged
            run.stopwatch.restart()
            error = self._invoke(run, invocation)
            classification = classify(error)
            if (
                self.rethrow_failures
                and classification.outcome is Outcome.FAIL
                and error is not None
                and error.__cause__ is not None
            ):
                raise error.__cause__

        result = InvocationResult(
            label=invocation.label,
            outcome=classification.outcome,
            chain=classification.chain,
        )
        log.debug("%s: %s", invocation.label, result.outcome)
        self.listener.invocation_finished(invocation, result)
        return result

    def _invoke(
        self, run: _ClassRun, invocation: TestMethodInvocation
    ) -> InvocationError | None:
        """Run init, body and cleanup; cleanup is skipped when init or body fail."""
        if invocation.binding_error is not None:
            return _wrap(invocation.binding_error, f"Cannot bind {invocation.label}")

        stopwatch = run.stopwatch
        phase = TimingBucket.FIXTURE
        try:
            _call_hook(run.instance, INIT_HOOK)
            stopwatch.add(TimingBucket.FIXTURE)

            phase = TimingBucket.BODY
            invocation.func(run.instance, *invocation.args)
            stopwatch.add(TimingBucket.BODY)

            phase = TimingBucket.FIXTURE
            _call_hook(run.instance, CLEANUP_HOOK)
            stopwatch.add(TimingBucket.FIXTURE)
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            stopwatch.add(phase)
            return _wrap(exc, f"{invocation.method_name} raised")
        return None


def _call_hook(instance: Any, name: str) -> None:
    hook = getattr(instance, name, None)
    if callable(hook):
        hook()


def _wrap(error: BaseException, message: str) -> InvocationError:
    wrapper = InvocationError(message)
    wrapper.__cause__ = error
    return wrapper


def _count(results: Sequence[InvocationResult], outcome: Outcome) -> int:
    return sum(1 for result in results if result.outcome is outcome)

