"""Tests for live console progress."""

import io

import pytest

from unit_test_runner.models.discovery import TestClassInfo, TestMethodInvocation
from unit_test_runner.models.result import (
    STATIC_INIT,
    FailureLink,
    HookFailure,
    InvocationResult,
    Outcome,
)
from unit_test_runner.rendering.console import RenderContext
from unit_test_runner.rendering.progress import ConsoleProgress


@pytest.fixture
def stream() -> io.StringIO:
    """Capture rendered output."""
    return io.StringIO()


@pytest.fixture
def progress(stream: io.StringIO) -> ConsoleProgress:
    """Progress listener writing plain text."""
    return ConsoleProgress(ctx=RenderContext(stream=stream))


@pytest.fixture
def sample_class() -> TestClassInfo:
    """A discovered class record."""
    return TestClassInfo(
        name="pkg.Sample", module_name="pkg", module_file="pkg.py", cls=object
    )


@pytest.fixture
def invocation() -> TestMethodInvocation:
    """A parameterized invocation."""
    return TestMethodInvocation(
        method_name="adds",
        func=lambda self, a, b: None,
        args=(1, 2),
        parameter_types=["int", "int"],
    )


def test_class_started(
    progress: ConsoleProgress, stream: io.StringIO, sample_class: TestClassInfo
) -> None:
    """Announces each class."""
    progress.class_started(sample_class)

    assert stream.getvalue() == "    Testing class 'pkg.Sample'\n"


@pytest.mark.parametrize(
    ("outcome", "status"),
    [(Outcome.PASS, "PASS"), (Outcome.SKIP, "SKIP"), (Outcome.FAIL, "FAIL")],
)
def test_invocation_status(
    progress: ConsoleProgress,
    stream: io.StringIO,
    invocation: TestMethodInvocation,
    outcome: Outcome,
    status: str,
) -> None:
    """Writes the invocation line with its status."""
    progress.invocation_started(invocation)
    progress.invocation_finished(
        invocation, InvocationResult(label=invocation.label, outcome=outcome)
    )

    assert stream.getvalue() == (
        f"        [{status}] Testing 'adds(int, int)' with (1, 2)\n"
    )


def test_failure_prints_cause_chain(
    progress: ConsoleProgress, stream: io.StringIO, invocation: TestMethodInvocation
) -> None:
    """Failures are followed by every link of their cause chain."""
    chain = [
        FailureLink(type_tag="RuntimeError", message="outer", trace=["    at a"]),
        FailureLink(type_tag="ValueError", message="root", trace=["    at b"]),
    ]

    progress.invocation_started(invocation)
    progress.invocation_finished(
        invocation,
        InvocationResult(label=invocation.label, outcome=Outcome.FAIL, chain=chain),
    )

    lines = stream.getvalue().splitlines()
    assert lines[1:] == [
        f"{' ' * 18}[RuntimeError] outer",
        "    at a",
        f"{' ' * 18}[ValueError] root",
        "    at b",
    ]


def test_hook_failure(
    progress: ConsoleProgress, stream: io.StringIO, sample_class: TestClassInfo
) -> None:
    """Hook failures name the hook and print their chain."""
    progress.hook_failed(
        sample_class,
        HookFailure(
            hook=STATIC_INIT,
            chain=[FailureLink(type_tag="OSError", message="gone")],
        ),
    )

    assert stream.getvalue().splitlines() == [
        "        static_init of 'pkg.Sample' failed",
        f"{' ' * 18}[OSError] gone",
    ]
