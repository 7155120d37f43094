"""Classification of raised exceptions into test outcomes."""

import traceback
from collections.abc import Sequence
from dataclasses import dataclass

from unit_test_runner.models.result import FailureLink, Outcome
from unit_test_runner.suite.base import SkippedError

HEADER_INDENT = " " * 18
TRACE_INDENT = " " * 16


class InvocationError(Exception):
    """Wraps any exception raised while invoking a test method or hook.

    The original exception is always attached as ``__cause__``.
    """


class BindingError(TypeError):
    """Raised when a parameterized method cannot be bound to its arguments."""


@dataclass(frozen=True, kw_only=True)
class Classification:
    """Outcome of an invocation plus the cause chain reported on failure."""

    outcome: Outcome
    chain: Sequence[FailureLink] = ()


def classify(error: BaseException | None) -> Classification:
    """Classify an invocation's raised exception.

    No exception means the invocation passed. A ``SkippedError``, raised
    directly or wrapped once, means it was skipped. Anything else is a failure
    whose chain lists every cause below the raised exception.
    """
    if error is None:
        return Classification(outcome=Outcome.PASS)

    if isinstance(error, SkippedError) or isinstance(error.__cause__, SkippedError):
        return Classification(outcome=Outcome.SKIP)

    return Classification(outcome=Outcome.FAIL, chain=cause_chain(error))


def cause_chain(error: BaseException) -> Sequence[FailureLink]:
    """Follow the causes of ``error`` down to the root cause.

    ``error`` itself is treated as the invocation wrapper and is not part of
    the chain. Explicit causes (``raise ... from``) and implicit, unsuppressed
    contexts are both followed.
    """
    chain: list[FailureLink] = []
    seen = {id(error)}
    current = _next_cause(error)

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(describe(current))
        current = _next_cause(current)

    return chain


def describe(error: BaseException) -> FailureLink:
    """Build a chain link (type tag, message, indented trace) for ``error``."""
    return FailureLink(
        type_tag=type_tag(error),
        message=str(error),
        trace=format_trace(error),
    )


def type_tag(error: BaseException) -> str:
    """Return the fully qualified type name of ``error``."""
    cls = type(error)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def format_trace(error: BaseException) -> Sequence[str]:
    """Format the traceback of ``error`` as lines indented for nested display."""
    lines: list[str] = []
    for entry in traceback.format_tb(error.__traceback__):
        lines.extend(f"{TRACE_INDENT}{line}" for line in entry.splitlines())
    return lines


def format_link(link: FailureLink) -> Sequence[str]:
    """Render one chain link as report lines."""
    return [f"{HEADER_INDENT}[{link.type_tag}] {link.message}", *link.trace]


def _next_cause(error: BaseException) -> BaseException | None:
    if error.__cause__ is not None:
        return error.__cause__
    if not error.__suppress_context__:
        return error.__context__
    return None
