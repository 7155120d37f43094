"""Live console progress written while test classes execute."""

from dataclasses import dataclass

from unit_test_runner.models.discovery import TestClassInfo, TestMethodInvocation
from unit_test_runner.models.result import HookFailure, InvocationResult, Outcome
from unit_test_runner.rendering.console import Color, RenderContext
from unit_test_runner.rendering.report import render_failure

STATUS_INDENT = " " * 8

STATUS_STYLES = {
    Outcome.PASS: ("PASS", Color.GREEN),
    Outcome.SKIP: ("SKIP", Color.YELLOW),
    Outcome.FAIL: ("FAIL", Color.RED),
}


@dataclass(frozen=True, kw_only=True)
class ConsoleProgress:
    """Execution listener printing one status line per invocation."""

    ctx: RenderContext

    def class_started(self, test_class: TestClassInfo) -> None:
        """Write the class banner."""
        self.ctx.write_line(f"    Testing class '{test_class.name}'")

    def invocation_started(self, invocation: TestMethodInvocation) -> None:
        """Start the status line with an empty placeholder."""
        self.ctx.begin_status(
            STATUS_INDENT,
            f"Testing '{invocation.signature}' with ({invocation.arguments})",
        )

    def invocation_finished(
        self, invocation: TestMethodInvocation, result: InvocationResult
    ) -> None:
        """Fill in the status, followed by the failure chain on Fail."""
        text, color = STATUS_STYLES[result.outcome]
        self.ctx.end_status(text, color)
        if result.outcome is Outcome.FAIL:
            render_failure(self.ctx, result.chain)

    def hook_failed(self, test_class: TestClassInfo, failure: HookFailure) -> None:
        """Report a construction or static hook failure in red."""
        self.ctx.write_line(
            f"{STATUS_INDENT}{failure.hook} of '{test_class.name}' failed", Color.RED
        )
        render_failure(self.ctx, failure.chain)
