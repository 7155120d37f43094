"""Test orchestrator driving discovery, execution and reporting."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from types import ModuleType
from typing import TextIO

from unit_test_runner.aggregator import aggregate
from unit_test_runner.discovery import discover_test_classes
from unit_test_runner.executor import TestExecutor
from unit_test_runner.models.config import RunnerConfig
from unit_test_runner.models.result import RunResult
from unit_test_runner.rendering.console import RenderContext
from unit_test_runner.rendering.progress import ConsoleProgress
from unit_test_runner.rendering.report import header, render_discovery, render_report

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestOrchestrator:
    """Runs every test class found in a set of modules and reports on them."""

    __test__ = False

    ctx: RenderContext
    config: RunnerConfig = field(default_factory=RunnerConfig)
    clock: Callable[[], int] = time.perf_counter_ns

    def run(self, modules: Sequence[ModuleType]) -> RunResult:
        """Discover, execute and report the tests in ``modules``.

        Classes run one at a time, highest priority first and by name within
        a priority.

        Returns:
            The aggregated result of the run

        """
        width = self.config.width
        classes = discover_test_classes(modules)

        self.ctx.write_line(header("UNIT TESTS", width))
        render_discovery(self.ctx, classes)

        executor = TestExecutor(
            listener=ConsoleProgress(ctx=self.ctx),
            clock=self.clock,
            rethrow_failures=self.config.rethrow_failures,
        )
        try:
            results = [executor.execute(test_class) for test_class in classes]
            run = aggregate(results)
            render_report(self.ctx, run, width)
        finally:
            self.ctx.close()

        log.info(
            "Test run completed: total=%d passed=%d skipped=%d failed=%d",
            run.total,
            run.passed,
            run.skipped,
            run.failed,
        )
        return run


def run_tests(
    modules: Sequence[ModuleType],
    config: RunnerConfig | None = None,
    stream: TextIO | None = None,
) -> int:
    """Run the tests in ``modules`` and return the number of failures.

    Zero means every test passed or was skipped.
    """
    config = config if config is not None else RunnerConfig()
    ctx = RenderContext.from_config(config, stream)
    run = TestOrchestrator(ctx=ctx, config=config).run(modules)
    return run.exit_failures
