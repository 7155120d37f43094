"""Text report with proportional bar graphs."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from unit_test_runner.aggregator import ratio
from unit_test_runner.classifier import format_link
from unit_test_runner.models.discovery import TestClassInfo
from unit_test_runner.models.result import ClassResult, FailureLink, RunResult
from unit_test_runner.rendering.console import Color, RenderContext
from unit_test_runner.timing import ticks_to_ms

CLASS_GRAPH_PADDING = 8
CLASS_GRAPH_MARGIN = 35

LEGEND = [
    (Color.GREEN, "Passed test methods"),
    (Color.YELLOW, "Skipped test methods"),
    (Color.RED, "Failed test methods"),
    (Color.MAGENTA, "Time used for testing (relative to the total time)"),
    (
        Color.DARK_BLUE,
        "Time used for constructing the test class and its static init and "
        "cleanup hooks",
    ),
    (Color.BLUE, "Time used for the test init and cleanup hooks"),
    (Color.CYAN, "Time used for the test methods"),
]


@dataclass(frozen=True, kw_only=True)
class GraphSegment:
    """One coloured segment of a bar graph."""

    value: float
    color: Color


def header(text: str, width: int) -> str:
    """Center `` text `` between ``=`` fills spanning ``width`` columns.

    An odd leftover column is padded on the right.
    """
    fill_width = max(0, width - len(text) - 2)
    line = "=" * (fill_width // 2)
    return f"{line} {text} {line}{'=' * (fill_width % 2)}"


def normalize_widths(values: Sequence[float], width: int) -> list[int]:
    """Scale ``values`` to integer widths summing exactly to ``width``.

    Truncation residue is added to the first of the largest segments. An input
    without a positive finite sum yields all zero widths.
    """
    positive = [v if math.isfinite(v) and v > 0 else 0.0 for v in values]
    total = sum(positive)
    if total <= 0 or width <= 0:
        return [0] * len(values)

    scaled = [v / total * width for v in positive]
    widths = [int(v) for v in scaled]
    largest = scaled.index(max(scaled))
    widths[largest] += width - sum(widths)
    return widths


def render_graph(
    ctx: RenderContext,
    padding: int,
    width: int,
    description: str,
    segments: Sequence[GraphSegment],
) -> None:
    """Write ``[####...]`` spanning ``width`` columns, then ``description``."""
    widths = normalize_widths([s.value for s in segments], width - 2)

    ctx.write(f"{' ' * padding}[")
    for segment, cells in zip(segments, widths, strict=True):
        ctx.fill(cells, segment.color)
    ctx.write_line(f"] {description}".rstrip())


def render_discovery(ctx: RenderContext, classes: Sequence[TestClassInfo]) -> None:
    """Write the list of classes about to be tested."""
    ctx.write_line()
    ctx.write_line(f"Testing {len(classes)} type(s):")
    for test_class in classes:
        ctx.write_line(f"    [{test_class.module_file}] {test_class.name}")
    ctx.write_line()


def render_failure(ctx: RenderContext, chain: Sequence[FailureLink]) -> None:
    """Write every link of a failure's cause chain."""
    for link in chain:
        for line in format_link(link):
            ctx.write_line(line, Color.RED)


def summary_lines(run: RunResult) -> list[str]:
    """Global statistics of a run.

    Hook failures are listed only when some occurred, with the number of them
    that count towards the exit status next to them.
    """
    lines = [
        f"    MODULES: {len(run.results):3}",
        f"    TOTAL:   {run.total:3}",
        _count_line("    PASSED:  ", run.passed, run.total),
        _count_line("    SKIPPED: ", run.skipped, run.total),
        _count_line("    FAILED:  ", run.failed, run.total),
    ]
    if run.hook_failures:
        counted = run.exit_failures - run.failed
        lines.append(
            f"    HOOK FAILURES: {run.hook_failures} ({counted} in exit status)"
        )
    lines += [
        f"    TIME:    {ticks_to_ms(run.total_ticks):9.3f} ms",
        "    DETAILS:",
    ]
    return lines


def class_lines(result: ClassResult, run: RunResult) -> list[str]:
    """Statistics of one class, relative to the whole run."""
    timings = result.timings
    class_ticks = timings.total

    lines = [
        f"        MODULE:  {result.name}",
        _count_line("        PASSED:  ", result.passed, result.total),
        _count_line("        SKIPPED: ", result.skipped, result.total),
        _count_line("        FAILED:  ", result.failed, result.total),
        _time_line("        TIME:    ", class_ticks, run.total_ticks),
        _time_line(
            "            CONSTRUCTION AND STATIC HOOKS: ",
            timings.lifecycle,
            class_ticks,
        ),
        _time_line(
            "            INITIALIZATION AND CLEANUP:    ", timings.fixture, class_ticks
        ),
        _time_line(
            "            METHOD TEST RUNS:              ", timings.body, class_ticks
        ),
    ]
    if result.hook_failures:
        hooks = ", ".join(failure.hook for failure in result.hook_failures)
        lines.append(f"        HOOK FAILURES: {hooks}")
    return lines


def render_class_section(
    ctx: RenderContext, result: ClassResult, run: RunResult, width: int
) -> None:
    """Write one class's statistics and its three graphs."""
    timings = result.timings
    time_share = ratio(timings.total, run.total_ticks)
    graph_width = width - CLASS_GRAPH_MARGIN

    ctx.write_line()
    for line in class_lines(result, run):
        ctx.write_line(line)

    render_graph(
        ctx,
        CLASS_GRAPH_PADDING,
        graph_width,
        "TIME/TOTAL",
        [
            GraphSegment(value=time_share, color=Color.MAGENTA),
            GraphSegment(value=1 - time_share, color=Color.BLACK),
        ],
    )
    render_graph(
        ctx,
        CLASS_GRAPH_PADDING,
        graph_width,
        "TIME DISTR",
        [
            GraphSegment(value=timings.lifecycle, color=Color.DARK_BLUE),
            GraphSegment(value=timings.fixture, color=Color.BLUE),
            GraphSegment(value=timings.body, color=Color.CYAN),
        ],
    )
    render_graph(
        ctx,
        CLASS_GRAPH_PADDING,
        graph_width,
        "PASS/SKIP/FAIL",
        _outcome_segments(result.passed, result.skipped, result.failed),
    )


def render_legend(ctx: RenderContext) -> None:
    """Write the meaning of every graph colour."""
    ctx.write_line("    GRAPH COLORS:")
    for color, description in LEGEND:
        ctx.write("       ")
        ctx.fill(3, color)
        ctx.write(" ")
        ctx.write_line(description)


def render_report(ctx: RenderContext, run: RunResult, width: int) -> None:
    """Write the complete results report for a run."""
    ctx.write_line()
    ctx.write_line(header("TEST RESULTS", width))
    render_graph(
        ctx, 0, width, "", _outcome_segments(run.passed, run.skipped, run.failed)
    )
    ctx.write_line()
    for line in summary_lines(run):
        ctx.write_line(line)

    for result in run.results:
        render_class_section(ctx, result, run, width)

    ctx.write_line()
    if run.results:
        render_legend(ctx)

    ctx.write_line()
    ctx.write_line("=" * width)


def _outcome_segments(passed: int, skipped: int, failed: int) -> list[GraphSegment]:
    return [
        GraphSegment(value=passed, color=Color.GREEN),
        GraphSegment(value=skipped, color=Color.YELLOW),
        GraphSegment(value=failed, color=Color.RED),
    ]


def _count_line(label: str, count: int, total: int) -> str:
    return f"{label}{count:3} ({ratio(count, total) * 100:7.3f} %)"


def _time_line(label: str, ticks: int, total_ticks: int) -> str:
    share = ratio(ticks, total_ticks) * 100
    return f"{label}{ticks_to_ms(ticks):9.3f} ms ({share:7.3f} %)"
