"""Tests for the render context."""

import io

import pytest
from colorama import Cursor, Fore

from unit_test_runner.models.config import RunnerConfig
from unit_test_runner.rendering.console import Color, RenderContext
from unit_test_runner.testing.factories import RunnerConfigFactory


@pytest.fixture(autouse=True)
def _terminal_width(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fix the terminal width used for line wrapping."""
    monkeypatch.setenv("COLUMNS", "80")


class TerminalStream(io.StringIO):
    """In-memory stream reporting itself as a terminal."""

    def isatty(self) -> bool:
        return True


class TestFromConfig:
    """Tests for terminal detection."""

    def test_non_terminal_stream_is_plain(self) -> None:
        """Streams that are not terminals get no colour or cursor movement."""
        ctx = RenderContext.from_config(RunnerConfig(), io.StringIO())

        assert not ctx.color
        assert not ctx.cursor

    def test_cursor_follows_colour(self) -> None:
        """In-place updates default to the colour setting."""
        ctx = RenderContext.from_config(RunnerConfig(color=True), io.StringIO())

        assert ctx.color
        assert ctx.cursor

    def test_explicit_cursor_setting(self) -> None:
        """In-place updates can be disabled independently."""
        config = RunnerConfig(color=True, cursor=False)

        ctx = RenderContext.from_config(config, io.StringIO())

        assert ctx.color
        assert not ctx.cursor

    def test_explicit_settings_override_terminal_detection(self) -> None:
        """Configured toggles win over an interactive stream."""
        stream = TerminalStream()
        config = RunnerConfigFactory.build()

        ctx = RenderContext.from_config(config, stream)

        assert stream.isatty()
        assert not ctx.color
        assert not ctx.cursor

    def test_terminal_stream_gets_colour(self) -> None:
        """Interactive streams get colour and cursor movement by default."""
        ctx = RenderContext.from_config(RunnerConfig(), TerminalStream())

        assert ctx.color
        assert ctx.cursor


class TestStatus:
    """Tests for status placeholders."""

    def test_plain_status_written_once_known(self) -> None:
        """Without cursor movement the line is written when the status is known."""
        stream = io.StringIO()
        ctx = RenderContext(stream=stream)

        ctx.begin_status("  ", "Testing 'x()' with ()")
        assert stream.getvalue() == ""

        ctx.end_status("PASS", Color.GREEN)
        assert stream.getvalue() == "  [PASS] Testing 'x()' with ()\n"

    def test_cursor_status_overwrites_placeholder(self) -> None:
        """With cursor movement the placeholder is overwritten in place."""
        stream = io.StringIO()
        ctx = RenderContext(stream=stream, cursor=True)

        ctx.begin_status("  ", "Testing 'x()' with ()")
        assert stream.getvalue() == "  [    ] Testing 'x()' with ()\n"

        ctx.end_status("FAIL", Color.RED)
        assert stream.getvalue().endswith(
            f"{Cursor.UP(1)}\r{Cursor.FORWARD(3)}FAIL\r{Cursor.DOWN(1)}"
        )

    def test_wrapped_status_line_moves_up_every_row(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A status line wrapping over several rows is found again."""
        monkeypatch.setenv("COLUMNS", "20")
        stream = io.StringIO()
        ctx = RenderContext(stream=stream, cursor=True)

        ctx.begin_status("", "x" * 30)
        ctx.end_status("SKIP", Color.YELLOW)

        assert Cursor.UP(2) in stream.getvalue()

    def test_end_without_begin(self) -> None:
        """Ending a status that was never started is an error."""
        ctx = RenderContext(stream=io.StringIO())

        with pytest.raises(RuntimeError, match="without begin_status"):
            ctx.end_status("PASS", Color.GREEN)


def test_coloured_write() -> None:
    """Colour codes precede the text when colour is enabled."""
    stream = io.StringIO()
    ctx = RenderContext(stream=stream, color=True)

    ctx.write_line("hello", Color.RED)

    assert stream.getvalue() == f"{Fore.RED}hello\n"


def test_plain_fill_distinguishes_segments() -> None:
    """Without colour each segment colour has its own fill character."""
    stream = io.StringIO()
    ctx = RenderContext(stream=stream)

    ctx.fill(2, Color.GREEN)
    ctx.fill(2, Color.YELLOW)
    ctx.fill(0, Color.RED)

    assert stream.getvalue() == "##??"
