"""Render context owning console colour and cursor state."""

import math
import shutil
import sys
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TextIO

from colorama import Cursor, Fore, Style

from unit_test_runner.models.config import RunnerConfig


class Color(StrEnum):
    """Colours used by the report."""

    WHITE = "white"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    MAGENTA = "magenta"
    BLACK = "black"
    DARK_BLUE = "dark_blue"
    BLUE = "blue"
    CYAN = "cyan"


ANSI_CODES = {
    Color.WHITE: Fore.WHITE,
    Color.GREEN: Fore.GREEN,
    Color.YELLOW: Fore.YELLOW,
    Color.RED: Fore.RED,
    Color.MAGENTA: Fore.MAGENTA,
    Color.BLACK: Fore.BLACK,
    Color.DARK_BLUE: Fore.BLUE,
    Color.BLUE: Fore.LIGHTBLUE_EX,
    Color.CYAN: Fore.CYAN,
}

# graph fill characters when colour is off, so segments stay distinguishable
PLAIN_FILL = {
    Color.WHITE: "#",
    Color.GREEN: "#",
    Color.YELLOW: "?",
    Color.RED: "!",
    Color.MAGENTA: "#",
    Color.BLACK: ".",
    Color.DARK_BLUE: "c",
    Color.BLUE: "i",
    Color.CYAN: "m",
}


@dataclass(frozen=True, kw_only=True)
class StatusBookmark:
    """Position of a status placeholder written by ``begin_status``."""

    indent: str
    text: str
    column: int
    rows: int


@dataclass(kw_only=True)
class RenderContext:
    """Console output surface for the report.

    With ``cursor`` enabled, a status placeholder is written immediately and
    overwritten in place once the outcome is known. Without it, the whole
    status line is written when the outcome is known.
    """

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    color: bool = False
    cursor: bool = False
    _bookmark: StatusBookmark | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_config(
        cls, config: RunnerConfig, stream: TextIO | None = None
    ) -> "RenderContext":
        """Create a context, detecting terminal support where not configured."""
        stream = stream if stream is not None else sys.stdout
        isatty = getattr(stream, "isatty", None)
        if (color := config.color) is None:
            color = bool(isatty and isatty())
        if (cursor := config.cursor) is None:
            cursor = color
        return cls(stream=stream, color=color, cursor=cursor)

    def write(self, text: str, color: Color = Color.WHITE) -> None:
        """Write ``text`` in ``color``."""
        if self.color:
            self.stream.write(ANSI_CODES[color])
        self.stream.write(text)

    def write_line(self, text: str = "", color: Color = Color.WHITE) -> None:
        """Write ``text`` in ``color`` followed by a newline."""
        self.write(f"{text}\n", color)

    def fill(self, count: int, color: Color) -> None:
        """Write a run of ``count`` graph cells in ``color``."""
        if count <= 0:
            return
        self.write(("#" if self.color else PLAIN_FILL[color]) * count, color)

    def begin_status(self, indent: str, text: str) -> None:
        """Start a status line ``<indent>[    ] <text>``."""
        line = f"{indent}[    ] {text}"
        columns = max(1, shutil.get_terminal_size().columns)
        self._bookmark = StatusBookmark(
            indent=indent,
            text=text,
            column=len(indent) + 1,
            rows=max(1, math.ceil(len(line) / columns)),
        )
        if self.cursor:
            self.write_line(line)

    def end_status(self, status: str, color: Color) -> None:
        """Fill in the status of the line started by ``begin_status``."""
        bookmark = self._bookmark
        self._bookmark = None
        if bookmark is None:
            raise RuntimeError("end_status called without begin_status")

        if not self.cursor:
            self.write(f"{bookmark.indent}[")
            self.write(status, color)
            self.write_line(f"] {bookmark.text}")
            return

        self.stream.write(Cursor.UP(bookmark.rows) + "\r")
        self.stream.write(Cursor.FORWARD(bookmark.column))
        self.write(status, color)
        self.stream.write(f"\r{Cursor.DOWN(bookmark.rows)}")
        self.write("", Color.WHITE)

    def close(self) -> None:
        """Reset console attributes and flush."""
        if self.color:
            self.stream.write(Style.RESET_ALL)
        self.stream.flush()
