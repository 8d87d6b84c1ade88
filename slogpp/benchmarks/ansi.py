"""ANSI escape sequences for terminal colours, cursor movement and progress bars."""

from __future__ import annotations

import math
import os
import sys
from enum import IntEnum

ESC = "\033["

_BAR = "━"


class Color(IntEnum):
    """Terminal colours; UNSPECIFIED leaves the colour unchanged."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    RESET = 8
    BRIGHT_BLACK = 9
    BRIGHT_RED = 10
    BRIGHT_GREEN = 11
    BRIGHT_YELLOW = 12
    BRIGHT_BLUE = 13
    BRIGHT_MAGENTA = 14
    BRIGHT_CYAN = 15
    BRIGHT_WHITE = 16
    UNSPECIFIED = 17


class EraseMode(IntEnum):
    """Which part of the current line to erase."""

    TO_END = 0
    TO_BEGIN = 1
    ALL = 2


_FG_CODES = (
    "30", "31", "32", "33", "34", "35", "36", "37", "39",
    "90", "91", "92", "93", "94", "95", "96", "97",
)

_BG_CODES = (
    "40", "41", "42", "43", "44", "45", "46", "47", "49",
    "100", "101", "102", "103", "104", "105", "106", "107",
)


def sgr(fg: Color = Color.UNSPECIFIED, bg: Color = Color.UNSPECIFIED) -> str:
    """Select foreground and background colours; with neither, reset all attributes."""
    fg, bg = Color(fg), Color(bg)
    if fg is Color.UNSPECIFIED and bg is Color.UNSPECIFIED:
        return ESC + "m"
    if bg is Color.UNSPECIFIED:
        return ESC + _FG_CODES[fg] + "m"
    if fg is Color.UNSPECIFIED:
        return ESC + _BG_CODES[bg] + "m"
    return ESC + _FG_CODES[fg] + ";" + _BG_CODES[bg] + "m"


def cursor_up(lines: int = 1) -> str:
    """Move the cursor up by ``lines`` lines."""
    if lines < 0:
        raise ValueError(f"cannot move up a negative number of lines, got {lines}")
    if lines == 0:
        return ""
    if lines == 1:
        return ESC + "A"
    return f"{ESC}{lines}A"


def in_line_delete(mode: EraseMode = EraseMode.TO_END) -> str:
    """Erase part of the current line."""
    return f"{ESC}{int(EraseMode(mode))}K"


def tty_width() -> int:
    """Width of the terminal behind standard output, or -1 when there is none."""
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return -1


def render_progress_bar(ratio: float, width: int) -> str:
    """Draw a bar ``width`` cells wide, the first ``ratio`` of it highlighted."""
    if width <= 0:
        return ""
    done = math.floor(max(0.0, min(1.0, ratio)) * width + 0.5)
    return _BAR * done + sgr(Color.BRIGHT_BLACK) + _BAR * (width - done) + sgr()