import io
import sys

import pytest

from slogpp.benchmarks.ansi import (
    ESC,
    Color,
    EraseMode,
    cursor_up,
    in_line_delete,
    render_progress_bar,
    sgr,
    tty_width,
)


def test_sgr_reset():
    assert sgr() == "\033[m"


def test_sgr_foreground_colours():
    assert sgr(Color.RED) == "\033[31m"
    assert sgr(Color.BLUE) == "\033[34m"
    assert sgr(Color.CYAN) == "\033[36m"


def test_sgr_foreground_and_background():
    assert sgr(Color.WHITE, Color.RED) == "\033[37;41m"


def test_sgr_background_only_differs_from_foreground():
    background = sgr(bg=Color.RED)
    assert background.startswith(ESC)
    assert background.endswith("m")
    assert background != sgr(Color.RED)


@pytest.mark.parametrize("lines", [2, 5, 17])
def test_cursor_up_many_lines(lines):
    result = cursor_up(lines)
    assert result.startswith(ESC)
    assert result.endswith("A")
    assert str(lines) in result


def test_cursor_up_zero_and_one():
    assert cursor_up(0) == ""
    assert cursor_up(1) == ESC + "A"
    assert cursor_up() == cursor_up(1)


def test_cursor_up_negative_raises():
    with pytest.raises(ValueError):
        cursor_up(-1)


def test_in_line_delete_default():
    assert in_line_delete() == "\033[0K"


def test_in_line_delete_modes_are_distinct():
    results = {in_line_delete(mode) for mode in EraseMode}
    assert len(results) == len(EraseMode)
    assert all(result.endswith("K") for result in results)


def test_tty_width_without_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert tty_width() == -1


def test_progress_bar_empty_width():
    assert render_progress_bar(0.5, 0) == ""
    assert render_progress_bar(0.5, -3) == ""


@pytest.mark.parametrize("ratio", [0.0, 0.3, 0.5, 0.99, 1.0])
def test_progress_bar_has_width_cells(ratio):
    assert render_progress_bar(ratio, 10).count("━") == 10


def test_progress_bar_full():
    assert render_progress_bar(1.0, 4) == "━" * 4 + sgr(Color.BRIGHT_BLACK) + sgr()


def test_progress_bar_is_clamped():
    assert render_progress_bar(7.0, 6) == render_progress_bar(1.0, 6)
    assert render_progress_bar(-2.0, 6) == render_progress_bar(0.0, 6)
    assert render_progress_bar(0.0, 6).startswith(sgr(Color.BRIGHT_BLACK))


def test_progress_bar_rounds_half_up():
    bar = render_progress_bar(0.5, 5)
    assert bar.index(ESC) == 3