"""Time a function over many calls and report the spread of its durations."""

from __future__ import annotations

import math
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Sequence, TextIO, Tuple, TypeVar

from .ansi import Color, EraseMode, cursor_up, in_line_delete, render_progress_bar, sgr, tty_width

T = TypeVar("T")

_SPINNER = ("⠷", "⠯", "⠟", "⠻", "⠽", "⠾")
_DONE = "⠿"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def humanize(nanoseconds: int) -> Tuple[float, str]:
    """Express a count of nanoseconds in the largest fitting unit."""
    value = float(nanoseconds)
    if value > 1e9:
        return value / 1e9, "s"
    if value > 1e6:
        return value / 1e6, "ms"
    if value > 1e3:
        return value / 1e3, "μs"
    return value, "ns"


def name_ellipsis(name: str, columns: int) -> str:
    """Fit a name into a quarter of the columns, padding or cutting it with '...'."""
    size = max(0, _round_half_away(columns * 0.25))
    if size < 3:
        return name
    if len(name) > size:
        return name[: size - 3] + "..."
    return name.ljust(size)


def _format_ns(nanoseconds: int) -> str:
    value, units = humanize(nanoseconds)
    return f"{value:g}{units}"


@dataclass
class BenchmarkResult:
    """The durations of every call, in nanoseconds, with their summary."""

    durations: List[int]
    total: int
    average: int
    minimum: int
    maximum: int
    units: str = "ns"
    ratio: float = 1.0

    @classmethod
    def from_durations(cls, durations: Sequence[int]) -> BenchmarkResult:
        """Summarise a non-empty list of durations."""
        durations = [int(d) for d in durations]
        if not durations:
            raise ValueError("a benchmark result needs at least one duration")
        total = sum(durations)
        count = len(durations)
        average = total // count if total >= 0 else -((-total) // count)
        return cls(
            durations=durations,
            total=total,
            average=average,
            minimum=min(durations),
            maximum=max(durations),
        )

    def __str__(self) -> str:
        return (
            f"{len(self.durations)} ops in {_format_ns(self.total)}"
            f" avg: {_format_ns(self.average)}"
            f" range:[{_format_ns(self.minimum)},{_format_ns(self.maximum)}]"
        )


@dataclass
class _State:
    name: str
    start: int
    last_display: Optional[int] = None
    iterations: int = 0
    nb_display: int = 0
    stop_at_iteration: int = 0
    total_duration: int = 0
    results: List[int] = field(default_factory=list)

    @property
    def warming_up(self) -> bool:
        return self.stop_at_iteration == 0

    def increment(self, last: int) -> None:
        self.iterations += 1
        self.total_duration += last
        self.results.append(last)


def _default_columns() -> int:
    return min(100, tty_width())


@dataclass
class Benchmarker(Generic[T]):
    """Calls a function on the items of ``data`` in turn until enough time is measured.

    Durations are nanoseconds as read from ``clock``. After a warm-up, the number
    of calls is chosen to last about ``target``, within the iteration bounds.
    """

    data: Sequence[T]
    target: int = 2_000_000_000
    max_warming_up: int = 500_000_000
    warmup: int = 20
    min_iterations: int = 50
    max_iteration: int = 100_000
    display: bool = True
    columns: int = field(default_factory=_default_columns)
    refresh: int = 100_000_000
    output: Optional[TextIO] = None
    clock: Callable[[], int] = time.perf_counter_ns

    def __post_init__(self) -> None:
        if len(self.data) == 0:
            raise ValueError("a benchmarker needs at least one data item")

    def benchmark(self, name: str, fn: Callable[[T], object]) -> BenchmarkResult:
        """Measure ``fn`` and return the durations of every call."""
        state = _State(name=name_ellipsis(name, self.columns), start=self.clock())
        count = len(self.data)
        while not self._should_stop(state):
            start = self.clock()
            fn(self.data[state.iterations % count])
            end = self.clock()

            state.increment(end - start)
            if state.warming_up:
                self._set_up_hot_state(state)
            self._display_state(state, end, False)

        self._display_state(state, self.clock(), True)
        return BenchmarkResult.from_durations(state.results)

    def _set_up_hot_state(self, state: _State) -> None:
        if not state.warming_up:
            return
        if state.iterations < self.warmup and state.total_duration < self.max_warming_up:
            return
        median = sorted(state.results)[len(state.results) // 2]
        if median > 0:
            estimate = _round_half_away(self.target / median)
        else:
            estimate = self.max_iteration
        state.stop_at_iteration = max(self.min_iterations, min(estimate, self.max_iteration))

    def _should_stop(self, state: _State) -> bool:
        return (
            not state.warming_up
            and state.iterations >= self.min_iterations
            and (
                state.iterations >= state.stop_at_iteration
                or state.total_duration >= 2 * self.target
            )
        )

    def _ratio(self, state: _State) -> float:
        def share(part: float, whole: float) -> float:
            return part / whole if whole else 1.0

        if state.warming_up:
            return max(
                share(state.iterations, self.warmup),
                share(state.total_duration, self.max_warming_up),
            )
        return max(
            share(state.iterations, state.stop_at_iteration),
            share(state.total_duration, 2.0 * self.target),
        )

    def _display_state(self, state: _State, now: int, terminate: bool) -> None:
        if not self.display or self.columns <= 0:
            return
        too_soon = state.last_display is not None and now - state.last_display < self.refresh
        if too_soon and not terminate:
            return
        state.last_display = now
        state.nb_display += 1

        parts = []
        if state.nb_display > 1:
            parts.append(cursor_up() + in_line_delete(EraseMode.ALL))

        spinner = _DONE if terminate else _SPINNER[state.nb_display % len(_SPINNER)]
        parts.append(state.name + " ")
        if state.warming_up and not terminate:
            parts.append(f"{'warming up':>13}")
        else:
            parts.append(f"{state.iterations:>6}/{state.stop_at_iteration:>6}")

        ratio = self._ratio(state)
        color = Color.CYAN
        if terminate:
            color = Color.GREEN
            ratio = 1.0
        elif state.warming_up:
            color = Color.YELLOW
        parts.append(f"{sgr(color)} {spinner} ")

        bar_width = self.columns - len(state.name) - 14 - 3 - 5
        parts.append(
            f"{render_progress_bar(ratio, bar_width)} {state.total_duration / 1e9:.1f}s\n"
        )

        out = self.output if self.output is not None else sys.stdout
        out.write("".join(parts))
        out.flush()