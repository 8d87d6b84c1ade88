"""Severity levels, with three sub-levels between consecutive main levels."""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """Severity of a log record; higher values are more severe."""

    UNKNOWN = -1
    TRACE = 0
    TRACE_1 = 1
    TRACE_2 = 2
    TRACE_3 = 3
    DEBUG = 4
    DEBUG_1 = 5
    DEBUG_2 = 6
    DEBUG_3 = 7
    INFO = 8
    INFO_1 = 9
    INFO_2 = 10
    INFO_3 = 11
    WARN = 12
    WARN_1 = 13
    WARN_2 = 14
    WARN_3 = 15
    ERROR = 16
    ERROR_1 = 17
    ERROR_2 = 18
    ERROR_3 = 19
    FATAL = 20


NUM_LEVELS = int(Level.FATAL) + 2

_SUBDIVIDABLE = frozenset(
    {Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR}
)


def sub_level(level: Level, n: int) -> Level:
    """Return the n-th sub-level (0 to 3) of a main level other than FATAL."""
    level = Level(level)
    if level not in _SUBDIVIDABLE:
        raise ValueError(f"{level.name} has no sub-levels")
    if not 0 <= n <= 3:
        raise ValueError(f"sub-level must be between 0 and 3, got {n}")
    return Level(int(level) + n)


def level_index(level: Level | int) -> int:
    """Return the slot of a level in a per-level table; 0 for anything unknown."""
    index = int(level) + 1
    if 0 <= index < NUM_LEVELS:
        return index
    return 0