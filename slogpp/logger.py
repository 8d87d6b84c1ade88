"""Loggers: attach attributes, filter by level and hand records to a sink."""

from __future__ import annotations

import os
from typing import Callable, Iterable, Optional

from .attribute import Attribute
from .level import Level
from .record import Record
from .sink import Sink

AbortFunction = Callable[[], object]

_abort_function: AbortFunction = os.abort


def set_abort_function(function: AbortFunction) -> AbortFunction:
    """Replace what a fatal log calls after logging; returns the previous function."""
    global _abort_function
    previous = _abort_function
    _abort_function = function
    return previous


class Logger:
    """Sends records to a sink, each carrying the logger's own attributes first."""

    def __init__(self, sink: Optional[Sink], attributes: Iterable[Attribute] = ()) -> None:
        self._sink = sink
        attributes = tuple(attributes)
        for attribute in attributes:
            if not isinstance(attribute, Attribute):
                raise TypeError(
                    f"logger attributes must be attributes, got {type(attribute).__name__}"
                )
        self._attributes = attributes

    @property
    def sink(self) -> Optional[Sink]:
        return self._sink

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return self._attributes

    def set_sink(self, sink: Optional[Sink]) -> Optional[Sink]:
        """Replace the sink and return the previous one."""
        previous = self._sink
        self._sink = sink
        return previous

    def from_level(self, level: Level) -> None:
        """Make the sink accept this level and everything above it."""
        if self._sink is not None:
            self._sink.from_level(Level(level))

    def set(self, level: Level, enabled: bool) -> None:
        """Make the sink accept or refuse a single level."""
        if self._sink is not None:
            self._sink.set(Level(level), enabled)

    def with_attributes(self, *attributes: Attribute) -> Logger:
        """Return a logger on the same sink that also adds the given attributes."""
        return Logger(self._sink, self._attributes + attributes)

    def log(self, level: Level, message: str, *attributes: Attribute) -> None:
        """Log a message at a level; nothing is built when the sink refuses the level."""
        level = Level(level)
        sink = self._sink
        if sink is None or not sink.enabled(level):
            return
        sink.log(Record(level, message, self._attributes + attributes))

    def trace(self, message: str, *attributes: Attribute) -> None:
        self.log(Level.TRACE, message, *attributes)

    def debug(self, message: str, *attributes: Attribute) -> None:
        self.log(Level.DEBUG, message, *attributes)

    def info(self, message: str, *attributes: Attribute) -> None:
        self.log(Level.INFO, message, *attributes)

    def warn(self, message: str, *attributes: Attribute) -> None:
        self.log(Level.WARN, message, *attributes)

    def error(self, message: str, *attributes: Attribute) -> None:
        self.log(Level.ERROR, message, *attributes)

    def fatal(self, message: str, *attributes: Attribute) -> None:
        """Log at FATAL, then call the abort function."""
        self.log(Level.FATAL, message, *attributes)
        _abort_function()

    # The debug-only variants log unless Python runs with optimisations (-O).

    def dtrace(self, message: str, *attributes: Attribute) -> None:
        if __debug__:
            self.log(Level.TRACE, message, *attributes)

    def ddebug(self, message: str, *attributes: Attribute) -> None:
        if __debug__:
            self.log(Level.DEBUG, message, *attributes)

    def dinfo(self, message: str, *attributes: Attribute) -> None:
        if __debug__:
            self.log(Level.INFO, message, *attributes)

    def dwarn(self, message: str, *attributes: Attribute) -> None:
        if __debug__:
            self.log(Level.WARN, message, *attributes)

    def derror(self, message: str, *attributes: Attribute) -> None:
        if __debug__:
            self.log(Level.ERROR, message, *attributes)