"""Destinations for records: filtering by level, formatting and writing."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from enum import IntFlag
from typing import Callable, Iterable, List, Optional, Sequence, TextIO

from .config import FileSinkConfig, ProgramOutputSinkConfig
from .level import NUM_LEVELS, Level, level_index
from .record import Record
from .threadpool import ThreadPool

Formatter = Callable[[Record], str]

THREAD_POOL = ThreadPool()


class ConcurrencyMode(IntFlag):
    """Whether a sink serialises its writes and whether it writes on the thread pool."""

    UNSAFE = 0
    MT_SAFE = 1
    ASYNC = 2
    ASYNC_MT_SAFE = 3


class Sink(ABC):
    """Receives records from loggers."""

    @abstractmethod
    def allocate_on_stack(self) -> bool:
        """Whether the sink is content with records it may not keep."""

    @abstractmethod
    def enabled(self, level: Level) -> bool:
        """Whether records of this level are accepted."""

    @abstractmethod
    def from_level(self, level: Level) -> None:
        """Accept this level and everything above it, and nothing below."""

    @abstractmethod
    def set(self, level: Level, enabled: bool) -> None:
        """Accept or refuse a single level."""

    @abstractmethod
    def log(self, record: Record) -> None:
        """Handle one record."""


class FormattingSink(Sink):
    """A sink that keeps a per-level table, formats records and writes the text."""

    def __init__(
        self,
        levels: Sequence[bool],
        formatter: Formatter,
        mode: ConcurrencyMode = ConcurrencyMode.UNSAFE,
        thread_pool: Optional[ThreadPool] = None,
    ) -> None:
        levels = [bool(enabled) for enabled in levels]
        if len(levels) != NUM_LEVELS:
            raise ValueError(f"expected {NUM_LEVELS} level flags, got {len(levels)}")
        self._levels = levels
        self._formatter = formatter
        self.mode = ConcurrencyMode(mode)
        self._thread_pool = thread_pool if thread_pool is not None else THREAD_POOL
        self._lock = threading.Lock()

    def allocate_on_stack(self) -> bool:
        return bool(self.mode & ConcurrencyMode.ASYNC)

    def enabled(self, level: Level) -> bool:
        return self._levels[level_index(level)]

    def from_level(self, level: Level) -> None:
        start = int(level) + 1
        for index in range(1, NUM_LEVELS):
            self._levels[index] = index >= start

    def set(self, level: Level, enabled: bool) -> None:
        index = int(level) + 1
        if 0 <= index < NUM_LEVELS:
            self._levels[index] = bool(enabled)

    def log(self, record: Record) -> None:
        if self.mode & ConcurrencyMode.ASYNC:
            task = self._emit_locked if self.mode & ConcurrencyMode.MT_SAFE else self._emit
            self._thread_pool.queue(task, record)
        elif self.mode & ConcurrencyMode.MT_SAFE:
            self._emit_locked(record)
        else:
            self._emit(record)

    def _emit(self, record: Record) -> None:
        self.write(self._formatter(record))

    def _emit_locked(self, record: Record) -> None:
        with self._lock:
            self._emit(record)

    @abstractmethod
    def write(self, text: str) -> None:
        """Output one formatted record."""


class _StandardStream:
    """Writes to whatever sys.stdout or sys.stderr is at the time of writing."""

    def __init__(self, to_stdout: bool) -> None:
        self._to_stdout = to_stdout

    def _target(self) -> TextIO:
        return sys.stdout if self._to_stdout else sys.stderr

    def write(self, text: str) -> int:
        return self._target().write(text)

    def flush(self) -> None:
        self._target().flush()


class StreamSink(FormattingSink):
    """A formatting sink that writes one line per record to a text stream."""

    def __init__(
        self,
        stream: TextIO,
        levels: Sequence[bool],
        formatter: Formatter,
        mode: ConcurrencyMode = ConcurrencyMode.UNSAFE,
        thread_pool: Optional[ThreadPool] = None,
        *,
        owns_stream: bool = False,
    ) -> None:
        super().__init__(levels, formatter, mode, thread_pool)
        self._stream = stream
        self._owns_stream = owns_stream

    def __enter__(self) -> StreamSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def write(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

    def close(self) -> None:
        """Close the stream if the sink opened it."""
        if self._owns_stream:
            self._stream.close()


class MultiSink(Sink):
    """Forwards each record to every member sink that accepts its level."""

    def __init__(self, sinks: Iterable[Optional[Sink]]) -> None:
        self._sinks: List[Sink] = [sink for sink in sinks if sink is not None]
        self._allocate_on_stack = all(sink.allocate_on_stack() for sink in self._sinks)
        lowest = Level.FATAL
        for sink in self._sinks:
            first = next((level for level in _ORDERED_LEVELS if sink.enabled(level)), Level.FATAL)
            lowest = min(lowest, first)
        self._from = lowest

    @property
    def sinks(self) -> tuple:
        return tuple(self._sinks)

    def allocate_on_stack(self) -> bool:
        return self._allocate_on_stack

    def enabled(self, level: Level) -> bool:
        return level >= self._from

    def from_level(self, level: Level) -> None:
        for sink in self._sinks:
            sink.from_level(level)

    def set(self, level: Level, enabled: bool) -> None:
        for sink in self._sinks:
            sink.set(level, enabled)

    def log(self, record: Record) -> None:
        for sink in self._sinks:
            if sink.enabled(record.level):
                sink.log(record)


_ORDERED_LEVELS = tuple(level for level in Level if level >= Level.TRACE)


def tee_sink(*sinks: Sink) -> MultiSink:
    """Combine sinks into one; a single list or tuple of sinks is accepted too."""
    if len(sinks) == 1 and isinstance(sinks[0], (list, tuple)):
        sinks = tuple(sinks[0])
    return MultiSink(sinks)


def sink_from_config(config: ProgramOutputSinkConfig | FileSinkConfig) -> StreamSink:
    """Build the sink a configuration describes; files are opened for appending."""
    mode = ConcurrencyMode.UNSAFE
    if config.asynchronous:
        mode |= ConcurrencyMode.ASYNC
    if config.with_locking:
        mode |= ConcurrencyMode.MT_SAFE

    if isinstance(config, FileSinkConfig):
        stream = open(config.filepath, "a", encoding="utf-8")
        return StreamSink(stream, config.levels, config.formatter(), mode, owns_stream=True)
    if isinstance(config, ProgramOutputSinkConfig):
        stream = _StandardStream(config.to_stdout)
        return StreamSink(stream, config.levels, config.formatter(), mode)  # type: ignore[arg-type]
    raise TypeError(f"unknown sink configuration {type(config).__name__}")