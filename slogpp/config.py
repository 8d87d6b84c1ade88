"""Sink configuration and the option functions that build it."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, TypeVar, Union

from .formatters import record_to_ansi_text, record_to_json, record_to_raw_text
from .level import NUM_LEVELS, Level
from .record import Record

Formatter = Callable[[Record], str]

T = TypeVar("T")
Option = Callable[[T], None]


class OutputFormat(Enum):
    """How a sink renders its records."""

    JSON = 0
    TEXT = 1


def _no_levels() -> List[bool]:
    return [False] * NUM_LEVELS


def _isatty(stream: object) -> bool:
    try:
        return bool(stream.isatty())  # type: ignore[attr-defined]
    except (AttributeError, ValueError, OSError):
        return False


@dataclass
class BaseSinkConfig:
    """Settings shared by every kind of sink; no level is enabled by default."""

    with_locking: bool = False
    asynchronous: bool = False
    format: OutputFormat = OutputFormat.JSON
    levels: List[bool] = field(default_factory=_no_levels)


@dataclass
class ProgramOutputSinkConfig(BaseSinkConfig):
    """A sink writing to the standard error stream, or to standard output."""

    to_stdout: bool = False
    disabled_color: bool = False
    force_color: bool = False

    def formatter(self) -> Formatter:
        """Pick the formatter; colours are used when forced or when writing to a terminal."""
        if self.format is OutputFormat.JSON:
            return record_to_json
        if self.disabled_color:
            return record_to_raw_text
        stream = sys.stdout if self.to_stdout else sys.stderr
        if self.force_color or _isatty(stream):
            return record_to_ansi_text
        return record_to_raw_text


@dataclass
class FileSinkConfig(BaseSinkConfig):
    """A sink appending to a file."""

    filepath: str = ""

    def formatter(self) -> Formatter:
        """Pick the formatter matching the output format."""
        if self.format is OutputFormat.JSON:
            return record_to_json
        return record_to_raw_text


SinkConfig = Union[ProgramOutputSinkConfig, FileSinkConfig]


@dataclass
class Config:
    """A list of sinks and the size of the thread pool serving asynchronous ones."""

    sinks: List[SinkConfig] = field(default_factory=list)
    thread_pool_size: int = 0


def with_locking() -> Option[BaseSinkConfig]:
    """Serialise writes to the sink with a lock."""

    def apply(config: BaseSinkConfig) -> None:
        config.with_locking = True

    return apply


def with_async() -> Option[BaseSinkConfig]:
    """Format and write records on the thread pool."""

    def apply(config: BaseSinkConfig) -> None:
        config.asynchronous = True

    return apply


def with_format(output_format: OutputFormat) -> Option[BaseSinkConfig]:
    """Select the output format."""
    output_format = OutputFormat(output_format)

    def apply(config: BaseSinkConfig) -> None:
        config.format = output_format

    return apply


def from_level(level: Level) -> Option[BaseSinkConfig]:
    """Enable the given level and every level above it."""
    start = int(Level(level)) + 1

    def apply(config: BaseSinkConfig) -> None:
        for index in range(max(start, 0), NUM_LEVELS):
            config.levels[index] = True

    return apply


def with_level(*levels: Level) -> Option[BaseSinkConfig]:
    """Enable exactly the given levels, in addition to those already enabled."""
    for level in levels:
        if not isinstance(level, Level):
            raise TypeError("all parameters should be of type Level")

    def apply(config: BaseSinkConfig) -> None:
        for level in levels:
            index = int(level) + 1
            if 0 <= index < NUM_LEVELS:
                config.levels[index] = True

    return apply


def with_stdout_output() -> Option[ProgramOutputSinkConfig]:
    """Write to standard output instead of standard error."""

    def apply(config: ProgramOutputSinkConfig) -> None:
        config.to_stdout = True

    return apply


def with_force_color() -> Option[ProgramOutputSinkConfig]:
    """Use coloured text even when not writing to a terminal."""

    def apply(config: ProgramOutputSinkConfig) -> None:
        config.force_color = True

    return apply


def with_disabled_color() -> Option[ProgramOutputSinkConfig]:
    """Never use coloured text."""

    def apply(config: ProgramOutputSinkConfig) -> None:
        config.disabled_color = True

    return apply


def with_program_output(*options: Callable[[ProgramOutputSinkConfig], None]) -> Option[Config]:
    """Add a program-output sink configured by the given options."""

    def apply(config: Config) -> None:
        sink_config = ProgramOutputSinkConfig()
        for option in options:
            option(sink_config)
        config.sinks.append(sink_config)

    return apply


def with_file_output(filename: str, *options: Callable[[FileSinkConfig], None]) -> Option[Config]:
    """Add a file sink appending to ``filename``, configured by the given options."""
    filename = str(filename)

    def apply(config: Config) -> None:
        sink_config = FileSinkConfig(filepath=filename)
        for option in options:
            option(sink_config)
        config.sinks.append(sink_config)

    return apply


def with_thread_pool_size(size: int) -> Option[Config]:
    """Set the number of threads serving asynchronous sinks."""
    if size < 0:
        raise ValueError(f"thread pool size cannot be negative, got {size}")

    def apply(config: Config) -> None:
        config.thread_pool_size = size

    return apply


def sanitize(config: Config) -> None:
    """Fill in defaults: a text sink to standard error from INFO, and a pool for async sinks."""
    if not config.sinks:
        with_program_output(with_format(OutputFormat.TEXT), from_level(Level.INFO))(config)

    has_async = any(sink.asynchronous for sink in config.sinks)
    if config.thread_pool_size == 0 and has_async:
        config.thread_pool_size = 1