"""Building sinks from options, and module-level logging through a default logger."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from .attribute import Attribute
from .config import Config, sanitize
from .level import Level
from .logger import Logger
from .sink import MultiSink, Sink, sink_from_config

_default_logger: Optional[Logger] = None
_default_lock = threading.Lock()


def build_sink(*options: Callable[[Config], None]) -> Sink:
    """Build a sink from configuration options.

    With no sink option, a text sink to standard error from INFO is used.
    Several sinks are combined into one that forwards to each of them.
    """
    config = Config()
    for option in options:
        option(config)
    sanitize(config)

    if len(config.sinks) == 1:
        return sink_from_config(config.sinks[0])
    return MultiSink(sink_from_config(sink_config) for sink_config in config.sinks)


def default_logger() -> Logger:
    """Return the process-wide logger, built with the default sink on first use."""
    global _default_logger
    with _default_lock:
        if _default_logger is None:
            _default_logger = Logger(build_sink())
        return _default_logger


def with_attributes(*attributes: Attribute) -> Logger:
    """Return a logger on the default sink that adds the given attributes."""
    return default_logger().with_attributes(*attributes)


def log(level: Level, message: str, *attributes: Attribute) -> None:
    default_logger().log(level, message, *attributes)


def trace(message: str, *attributes: Attribute) -> None:
    default_logger().trace(message, *attributes)


def debug(message: str, *attributes: Attribute) -> None:
    default_logger().debug(message, *attributes)


def info(message: str, *attributes: Attribute) -> None:
    default_logger().info(message, *attributes)


def warn(message: str, *attributes: Attribute) -> None:
    default_logger().warn(message, *attributes)


def error(message: str, *attributes: Attribute) -> None:
    default_logger().error(message, *attributes)


def fatal(message: str, *attributes: Attribute) -> None:
    default_logger().fatal(message, *attributes)


def dtrace(message: str, *attributes: Attribute) -> None:
    default_logger().dtrace(message, *attributes)


def ddebug(message: str, *attributes: Attribute) -> None:
    default_logger().ddebug(message, *attributes)


def dinfo(message: str, *attributes: Attribute) -> None:
    default_logger().dinfo(message, *attributes)


def dwarn(message: str, *attributes: Attribute) -> None:
    default_logger().dwarn(message, *attributes)


def derror(message: str, *attributes: Attribute) -> None:
    default_logger().derror(message, *attributes)