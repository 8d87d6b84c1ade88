"""Typed key/value attributes attached to log records."""

from __future__ import annotations

import inspect
import numbers
import os
import time as _time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Iterator, Union

_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_NAIVE = datetime(1970, 1, 1)


def _timedelta_to_ns(delta: timedelta) -> int:
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000


@dataclass(frozen=True, order=True)
class Duration:
    """A signed span of time in nanoseconds."""

    nanoseconds: int

    def __post_init__(self) -> None:
        if isinstance(self.nanoseconds, bool) or not isinstance(self.nanoseconds, numbers.Integral):
            raise TypeError("Duration needs an integer count of nanoseconds")
        object.__setattr__(self, "nanoseconds", int(self.nanoseconds))

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        return cls(_timedelta_to_ns(delta))


@dataclass(frozen=True, order=True)
class Timestamp:
    """A point in time, as nanoseconds since the Unix epoch (UTC)."""

    nanoseconds: int

    def __post_init__(self) -> None:
        if isinstance(self.nanoseconds, bool) or not isinstance(self.nanoseconds, numbers.Integral):
            raise TypeError("Timestamp needs an integer count of nanoseconds")
        object.__setattr__(self, "nanoseconds", int(self.nanoseconds))

    @classmethod
    def now(cls) -> Timestamp:
        return cls(_time.time_ns())

    @classmethod
    def from_datetime(cls, moment: datetime) -> Timestamp:
        """Convert a datetime; a naive one is taken to be in UTC."""
        epoch = _EPOCH_NAIVE if moment.tzinfo is None else _EPOCH_UTC
        return cls(_timedelta_to_ns(moment - epoch))


@dataclass(frozen=True)
class Pointer:
    """A memory address; 0 stands for the null pointer."""

    address: int = 0

    @property
    def is_null(self) -> bool:
        return self.address == 0


@dataclass(frozen=True)
class Group:
    """An ordered collection of nested attributes."""

    attributes: tuple[Attribute, ...]

    def __post_init__(self) -> None:
        attributes = tuple(self.attributes)
        for attribute in attributes:
            if not isinstance(attribute, Attribute):
                raise TypeError(f"group members must be attributes, got {type(attribute).__name__}")
        object.__setattr__(self, "attributes", attributes)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def __getitem__(self, index: int) -> Attribute:
        return self.attributes[index]


Value = Union[None, bool, int, float, str, Duration, Timestamp, Group, Pointer]

_VALUE_TYPES = (bool, int, float, str, Duration, Timestamp, Group, Pointer)


@dataclass(frozen=True)
class Attribute:
    """A named value; an attribute whose value is None is empty and never output."""

    key: str = ""
    value: Value = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise TypeError("attribute key must be a string")
        if self.value is not None and not isinstance(self.value, _VALUE_TYPES):
            raise TypeError(f"unsupported attribute value type {type(self.value).__name__}")

    @property
    def empty(self) -> bool:
        return self.value is None


def boolean(key: str, value: bool) -> Attribute:
    """Build a boolean attribute."""
    return Attribute(key, bool(value))


def integer(key: str, value: int) -> Attribute:
    """Build an integer attribute."""
    if not isinstance(value, numbers.Integral):
        raise TypeError(f"integer attribute needs an integral value, got {type(value).__name__}")
    return Attribute(key, int(value))


def floating(key: str, value: float) -> Attribute:
    """Build a floating-point attribute."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"floating attribute needs a real value, got {type(value).__name__}")
    return Attribute(key, float(value))


def string(key: str, value: str | os.PathLike) -> Attribute:
    """Build a string attribute; paths are stored as their string form."""
    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if isinstance(value, bytes):
        raise TypeError("string attribute needs text, not bytes")
    if not isinstance(value, str):
        raise TypeError(f"string attribute needs a string, got {type(value).__name__}")
    return Attribute(key, value)


def duration(key: str, value: Duration | timedelta | int) -> Attribute:
    """Build a duration attribute from a Duration, a timedelta or nanoseconds."""
    if isinstance(value, Duration):
        return Attribute(key, value)
    if isinstance(value, timedelta):
        return Attribute(key, Duration.from_timedelta(value))
    return Attribute(key, Duration(value))


def time(key: str, value: Timestamp | datetime | int) -> Attribute:
    """Build a time attribute from a Timestamp, a datetime or epoch nanoseconds."""
    if isinstance(value, Timestamp):
        return Attribute(key, value)
    if isinstance(value, datetime):
        return Attribute(key, Timestamp.from_datetime(value))
    return Attribute(key, Timestamp(value))


def group(key: str, *attributes: Attribute) -> Attribute:
    """Build a group attribute holding at least one attribute."""
    if not attributes:
        raise ValueError("a group should always have at least one attribute")
    return Attribute(key, Group(attributes))


def map_container(
    key: str, items: Iterable[Any], mapper: Callable[[str, Any], Attribute]
) -> Attribute:
    """Build a group whose members are mapper("#i", item) for each item."""
    members = tuple(mapper(f"#{index}", item) for index, item in enumerate(items))
    return Attribute(key, Group(members))


def pointer(key: str, address: int | None) -> Attribute:
    """Build a pointer attribute; None is the null pointer."""
    if address is None:
        return Attribute(key, Pointer(0))
    if isinstance(address, bool) or not isinstance(address, numbers.Integral):
        raise TypeError("pointer attribute needs an integer address or None")
    return Attribute(key, Pointer(int(address)))


def err(error: str | BaseException) -> Attribute:
    """Build an "error" attribute from a message or an exception.

    An exception with a callable ``message`` method reports its result;
    otherwise its string form is used.
    """
    if isinstance(error, str):
        return Attribute("error", error)
    if isinstance(error, BaseException):
        message = getattr(error, "message", None)
        if callable(message):
            return Attribute("error", str(message()))
        return Attribute("error", str(error))
    raise TypeError(f"err() needs a string or an exception, got {type(error).__name__}")


def location() -> Attribute:
    """Build a "location" group describing the caller's function, file and line."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is None:
            raise RuntimeError("no caller frame available")
        code = caller.f_code
        function_name = getattr(code, "co_qualname", code.co_name)
        return group(
            "location",
            string("function", function_name),
            string("file", code.co_filename),
            integer("line", caller.f_lineno),
        )
    finally:
        del frame, caller