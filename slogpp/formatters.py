"""Render records as JSON, plain text or coloured tree text."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
import math

from .attribute import Attribute, Duration, Group, Pointer, Timestamp
from .level import Level, level_index
from .record import Record

_EPOCH = datetime(1970, 1, 1)

_US = 1_000
_MS = 1_000 * _US
_S = 1_000 * _MS
_MINUTE = 60 * _S

_C_SPACE = frozenset(" \t\n\v\f\r")

_JSON_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_LEVEL_NAMES = (
    "UNKNOWN",
    "TRACE", "TRACE_1", "TRACE_2", "TRACE_3",
    "DEBUG", "DEBUG_1", "DEBUG_2", "DEBUG_3",
    "INFO", "INFO_1", "INFO_2", "INFO_3",
    "WARN", "WARN_1", "WARN_2", "WARN_3",
    "ERROR", "ERROR_1", "ERROR_2", "ERROR_3",
    "FATAL",
)

_LEVEL_COLORS = (
    ("",)
    + ("",) * 4
    + ("\033[34m",) * 4
    + ("\033[36m",) * 4
    + ("\033[33m",) * 4
    + ("\033[31m",) * 4
    + ("\033[37;41m",)
)

_RESET = "\033[m"


def format_bool(value: bool) -> str:
    """Render a boolean as ``true`` or ``false``."""
    return "true" if value else "false"


def format_int(value: int) -> str:
    """Render an integer in base 10."""
    return str(int(value))


def format_float(value: float) -> str:
    """Render a float in its shortest round-trip form.

    Fixed and scientific notations are both considered and the shorter one
    is chosen, fixed winning a tie.
    """
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "-inf" if value < 0 else "inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"

    decimal = Decimal(repr(abs(value))).as_tuple()
    raw_digits = "".join(str(d) for d in decimal.digits)
    digits = raw_digits.rstrip("0") or "0"
    exponent = int(decimal.exponent) + len(raw_digits) - len(digits)

    if exponent >= 0:
        fixed = digits + "0" * exponent
    else:
        point = len(digits) + exponent
        if point > 0:
            fixed = digits[:point] + "." + digits[point:]
        else:
            fixed = "0." + "0" * (-point) + digits

    sci_exponent = len(digits) - 1 + exponent
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    exp_sign = "-" if sci_exponent < 0 else "+"
    scientific = f"{mantissa}e{exp_sign}{abs(sci_exponent):02d}"

    return sign + (fixed if len(fixed) <= len(scientific) else scientific)


def format_pointer(address: Pointer | int | None) -> str:
    """Render an address in hexadecimal, or ``nullptr`` for the null pointer."""
    if isinstance(address, Pointer):
        address = address.address
    if not address:
        return "nullptr"
    address = int(address)
    if address < 0:
        return "-0x" + format(-address, "x")
    return "0x" + format(address, "x")


def format_duration(value: Duration | int) -> str:
    """Render a duration such as ``1.1µs``, ``4m5s`` or ``5h6m7.001s``."""
    ns = value.nanoseconds if isinstance(value, Duration) else int(value)
    if ns == 0:
        return "0s"

    sign = ""
    if ns < 0:
        sign = "-"
        ns = -ns

    if ns < _US:
        return f"{sign}{format_int(ns)}ns"
    if ns < _MS:
        return f"{sign}{format_float(ns / 1.0e3)}µs"
    if ns < _S:
        return f"{sign}{format_float(ns / 1.0e6)}ms"

    minutes = ns // _MINUTE
    if minutes == 0:
        return f"{sign}{format_float(ns / 1.0e9)}s"

    seconds = format_float((ns % _MINUTE) / 1.0e9)
    hours = minutes // 60
    if hours == 0:
        return f"{sign}{format_int(minutes)}m{seconds}s"
    return f"{sign}{format_int(hours)}h{format_int(minutes % 60)}m{seconds}s"


def format_to_prefix(value: int, digits: int, prefix: str) -> str:
    """Render a non-negative integer left-padded with ``prefix`` to ``digits`` characters."""
    if not 1 <= digits <= 9:
        raise ValueError(f"digits must be between 1 and 9, got {digits}")
    if len(prefix) != 1:
        raise ValueError("prefix must be a single character")
    value = int(value)
    limit = 10**digits
    if value < 0 or value >= limit:
        raise ValueError(
            f"value ({value}) should be positive and smaller than {limit} "
            f"while printing in {digits} digits."
        )
    return str(value).rjust(digits, prefix)


def format_time(value: Timestamp | int) -> str:
    """Render a timestamp as RFC 3339 in UTC with 3, 6 or 9 fraction digits."""
    ns = value.nanoseconds if isinstance(value, Timestamp) else int(value)
    whole = abs(ns) // 1_000_000_000
    seconds = whole if ns >= 0 else -whole
    nanos = ns - seconds * 1_000_000_000

    moment = _EPOCH + timedelta(seconds=seconds)
    head = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )

    if nanos % 1_000_000 == 0:
        fraction = format_to_prefix(nanos // 1_000_000, 3, "0")
    elif nanos % 1_000 == 0:
        fraction = format_to_prefix(nanos // 1_000, 6, "0")
    else:
        fraction = format_to_prefix(nanos, 9, "0")
    return f"{head}.{fraction}Z"


def text_quote(value: str) -> str:
    """Quote a string for text output when it holds whitespace; escape bare quotes."""
    quote = any(ch in _C_SPACE for ch in value)
    parts = []
    previous = ""
    for ch in value:
        if ch == '"' and previous != "\\":
            parts.append("\\")
        parts.append(ch)
        previous = ch
    body = "".join(parts)
    return f'"{body}"' if quote else body


def _json_escape_char(ch: str) -> str:
    escaped = _JSON_ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    code = ord(ch)
    if 0x20 <= code < 0x80:
        return ch
    if code > 0xFFFF:
        code -= 0x10000
        high = 0xD800 + (code >> 10)
        low = 0xDC00 + (code & 0x3FF)
        return f"\\u{high:04x}\\u{low:04x}"
    return f"\\u{code:04x}"


def json_quote(value: str) -> str:
    """Render a string as a JSON string literal, escaping non-ASCII characters."""
    return '"' + "".join(_json_escape_char(ch) for ch in value) + '"'


def format_value(value: object) -> str:
    """Render a scalar attribute value for text output."""
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, int):
        return format_int(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return text_quote(value)
    if isinstance(value, Duration):
        return format_duration(value)
    if isinstance(value, Timestamp):
        return format_time(value)
    if isinstance(value, Pointer):
        return format_pointer(value)
    raise TypeError(f"cannot format a value of type {type(value).__name__}")


def level_name(level: Level | int) -> str:
    """Return the display name of a level; ``UNKNOWN`` when out of range."""
    return _LEVEL_NAMES[level_index(level)]


def level_color(level: Level | int) -> str:
    """Return the ANSI colour sequence used for a level."""
    return _LEVEL_COLORS[level_index(level)]


def _attribute_to_json(attribute: Attribute) -> str | None:
    value = attribute.value
    if value is None:
        return None
    head = f'"{attribute.key}":'
    if isinstance(value, Group):
        members = [m for m in (_attribute_to_json(a) for a in value) if m is not None]
        return head + "{" + ",".join(members) + "}"
    if isinstance(value, str):
        return head + json_quote(value)
    if isinstance(value, (bool, int, float)):
        return head + format_value(value)
    return head + '"' + format_value(value) + '"'


def _attribute_to_text(attribute: Attribute, prefix: str) -> str:
    value = attribute.value
    if value is None:
        return ""
    name = prefix + attribute.key
    if isinstance(value, Group):
        return "".join(_attribute_to_text(a, name + ".") for a in value)
    return f" {name}={format_value(value)}"


def _attributes_to_tree(attributes: tuple[Attribute, ...], parent_prefix: str) -> str:
    last = len(attributes) - 1
    return "".join(
        _attribute_to_tree(attribute, parent_prefix, position == last)
        for position, attribute in enumerate(attributes)
    )


def _attribute_to_tree(attribute: Attribute, parent_prefix: str, is_last: bool) -> str:
    value = attribute.value
    if value is None:
        return ""
    prefix = parent_prefix + ("└── " if is_last else "├── ")
    if isinstance(value, Group):
        child_prefix = parent_prefix + ("    " if is_last else "│   ")
        return prefix + attribute.key + _attributes_to_tree(value.attributes, child_prefix)
    return f"{prefix}{attribute.key}={format_value(value)}"


def record_to_json(record: Record) -> str:
    """Render a record as a single-line JSON object."""
    parts = [
        '{"time":"',
        format_time(record.timestamp),
        '","level":"',
        level_name(record.level),
        '","message":',
        json_quote(record.message),
    ]
    for attribute in record.attributes:
        rendered = _attribute_to_json(attribute)
        if rendered is not None:
            parts.append("," + rendered)
    parts.append("}")
    return "".join(parts)


def record_to_raw_text(record: Record) -> str:
    """Render a record as ``time LEVEL message key=value ...``."""
    head = f"{format_time(record.timestamp)} {level_name(record.level)} {text_quote(record.message)}"
    return head + "".join(_attribute_to_text(a, "") for a in record.attributes)


def record_to_ansi_text(record: Record) -> str:
    """Render a record with a coloured level and its attributes as a tree."""
    head = (
        f"{format_time(record.timestamp)} {level_color(record.level)}"
        f"{level_name(record.level)}{_RESET} {text_quote(record.message)}"
    )
    return head + _attributes_to_tree(record.attributes, "\n")