"""A single log entry: timestamp, level, message and attributes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .attribute import Attribute, Timestamp
from .level import Level


@dataclass(frozen=True)
class Record:
    """An immutable log entry; the timestamp defaults to the creation time."""

    level: Level
    message: str
    attributes: tuple[Attribute, ...] = ()
    timestamp: Timestamp = field(default_factory=Timestamp.now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Level(self.level))
        if not isinstance(self.message, str):
            raise TypeError("record message must be a string")
        attributes = tuple(self.attributes)
        for attribute in attributes:
            if not isinstance(attribute, Attribute):
                raise TypeError(
                    f"record attributes must be attributes, got {type(attribute).__name__}"
                )
        object.__setattr__(self, "attributes", attributes)
        if not isinstance(self.timestamp, Timestamp):
            raise TypeError("record timestamp must be a Timestamp")

    def with_attributes(self, *attributes: Attribute) -> Record:
        """Return a copy of this record with the given attributes appended."""
        return replace(self, attributes=self.attributes + attributes)