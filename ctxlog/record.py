"""Log records, attributes and levels.

A :class:`Record` is what a logger hands to a sink: timestamp, level,
message, an ordered list of :class:`Attr` and the caller's source location.
Levels are OpenTelemetry ``SeverityNumber`` values.
"""

import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from opentelemetry._logs import SeverityNumber

DEBUG = SeverityNumber.DEBUG
INFO = SeverityNumber.INFO
WARN = SeverityNumber.WARN
ERROR = SeverityNumber.ERROR


class Group(tuple):
    """Members of a group attribute. Only ``group()`` and ``to_attr`` build it."""

    def __repr__(self) -> str:
        return f"Group({list(self)!r})"


@dataclass(frozen=True)
class Attr:
    """A key/value pair attached to a record.

    A group is an ``Attr`` whose value is a :class:`Group` of ``Attr``.
    Any other value, including an empty list, is a plain value.
    """

    key: str
    value: Any

    @property
    def is_group(self) -> bool:
        return isinstance(self.value, Group)

    def is_empty(self) -> bool:
        return self.key == "" and self.value is None


def group(key: str, *attrs: Attr) -> Attr:
    """Build a group attribute."""
    return Attr(key, Group(attrs))


def to_attr(key: str, value: Any) -> Attr:
    """Convert a keyword argument into an ``Attr``.

    Dicts and non-empty lists of ``Attr`` become groups.
    """
    if isinstance(value, dict):
        return Attr(key, Group(to_attr(str(k), v) for k, v in value.items()))
    if isinstance(value, list) and value and all(isinstance(a, Attr) for a in value):
        return Attr(key, Group(value))
    return Attr(key, value)


def flatten_attrs(attrs: Iterable[Attr], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(dotted_key, value)`` pairs for ``attrs``.

    Empty attrs and empty groups are dropped; groups with an empty key are
    inlined into the enclosing level.
    """
    for a in attrs:
        if a.is_empty():
            continue
        if a.is_group:
            sub = f"{prefix}{a.key}." if a.key else prefix
            yield from flatten_attrs(a.value, sub)
        else:
            yield f"{prefix}{a.key}", a.value


@dataclass(frozen=True)
class Source:
    """Location of the logging call site."""

    function: str
    file: str
    line: int


@dataclass
class Record:
    """A single log event, before rendering."""

    timestamp: int
    level: SeverityNumber
    message: str
    attrs: list[Attr] = field(default_factory=list)
    source: Source | None = None

    def add(self, /, *attrs: Attr, **kwargs: Any) -> None:
        """Append prebuilt attrs, then keyword pairs in call order."""
        self.attrs.extend(attrs)
        self.attrs.extend(to_attr(k, v) for k, v in kwargs.items())

    def clone(self) -> "Record":
        return Record(
            timestamp=self.timestamp,
            level=self.level,
            message=self.message,
            attrs=list(self.attrs),
            source=self.source,
        )

    def attributes(self) -> dict[str, Any]:
        """Flattened attributes as an ordered dict."""
        return dict(flatten_attrs(self.attrs))


class LevelVar:
    """A minimum level that can be changed while sinks hold a reference.

    Sinks built with the same ``LevelVar`` all follow updates to it.
    """

    def __init__(self, level: SeverityNumber = INFO):
        self._lock = threading.Lock()
        self._level = level

    def level(self) -> SeverityNumber:
        return self._level

    def set(self, level: SeverityNumber) -> None:
        with self._lock:
            self._level = level

    def __repr__(self) -> str:
        return f"LevelVar({self._level.name})"


def level_value(level: SeverityNumber | LevelVar | None) -> int:
    """Numeric threshold of a fixed level or a ``LevelVar``."""
    if level is None:
        return INFO.value
    if isinstance(level, LevelVar):
        return level.level().value
    return level.value
