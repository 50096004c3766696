"""Sinks: the destination side of a logger.

:class:`Sink` is the contract every inner sink fulfils. :class:`BaseSink`
gives concrete sinks static attributes, groups and a minimum level.
:class:`ContextSink` wraps an inner sink and appends context-derived
attributes to each record at ``handle`` time, so one long-lived instance
can tag records from many concurrent call chains, each with its own
snapshot.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from opentelemetry._logs import SeverityNumber

from .attr import ContextAttr
from .context import Context
from .record import Attr, LevelVar, Record, flatten_attrs, level_value


class Sink(ABC):
    """Receives fully formed records."""

    @abstractmethod
    def enabled(self, ctx: Context, level: SeverityNumber) -> bool: ...

    @abstractmethod
    def handle(self, ctx: Context, record: Record) -> None: ...

    @abstractmethod
    def with_attrs(self, attrs: Sequence[Attr]) -> "Sink": ...

    @abstractmethod
    def with_group(self, name: str) -> "Sink": ...


class BaseSink(Sink):
    """Level gating plus static attributes and groups for concrete sinks.

    Static attributes are qualified by the groups open when they were
    added; record attributes are qualified by all groups.

    Args:
        level: Minimum level. Either a fixed ``SeverityNumber`` or a shared
            :class:`LevelVar`. ``None`` means INFO.
    """

    def __init__(self, level: SeverityNumber | LevelVar | None = None):
        self._level = level
        self._prefix = ""
        self._static: tuple[tuple[str, Any], ...] = ()

    def _clone(self) -> "BaseSink":
        return copy.copy(self)

    def enabled(self, ctx: Context, level: SeverityNumber) -> bool:
        return level.value >= level_value(self._level)

    def with_attrs(self, attrs: Sequence[Attr]) -> "BaseSink":
        c = self._clone()
        c._static = self._static + tuple(flatten_attrs(attrs, self._prefix))
        return c

    def with_group(self, name: str) -> "BaseSink":
        if name == "":
            return self
        c = self._clone()
        c._prefix = f"{self._prefix}{name}."
        return c

    def attributes(self, record: Record) -> list[tuple[str, Any]]:
        """Static attributes followed by the record's, flattened."""
        return list(self._static) + list(flatten_attrs(record.attrs, self._prefix))


class ContextSink(Sink):
    """Inner sink wrapper that adds context attributes to every record.

    The inner sink is shared by every clone and never copied. The
    descriptor list is copied on every structural derivation, so clones
    never observe each other's additions.

    Example:
        >>> sink = ContextSink(inner).with_context_attrs(log_id_attr())
        >>> sink.handle(with_log_context(BACKGROUND), record)
    """

    def __init__(self, inner: Sink, attrs: Iterable[ContextAttr] = ()):
        self._inner = inner
        self._attrs: tuple[ContextAttr, ...] = tuple(attrs)

    @property
    def inner(self) -> Sink:
        return self._inner

    @property
    def context_attrs(self) -> tuple[ContextAttr, ...]:
        return self._attrs

    def _clone(self) -> "ContextSink":
        return ContextSink(self._inner, self._attrs)

    def enabled(self, ctx: Context, level: SeverityNumber) -> bool:
        return self._inner.enabled(ctx, level)

    def handle(self, ctx: Context, record: Record) -> None:
        """Append resolved context attributes and forward to the inner sink.

        Exceptions raised by the inner sink propagate unchanged.
        """
        record = record.clone()
        for descriptor in self._attrs:
            attr = descriptor.attr(ctx)
            if attr is not None:
                record.attrs.append(attr)
        self._inner.handle(ctx, record)

    def with_attrs(self, attrs: Sequence[Attr]) -> "ContextSink":
        c = self._clone()
        c._inner = self._inner.with_attrs(attrs)
        return c

    def with_group(self, name: str) -> "ContextSink":
        c = self._clone()
        c._inner = self._inner.with_group(name)
        return c

    def with_inner(self, inner: Sink) -> "ContextSink":
        """Clone with a different inner sink and the same descriptors."""
        c = self._clone()
        c._inner = inner
        return c

    def set_context_attrs(self, attrs: Iterable[ContextAttr]) -> "ContextSink":
        """Clone whose descriptors are replaced by ``attrs``."""
        c = self._clone()
        c._attrs = tuple(attrs)
        return c

    def add_context_attr(self, attr: ContextAttr) -> "ContextSink":
        """Clone with ``attr`` appended."""
        return self.with_context_attrs(attr)

    def with_context_attrs(self, *attrs: ContextAttr) -> "ContextSink":
        """Clone with ``attrs`` appended to the existing descriptors."""
        c = self._clone()
        c._attrs = self._attrs + attrs
        return c
