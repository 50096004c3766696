"""Context attribute descriptors.

A :class:`ContextAttr` is a declarative rule that turns a context snapshot
into at most one output attribute:

- ``key``: output key. An empty key always suppresses the attribute.
- ``default``: value used when ``resolve`` is missing or reports not found.
  ``None`` means absent.
- ``resolve``: ``(ctx) -> (value, found)``. When found, the value
  supersedes ``default``.
- ``format``: ``(key, value) -> Attr | None``. ``None`` suppresses the
  attribute. Without a formatter the pair is emitted as-is unless the value
  is absent.

Example:
    >>> request_id = context_attr("requestId", resolve=value_getter(RequestIdKey, str))
    >>> sink = sink.with_context_attrs(request_id)
"""

from collections.abc import Callable, Hashable
from dataclasses import dataclass, replace
from typing import Any

from .context import Context, get_log_id, get_parent_log_id
from .log_id import BaseLogID
from .record import Attr

KEY_LOG_ID = "logId"
KEY_PARENT_LOG_ID = "parentLogId"

Resolver = Callable[[Context], tuple[Any, bool]]
Formatter = Callable[[str, Any], Attr | None]


def default_format(key: str, value: Any) -> Attr | None:
    """Emit ``Attr(key, value)``; suppress on empty key or absent value."""
    if key == "" or value is None:
        return None
    return Attr(key, value)


@dataclass(frozen=True)
class ContextAttr:
    """Rule deriving one log attribute from a context snapshot."""

    key: str
    default: Any = None
    resolve: Resolver | None = None
    format: Formatter | None = None

    def value(self, ctx: Context) -> Any:
        """Resolved value for ``ctx``; ``default`` when not found."""
        if self.resolve is not None:
            value, found = self.resolve(ctx)
            if found:
                return value
        return self.default

    def attr(self, ctx: Context) -> Attr | None:
        """Resolve against ``ctx`` and format. ``None`` means omitted."""
        if self.key == "":
            return None
        value = self.value(ctx)
        if self.format is not None:
            return self.format(self.key, value)
        return default_format(self.key, value)

    def with_default(self, default: Any) -> "ContextAttr":
        return replace(self, default=default)


def context_attr(
    key: str,
    default: Any = None,
    resolve: Resolver | None = None,
    format: Formatter | None = None,
) -> ContextAttr:
    """Build a :class:`ContextAttr`."""
    return ContextAttr(key=key, default=default, resolve=resolve, format=format)


def value_getter(ctx_key: Hashable, type_: type | tuple[type, ...] = object) -> Resolver:
    """Resolver reading ``ctx_key`` from the snapshot.

    Reports found only when the stored value is an instance of ``type_``.
    ``None`` is never found.
    """

    def resolve(ctx: Context) -> tuple[Any, bool]:
        value = ctx.value(ctx_key)
        if value is None or not isinstance(value, type_):
            return None, False
        return value, True

    return resolve


def _id_value(log_id: BaseLogID) -> tuple[str | None, bool]:
    if log_id.is_zero():
        return None, False
    return str(log_id), True


def _resolve_log_id(ctx: Context) -> tuple[str | None, bool]:
    return _id_value(get_log_id(ctx))


def _resolve_parent_log_id(ctx: Context) -> tuple[str | None, bool]:
    return _id_value(get_parent_log_id(ctx))


def log_id_attr(default: BaseLogID | None = None) -> ContextAttr:
    """Descriptor emitting ``logId`` from the snapshot, or ``default``."""
    pinned = _id_value(default)[0] if default is not None else None
    return ContextAttr(KEY_LOG_ID, pinned, _resolve_log_id)


def parent_log_id_attr(default: BaseLogID | None = None) -> ContextAttr:
    """Descriptor emitting ``parentLogId`` from the snapshot, or ``default``."""
    pinned = _id_value(default)[0] if default is not None else None
    return ContextAttr(KEY_PARENT_LOG_ID, pinned, _resolve_parent_log_id)


def is_log_id_attr(attr: ContextAttr) -> bool:
    return attr.key in (KEY_LOG_ID, KEY_PARENT_LOG_ID)
