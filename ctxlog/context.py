"""Immutable context snapshots and log-id lineage binding.

Provides :class:`Context`, a key-addressable store that is never changed in
place: every ``with_value`` returns a new snapshot layered over the old one.
The current and parent log ids live under two private keys that application
code cannot collide with.

Example:
    >>> ctx = with_log_context(BACKGROUND)
    >>> child = with_child_log_context(ctx)
    >>> get_parent_log_id(child) == get_log_id(ctx)
    True
"""

from collections.abc import Hashable, Mapping
from types import MappingProxyType
from typing import Any

from .log_id import NIL, BaseLogID, new_id


class Context:
    """Immutable snapshot of request- or task-scoped values."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[Hashable, Any] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    def value(self, key: Hashable, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        return self._values.get(key, default)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def with_value(self, key: Hashable, value: Any) -> "Context":
        """Derive a snapshot with ``key`` bound to ``value``."""
        return Context({**self._values, key: value})

    def with_values(self, /, **values: Any) -> "Context":
        """Derive a snapshot with several string keys bound at once."""
        return Context({**self._values, **values})

    def __repr__(self) -> str:
        return f"Context({len(self._values)} values)"


BACKGROUND = Context()


class _ContextKey:
    """Private sentinel key type."""

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return f"<ctxlog.{self._name}>"


_LOG_ID_KEY = _ContextKey("log_id")
_PARENT_LOG_ID_KEY = _ContextKey("parent_log_id")


def _read_id(ctx: Context, key: _ContextKey) -> BaseLogID:
    value = ctx.value(key)
    if isinstance(value, BaseLogID):
        return value
    return NIL


def get_log_id(ctx: Context) -> BaseLogID:
    """Current log id of ``ctx``; :data:`NIL` when unset or malformed."""
    return _read_id(ctx, _LOG_ID_KEY)


def get_parent_log_id(ctx: Context) -> BaseLogID:
    """Parent log id of ``ctx``; :data:`NIL` when unset or malformed."""
    return _read_id(ctx, _PARENT_LOG_ID_KEY)


def set_log_id(ctx: Context, log_id: BaseLogID) -> Context:
    return ctx.with_value(_LOG_ID_KEY, log_id)


def set_parent_log_id(ctx: Context, parent_log_id: BaseLogID) -> Context:
    return ctx.with_value(_PARENT_LOG_ID_KEY, parent_log_id)


def with_log_context(ctx: Context) -> Context:
    """Return a snapshot carrying a newly generated log id.

    An existing log id is replaced. The parent slot is left untouched.
    """
    return set_log_id(ctx, new_id())


def with_child_log_context(ctx: Context) -> Context:
    """Return a snapshot one generation below ``ctx``.

    The current log id of ``ctx`` (zero if absent) becomes the parent log
    id and a newly generated id becomes the current one.
    """
    parent = get_log_id(ctx)
    child = set_parent_log_id(ctx, parent)
    return set_log_id(child, new_id())
