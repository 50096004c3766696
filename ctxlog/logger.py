"""Logger facade, logger provider and the process-wide defaults.

:class:`Logger` is the object applications call. It is a thin handle over
one sink and carries no state between calls: attribute values come from
the context passed to each call, or from defaults pinned by
:meth:`LoggerProvider.bind`.

Example:
    >>> ctx, logger = ctxlog.bind(BACKGROUND)
    >>> logger.info("start")                      # logId=...
    >>> child_ctx, child = ctxlog.bind_child(ctx)
    >>> child.info("sub task", step=1)            # logId=... parentLogId=...
"""

import copy
import sys
import threading
import time
from typing import Any, TextIO

from opentelemetry._logs import SeverityNumber

from .attr import ContextAttr, is_log_id_attr, log_id_attr, parent_log_id_attr
from .context import (
    BACKGROUND,
    Context,
    get_log_id,
    get_parent_log_id,
    with_child_log_context,
    with_log_context,
)
from .errors import MissingSinkError, SinkTypeError
from .record import DEBUG, ERROR, INFO, WARN, Attr, LevelVar, Record, Source, to_attr
from .sink import ContextSink, Sink
from .telemetry.config import console_sink
from .telemetry.exporters import LOG_FORMAT

# Returns the record timestamp in ns. Replaceable for tests.
now_func = time.time_ns


def _source(depth: int) -> Source | None:
    """Call site ``depth`` frames above the caller of this function."""
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return None
    code = frame.f_code
    return Source(code.co_name, code.co_filename, frame.f_lineno)


# =============================================================================
# Logger
# =============================================================================


class Logger:
    """Leveled logging entry points over a single sink.

    Methods without a ``ctx`` argument log with the background context, so
    only attributes pinned on the sink (see :meth:`LoggerProvider.bind`)
    are emitted. The ``*_context`` variants resolve attributes against the
    given context.

    Attributes are passed as prebuilt :class:`Attr` values (including
    groups) and/or keyword arguments; dict values become groups. Any keyword
    is an attribute name, ``ctx``, ``level`` and ``message`` included.
    """

    def __init__(self, sink: Sink):
        if sink is None:
            raise MissingSinkError("logger requires a sink", source="Logger")
        self._sink = sink

    @property
    def sink(self) -> Sink:
        return self._sink

    def _with_sink(self, sink: Sink) -> "Logger":
        c = copy.copy(self)
        c._sink = sink
        return c

    def with_attrs(self, /, *attrs: Attr, **kwargs: Any) -> "Logger":
        """Derive a logger whose records always carry the given attrs."""
        static = list(attrs) + [to_attr(k, v) for k, v in kwargs.items()]
        return self._with_sink(self._sink.with_attrs(static))

    def with_group(self, name: str) -> "Logger":
        """Derive a logger that nests subsequent attrs under ``name``."""
        return self._with_sink(self._sink.with_group(name))

    def with_context_attrs(self, *attrs: ContextAttr) -> "Logger":
        """Derive a logger with extra context descriptors.

        Raises:
            SinkTypeError: the logger's sink is not a ContextSink.
        """
        if not isinstance(self._sink, ContextSink):
            raise SinkTypeError(
                f"context attributes need a ContextSink, got {type(self._sink).__name__}",
                source="Logger",
            )
        return self._with_sink(self._sink.with_context_attrs(*attrs))

    def enabled(self, ctx: Context | None, level: SeverityNumber) -> bool:
        return self._sink.enabled(ctx if ctx is not None else BACKGROUND, level)

    def debug(self, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(BACKGROUND, DEBUG, 0, message, attrs, kwargs)

    def debug_context(self, ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(ctx, DEBUG, 0, message, attrs, kwargs)

    def info(self, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(BACKGROUND, INFO, 0, message, attrs, kwargs)

    def info_context(self, ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(ctx, INFO, 0, message, attrs, kwargs)

    def warning(self, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(BACKGROUND, WARN, 0, message, attrs, kwargs)

    def warning_context(self, ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(ctx, WARN, 0, message, attrs, kwargs)

    def error(self, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(BACKGROUND, ERROR, 0, message, attrs, kwargs)

    def error_context(self, ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
        self._log(ctx, ERROR, 0, message, attrs, kwargs)

    def log(
        self, ctx: Context, level: SeverityNumber, message: str, /, *attrs: Attr, **kwargs: Any
    ) -> None:
        """Log at an explicit level."""
        self._log(ctx, level, 0, message, attrs, kwargs)

    def log_attrs(
        self, ctx: Context, level: SeverityNumber, message: str, /, *attrs: Attr
    ) -> None:
        """Like :meth:`log`, with prebuilt attrs only."""
        self._log(ctx, level, 0, message, attrs, {})

    def handle_log(
        self,
        ctx: Context,
        level: SeverityNumber,
        call_depth: int,
        message: str,
        /,
        *attrs: Attr,
        **kwargs: Any,
    ) -> None:
        """Entry point for user-defined logging wrappers.

        The recorded source is the caller of the function that calls
        ``handle_log``, moved up by ``call_depth`` additional frames. A
        wrapper called directly by application code passes 0; a wrapper
        called through one more helper passes 1.
        """
        self._log(ctx, level, call_depth + 1, message, attrs, kwargs)

    def handle_log_attrs(
        self,
        ctx: Context,
        level: SeverityNumber,
        call_depth: int,
        message: str,
        /,
        *attrs: Attr,
    ) -> None:
        """Like :meth:`handle_log`, with prebuilt attrs only."""
        self._log(ctx, level, call_depth + 1, message, attrs, {})

    def _log(
        self,
        ctx: Context | None,
        level: SeverityNumber,
        call_depth: int,
        message: str,
        attrs: tuple[Attr, ...],
        kwargs: dict[str, Any],
    ) -> None:
        # Must be called directly by a public entry point: frame 2 is the
        # entry point's caller.
        if ctx is None:
            ctx = BACKGROUND
        if not self._sink.enabled(ctx, level):
            return
        record = Record(now_func(), level, message, source=_source(2 + call_depth))
        record.add(*attrs, **kwargs)
        self._sink.handle(ctx, record)

    def __repr__(self) -> str:
        return f"Logger({type(self._sink).__name__})"


def new_logger(sink: Sink) -> Logger:
    """Return a logger over ``sink``. An absent sink raises MissingSinkError."""
    return Logger(sink)


# =============================================================================
# Logger Provider
# =============================================================================


class LoggerProvider:
    """Creates loggers sharing one :class:`ContextSink`.

    A plain inner sink is wrapped in a ContextSink carrying the built-in
    ``logId`` and ``parentLogId`` descriptors; a ContextSink is used as is.
    """

    def __init__(self, sink: Sink):
        if sink is None:
            raise MissingSinkError("provider requires a sink", source="LoggerProvider")
        if not isinstance(sink, ContextSink):
            sink = ContextSink(sink, (log_id_attr(), parent_log_id_attr()))
        self._sink = sink

    @property
    def sink(self) -> ContextSink:
        return self._sink

    def new_logger(self) -> Logger:
        return Logger(self._sink)

    def bind(self, ctx: Context | None) -> tuple[Context, Logger]:
        """Return ``ctx`` with a log id and a logger pinned to it.

        A log id is generated when ``ctx`` has none. The logger's
        descriptors are replaced by ``logId`` and ``parentLogId`` defaulting
        to the ids of the returned context, followed by the provider's
        other descriptors with their defaults pinned to their values in
        ``ctx``. Logging without a context still emits those values; a
        context passed at call time overrides them.
        """
        if ctx is None:
            ctx = BACKGROUND
        if get_log_id(ctx).is_zero():
            ctx = with_log_context(ctx)

        attrs = [
            log_id_attr(get_log_id(ctx)),
            parent_log_id_attr(get_parent_log_id(ctx)),
        ]
        for descriptor in self._sink.context_attrs:
            if is_log_id_attr(descriptor):
                continue
            attrs.append(descriptor.with_default(descriptor.value(ctx)))

        return ctx, Logger(self._sink.set_context_attrs(attrs))

    def bind_child(self, ctx: Context | None) -> tuple[Context, Logger]:
        """Advance the lineage of ``ctx`` one generation, then :meth:`bind`."""
        return self.bind(with_child_log_context(ctx if ctx is not None else BACKGROUND))

    def with_context_attrs(self, *attrs: ContextAttr) -> "LoggerProvider":
        return LoggerProvider(self._sink.with_context_attrs(*attrs))

    def with_inner_sink(self, sink: Sink) -> "LoggerProvider":
        if sink is None:
            raise MissingSinkError("provider requires a sink", source="LoggerProvider")
        return LoggerProvider(self._sink.with_inner(sink))


# =============================================================================
# Default Provider
# =============================================================================


_log_level = LevelVar(INFO)
_default_provider: LoggerProvider | None = None
_default_lock = threading.Lock()


def log_level() -> LevelVar:
    """Minimum level shared by the default console sink."""
    return _log_level


def set_log_level(level: SeverityNumber) -> None:
    _log_level.set(level)


def default_provider() -> LoggerProvider:
    """Get or create the default provider.

    Lazily initializes a provider writing text lines to stdout, gated by
    :func:`log_level`. Returns the same provider until it is replaced.
    """
    global _default_provider
    if _default_provider is None:
        with _default_lock:
            if _default_provider is None:
                _default_provider = LoggerProvider(console_sink(level=_log_level))
    return _default_provider


def set_default_provider(provider: LoggerProvider | None) -> None:
    """Replace the default provider. ``None`` restores the built-in one on next use."""
    global _default_provider
    with _default_lock:
        _default_provider = provider


def default_logger() -> Logger:
    return default_provider().new_logger()


def set_sink(sink: Sink) -> None:
    """Replace the default provider with one built over ``sink``."""
    set_default_provider(LoggerProvider(sink))


def set_inner_sink(sink: Sink) -> None:
    """Swap the default provider's inner sink, keeping its descriptors."""
    set_default_provider(default_provider().with_inner_sink(sink))


def set_console_sink(
    stream: TextIO | None = None,
    *,
    format: LOG_FORMAT = "text",
    add_source: bool = False,
) -> None:
    """Write the default provider's records to ``stream`` as text or JSON lines."""
    set_inner_sink(
        console_sink(stream, format=format, level=_log_level, add_source=add_source)
    )


def add_context_attrs(*attrs: ContextAttr) -> None:
    """Append descriptors to the default provider.

    Loggers obtained earlier keep their own descriptor lists.
    """
    set_default_provider(default_provider().with_context_attrs(*attrs))


def bind(ctx: Context | None) -> tuple[Context, Logger]:
    """:meth:`LoggerProvider.bind` on the default provider."""
    return default_provider().bind(ctx)


def bind_child(ctx: Context | None) -> tuple[Context, Logger]:
    """:meth:`LoggerProvider.bind_child` on the default provider."""
    return default_provider().bind_child(ctx)


# =============================================================================
# Module-level entry points (default logger)
# =============================================================================


def debug(message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(BACKGROUND, DEBUG, 0, message, attrs, kwargs)


def info(message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(BACKGROUND, INFO, 0, message, attrs, kwargs)


def warning(message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(BACKGROUND, WARN, 0, message, attrs, kwargs)


def error(message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(BACKGROUND, ERROR, 0, message, attrs, kwargs)


def debug_context(ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(ctx, DEBUG, 0, message, attrs, kwargs)


def info_context(ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(ctx, INFO, 0, message, attrs, kwargs)


def warning_context(ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(ctx, WARN, 0, message, attrs, kwargs)


def error_context(ctx: Context, message: str, /, *attrs: Attr, **kwargs: Any) -> None:
    default_logger()._log(ctx, ERROR, 0, message, attrs, kwargs)


def log(
    ctx: Context, level: SeverityNumber, message: str, /, *attrs: Attr, **kwargs: Any
) -> None:
    default_logger()._log(ctx, level, 0, message, attrs, kwargs)


def log_attrs(ctx: Context, level: SeverityNumber, message: str, /, *attrs: Attr) -> None:
    default_logger()._log(ctx, level, 0, message, attrs, {})
