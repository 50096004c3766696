"""Convenience exports for the :mod:`ctxlog` package."""

from .attr import (  # noqa: F401
    KEY_LOG_ID,
    KEY_PARENT_LOG_ID,
    ContextAttr,
    context_attr,
    default_format,
    log_id_attr,
    parent_log_id_attr,
    value_getter,
)
from .context import (  # noqa: F401
    BACKGROUND,
    Context,
    get_log_id,
    get_parent_log_id,
    with_child_log_context,
    with_log_context,
)
from .errors import CtxLogException, MissingSinkError, SinkTypeError  # noqa: F401
from .log_id import (  # noqa: F401
    NIL,
    BaseLogID,
    IDGenerator,
    LogID,
    RandomIDGenerator,
    StringLogID,
    get_id_generator,
    new_id,
    set_id_generator,
)
from .logger import (  # noqa: F401
    Logger,
    LoggerProvider,
    add_context_attrs,
    bind,
    bind_child,
    debug,
    debug_context,
    default_logger,
    default_provider,
    error,
    error_context,
    info,
    info_context,
    log,
    log_attrs,
    log_level,
    new_logger,
    set_console_sink,
    set_default_provider,
    set_inner_sink,
    set_log_level,
    set_sink,
    warning,
    warning_context,
)
from .record import DEBUG, ERROR, INFO, WARN, Attr, Group, LevelVar, Record, Source, group  # noqa: F401
from .rx_sink import SubjectSink, level_filter, record_redirect_to  # noqa: F401
from .sink import BaseSink, ContextSink, Sink  # noqa: F401
from .telemetry import OTelSink, console_sink  # noqa: F401

__all__ = [
    # identifiers
    "LogID",
    "StringLogID",
    "BaseLogID",
    "NIL",
    "IDGenerator",
    "RandomIDGenerator",
    "new_id",
    "set_id_generator",
    "get_id_generator",

    # context
    "Context",
    "BACKGROUND",
    "get_log_id",
    "get_parent_log_id",
    "with_log_context",
    "with_child_log_context",

    # attributes
    "Attr",
    "group",
    "Group",
    "ContextAttr",
    "context_attr",
    "value_getter",
    "default_format",
    "log_id_attr",
    "parent_log_id_attr",
    "KEY_LOG_ID",
    "KEY_PARENT_LOG_ID",

    # records and levels
    "Record",
    "Source",
    "LevelVar",
    "DEBUG",
    "INFO",
    "WARN",
    "ERROR",

    # sinks
    "Sink",
    "BaseSink",
    "ContextSink",
    "SubjectSink",
    "OTelSink",
    "console_sink",
    "level_filter",
    "record_redirect_to",

    # logger
    "Logger",
    "LoggerProvider",
    "new_logger",
    "default_provider",
    "set_default_provider",
    "default_logger",
    "set_sink",
    "set_inner_sink",
    "set_console_sink",
    "add_context_attrs",
    "set_log_level",
    "log_level",
    "bind",
    "bind_child",
    "debug",
    "info",
    "warning",
    "error",
    "debug_context",
    "info_context",
    "warning_context",
    "error_context",
    "log",
    "log_attrs",

    # errors
    "CtxLogException",
    "MissingSinkError",
    "SinkTypeError",
]
