"""OTel-backed inner sink and log record formatting.

Provides :class:`OTelSink`, an inner sink that emits each record through an
OTel ``Logger``, and :func:`format_log_record` /
:func:`format_log_record_json` used by the exporters.
"""

import json
import time
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from opentelemetry._logs import Logger, LogRecord, SeverityNumber

from ..context import Context
from ..record import LevelVar, Record
from ..sink import BaseSink

SOURCE_FUNCTION_KEY = "code.function.name"
SOURCE_FILE_KEY = "code.file.path"
SOURCE_LINE_KEY = "code.line.number"

_PRIMITIVES = (str, bool, int, float)


def _otel_value(value: Any) -> Any:
    """Coerce ``value`` to a type OTel accepts as an attribute value."""
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, _PRIMITIVES) for v in value):
        return list(value)
    return str(value)


# =============================================================================
# OTel Sink
# =============================================================================


class OTelSink(BaseSink):
    """Inner sink emitting records via an OTel ``Logger``.

    OTel attributes are a mapping, so when a key repeats (a keyword
    ``logId`` next to the context-derived one, say) the last value wins.
    Context attributes come after record attributes and therefore win.

    Example:
        >>> provider = configure_logger_provider(log_exporter=ConsoleLogRecordExporter())
        >>> sink = OTelSink(provider.get_logger("myapp"), level=SeverityNumber.DEBUG)
        >>> logger = ctxlog.LoggerProvider(sink).new_logger()
    """

    def __init__(
        self,
        logger: Logger,
        level: SeverityNumber | LevelVar | None = None,
        add_source: bool = False,
    ):
        """Initialize OTel sink.

        Args:
            logger: OTel Logger instance from LoggerProvider.get_logger()
            level: Minimum level, fixed or shared through a LevelVar.
            add_source: Include the call site as ``code.*`` attributes.
        """
        super().__init__(level)
        self._logger = logger
        self._add_source = add_source

    def handle(self, ctx: Context, record: Record) -> None:
        attrs: dict[str, Any] = {}
        for key, value in self.attributes(record):
            attrs[key] = _otel_value(value)
        if self._add_source and record.source is not None:
            attrs[SOURCE_FUNCTION_KEY] = record.source.function
            attrs[SOURCE_FILE_KEY] = record.source.file
            attrs[SOURCE_LINE_KEY] = record.source.line

        self._logger.emit(
            LogRecord(
                timestamp=record.timestamp,
                observed_timestamp=time.time_ns(),
                body=record.message,
                severity_text=record.level.name,
                severity_number=record.level,
                attributes=attrs,
            )
        )


# =============================================================================
# Log Record Formatting
# =============================================================================


def _format_value(value: Any) -> str:
    text = str(value)
    if text == "" or any(c.isspace() or c in '="' for c in text):
        return json.dumps(text)
    return text


def _timestamp(record: LogRecord) -> datetime:
    return datetime.fromtimestamp((record.timestamp or 0) / 1e9, tz=UTC)


def format_log_record(record: LogRecord) -> str:
    """
    Format a LogRecord as a human-readable line.

    Format: YYYY-MM-DDTHH:MM:SS.mmmZ [LEVEL] body key=value ...\\n

    Values containing whitespace, ``=`` or quotes are JSON-quoted.

    Args:
        record: OpenTelemetry LogRecord to format.

    Returns:
        Formatted string suitable for console output.
    """
    timestamp_str = _timestamp(record).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    attrs: Mapping[str, Any] = record.attributes or {}
    parts = [f"{timestamp_str} [{record.severity_text}] {_format_value(record.body)}"]
    parts.extend(f"{key}={_format_value(value)}" for key, value in attrs.items())
    return " ".join(parts) + "\n"


def format_log_record_json(record: LogRecord) -> str:
    """
    Format a LogRecord as a JSON line for structured output.

    Attributes are nested under ``attributes``, in record order, so they
    never replace ``time``, ``level`` or ``msg``.

    Args:
        record: OpenTelemetry LogRecord to format.

    Returns:
        JSON string (single line) with newline terminator.
    """
    data: dict[str, Any] = {
        "time": _timestamp(record).isoformat(),
        "level": record.severity_text,
        "msg": record.body,
        "attributes": dict(record.attributes) if record.attributes else {},
    }
    return json.dumps(data, default=str) + "\n"
