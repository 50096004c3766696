"""OpenTelemetry output for ctxlog.

This package provides the OTel-backed inner sink, provider configuration
and a line-oriented log-record exporter.
"""

from .config import (
    INSTRUMENTATION_NAME,
    configure_logger_provider,
    console_sink,
)
from .exporters import (
    LOG_FORMAT,
    ConsoleLogRecordExporter,
)
from .sink import (
    OTelSink,
    format_log_record,
    format_log_record_json,
)

__all__ = [
    # config
    "INSTRUMENTATION_NAME",
    "configure_logger_provider",
    "console_sink",
    # sink
    "OTelSink",
    "format_log_record",
    "format_log_record_json",
    # exporters
    "ConsoleLogRecordExporter",
    "LOG_FORMAT",
]
