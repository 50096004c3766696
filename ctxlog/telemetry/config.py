"""OTel provider configuration for ctxlog.

Provides :func:`configure_logger_provider` (SDK logger provider with an
exporter) and :func:`console_sink` (an :class:`OTelSink` writing lines to a
stream).
"""

from typing import TextIO

from opentelemetry._logs import SeverityNumber
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import (
    BatchLogRecordProcessor,
    LogRecordExporter,
    SimpleLogRecordProcessor,
)
from opentelemetry.sdk.resources import Resource

from ..record import LevelVar
from .exporters import LOG_FORMAT, ConsoleLogRecordExporter
from .sink import OTelSink

INSTRUMENTATION_NAME = "ctxlog"


def configure_logger_provider(
    service_name: str = "ctxlog",
    service_version: str = "",
    log_exporter: LogRecordExporter | None = None,
    batch_logs: bool = False,
) -> LoggerProvider:
    """
    Configure an OTel LoggerProvider.

    Returns the provider for explicit injection -- does NOT set the global
    OTel provider.

    Args:
        service_name: Service identifier for resource attributes.
        service_version: Service version for resource attributes.
        log_exporter: Optional log exporter
            (e.g., ConsoleLogRecordExporter, OTLPLogExporter).
        batch_logs: If True, use BatchLogRecordProcessor
            (better for network exporters). If False, use
            SimpleLogRecordProcessor (immediate and ordered, better for
            console).

    Returns:
        Configured LoggerProvider.

    Example:
        >>> provider = configure_logger_provider(
        ...     service_name="my-app",
        ...     log_exporter=ConsoleLogRecordExporter(format="json"),
        ... )
        >>> sink = OTelSink(provider.get_logger("my-app"))
    """
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": service_version,
        }
    )

    logger_provider = LoggerProvider(resource=resource)
    if log_exporter:
        if batch_logs:
            logger_provider.add_log_record_processor(
                BatchLogRecordProcessor(log_exporter)
            )
        else:
            logger_provider.add_log_record_processor(
                SimpleLogRecordProcessor(log_exporter)
            )

    return logger_provider


def console_sink(
    stream: TextIO | None = None,
    *,
    format: LOG_FORMAT = "text",
    level: SeverityNumber | LevelVar | None = None,
    add_source: bool = False,
    service_name: str = "ctxlog",
) -> OTelSink:
    """Build an :class:`OTelSink` that writes one line per record.

    Args:
        stream: Target stream, stdout when ``None``.
        format: "text" or "json".
        level: Minimum level, fixed or shared through a LevelVar.
        add_source: Include the call site in each line.
        service_name: Service name of the underlying OTel provider.
    """
    provider = configure_logger_provider(
        service_name=service_name,
        log_exporter=ConsoleLogRecordExporter(stream, format=format),
        batch_logs=False,
    )
    return OTelSink(
        provider.get_logger(INSTRUMENTATION_NAME),
        level=level,
        add_source=add_source,
    )
