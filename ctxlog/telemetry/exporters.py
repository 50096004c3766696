"""OTel log-record exporter for console and stream output.

Provides :class:`ConsoleLogRecordExporter`, which writes text or JSON lines
to a text stream (stdout by default).
"""

import sys
import threading
from collections.abc import Sequence
from typing import Literal, TextIO

from opentelemetry.sdk._logs._internal import ReadableLogRecord
from opentelemetry.sdk._logs.export import (
    LogRecordExporter,
    LogRecordExportResult,
)

from .sink import format_log_record, format_log_record_json

LOG_FORMAT = Literal["text", "json"]


class ConsoleLogRecordExporter(LogRecordExporter):
    """OTel LogRecordExporter that writes one line per record to a stream.

    Unlike OTel's ConsoleLogExporter which outputs verbose multi-line JSON,
    this exporter produces a single line per record.

    Example output (text):
        2026-02-03T10:30:00.000Z [INFO] start logId=9f86d081884c7d65
        2026-02-03T10:30:01.000Z [INFO] end logId=9f86d081884c7d65

    Parameters:
        stream: Target stream. ``None`` resolves ``sys.stdout`` at write
            time, so stream redirection is honoured.
        format: "text" for human-readable lines, "json" for JSON lines.
    """

    def __init__(self, stream: TextIO | None = None, *, format: LOG_FORMAT = "text"):
        if format not in ("text", "json"):
            raise ValueError(f"Invalid format: {format}. Choose from 'text', 'json'.")
        self._stream = stream
        self._format = format
        self._formatter = (
            format_log_record_json if format == "json" else format_log_record
        )
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def export(self, batch: Sequence[ReadableLogRecord]) -> LogRecordExportResult:
        """Export log records to the stream.

        Args:
            batch: Sequence of ReadableLogRecord objects to export.

        Returns:
            LogRecordExportResult.SUCCESS on success,
            LogRecordExportResult.FAILURE on error.
        """
        try:
            stream = self.stream
            with self._lock:
                for readable_record in batch:
                    stream.write(self._formatter(readable_record.log_record))
                stream.flush()
            return LogRecordExportResult.SUCCESS
        except Exception:
            return LogRecordExportResult.FAILURE

    def shutdown(self) -> None:
        """Shutdown the exporter (the stream is owned by the caller)."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush the stream.

        Returns:
            True always.
        """
        self.stream.flush()
        return True
