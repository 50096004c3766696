"""Helpers for testing code that logs through ctxlog."""

import threading

from .log_id import IDGenerator, StringLogID, set_id_generator
from .record import Record
from .rx_sink import SubjectSink


class CountUpIDGenerator(IDGenerator):
    """Emits ``0000000000000000``, ``0000000000000001``, ... in order."""

    def __init__(self, start: int = 0):
        self._lock = threading.Lock()
        self._count = start

    def new_id(self) -> StringLogID:
        with self._lock:
            log_id = StringLogID(f"{self._count:016d}")
            self._count += 1
        return log_id


def use_count_up_ids(start: int = 0) -> CountUpIDGenerator:
    """Install a fresh :class:`CountUpIDGenerator` process-wide."""
    generator = CountUpIDGenerator(start)
    set_id_generator(generator)
    return generator


class RecordCollector:
    """Collects the records published by a :class:`SubjectSink`."""

    def __init__(self, sink: SubjectSink):
        self.records: list[Record] = []
        self._subscription = sink.subject.subscribe(self.records.append)

    def pop(self) -> Record:
        """Return the only collected record and reset.

        Raises:
            ValueError: not exactly one record was collected.
        """
        if len(self.records) != 1:
            raise ValueError(f"expected one record, got {len(self.records)}")
        return self.records.pop()

    def attributes(self) -> dict:
        """Flattened attributes of the only collected record, then reset."""
        return self.pop().attributes()

    def clear(self) -> None:
        self.records.clear()

    def dispose(self) -> None:
        self._subscription.dispose()
