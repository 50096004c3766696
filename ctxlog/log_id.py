"""Lineage identifiers and the process-wide identifier generator.

A :class:`LogID` tags one logical operation (a request, a spawned task) so
that its log lines can be correlated. The all-zero value :data:`NIL` means
"no identifier assigned" and is never written to log output.
"""

import os
import random
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass

LOG_ID_SIZE = 8


class BaseLogID(ABC):
    """Common interface of the identifier types understood by ctxlog."""

    @abstractmethod
    def is_zero(self) -> bool: ...

    @abstractmethod
    def __str__(self) -> str: ...


@dataclass(frozen=True)
class LogID(BaseLogID):
    """Fixed-width 8 byte identifier, rendered as lowercase hex."""

    value: bytes = bytes(LOG_ID_SIZE)

    def __post_init__(self):
        if len(self.value) != LOG_ID_SIZE:
            raise ValueError(
                f"LogID must be {LOG_ID_SIZE} bytes, got {len(self.value)}"
            )

    @classmethod
    def from_hex(cls, text: str) -> "LogID":
        return cls(bytes.fromhex(text))

    def is_zero(self) -> bool:
        return self.value == bytes(LOG_ID_SIZE)

    def __str__(self) -> str:
        if self.is_zero():
            return ""
        return self.value.hex()


@dataclass(frozen=True)
class StringLogID(BaseLogID):
    """Identifier carried as an opaque string. The empty string is zero."""

    value: str = ""

    def is_zero(self) -> bool:
        return self.value == ""

    def __str__(self) -> str:
        return self.value


NIL = LogID()


# =============================================================================
# Generators
# =============================================================================


class IDGenerator(ABC):
    """Strategy producing fresh identifiers."""

    @abstractmethod
    def new_id(self) -> BaseLogID: ...


class RandomIDGenerator(IDGenerator):
    """Pseudorandom generator seeded from the OS entropy source.

    ``random.Random`` is not safe to share between threads, so every draw
    happens under a lock.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "little")
        self._lock = threading.Lock()
        self._rand = random.Random(seed)

    def new_id(self) -> LogID:
        with self._lock:
            return LogID(self._rand.randbytes(LOG_ID_SIZE))


_id_generator: IDGenerator = RandomIDGenerator()


def set_id_generator(generator: IDGenerator) -> None:
    """Replace the process-wide identifier generator."""
    global _id_generator
    _id_generator = generator


def get_id_generator() -> IDGenerator:
    return _id_generator


def new_id() -> BaseLogID:
    """Return a fresh identifier from the process-wide generator."""
    return _id_generator.new_id()
