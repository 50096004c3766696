"""Core error types for :mod:`ctxlog`."""


class CtxLogException(Exception):
    """Base class for all ctxlog exceptions."""

    def __init__(self, note: str, source: str = "Unknown"):
        super().__init__(f"<{source}> {note}")
        self.source = source
        self.note = note

    def __str__(self):
        return f"<{self.source}> {self.note}"


class MissingSinkError(CtxLogException):
    """A logger or provider was constructed without a sink."""


class SinkTypeError(CtxLogException):
    """A ``ContextSink`` was required but a different sink was supplied."""
