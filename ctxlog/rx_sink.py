"""Reactive inner sink.

:class:`SubjectSink` publishes every handled record to a reactivex
``Subject`` so in-process consumers can observe the augmented log stream.
"""

from typing import Any, Callable

import reactivex as rx
from opentelemetry._logs import SeverityNumber
from reactivex import Observable, Subject
from reactivex import operators as ops

from .context import Context
from .record import Attr, LevelVar, Record
from .sink import BaseSink


class SubjectSink(BaseSink):
    """Inner sink that forwards records to a ``Subject``.

    The published record is a copy whose ``attrs`` are the flattened
    static, record and context attributes, in output order.

    Example:
        >>> sink = SubjectSink(level=SeverityNumber.DEBUG)
        >>> sink.subject.subscribe(print)
        >>> logger = ctxlog.LoggerProvider(sink).new_logger()
    """

    def __init__(
        self,
        subject: Subject | None = None,
        level: SeverityNumber | LevelVar | None = None,
    ):
        super().__init__(level)
        self.subject: Subject = subject if subject is not None else Subject()

    def handle(self, ctx: Context, record: Record) -> None:
        published = record.clone()
        published.attrs = [Attr(k, v) for k, v in self.attributes(record)]
        self.subject.on_next(published)


def level_filter(min_level: SeverityNumber):
    """
    The operator to keep records at or above ``min_level``. Other items are dropped.
    """
    return ops.filter(
        lambda item: isinstance(item, Record) and item.level.value >= min_level.value
    )


def record_redirect_to(
    target: rx.abc.ObserverBase | Callable,
    min_level: SeverityNumber = SeverityNumber.TRACE,
):
    """
    The operator redirects records at or above ``min_level`` to ``target``
    (an observer or a function) and forwards every other item.
    Records below ``min_level`` are dropped.
    """

    def _record_redirect_to(source):
        def subscribe(observer, scheduler=None):

            if hasattr(target, "on_next"):
                redirect_fun = target.on_next
            else:
                redirect_fun = target

            def on_next(value: Any) -> None:
                if isinstance(value, Record):
                    if value.level.value >= min_level.value:
                        redirect_fun(value)
                else:
                    observer.on_next(value)

            return source.subscribe(
                on_next=on_next,
                on_error=observer.on_error,
                on_completed=observer.on_completed,
                scheduler=scheduler,
            )

        return Observable(subscribe)

    return _record_redirect_to
