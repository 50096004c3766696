import pytest
import reactivex as rx
from opentelemetry._logs import SeverityNumber
from reactivex import Subject

from ctxlog import BACKGROUND, DEBUG, ERROR, INFO, WARN, Attr, Record, SubjectSink, group
from ctxlog.rx_sink import level_filter, record_redirect_to
from ctxlog.testing import RecordCollector


class Collector:
    def __init__(self):
        self.items = []

    def on_next(self, value):
        self.items.append(value)

    def on_error(self, error):
        raise error

    def on_completed(self):
        pass


def _record(message, level=INFO):
    return Record(0, level, message)


def test_subject_sink_publishes_flattened_copy():
    sink = SubjectSink(level=DEBUG).with_attrs([Attr("svc", "api")])
    published = []
    sink.subject.subscribe(published.append)
    record = Record(0, INFO, "m", [group("g", Attr("a", 1))])

    sink.handle(BACKGROUND, record)

    assert len(published) == 1
    assert published[0] is not record
    assert published[0].attrs == [Attr("svc", "api"), Attr("g.a", 1)]
    assert record.attrs == [group("g", Attr("a", 1))]


def test_subject_sink_uses_given_subject():
    subject = Subject()
    sink = SubjectSink(subject)
    assert sink.subject is subject
    assert sink.with_group("g").subject is subject


def test_level_filter():
    items = [_record("a", DEBUG), _record("b", WARN), _record("c", ERROR), "x"]
    collected = []
    rx.from_(items).pipe(level_filter(WARN)).subscribe(collected.append)

    assert [r.message for r in collected] == ["b", "c"]


def test_record_redirect_to():
    target = Collector()
    output = []
    source = [_record("x", INFO), _record("y", DEBUG), 1]
    rx.from_(source).pipe(record_redirect_to(target, INFO)).subscribe(output.append)

    assert output == [1]
    assert [r.message for r in target.items] == ["x"]


def test_record_redirect_to_function():
    redirected = []
    output = []
    source = [_record("x", SeverityNumber.TRACE), "keep"]
    rx.from_(source).pipe(record_redirect_to(redirected.append)).subscribe(output.append)

    assert output == ["keep"]
    assert [r.message for r in redirected] == ["x"]


def test_record_collector_pop_requires_one_record():
    sink = SubjectSink(level=DEBUG)
    collector = RecordCollector(sink)

    with pytest.raises(ValueError, match="got 0"):
        collector.pop()

    sink.handle(BACKGROUND, _record("a"))
    sink.handle(BACKGROUND, _record("b"))
    with pytest.raises(ValueError, match="got 2"):
        collector.pop()
    collector.dispose()
