"""Tests for BaseSink and the attribute-augmenting ContextSink."""

import time
from unittest.mock import MagicMock

import pytest

from ctxlog import (
    BACKGROUND,
    DEBUG,
    INFO,
    WARN,
    Attr,
    ContextSink,
    LevelVar,
    Record,
    SubjectSink,
    context_attr,
    group,
    log_id_attr,
    parent_log_id_attr,
    value_getter,
    with_child_log_context,
    with_log_context,
)
from ctxlog.testing import RecordCollector


class CtxKey:
    pass


def _record(*attrs, level=INFO):
    return Record(time.time_ns(), level, "message", list(attrs))


class TestBaseSink:
    """Tests for level gating, static attributes and groups."""

    def test_fixed_level(self):
        sink = SubjectSink(level=WARN)
        assert not sink.enabled(BACKGROUND, INFO)
        assert sink.enabled(BACKGROUND, WARN)

    def test_default_level_is_info(self):
        sink = SubjectSink()
        assert not sink.enabled(BACKGROUND, DEBUG)
        assert sink.enabled(BACKGROUND, INFO)

    def test_level_var_is_followed(self):
        level = LevelVar(INFO)
        sink = SubjectSink(level=level)
        assert not sink.enabled(BACKGROUND, DEBUG)

        level.set(DEBUG)
        assert sink.enabled(BACKGROUND, DEBUG)

    def test_static_attrs_come_first(self):
        sink = SubjectSink().with_attrs([Attr("static", 1)])
        collector = RecordCollector(sink)

        sink.handle(BACKGROUND, _record(Attr("a", 2)))
        assert list(collector.attributes().items()) == [("static", 1), ("a", 2)]

    def test_groups_qualify_later_attrs(self):
        sink = SubjectSink().with_attrs([Attr("outer", 1)]).with_group("g").with_attrs(
            [Attr("inner", 2)]
        )
        collector = RecordCollector(sink)

        sink.handle(BACKGROUND, _record(Attr("a", 3), group("sub", Attr("b", 4))))
        assert collector.attributes() == {"outer": 1, "g.inner": 2, "g.a": 3, "g.sub.b": 4}

    def test_empty_group_name_is_noop(self):
        sink = SubjectSink()
        assert sink.with_group("") is sink

    def test_derivation_leaves_receiver_unchanged(self):
        base = SubjectSink()
        base.with_attrs([Attr("x", 1)]).with_group("g")
        collector = RecordCollector(base)

        base.handle(BACKGROUND, _record(Attr("a", 1)))
        assert collector.attributes() == {"a": 1}

    def test_empty_attrs_dropped_and_empty_key_group_inlined(self):
        sink = SubjectSink()
        collector = RecordCollector(sink)

        sink.handle(
            BACKGROUND,
            _record(Attr("", None), group("", Attr("i", 1)), group("empty"), Attr("n", [1, 2])),
        )
        assert collector.attributes() == {"i": 1, "n": [1, 2]}


class TestContextSink:
    """Tests for context attribute augmentation."""

    @pytest.fixture
    def inner(self):
        sink = SubjectSink(level=DEBUG)
        return sink, RecordCollector(sink)

    def test_handle_appends_in_descriptor_order(self, inner, count_up_ids):
        sink, collector = inner
        ctx_sink = ContextSink(sink, (log_id_attr(), parent_log_id_attr())).with_context_attrs(
            context_attr("ctxAttr", resolve=value_getter(CtxKey, str))
        )
        ctx = with_child_log_context(with_log_context(BACKGROUND)).with_value(CtxKey, "v")

        ctx_sink.handle(ctx, _record(Attr("a", 1)))

        assert list(collector.attributes().items()) == [
            ("a", 1),
            ("logId", "0000000000000001"),
            ("parentLogId", "0000000000000000"),
            ("ctxAttr", "v"),
        ]

    def test_zero_ids_are_omitted(self, inner):
        sink, collector = inner
        ctx_sink = ContextSink(sink, (log_id_attr(), parent_log_id_attr()))

        ctx_sink.handle(BACKGROUND, _record())
        assert collector.attributes() == {}

    def test_same_sink_serves_different_contexts(self, inner, count_up_ids):
        sink, collector = inner
        ctx_sink = ContextSink(sink, (log_id_attr(),))
        first = with_log_context(BACKGROUND)
        second = with_log_context(BACKGROUND)

        ctx_sink.handle(first, _record())
        ctx_sink.handle(second, _record())

        assert [r.attributes()["logId"] for r in collector.records] == [
            "0000000000000000",
            "0000000000000001",
        ]

    def test_handle_does_not_mutate_caller_record(self, inner, count_up_ids):
        sink, _ = inner
        ctx_sink = ContextSink(sink, (log_id_attr(),))
        record = _record(Attr("a", 1))

        ctx_sink.handle(with_log_context(BACKGROUND), record)
        assert record.attrs == [Attr("a", 1)]

    def test_enabled_delegates(self):
        stub = MagicMock()
        stub.enabled.return_value = False
        ctx_sink = ContextSink(stub)

        assert ctx_sink.enabled(BACKGROUND, INFO) is False
        stub.enabled.assert_called_once_with(BACKGROUND, INFO)

    def test_inner_errors_propagate(self):
        stub = MagicMock()
        stub.handle.side_effect = OSError("disk full")
        ctx_sink = ContextSink(stub)

        with pytest.raises(OSError, match="disk full"):
            ctx_sink.handle(BACKGROUND, _record())

    def test_clone_independence(self, inner):
        sink, collector = inner
        original = ContextSink(sink, (context_attr("a", "1"),))
        derived = original.with_context_attrs(context_attr("b", "2"))
        derived.add_context_attr(context_attr("c", "3"))

        original.handle(BACKGROUND, _record())
        assert collector.attributes() == {"a": "1"}

        derived.handle(BACKGROUND, _record())
        assert collector.attributes() == {"a": "1", "b": "2"}

    def test_set_context_attrs_replaces(self, inner):
        sink, collector = inner
        original = ContextSink(sink, (context_attr("a", "1"),))
        replaced = original.set_context_attrs([context_attr("z", "26")])

        replaced.handle(BACKGROUND, _record())
        assert collector.attributes() == {"z": "26"}
        assert [a.key for a in original.context_attrs] == ["a"]

    def test_set_context_attrs_copies_caller_list(self, inner):
        sink, collector = inner
        attrs = [context_attr("a", "1")]
        ctx_sink = ContextSink(sink).set_context_attrs(attrs)
        attrs.append(context_attr("b", "2"))

        ctx_sink.handle(BACKGROUND, _record())
        assert collector.attributes() == {"a": "1"}

    def test_structural_derivations_share_inner_sink(self):
        stub = MagicMock()
        ctx_sink = ContextSink(stub)

        assert ctx_sink.with_context_attrs(context_attr("a", "1")).inner is stub
        assert ctx_sink.set_context_attrs([]).inner is stub

    def test_with_attrs_and_group_pass_through(self):
        stub = MagicMock()
        grouped = MagicMock()
        stub.with_group.return_value = grouped
        grouped.with_attrs.return_value = "attrs-applied"
        attr = context_attr("a", "1")

        derived = ContextSink(stub, (attr,)).with_group("g").with_attrs([Attr("s", 1)])

        stub.with_group.assert_called_once_with("g")
        grouped.with_attrs.assert_called_once_with([Attr("s", 1)])
        assert derived.inner == "attrs-applied"
        assert derived.context_attrs == (attr,)

    def test_with_inner_keeps_descriptors(self):
        attr = context_attr("a", "1")
        swapped = ContextSink(MagicMock(), (attr,)).with_inner("other")

        assert swapped.inner == "other"
        assert swapped.context_attrs == (attr,)
