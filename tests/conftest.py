"""Shared test fixtures for ctxlog tests."""

import pytest

import ctxlog
from ctxlog import logger as logger_module
from ctxlog.log_id import get_id_generator, set_id_generator
from ctxlog.testing import RecordCollector, use_count_up_ids


@pytest.fixture(autouse=True)
def restore_globals():
    """Snapshot and restore the process-wide generator, level and provider."""
    generator = get_id_generator()
    level = ctxlog.log_level().level()
    provider = logger_module._default_provider
    yield
    set_id_generator(generator)
    ctxlog.set_log_level(level)
    ctxlog.set_default_provider(provider)


@pytest.fixture
def count_up_ids():
    """Deterministic ids: 0000000000000000, 0000000000000001, ..."""
    return use_count_up_ids()


@pytest.fixture
def subject_sink():
    """A SubjectSink following the process-wide level."""
    return ctxlog.SubjectSink(level=ctxlog.log_level())


@pytest.fixture
def collector(subject_sink):
    c = RecordCollector(subject_sink)
    yield c
    c.dispose()


@pytest.fixture
def default_to_subject(subject_sink, collector):
    """Route the default provider into ``subject_sink`` at DEBUG level."""
    ctxlog.set_default_provider(None)
    ctxlog.set_sink(subject_sink)
    ctxlog.set_log_level(ctxlog.DEBUG)
    return collector
