from __future__ import annotations

import logging

from prometheus_client import REGISTRY

from yomitan_audio.utils.logging_config import _resolve_level
from yomitan_audio.utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)


class RecordingSpan:
    def __init__(self) -> None:
        self.attributes = {}
        self.exceptions = []

    def set_attribute(self, key, value) -> None:
        self.attributes[key] = value

    def record_exception(self, error) -> None:
        self.exceptions.append(error)


def test_logger_appends_sorted_context(caplog) -> None:
    logger = get_logger("yomitan_audio.tests.observability").bind(component="probe")

    caplog.set_level(logging.INFO, logger="yomitan_audio.tests.observability")
    logger.info("Lookup request received", context={"term": "猫", "reading": "ねこ"})

    (record,) = caplog.records
    assert record.getMessage() == (
        'Lookup request received | {"component": "probe", "reading": "ねこ", "term": "猫"}'
    )


def test_logger_without_context_leaves_message_untouched(caplog) -> None:
    logger = get_logger("yomitan_audio.tests.observability")

    caplog.set_level(logging.INFO, logger="yomitan_audio.tests.observability")
    logger.info("plain")

    assert caplog.records[0].getMessage() == "plain"


def test_bind_does_not_mutate_parent_context() -> None:
    parent = get_logger("yomitan_audio.tests.observability", service="lookup")
    child = parent.bind(component="fetch")

    assert parent.extra == {"service": "lookup"}
    assert child.extra == {"service": "lookup", "component": "fetch"}


def test_counters_are_reused_across_registrations() -> None:
    first = create_counter("yomitan_audio_test_events_total", "Test counter.")
    second = create_counter("yomitan_audio_test_events_total", "Test counter.")

    before = REGISTRY.get_sample_value("yomitan_audio_test_events_total") or 0.0
    first.inc()
    second.inc(2)

    assert REGISTRY.get_sample_value("yomitan_audio_test_events_total") == before + 3


def test_histogram_timer_observes_once() -> None:
    histogram = create_histogram("yomitan_audio_test_stage_seconds", "Test histogram.")
    again = create_histogram("yomitan_audio_test_stage_seconds", "Test histogram.")

    before = REGISTRY.get_sample_value("yomitan_audio_test_stage_seconds_count") or 0.0
    with histogram.time():
        pass
    again.observe(0.5)

    assert REGISTRY.get_sample_value("yomitan_audio_test_stage_seconds_count") == before + 2


def test_span_helpers_skip_none_and_join_sequences() -> None:
    span = RecordingSpan()

    add_span_attributes(span, {"term": "猫", "reading": None, "sources": ["nhk16", "tts"]})
    error = RuntimeError("boom")
    record_exception(span, error)

    assert span.attributes == {"term": "猫", "sources": "nhk16,tts", "error": True}
    assert span.exceptions == [error]

    add_span_attributes(None, {"ignored": 1})
    record_exception(None, error)


def test_start_span_works_without_sdk() -> None:
    with start_span("audio.test", {"term": "猫"}) as span:
        add_span_attributes(span, {"result.total": 0})


def test_resolve_level_accepts_names_numbers_and_garbage() -> None:
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level("30") == logging.WARNING
    assert _resolve_level(logging.ERROR) == logging.ERROR
    assert _resolve_level("not-a-level") == logging.INFO
    assert _resolve_level(None) == logging.INFO
