"""Structured logging, Prometheus metrics and OpenTelemetry spans.

Every component logs through :func:`get_logger` so that request context is
rendered consistently, and records metrics through the thin handles below so
repeated service construction (tests, reloads) never trips Prometheus'
duplicate-registration guard.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from opentelemetry import trace
from prometheus_client import REGISTRY, Counter, Histogram


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter that appends bound and per-call context as a JSON suffix."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra)
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra)
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            payload = json.dumps(
                event_context, sort_keys=True, default=str, ensure_ascii=False
            )
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


class _MetricHandle:
    def __init__(self, impl: Any) -> None:
        self._impl = impl

    def labels(self, **labels: Any):
        return self.__class__(self._impl.labels(**labels))


class CounterHandle(_MetricHandle):
    """Wrapper around a Prometheus counter."""

    def inc(self, amount: float = 1.0) -> None:
        self._impl.inc(amount)


class HistogramHandle(_MetricHandle):
    """Wrapper around a Prometheus histogram."""

    def observe(self, value: float) -> None:
        self._impl.observe(value)

    @contextmanager
    def time(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(time.perf_counter() - start)


def _registered(name: str) -> Any:
    # Counters register under both ``name`` and ``name_total``.
    collectors = REGISTRY._names_to_collectors  # type: ignore[attr-defined]
    return collectors.get(name) or collectors.get(f"{name}_total")


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> CounterHandle:
    """Create (or reuse) a Prometheus counter."""

    try:
        impl = Counter(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        impl = _registered(name)
    return CounterHandle(impl)


def create_histogram(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> HistogramHandle:
    """Create (or reuse) a Prometheus histogram."""

    try:
        impl = Histogram(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        impl = _registered(name)
    return HistogramHandle(impl)


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None):
    """Open an OpenTelemetry span named ``name``.

    Without a configured SDK the global tracer hands out non-recording spans,
    so callers can annotate unconditionally.
    """

    tracer = trace.get_tracer("yomitan_audio")
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    """Attach scalar ``attributes`` to ``span``; lists are joined with commas."""

    if span is None:
        return
    for key, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)):
            value = ",".join(str(item) for item in value)
        span.set_attribute(str(key), value)


def record_exception(span: Any, error: BaseException) -> None:
    """Mark ``span`` as failed with ``error``."""

    if span is None:
        return
    span.record_exception(error)
    span.set_attribute("error", True)


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "CounterHandle",
    "HistogramHandle",
    "create_counter",
    "create_histogram",
    "start_span",
    "add_span_attributes",
    "record_exception",
]
