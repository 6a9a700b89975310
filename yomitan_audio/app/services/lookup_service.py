"""Lookup service composing fetch, labelling and ranking."""

from __future__ import annotations

import copy
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Union

from yomitan_audio.core import (
    AudioEntry,
    AudioStore,
    LookupQuery,
    StorageFailure,
    fetch_candidates,
    generate_display_names,
    parse_sources,
    sort_results,
)

from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry
from .result_formatter import AudioResultFormatter

SourcesArg = Union[str, Iterable[str], None]


class LookupFailed(Exception):
    """Public fault raised when the catalog could not be queried.

    The message is fixed so that callers never see storage internals; the
    originating :class:`StorageFailure` stays available as ``__cause__``.
    """

    status_code = 500
    public_message = "Database query failed"

    def __init__(self) -> None:
        super().__init__(self.public_message)


class AudioQueryOrchestrator:
    """Runs audio lookups against a storage collaborator."""

    def __init__(
        self,
        *,
        repository: AudioStore,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.repository = repository
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}

        self._logger = get_logger(__name__).bind(
            component="audio_query_orchestrator",
            repository=type(repository).__name__,
        )

        self._metric_request_total = create_counter(
            "audio_lookup_requests_total",
            "Total audio lookup requests received.",
        )
        self._metric_request_failures = create_counter(
            "audio_lookup_request_failures_total",
            "Total audio lookup requests that failed in storage.",
        )
        self._metric_request_duration = create_histogram(
            "audio_lookup_request_seconds",
            "Latency of audio lookup requests.",
        )
        self._metric_results = create_counter(
            "audio_lookup_results_total",
            "Audio entries returned, by match type.",
            label_names=("match_type",),
        )

    def get_latest_telemetry(self) -> Dict[str, Any]:
        if not self._latest_trace:
            return self.telemetry.latest_snapshot()
        return copy.deepcopy(self._latest_trace)

    def _build_query(self, term: Optional[str], reading: Optional[str], sources: SourcesArg) -> LookupQuery:
        return LookupQuery(
            term=term or "",
            reading=reading or "",
            sources=tuple(parse_sources(sources)),
        )

    def lookup_audio(
        self,
        term: Optional[str],
        reading: Optional[str] = "",
        sources: SourcesArg = None,
    ) -> List[AudioEntry]:
        """Return entries for ``term``/``reading``, best match first.

        Raises :class:`LookupFailed` when storage reports a failure.
        """

        query = self._build_query(term, reading, sources)
        request_context: Dict[str, Any] = {
            "term": query.term,
            "reading": query.reading,
            "sources": list(query.sources),
        }

        if not query.term.strip():
            self._logger.warning("Lookup skipped: empty term", context=request_context)
            return []

        telemetry = self.telemetry
        telemetry.start_trace("lookup_audio")
        telemetry.increment("lookup.invoked")
        telemetry.annotate("input.term", query.term)
        telemetry.annotate("input.reading", query.reading)
        telemetry.annotate("input.sources", list(query.sources))

        self._metric_request_total.inc()
        self._logger.info("Lookup request received", context=request_context)

        with start_span("audio.lookup", request_context) as span:
            with self._metric_request_duration.time():
                try:
                    with telemetry.timer("lookup.fetch") as fetch_meta:
                        candidates = fetch_candidates(
                            self.repository,
                            query.term,
                            query.reading,
                            query.sources,
                        )
                        fetch_meta["rows"] = len(candidates)
                except StorageFailure as exc:
                    self._metric_request_failures.inc()
                    self._logger.error(
                        "Lookup request failed",
                        context={
                            **exc.context,
                            "sources": list(query.sources),
                            "error": str(exc.cause) if exc.cause is not None else "Unknown Error",
                        },
                    )
                    record_exception(span, exc)
                    telemetry.increment("lookup.failed")
                    self._latest_trace = telemetry.snapshot()
                    raise LookupFailed() from exc

                # Labels compare against the caller's reading, not the
                # hiragana form used to filter storage.
                with telemetry.timer("lookup.label"):
                    names = generate_display_names(candidates, query.term, query.reading)

                with telemetry.timer("lookup.rank"):
                    ranked = sort_results(candidates, names)

            match_counts = Counter(name.match_type.name.lower() for name in names)
            for match_type, count in match_counts.items():
                self._metric_results.labels(match_type=match_type).inc(count)

            self._logger.info(
                "Lookup request completed",
                context={"term": query.term, "result_count": len(ranked), "match_counts": dict(match_counts)},
            )
            telemetry.annotate("result.total", len(ranked))
            telemetry.increment("lookup.completed")
            self._latest_trace = telemetry.snapshot()
            add_span_attributes(
                span,
                {"lookup.success": True, "result.total": len(ranked)},
            )

        return ranked


class AudioLookupService:
    """Thin facade that delegates to the orchestrator and formatter."""

    def __init__(
        self,
        *,
        repository: AudioStore,
        telemetry: Optional[StructuredTelemetry] = None,
        orchestrator: Optional[AudioQueryOrchestrator] = None,
        formatter: Optional[AudioResultFormatter] = None,
    ) -> None:
        self.orchestrator = orchestrator or AudioQueryOrchestrator(
            repository=repository,
            telemetry=telemetry,
        )
        self.formatter = formatter or AudioResultFormatter()
        self.repository = repository
        self.telemetry = self.orchestrator.telemetry

    def lookup_audio(
        self,
        term: Optional[str],
        reading: Optional[str] = "",
        sources: SourcesArg = None,
    ) -> List[AudioEntry]:
        return self.orchestrator.lookup_audio(term, reading, sources)

    def get_latest_telemetry(self) -> Dict[str, Any]:
        return self.orchestrator.get_latest_telemetry()

    def format_results(self, term: str, entries: List[AudioEntry]) -> str:
        return self.formatter.format_results(term, entries)

    def build_audio_source_list(self, entries: List[AudioEntry], base_url: str) -> Dict[str, Any]:
        return self.formatter.build_audio_source_list(entries, base_url)


__all__ = ["AudioLookupService", "AudioQueryOrchestrator", "LookupFailed"]
