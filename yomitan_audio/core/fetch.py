"""Candidate retrieval against a storage collaborator."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from ..utils.observability import get_logger
from .filters import build_audio_filter
from .models import AudioEntry, AudioFilter, QueryResult

_logger = get_logger(__name__).bind(component="candidate_fetch")


class AudioStore(Protocol):
    """Storage collaborator able to run an :class:`AudioFilter`."""

    def fetch_entries(self, audio_filter: AudioFilter) -> QueryResult:
        ...


class StorageFailure(Exception):
    """The storage collaborator reported a failed lookup."""

    def __init__(self, term: str, reading: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Audio lookup failed for term={term!r}, reading={reading!r}")
        self.term = term
        self.reading = reading
        self.cause = cause

    @property
    def context(self) -> dict:
        return {"term": self.term, "reading": self.reading}


def fetch_candidates(
    store: AudioStore,
    term: str,
    reading: str = "",
    sources: Optional[Sequence[str]] = None,
) -> List[AudioEntry]:
    """Return every catalog entry matching the query, in storage order.

    Raises :class:`StorageFailure` when the store reports failure; rows of a
    failed result are never inspected.
    """

    audio_filter = build_audio_filter(term, reading, sources)
    result = store.fetch_entries(audio_filter)

    if not result.success:
        underlying = str(result.error) if result.error is not None else "Unknown Error"
        _logger.error(
            "Audio database query failed",
            context={"term": term, "reading": reading, "underlying_error": underlying},
        )
        raise StorageFailure(term, reading, result.error)

    return list(result.rows)


__all__ = ["AudioStore", "StorageFailure", "fetch_candidates"]
