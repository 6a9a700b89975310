"""Core lookup stages: filter building, candidate fetch, labelling, ranking."""

from .fetch import AudioStore, StorageFailure, fetch_candidates
from .filters import build_audio_filter
from .kana import katakana_to_hiragana
from .labels import build_display_name, classify_match, generate_display_names
from .models import (
    AudioEntry,
    AudioFilter,
    DisplayName,
    LookupQuery,
    MatchType,
    QueryParam,
    QueryResult,
)
from .ranking import (
    UNKNOWN_SOURCE_PRIORITY,
    match_type_from_label,
    rank_entries,
    sort_results,
    source_priority,
)
from .sources import ALL_SOURCES, AUDIO_SOURCES, SOURCE_PRIORITY, parse_sources

__all__ = [
    "ALL_SOURCES",
    "AUDIO_SOURCES",
    "SOURCE_PRIORITY",
    "UNKNOWN_SOURCE_PRIORITY",
    "AudioEntry",
    "AudioFilter",
    "AudioStore",
    "DisplayName",
    "LookupQuery",
    "MatchType",
    "QueryParam",
    "QueryResult",
    "StorageFailure",
    "build_audio_filter",
    "build_display_name",
    "classify_match",
    "fetch_candidates",
    "generate_display_names",
    "katakana_to_hiragana",
    "match_type_from_label",
    "parse_sources",
    "rank_entries",
    "sort_results",
    "source_priority",
]
