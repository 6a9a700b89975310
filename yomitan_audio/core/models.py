"""Dataclasses shared by the lookup stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple, Union

QueryParam = Union[str, int, float]


@dataclass(frozen=True)
class AudioEntry:
    """One catalog row identifying a playable clip."""

    expression: str
    reading: str
    source: str
    file: str
    display: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MatchType(IntEnum):
    """How strongly an entry matches the query; lower values rank first."""

    EXPRESSION_AND_READING = 0
    EXPRESSION_ONLY = 1
    READING_ONLY = 2
    NONE = 3

    @property
    def annotation(self) -> str:
        return _ANNOTATIONS[self]


_ANNOTATIONS = {
    MatchType.EXPRESSION_AND_READING: " (Expression+Reading)",
    MatchType.EXPRESSION_ONLY: " (Only Expression)",
    MatchType.READING_ONLY: " (Only Reading)",
    MatchType.NONE: "",
}


@dataclass(frozen=True)
class DisplayName:
    """A generated label paired with the match type it was built from."""

    text: str
    match_type: MatchType

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class AudioFilter:
    """Parameterised ``WHERE`` clause for the entries table."""

    clause: str
    params: Tuple[QueryParam, ...]


@dataclass
class QueryResult:
    """Outcome reported by a storage collaborator."""

    success: bool
    rows: List[AudioEntry] = field(default_factory=list)
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class LookupQuery:
    term: str
    reading: str = ""
    sources: Tuple[str, ...] = ()


__all__ = [
    "AudioEntry",
    "AudioFilter",
    "DisplayName",
    "LookupQuery",
    "MatchType",
    "QueryParam",
    "QueryResult",
]
