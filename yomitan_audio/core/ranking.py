"""Order labelled candidates for presentation."""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple, Union

from .labels import generate_display_names
from .models import AudioEntry, DisplayName, MatchType
from .sources import SOURCE_PRIORITY

UNKNOWN_SOURCE_PRIORITY = sys.maxsize

Label = Union[DisplayName, str]


def source_priority(source: str) -> int:
    return SOURCE_PRIORITY.get(source, UNKNOWN_SOURCE_PRIORITY)


def match_type_from_label(label: Optional[str]) -> MatchType:
    """Recover the match type from the annotation suffix of a plain label."""

    if not label:
        return MatchType.NONE
    for match_type in (
        MatchType.EXPRESSION_AND_READING,
        MatchType.EXPRESSION_ONLY,
        MatchType.READING_ONLY,
    ):
        if match_type.annotation.strip() in label:
            return match_type
    return MatchType.NONE


def _resolve_label(label: Label) -> Tuple[str, MatchType]:
    if isinstance(label, DisplayName):
        return label.text, label.match_type
    return label, match_type_from_label(label)


def sort_results(entries: Sequence[AudioEntry], names: Sequence[Label]) -> List[AudioEntry]:
    """Return copies of ``entries`` carrying their label, best match first.

    Entries sort by match type, then source priority; unknown sources go last
    and full ties keep their fetch order. An entry without a corresponding
    label gets ``display=None`` and the lowest match priority.
    """

    keyed: List[Tuple[Tuple[int, int], AudioEntry]] = []
    for index, entry in enumerate(entries):
        if index < len(names):
            text, match_type = _resolve_label(names[index])
            labelled = replace(entry, display=text)
        else:
            match_type = MatchType.NONE
            labelled = replace(entry, display=None)
        keyed.append(((int(match_type), source_priority(entry.source)), labelled))

    keyed.sort(key=lambda item: item[0])
    return [entry for _, entry in keyed]


def rank_entries(entries: Sequence[AudioEntry], term: str, reading: Optional[str]) -> List[AudioEntry]:
    """Label then sort ``entries`` for the given query."""

    return sort_results(entries, generate_display_names(entries, term, reading))


__all__ = [
    "UNKNOWN_SOURCE_PRIORITY",
    "match_type_from_label",
    "rank_entries",
    "sort_results",
    "source_priority",
]
