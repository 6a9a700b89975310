"""Display labels describing why each candidate matched."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import AudioEntry, DisplayName, MatchType


def classify_match(entry: AudioEntry, term: str, reading: Optional[str]) -> MatchType:
    """Compare ``entry`` against the query exactly as supplied by the caller."""

    expression_match = term == entry.expression
    reading_match = reading == entry.reading

    if expression_match and reading_match:
        return MatchType.EXPRESSION_AND_READING
    if expression_match:
        return MatchType.EXPRESSION_ONLY
    if reading_match:
        return MatchType.READING_ONLY
    return MatchType.NONE


def build_display_name(entry: AudioEntry, match_type: MatchType) -> DisplayName:
    text = entry.source
    if entry.display:
        text += f": {entry.display}"
    return DisplayName(text=text + match_type.annotation, match_type=match_type)


def generate_display_names(
    entries: Iterable[AudioEntry],
    term: str,
    reading: Optional[str],
) -> List[DisplayName]:
    """Return one label per entry, in input order.

    e.g. ``forvo: cat (Expression+Reading)`` or a bare ``nhk16`` when the
    entry has no descriptor and matches neither field.
    """

    return [build_display_name(entry, classify_match(entry, term, reading)) for entry in entries]


__all__ = ["build_display_name", "classify_match", "generate_display_names"]
