"""Build the parameterised filter used to fetch candidate entries."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .kana import katakana_to_hiragana
from .models import AudioFilter, QueryParam
from .sources import is_unrestricted

_EXPRESSION_CLAUSE = "WHERE expression = ?"
_EXPRESSION_OR_READING_CLAUSE = "WHERE (expression = ? OR reading = ?)"


def build_audio_filter(
    term: str,
    reading: Optional[str] = "",
    sources: Optional[Sequence[str]] = None,
) -> AudioFilter:
    """Return the clause and ordered parameters matching the query.

    Parameters are ordered term, hiragana reading (when a reading is given),
    then each source in input order.
    """

    clause = _EXPRESSION_CLAUSE
    params: List[QueryParam] = [term]

    if reading and reading.strip():
        clause = _EXPRESSION_OR_READING_CLAUSE
        params.append(katakana_to_hiragana(reading))

    selected = list(sources or ())
    if not is_unrestricted(selected):
        placeholders = ", ".join("?" for _ in selected)
        clause += f" AND source IN ({placeholders})"
        params.extend(selected)

    return AudioFilter(clause=clause, params=tuple(params))


__all__ = ["build_audio_filter"]
