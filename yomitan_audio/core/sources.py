"""Known audio providers and helpers for caller-supplied source lists."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Union

ALL_SOURCES = "all"

# Preference order used as the ranking tie-break.
AUDIO_SOURCES = (
    "nhk16",
    "daijisen",
    "shinmeikai8",
    "jpod",
    "taas",
    "ozk5",
    "forvo",
    "forvo_ext",
    "forvo_ext2",
    "tts",
)

SOURCE_PRIORITY: Mapping[str, int] = MappingProxyType(
    {name: index for index, name in enumerate(AUDIO_SOURCES)}
)


def parse_sources(value: Union[str, Iterable[str], None]) -> List[str]:
    """Normalise a source selection into an ordered list of identifiers.

    Accepts ``None``, a comma-separated string or any iterable of strings.
    Identifiers are trimmed and lowercased; blanks are dropped.
    """

    if value is None:
        return []
    if isinstance(value, str):
        candidates: Iterable[str] = value.split(",")
    else:
        candidates = value

    sources: List[str] = []
    for item in candidates:
        if item is None:
            continue
        cleaned = str(item).strip().lower()
        if cleaned:
            sources.append(cleaned)
    return sources


def is_unrestricted(sources: Optional[Iterable[str]]) -> bool:
    """Return whether ``sources`` places no restriction on providers."""

    selected = list(sources or ())
    return not selected or ALL_SOURCES in selected


__all__ = [
    "ALL_SOURCES",
    "AUDIO_SOURCES",
    "SOURCE_PRIORITY",
    "is_unrestricted",
    "parse_sources",
]
