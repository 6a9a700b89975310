"""Kana script folding used to normalise readings before lookup."""

from __future__ import annotations

import re

# Katakana ァ..ヶ plus the iteration marks ヽ ヾ sit exactly 0x60 above their
# hiragana counterparts. The prolonged sound mark ー is shared and left alone.
_KATAKANA_PATTERN = re.compile("[ァ-ヶヽヾ]")
_KANA_OFFSET = 0x60


def katakana_to_hiragana(text: str) -> str:
    """Return ``text`` with every katakana character mapped to hiragana."""

    if not text:
        return ""
    return _KATAKANA_PATTERN.sub(lambda match: chr(ord(match.group(0)) - _KANA_OFFSET), text)


__all__ = ["katakana_to_hiragana"]
