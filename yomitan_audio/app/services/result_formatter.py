"""Render ranked audio entries for clients and the UI."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence
from urllib.parse import quote

from yomitan_audio.core.models import AudioEntry


class AudioResultFormatter:
    """Turn ranked entries into a Yomitan source list or UI markdown."""

    def audio_url(self, base_url: str, entry: AudioEntry) -> str:
        prefix = (base_url or "").rstrip("/")
        return f"{prefix}/{quote(entry.source, safe='')}/{quote(entry.file, safe='')}"

    def build_audio_source_list(
        self,
        entries: Sequence[AudioEntry],
        base_url: str,
    ) -> Dict[str, Any]:
        """Return the ``audioSourceList`` payload understood by Yomitan.

        Order is preserved; each entry's ``display`` label becomes its name,
        falling back to the bare source when the entry carries no label.
        """

        return {
            "type": "audioSourceList",
            "audioSources": [
                {"name": entry.display or entry.source, "url": self.audio_url(base_url, entry)}
                for entry in entries
            ],
        }

    def format_results(self, term: str, entries: Sequence[AudioEntry]) -> str:
        if not entries:
            return f"❌ No audio found for '{term}'. Try another reading or widen the sources."

        lines: List[str] = [f"### Audio for {term}", ""]
        for position, entry in enumerate(entries, start=1):
            label = entry.display or entry.source
            reading = f" 【{entry.reading}】" if entry.reading else ""
            lines.append(f"{position}. **{label}** - {entry.expression}{reading} `{entry.file}`")
        return "\n".join(lines)


__all__ = ["AudioResultFormatter"]
