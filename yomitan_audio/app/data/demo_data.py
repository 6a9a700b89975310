"""Small bundled catalog used to seed a fresh database."""

from __future__ import annotations

from typing import Iterator, Tuple

# (expression, reading, source, file, display)
DEMO_AUDIO_ENTRIES: Tuple[Tuple[str, str, str, str, str], ...] = (
    ("猫", "ねこ", "nhk16", "猫_ねこ.opus", ""),
    ("猫", "ねこ", "daijisen", "ねこ.opus", ""),
    ("猫", "ねこ", "forvo", "ねこ_strawberry.opus", "strawberry"),
    ("猫", "ねこ", "tts", "猫.opus", ""),
    ("根子", "ねこ", "shinmeikai8", "根子_ねこ.opus", ""),
    ("学校", "がっこう", "nhk16", "学校_がっこう.opus", ""),
    ("学校", "がっこう", "jpod", "学校_がっこう.mp3", ""),
    ("学校", "がっこう", "forvo_ext", "学校_kaoring.mp3", "kaoring"),
    ("水", "みず", "nhk16", "水_みず.opus", ""),
    ("水", "みず", "taas", "水.mp3", "male"),
    ("水", "すい", "ozk5", "水_すい.opus", ""),
    ("見ず", "みず", "daijisen", "見ず.opus", ""),
    ("犬", "いぬ", "forvo_ext2", "犬_skent.mp3", "skent"),
    ("犬", "いぬ", "jpod", "犬_いぬ.mp3", ""),
)


def iter_demo_audio_rows() -> Iterator[Tuple[str, str, str, str, str]]:
    return iter(DEMO_AUDIO_ENTRIES)


__all__ = ["DEMO_AUDIO_ENTRIES", "iter_demo_audio_rows"]
