"""Ordering guarantees of the ranker."""

from __future__ import annotations

from yomitan_audio.core.labels import generate_display_names
from yomitan_audio.core.models import AudioEntry, DisplayName, MatchType
from yomitan_audio.core.ranking import (
    UNKNOWN_SOURCE_PRIORITY,
    match_type_from_label,
    rank_entries,
    sort_results,
    source_priority,
)


def _entry(source: str, expression: str = "猫", reading: str = "ねこ", file: str = "") -> AudioEntry:
    return AudioEntry(expression=expression, reading=reading, source=source, file=file or source)


def test_known_source_priority_breaks_ties():
    entries = [_entry("tts"), _entry("nhk16")]

    ranked = rank_entries(entries, "猫", "ねこ")

    assert [entry.source for entry in ranked] == ["nhk16", "tts"]
    assert ranked[0].display == "nhk16 (Expression+Reading)"


def test_full_priority_table_order():
    order = [
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
    ]
    entries = [_entry(source) for source in reversed(order)]

    ranked = rank_entries(entries, "猫", "ねこ")

    assert [entry.source for entry in ranked] == order


def test_match_type_outranks_source_priority():
    entries = [
        _entry("nhk16", reading="びょう"),
        _entry("unknown_provider"),
        _entry("tts", expression="根子"),
    ]

    ranked = rank_entries(entries, "猫", "ねこ")

    assert [entry.source for entry in ranked] == ["unknown_provider", "nhk16", "tts"]


def test_unknown_sources_sort_after_known_and_keep_fetch_order():
    entries = [
        _entry("zeta_audio", file="z1"),
        _entry("alpha_audio", file="a1"),
        _entry("tts"),
        _entry("zeta_audio", file="z2"),
    ]

    ranked = rank_entries(entries, "猫", "ねこ")

    assert [entry.file for entry in ranked] == ["tts", "z1", "a1", "z2"]
    assert source_priority("alpha_audio") == UNKNOWN_SOURCE_PRIORITY


def test_identical_keys_preserve_original_order():
    entries = [_entry("forvo", file=f"clip-{index}") for index in range(5)]

    ranked = rank_entries(entries, "猫", "ねこ")

    assert [entry.file for entry in ranked] == [f"clip-{index}" for index in range(5)]


def test_ranking_returns_copies_and_leaves_input_untouched():
    entries = [_entry("tts"), _entry("nhk16")]
    entries[0] = AudioEntry(expression="猫", reading="ねこ", source="tts", file="t", display="robot")

    ranked = sort_results(entries, generate_display_names(entries, "猫", "ねこ"))

    assert entries[0].display == "robot"
    assert ranked[1].display == "tts: robot (Expression+Reading)"
    assert ranked[1] is not entries[0]


def test_missing_labels_rank_last_without_display():
    entries = [_entry("nhk16", file="first"), _entry("forvo", file="second"), _entry("tts", file="third")]
    names = [DisplayName("nhk16 (Expression+Reading)", MatchType.EXPRESSION_AND_READING)]

    ranked = sort_results(entries, names)

    assert [entry.file for entry in ranked] == ["first", "second", "third"]
    assert ranked[1].display is None
    assert ranked[2].display is None


def test_empty_input_returns_empty_list():
    assert sort_results([], []) == []
    assert rank_entries([], "猫", "ねこ") == []


def test_count_is_preserved():
    entries = [_entry(source) for source in ("tts", "forvo", "mystery", "nhk16")]

    assert len(rank_entries(entries, "猫", "いぬ")) == len(entries)


def test_reranking_is_idempotent():
    entries = [
        _entry("tts", reading="びょう"),
        _entry("mystery"),
        _entry("jpod", expression="根子"),
        _entry("nhk16"),
        _entry("forvo", reading="びょう"),
    ]
    ranked = rank_entries(entries, "猫", "ねこ")

    reranked = sort_results(ranked, [entry.display for entry in ranked])

    assert reranked == ranked


def test_plain_string_labels_are_classified_by_suffix():
    assert match_type_from_label("forvo: cat (Expression+Reading)") is MatchType.EXPRESSION_AND_READING
    assert match_type_from_label("nhk16 (Only Expression)") is MatchType.EXPRESSION_ONLY
    assert match_type_from_label("jpod (Only Reading)") is MatchType.READING_ONLY
    assert match_type_from_label("tts") is MatchType.NONE
    assert match_type_from_label(None) is MatchType.NONE


def test_descriptor_text_cannot_spoof_match_type():
    spoof = AudioEntry(
        expression="根子",
        reading="ねこ",
        source="nhk16",
        file="spoof",
        display="fake (Expression+Reading)",
    )
    genuine = _entry("tts", reading="びょう", file="genuine")

    ranked = rank_entries([spoof, genuine], "猫", "ねこ")

    assert [entry.file for entry in ranked] == ["genuine", "spoof"]
    assert ranked[1].display == "nhk16: fake (Expression+Reading) (Only Reading)"
