from yomitan_audio.app.services.result_formatter import AudioResultFormatter
from yomitan_audio.core.models import AudioEntry


ENTRIES = [
    AudioEntry("猫", "ねこ", "nhk16", "猫_ねこ.opus", "nhk16 (Expression+Reading)"),
    AudioEntry("根子", "", "jpod", "a b.mp3", None),
]


def test_source_list_preserves_order_and_falls_back_to_source():
    payload = AudioResultFormatter().build_audio_source_list(ENTRIES, "https://audio.example/")

    assert payload["type"] == "audioSourceList"
    assert [source["name"] for source in payload["audioSources"]] == [
        "nhk16 (Expression+Reading)",
        "jpod",
    ]
    assert payload["audioSources"][1]["url"] == "https://audio.example/jpod/a%20b.mp3"


def test_empty_source_list():
    payload = AudioResultFormatter().build_audio_source_list([], "https://audio.example")

    assert payload == {"type": "audioSourceList", "audioSources": []}


def test_markdown_lists_ranked_entries():
    text = AudioResultFormatter().format_results("猫", ENTRIES)

    lines = text.splitlines()
    assert lines[0] == "### Audio for 猫"
    assert lines[2] == "1. **nhk16 (Expression+Reading)** - 猫 【ねこ】 `猫_ねこ.opus`"
    assert lines[3] == "2. **jpod** - 根子 `a b.mp3`"


def test_markdown_for_no_results():
    text = AudioResultFormatter().format_results("猫", [])

    assert text.startswith("❌ No audio found for '猫'.")
