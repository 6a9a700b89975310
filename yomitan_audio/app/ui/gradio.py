"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Sequence, Tuple

import gradio as gr

from yomitan_audio.core import ALL_SOURCES, AUDIO_SOURCES

from ..data.database import SQLiteAudioRepository
from ..services.lookup_service import AudioLookupService, LookupFailed
from ...utils.observability import get_logger

_logger = get_logger(__name__).bind(component="gradio_ui")
_DEFAULT_RESULTS_MESSAGE = "Enter a term and click **Find Audio**."


def _ensure_list(value) -> List:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [item for item in value if item not in (None, "")]
    if isinstance(value, str):
        return [value] if value else []
    return [value]


def run_lookup(
    service: AudioLookupService,
    term: str,
    reading: str,
    sources: Sequence[str] | str | None,
    base_url: str,
) -> Tuple[str, str, Dict[str, Any]]:
    """Handle one UI request: returns status, results markdown and payload."""

    empty_payload: Dict[str, Any] = {"type": "audioSourceList", "audioSources": []}

    if not term or not term.strip():
        return "Please enter a term to look up.", _DEFAULT_RESULTS_MESSAGE, empty_payload

    start_time = time.perf_counter()
    try:
        entries = service.lookup_audio(term.strip(), (reading or "").strip(), _ensure_list(sources))
    except LookupFailed as exc:
        return f"Lookup failed: {exc}", _DEFAULT_RESULTS_MESSAGE, empty_payload

    elapsed = time.perf_counter() - start_time
    status = f"Found {len(entries)} audio entr{'y' if len(entries) == 1 else 'ies'} in {elapsed:.2f}s"
    return (
        status,
        service.format_results(term.strip(), entries),
        service.build_audio_source_list(entries, base_url),
    )


def create_interface(
    lookup_service: AudioLookupService,
    repository: SQLiteAudioRepository,
    base_url: str,
) -> gr.Blocks:
    """Construct the Gradio Blocks UI."""

    source_options = [ALL_SOURCES, *AUDIO_SOURCES]
    try:
        for source in repository.get_sources():
            if source not in source_options:
                source_options.append(source)
    except Exception as exc:
        # The picker still works with the built-in providers.
        _logger.warning("Source list unavailable", context={"error": str(exc)})

    def lookup_interface(term: str, reading: str, sources: Sequence[str] | None):
        return run_lookup(lookup_service, term, reading, sources, base_url)

    with gr.Blocks(title="Yomitan Audio Lookup") as interface:
        gr.Markdown(
            "<h2>🔊 Yomitan Audio Lookup</h2>\n"
            "<p>Find pronunciation clips for a word, best matches first.</p>"
        )
        with gr.Row():
            with gr.Column(scale=1):
                term_input = gr.Textbox(label="Term", placeholder="e.g. 学校", lines=1)
                reading_input = gr.Textbox(
                    label="Reading",
                    placeholder="e.g. がっこう or ガッコウ (optional)",
                    lines=1,
                )
                sources_input = gr.Dropdown(
                    choices=source_options,
                    value=[ALL_SOURCES],
                    multiselect=True,
                    label="Sources",
                    info="Leave as 'all' to search every provider",
                )
                lookup_btn = gr.Button("🔍 Find Audio", variant="primary")
            with gr.Column(scale=2):
                status_md = gr.Markdown(value="Waiting for a lookup…")
                results_md = gr.Markdown(value=_DEFAULT_RESULTS_MESSAGE)
                payload_json = gr.JSON(label="audioSourceList payload")

        inputs = [term_input, reading_input, sources_input]
        outputs = [status_md, results_md, payload_json]
        lookup_btn.click(fn=lookup_interface, inputs=inputs, outputs=outputs)
        term_input.submit(fn=lookup_interface, inputs=inputs, outputs=outputs)

    return interface


__all__ = ["create_interface", "run_lookup"]
