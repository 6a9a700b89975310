"""Application wiring for the Yomitan audio lookup service."""

from __future__ import annotations

import os
from typing import List, Optional

if __package__ in {None, ""}:
    import sys
    from pathlib import Path

    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from yomitan_audio.core import AudioEntry
from yomitan_audio.utils.logging_config import configure_logging
from yomitan_audio.utils.observability import get_logger

from yomitan_audio.app.data.database import SQLiteAudioRepository
from yomitan_audio.app.services.lookup_service import AudioLookupService
from yomitan_audio.app.ui.gradio import create_interface

DB_PATH_ENV = "YOMITAN_AUDIO_DB"
BASE_URL_ENV = "YOMITAN_AUDIO_BASE_URL"
SHARE_ENV = "YOMITAN_AUDIO_SHARE"

DEFAULT_DB_PATH = "audio.db"
DEFAULT_BASE_URL = "http://localhost:7860/audio"


class AudioLookupApp:
    """High-level application facade bundling dependencies."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        *,
        repository: Optional[SQLiteAudioRepository] = None,
        lookup_service: Optional[AudioLookupService] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.db_path = db_path or os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH
        self.base_url = base_url or os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        self._logger = get_logger(__name__).bind(component="app_facade")
        self._logger.info(
            "Initialising application facade",
            context={"db_path": self.db_path, "base_url": self.base_url},
        )

        self.repository = repository or SQLiteAudioRepository(self.db_path)
        try:
            row_count = self.repository.ensure_database()
        except Exception as exc:
            self._logger.error(
                "Database initialisation failed",
                context={"db_path": self.db_path, "error": str(exc)},
            )
            raise
        else:
            self._logger.info(
                "Database ready",
                context={"db_path": self.db_path, "row_count": row_count},
            )

        self.lookup_service = lookup_service or AudioLookupService(repository=self.repository)

    # Public API ------------------------------------------------------------
    def lookup_audio(self, term: str, reading: str = "", sources=None) -> List[AudioEntry]:
        return self.lookup_service.lookup_audio(term, reading, sources)

    def audio_source_list(self, term: str, reading: str = "", sources=None) -> dict:
        entries = self.lookup_audio(term, reading, sources)
        return self.lookup_service.build_audio_source_list(entries, self.base_url)

    def create_gradio_interface(self):
        return create_interface(self.lookup_service, self.repository, self.base_url)


def _should_share_interface() -> bool:
    """Return whether the Gradio UI should request a public share link."""

    env_value = os.environ.get(SHARE_ENV, "")
    return str(env_value).strip().lower() in {"1", "true", "yes", "on"}


def main() -> None:
    configure_logging()
    app = AudioLookupApp()
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=_should_share_interface(),
    )


__all__ = ["AudioLookupApp", "main"]


if __name__ == "__main__":
    main()
