import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from yomitan_audio.app.data.database import SQLiteAudioRepository
from yomitan_audio.core.models import AudioEntry, AudioFilter, QueryResult


class RecordingStore:
    """Storage stub that returns canned rows and remembers each filter."""

    def __init__(self, rows=None, *, error: BaseException | None = None) -> None:
        self.rows: List[AudioEntry] = list(rows or [])
        self.error = error
        self.filters: List[AudioFilter] = []

    def fetch_entries(self, audio_filter: AudioFilter) -> QueryResult:
        self.filters.append(audio_filter)
        if self.error is not None:
            return QueryResult(success=False, rows=[], error=self.error)
        return QueryResult(success=True, rows=list(self.rows))


@pytest.fixture
def recording_store():
    return RecordingStore


@pytest.fixture
def seeded_repository(tmp_path):
    """Repository backed by a fresh demo catalog in ``tmp_path``."""

    repository = SQLiteAudioRepository(str(tmp_path / "audio.db"))
    repository.ensure_database()
    yield repository
    repository.close()
