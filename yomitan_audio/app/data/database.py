"""SQLite storage for the audio catalog."""

from __future__ import annotations

import os
import queue
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Generator, Iterable, List, Sequence

from yomitan_audio.core.models import AudioEntry, AudioFilter, QueryResult
from yomitan_audio.utils.observability import get_logger

from .demo_data import DEMO_AUDIO_ENTRIES, iter_demo_audio_rows

_ENTRY_COLUMNS = "expression, reading, source, file, display"


def _ensure_parent_directory(path: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _row_to_entry(row: Sequence[Any]) -> AudioEntry:
    expression, reading, source, file, display = row
    return AudioEntry(
        expression=expression or "",
        reading=reading or "",
        source=source or "",
        file=file or "",
        display=display or None,
    )


class SQLiteAudioRepository:
    """Repository encapsulating all SQLite access for audio lookups."""

    def __init__(
        self,
        db_path: str,
        *,
        pool_size: int = 4,
        pool_timeout: float = 5.0,
    ) -> None:
        self.db_path = db_path
        self._pool_size = max(1, int(pool_size))
        self._pool_timeout = max(0.0, float(pool_timeout))
        self._pool: queue.Queue = queue.Queue(maxsize=self._pool_size)
        self._pool_semaphore = threading.BoundedSemaphore(self._pool_size)
        self._logger = get_logger(__name__).bind(
            component="sqlite_repository",
            db_path=db_path,
        )
        self._logger.info(
            "SQLite repository initialised",
            context={"pool_size": self._pool_size, "pool_timeout": self._pool_timeout},
        )

    # Connection pool -------------------------------------------------------
    def _create_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self.db_path, check_same_thread=False)
        try:
            connection.execute("PRAGMA journal_mode=WAL")
        except sqlite3.Error as exc:
            # WAL is best-effort; read-only or in-memory files refuse it.
            self._logger.warning("SQLite WAL mode unavailable", context={"error": str(exc)})
        return connection

    def _acquire_connection(self) -> sqlite3.Connection:
        if not self._pool_semaphore.acquire(timeout=self._pool_timeout or None):
            self._logger.error(
                "Database connection pool exhausted",
                context={"pool_size": self._pool_size, "timeout": self._pool_timeout},
            )
            raise TimeoutError("Database connection pool exhausted")

        try:
            return self._pool.get_nowait()
        except queue.Empty:
            pass
        try:
            return self._create_connection()
        except Exception:
            self._pool_semaphore.release()
            raise

    def _release_connection(self, connection: sqlite3.Connection) -> None:
        try:
            self._pool.put_nowait(connection)
        except queue.Full:
            connection.close()
        finally:
            self._pool_semaphore.release()

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        connection = self._acquire_connection()
        try:
            yield connection
            if connection.in_transaction:
                connection.commit()
        except Exception as exc:
            if connection.in_transaction:
                connection.rollback()
            self._logger.error("SQLite operation failed", context={"error": str(exc)})
            raise
        finally:
            self._release_connection(connection)

    def close(self) -> None:
        """Close every pooled connection."""

        while True:
            try:
                connection = self._pool.get_nowait()
            except queue.Empty:
                break
            connection.close()

    # Schema ----------------------------------------------------------------
    def ensure_database(self) -> int:
        """Ensure the catalog exists, seeding the demo rows when needed."""

        self._logger.info("Ensuring database availability")
        if not os.path.exists(self.db_path):
            self._logger.info("Database file missing; creating demo database")
            return self._create_demo_database()

        try:
            with self._connect() as conn:
                self._initialise_schema(conn)
                (count,) = conn.execute("SELECT COUNT(*) FROM entries").fetchone()
        except sqlite3.Error as exc:
            self._logger.warning(
                "Database verification failed; recreating demo",
                context={"error": str(exc)},
            )
            return self._create_demo_database(overwrite=True)

        row_count = int(count)
        self._logger.info("Database schema verified", context={"row_count": row_count})
        return row_count

    def _initialise_schema(self, connection: sqlite3.Connection) -> None:
        connection.execute(
            """
            CREATE TABLE IF NOT EXISTS entries (
                id INTEGER PRIMARY KEY,
                expression TEXT NOT NULL,
                reading TEXT NOT NULL DEFAULT '',
                source TEXT NOT NULL,
                file TEXT NOT NULL,
                display TEXT
            )
            """
        )
        connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_entries_expression ON entries (expression, source)"
        )
        connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_entries_reading ON entries (reading, source)"
        )
        connection.commit()

    def _create_demo_database(self, overwrite: bool = False) -> int:
        if overwrite and os.path.exists(self.db_path):
            self.close()
            os.remove(self.db_path)

        _ensure_parent_directory(self.db_path)
        self._logger.info("Seeding demo database", context={"overwrite": overwrite})

        with self._connect() as conn:
            self._initialise_schema(conn)
            conn.execute("DELETE FROM entries")
            conn.executemany(
                f"INSERT INTO entries ({_ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                iter_demo_audio_rows(),
            )
            conn.commit()

        row_count = len(DEMO_AUDIO_ENTRIES)
        self._logger.info("Demo database seeded", context={"rows": row_count})
        return row_count

    # Queries ---------------------------------------------------------------
    def fetch_entries(self, audio_filter: AudioFilter) -> QueryResult:
        """Run ``audio_filter`` against the catalog.

        Failures are reported through the returned :class:`QueryResult`
        rather than raised.
        """

        query = f"SELECT {_ENTRY_COLUMNS} FROM entries {audio_filter.clause} ORDER BY id"
        self._logger.debug(
            "Fetching audio entries",
            context={"clause": audio_filter.clause, "param_count": len(audio_filter.params)},
        )
        try:
            with self._connect() as conn:
                rows = conn.execute(query, audio_filter.params).fetchall()
        except (sqlite3.Error, TimeoutError) as exc:
            return QueryResult(success=False, rows=[], error=exc)

        return QueryResult(success=True, rows=[_row_to_entry(row) for row in rows])

    def insert_entries(self, entries: Iterable[AudioEntry]) -> int:
        rows = [
            (entry.expression, entry.reading, entry.source, entry.file, entry.display or "")
            for entry in entries
        ]
        if not rows:
            return 0

        with self._connect() as conn:
            self._initialise_schema(conn)
            conn.executemany(
                f"INSERT INTO entries ({_ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                rows,
            )

        self._logger.info("Audio entries inserted", context={"rows": len(rows)})
        return len(rows)

    def count_entries(self) -> int:
        with self._connect() as conn:
            (count,) = conn.execute("SELECT COUNT(*) FROM entries").fetchone()
        return int(count)

    def get_sources(self) -> List[str]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT DISTINCT source FROM entries WHERE source IS NOT NULL ORDER BY source"
            ).fetchall()
        return [row[0] for row in rows if row and row[0]]


__all__ = ["SQLiteAudioRepository"]
