"""Durable key-value storage backed by a single SQLite file.

One row per namespace key. The session store writes its whole snapshot
under one key after every mutation.
"""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the durable store cannot be read or written."""

    pass


class SqliteStorage:
    """Key-value persistence in a local SQLite database.

    A connection is opened per operation so the file can be inspected or
    replaced while the app runs.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize storage.

        Args:
            path: Database file location. Parent directories are created.
        """
        self._path = Path(path)

    def _connect(self) -> sqlite3.Connection:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._path)
        conn.execute("CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)")
        return conn

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent.

        Raises:
            PersistenceError: If the database cannot be read.
        """
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to read {key!r} from {self._path}: {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            PersistenceError: If the write fails.
        """
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        "INSERT INTO kv (key, value) VALUES (?, ?) "
                        "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                        (key, value),
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to write {key!r} to {self._path}: {e}") from e

    def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored.

        Raises:
            PersistenceError: If the write fails.
        """
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to delete {key!r} from {self._path}: {e}") from e
