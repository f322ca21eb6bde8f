"""Unit tests for SQLite key-value storage."""

from pathlib import Path

import pytest

from private_chat.sessions.storage import PersistenceError, SqliteStorage


class TestSqliteStorage:
    """Tests for get/set/delete semantics."""

    def test_missing_key_returns_none(self, tmp_path: Path) -> None:
        """Reading a key that was never written returns None."""
        assert SqliteStorage(tmp_path / "kv.db").get("absent") is None

    def test_set_then_get(self, tmp_path: Path) -> None:
        """Written values are read back unchanged."""
        storage = SqliteStorage(tmp_path / "kv.db")
        storage.set("k", '{"a": 1}')

        assert storage.get("k") == '{"a": 1}'

    def test_set_overwrites(self, tmp_path: Path) -> None:
        """A second write replaces the first."""
        storage = SqliteStorage(tmp_path / "kv.db")
        storage.set("k", "one")
        storage.set("k", "two")

        assert storage.get("k") == "two"

    def test_delete_removes_key(self, tmp_path: Path) -> None:
        """Deleted keys read back as None; deleting twice is harmless."""
        storage = SqliteStorage(tmp_path / "kv.db")
        storage.set("k", "v")
        storage.delete("k")
        storage.delete("k")

        assert storage.get("k") is None

    def test_values_survive_new_instance(self, tmp_path: Path) -> None:
        """Data is durable across storage instances on the same file."""
        SqliteStorage(tmp_path / "kv.db").set("k", "v")

        assert SqliteStorage(tmp_path / "kv.db").get("k") == "v"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Missing parent directories are created on first write."""
        path = tmp_path / "nested" / "dir" / "kv.db"
        SqliteStorage(path).set("k", "v")

        assert path.exists()

    def test_unwritable_path_raises_persistence_error(self, tmp_path: Path) -> None:
        """A path that cannot hold a database raises PersistenceError."""
        blocked = tmp_path / "is_a_directory"
        blocked.mkdir()

        with pytest.raises(PersistenceError):
            SqliteStorage(blocked).set("k", "v")
