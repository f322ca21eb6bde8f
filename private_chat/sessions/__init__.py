"""Session persistence.

The store owns every session and writes a full snapshot to SQLite-backed
key-value storage after each change.
"""

from private_chat.sessions.storage import PersistenceError, SqliteStorage
from private_chat.sessions.store import (
    STORAGE_KEY,
    AssistantHandle,
    SessionNotFoundError,
    SessionStore,
)

__all__ = [
    "STORAGE_KEY",
    "AssistantHandle",
    "PersistenceError",
    "SessionNotFoundError",
    "SessionStore",
    "SqliteStorage",
]
