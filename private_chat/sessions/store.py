"""Session store: the single owner and writer of chat sessions.

All mutations go through this class. After each one the whole collection
is re-serialized to durable storage; in-memory state stays authoritative
if that write fails.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from private_chat.models.session import (
    DEFAULT_TITLE,
    AssistantMessage,
    Session,
    StoredMessage,
    UserMessage,
    derive_title,
    dump_sessions,
    load_sessions,
)
from private_chat.sessions.storage import PersistenceError

logger = logging.getLogger(__name__)

STORAGE_KEY = "private-chat:sessions"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SessionNotFoundError(KeyError):
    """Raised when an operation names a session that does not exist."""

    pass


@dataclass(frozen=True)
class AssistantHandle:
    """Reference to an open assistant message.

    Attributes:
        session_id: Session the message belongs to.
        index: Position of the message in that session's history.
    """

    session_id: str
    index: int


class SessionStore:
    """In-memory session collection mirrored to durable storage.

    Sessions are kept newest first. Exactly one session is active whenever
    the collection is non-empty, and the collection is never left empty.
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        """Load sessions from storage, or start with one fresh session.

        Args:
            storage: Durable key-value backend.
            key: Namespace key holding the snapshot.
        """
        self._storage = storage
        self._key = key
        self._sessions: list[Session] = self._load()
        if not self._sessions:
            self._add_session()
        self._active_id: str = self._sessions[0].id

    def _load(self) -> list[Session]:
        try:
            snapshot = self._storage.get(self._key)
        except PersistenceError as e:
            logger.warning(f"Could not read session snapshot, starting fresh: {e}")
            return []

        if snapshot is None:
            return []

        try:
            sessions = load_sessions(snapshot)
        except ValidationError as e:
            logger.warning(f"Discarding malformed session snapshot: {e.error_count()} errors")
            return []

        logger.info(f"Loaded {len(sessions)} sessions from storage")
        return sessions

    def _persist(self) -> None:
        try:
            if self._sessions:
                self._storage.set(self._key, dump_sessions(self._sessions))
            else:
                self._storage.delete(self._key)
        except PersistenceError as e:
            logger.error(f"Session snapshot write failed: {e}")

    def _get(self, session_id: str) -> Session:
        for session in self._sessions:
            if session.id == session_id:
                return session
        raise SessionNotFoundError(session_id)

    @property
    def active_session_id(self) -> str:
        """Identifier of the selected session."""
        return self._active_id

    @property
    def active_session(self) -> Session:
        return self._get(self.active_session_id)

    def list_sessions(self) -> list[Session]:
        """Return sessions, newest first."""
        return list(self._sessions)

    def _add_session(self) -> Session:
        session = Session()
        self._sessions.insert(0, session)
        logger.info(f"Created session {session.id}")
        self._persist()
        return session

    def create_session(self) -> Session:
        """Prepend a new empty session and make it active."""
        session = self._add_session()
        self._active_id = session.id
        return session

    def delete_session(self, session_id: str) -> None:
        """Remove a session.

        If it was active, the most recent remaining session becomes active.
        Deleting the last session clears the snapshot and starts a new one.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        session = self._get(session_id)
        self._sessions.remove(session)
        logger.info(f"Deleted session {session_id}")

        if not self._sessions:
            self._persist()
            self.create_session()
            return

        if self._active_id == session_id:
            self._active_id = self._sessions[0].id
        self._persist()

    def set_active(self, session_id: str) -> None:
        """Select a session.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        self._get(session_id)
        self._active_id = session_id

    def append_user_message(self, session_id: str, content: str) -> UserMessage:
        """Append a user message, titling the session if it was empty.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        session = self._get(session_id)
        message = UserMessage(content=content)
        if not session.messages and session.title == DEFAULT_TITLE:
            session.title = derive_title(content)
        session.messages.append(message)
        self._persist()
        return message

    def begin_assistant_message(self, session_id: str) -> AssistantHandle:
        """Append an empty assistant message and return a handle to it.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        session = self._get(session_id)
        session.messages.append(AssistantMessage())
        self._persist()
        return AssistantHandle(session_id=session_id, index=len(session.messages) - 1)

    def append_delta(self, handle: AssistantHandle, fragment: str) -> None:
        """Concatenate a streamed fragment onto an open assistant message.

        Raises:
            SessionNotFoundError: If the handle's session was deleted.
        """
        message = self._get(handle.session_id).messages[handle.index]
        if not isinstance(message, AssistantMessage):
            raise TypeError(f"Handle points at a {message.role} message")
        message.content += fragment
        self._persist()

    def get_messages(self, session_id: str) -> list[StoredMessage]:
        """Return a session's messages in order.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        return list(self._get(session_id).messages)
