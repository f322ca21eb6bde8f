"""Chat orchestrator: drives one turn from submission to streamed reply.

Turn states run Idle -> Composing -> Streaming -> Idle. File extraction
is tracked separately and blocks submission while in flight.

Policies:
    - A submission while any turn is in flight is rejected, not queued.
    - Streams are not cancelled. Switching sessions leaves the stream
      writing into the session that was active at submission.
    - A failed turn leaves any partial assistant reply as it is. A turn
      that fails before the engine answers leaves no assistant reply.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from private_chat.chat.composer import ContextComposer
from private_chat.config import get_app_config
from private_chat.engine.inference import get_inference_adapter
from private_chat.models.schemas import TurnState
from private_chat.models.session import RequestMessage, Session, attachment_marker
from private_chat.models.tools import FileAttachment, NoTool, PendingTool, WebSearch
from private_chat.parsing.extraction import ExtractedText, ExtractionError, TextExtractor
from private_chat.search.web_search import WebSearchAdapter
from private_chat.sessions.storage import SqliteStorage
from private_chat.sessions.store import SessionStore

logger = logging.getLogger(__name__)


class ChatEngine(Protocol):
    ready: bool
    status_text: str

    def stream(self, messages: Sequence[RequestMessage]) -> AsyncIterator[str]: ...


class FileExtractor(Protocol):
    async def extract(
        self, name: str, content_type: str | None, data: bytes
    ) -> ExtractedText: ...


class ChatOrchestrator:
    """Coordinates sessions, context composition and streaming.

    Holds the pending tool state for the next turn. Attaching a file and
    enabling web search each replace the other.
    """

    def __init__(
        self,
        store: SessionStore,
        engine: ChatEngine,
        composer: ContextComposer,
        extractor: FileExtractor,
    ) -> None:
        self._store = store
        self._engine = engine
        self._composer = composer
        self._extractor = extractor
        self._pending_tool: PendingTool = NoTool()
        self._state = TurnState.IDLE
        self._file_processing = False

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_loading(self) -> bool:
        """True while a turn is composing or streaming."""
        return self._state is not TurnState.IDLE

    @property
    def file_processing(self) -> bool:
        return self._file_processing

    @property
    def pending_tool(self) -> PendingTool:
        return self._pending_tool

    @property
    def engine_ready(self) -> bool:
        return self._engine.ready

    @property
    def status_text(self) -> str:
        return self._engine.status_text

    @property
    def web_search_enabled(self) -> bool:
        return isinstance(self._pending_tool, WebSearch)

    @property
    def attached_file(self) -> FileAttachment | None:
        if isinstance(self._pending_tool, FileAttachment):
            return self._pending_tool
        return None

    # Tool state

    def set_web_search(self, enabled: bool) -> None:
        """Toggle web search mode. Enabling it drops any attached file."""
        if enabled:
            if isinstance(self._pending_tool, FileAttachment):
                logger.info(f"Web search enabled, dropping attachment {self._pending_tool.name}")
            self._pending_tool = WebSearch()
        elif isinstance(self._pending_tool, WebSearch):
            self._pending_tool = NoTool()

    def clear_file(self) -> None:
        """Drop the attached file. Web search stays off."""
        if isinstance(self._pending_tool, FileAttachment):
            self._pending_tool = NoTool()

    async def attach_file(
        self, name: str, content_type: str | None, data: bytes
    ) -> FileAttachment | None:
        """Extract a file and make it the pending context.

        Any previous attachment is cleared first. On success web search
        mode is turned off.

        Returns:
            The new attachment, or None if another extraction is in flight.

        Raises:
            ExtractionError: If the file cannot be extracted. The pending
                attachment is left empty.
        """
        if self._file_processing:
            logger.debug(f"Ignoring {name}: another file is still being processed")
            return None

        self.clear_file()
        self._file_processing = True
        try:
            extracted = await self._extractor.extract(name, content_type, data)
        except ExtractionError:
            self.clear_file()
            raise
        finally:
            self._file_processing = False

        attachment = FileAttachment(name=name, text=extracted.text)
        self._pending_tool = attachment
        return attachment

    # Sessions

    def new_session(self) -> Session:
        return self._store.create_session()

    def select_session(self, session_id: str) -> None:
        self._store.set_active(session_id)

    def delete_session(self, session_id: str) -> None:
        self._store.delete_session(session_id)

    # Turns

    def can_submit(self, text: str) -> bool:
        """Return True if ``text`` would be accepted as a new turn."""
        return (
            bool(text.strip())
            and self._engine.ready
            and not self._file_processing
            and not self.is_loading
        )

    async def submit(self, text: str) -> bool:
        """Run one turn for the active session.

        Rejected submissions are no-ops. Once accepted, the turn always
        returns to Idle; failures are logged and leave history as is.

        Args:
            text: The user's input.

        Returns:
            True if the submission was accepted.
        """
        if not self.can_submit(text):
            logger.debug("Submission rejected")
            return False

        query = text.strip()
        tool = self._pending_tool
        if isinstance(tool, FileAttachment):
            self._pending_tool = NoTool()
            content = attachment_marker(tool.name) + query
        else:
            content = query

        session_id = self._store.active_session_id
        self._store.append_user_message(session_id, content)
        self._state = TurnState.COMPOSING

        try:
            composed = await self._composer.compose(tool, query)
            request: list[RequestMessage] = [
                composed.to_system_message(),
                *self._store.get_messages(session_id),
            ]

            self._state = TurnState.STREAMING
            stream = aiter(self._engine.stream(request))
            # The reply exists only once the engine has answered
            first = await anext(stream, None)
            handle = self._store.begin_assistant_message(session_id)
            if first is not None:
                self._store.append_delta(handle, first)
            async for delta in stream:
                self._store.append_delta(handle, delta)
        except Exception:
            logger.exception(f"Turn failed for session {session_id}")
        finally:
            self._state = TurnState.IDLE

        return True


# Module-level singleton instance
_orchestrator: ChatOrchestrator | None = None


def get_orchestrator() -> ChatOrchestrator:
    """Get or create the global chat orchestrator.

    Wires the default adapters and the SQLite-backed session store.

    Returns:
        The ChatOrchestrator instance.
    """
    global _orchestrator
    if _orchestrator is None:
        config = get_app_config()
        _orchestrator = ChatOrchestrator(
            store=SessionStore(SqliteStorage(config.storage_path)),
            engine=get_inference_adapter(),
            composer=ContextComposer(WebSearchAdapter(config), config),
            extractor=TextExtractor(config),
        )
    return _orchestrator
