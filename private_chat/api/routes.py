"""Read-only endpoints for engine status and stored sessions."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from private_chat.chat.orchestrator import ChatOrchestrator, get_orchestrator
from private_chat.models.schemas import SessionInfo, StatusResponse, ToolMode
from private_chat.models.session import StoredMessage
from private_chat.models.tools import FileAttachment, WebSearch
from private_chat.sessions.store import SessionNotFoundError

router = APIRouter(tags=["sessions"])

Orchestrator = Annotated[ChatOrchestrator, Depends(get_orchestrator)]


@router.get("/status", response_model=StatusResponse)
async def get_status(orchestrator: Orchestrator) -> StatusResponse:
    """Report engine readiness and the state of the current turn."""
    tool = orchestrator.pending_tool
    if isinstance(tool, FileAttachment):
        mode = ToolMode.FILE
    elif isinstance(tool, WebSearch):
        mode = ToolMode.WEB_SEARCH
    else:
        mode = ToolMode.NONE

    return StatusResponse(
        ready=orchestrator.engine_ready,
        status=orchestrator.status_text,
        turn_state=orchestrator.state,
        file_processing=orchestrator.file_processing,
        tool=mode,
        attached_file=tool.name if isinstance(tool, FileAttachment) else None,
    )


@router.get("/sessions", response_model=list[SessionInfo])
async def list_sessions(orchestrator: Orchestrator) -> list[SessionInfo]:
    """List sessions, newest first."""
    store = orchestrator.store
    active_id = store.active_session_id
    return [
        SessionInfo(
            session_id=session.id,
            title=session.title,
            message_count=len(session.messages),
            created_at=session.created_at,
            active=session.id == active_id,
        )
        for session in store.list_sessions()
    ]


@router.get("/sessions/{session_id}/messages", response_model=list[StoredMessage])
async def get_session_messages(session_id: str, orchestrator: Orchestrator) -> list[StoredMessage]:
    """Return a session's messages in order.

    Raises:
        404: No session with this id.
    """
    try:
        return orchestrator.store.get_messages(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        ) from e
