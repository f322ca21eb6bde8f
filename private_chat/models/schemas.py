from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TurnState(str, Enum):
    """Orchestrator state for the turn in flight."""

    IDLE = "idle"
    COMPOSING = "composing"
    STREAMING = "streaming"


class ToolMode(str, Enum):
    """Which pending tool is selected for the next turn."""

    NONE = "none"
    FILE = "file"
    WEB_SEARCH = "web_search"


class SessionInfo(BaseModel):
    """Summary of a chat session.

    Attributes:
        session_id: Unique session identifier.
        title: Display title.
        message_count: Number of messages in session.
        created_at: Session creation timestamp.
        active: Whether this is the selected session.
    """

    session_id: str
    title: str
    message_count: int = Field(ge=0)
    created_at: datetime
    active: bool = False


class StatusResponse(BaseModel):
    """Engine readiness and orchestrator state.

    Attributes:
        ready: Whether the inference engine accepted the readiness probe.
        status: Human-readable engine status ("Ready" or an error string).
        turn_state: Current turn state.
        file_processing: Whether a file extraction is in flight.
        tool: Pending tool for the next turn.
        attached_file: Name of the attached file, if any.
    """

    ready: bool
    status: str
    turn_state: TurnState
    file_processing: bool
    tool: ToolMode
    attached_file: str | None = None
