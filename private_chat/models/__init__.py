"""Data models for sessions, messages and tool state.

Models:
    - Session: Persisted conversation with ordered messages
    - UserMessage / AssistantMessage / SystemMessage: Tagged message variants
    - PendingTool: Exclusive file-or-web-search selection for the next turn
    - SessionInfo / StatusResponse: API response schemas
"""

from private_chat.models.schemas import SessionInfo, StatusResponse, ToolMode, TurnState
from private_chat.models.session import (
    DEFAULT_TITLE,
    AssistantMessage,
    RequestMessage,
    Session,
    StoredMessage,
    SystemMessage,
    UserMessage,
    attachment_marker,
    derive_title,
    dump_sessions,
    load_sessions,
)
from private_chat.models.tools import FileAttachment, NoTool, PendingTool, WebSearch

__all__ = [
    "DEFAULT_TITLE",
    "AssistantMessage",
    "FileAttachment",
    "NoTool",
    "PendingTool",
    "RequestMessage",
    "Session",
    "SessionInfo",
    "StatusResponse",
    "StoredMessage",
    "SystemMessage",
    "ToolMode",
    "TurnState",
    "UserMessage",
    "WebSearch",
    "attachment_marker",
    "derive_title",
    "dump_sessions",
    "load_sessions",
]
