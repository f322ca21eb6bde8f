"""Session and message models.

Messages are a tagged variant over ``role``. Only user and assistant
messages can be stored in a session; system messages are built per request.
"""

import re
import uuid
from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

DEFAULT_TITLE = "New Chat"
TITLE_MAX_LENGTH = 30
TITLE_ELLIPSIS = "..."

_ATTACHMENT_MARKER = re.compile(r"^\[Attached: [^\]\n]*\]\n?")


class SystemMessage(BaseModel):
    """Instruction prepended to a request. Never stored in a session."""

    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseModel):
    """User-visible turn text, optionally prefixed with an attachment marker."""

    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseModel):
    """Model reply. Starts empty and grows as deltas arrive."""

    role: Literal["assistant"] = "assistant"
    content: str = ""


StoredMessage = Annotated[UserMessage | AssistantMessage, Field(discriminator="role")]
RequestMessage = Annotated[
    SystemMessage | UserMessage | AssistantMessage, Field(discriminator="role")
]


class Session(BaseModel):
    """One persisted conversation thread.

    Attributes:
        id: Opaque unique identifier, never reused.
        title: Display label, derived once from the first user message.
        messages: Ordered history of user and assistant messages.
        created_at: Creation timestamp (UTC).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = DEFAULT_TITLE
    messages: list[StoredMessage] = Field(default_factory=list)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="createdAt",
    )


SessionList = TypeAdapter(list[Session])


def attachment_marker(file_name: str) -> str:
    """Return the marker line prefixed to a user message with an attached file."""
    return f"[Attached: {file_name}]\n"


def derive_title(content: str) -> str:
    """Build a session title from the first user message.

    Strips the attachment marker, collapses whitespace and truncates to
    ``TITLE_MAX_LENGTH`` characters with an ellipsis.
    """
    text = _ATTACHMENT_MARKER.sub("", content, count=1)
    text = " ".join(text.split())
    if not text:
        return DEFAULT_TITLE
    if len(text) > TITLE_MAX_LENGTH:
        return text[:TITLE_MAX_LENGTH].rstrip() + TITLE_ELLIPSIS
    return text


def dump_sessions(sessions: list[Session]) -> str:
    """Serialize a session collection to the durable JSON snapshot."""
    return SessionList.dump_json(sessions, by_alias=True).decode()


def load_sessions(snapshot: str | bytes) -> list[Session]:
    """Parse a durable JSON snapshot.

    Raises:
        pydantic.ValidationError: If the snapshot is malformed.
    """
    return SessionList.validate_json(snapshot)
