"""Pending tool state for the next turn.

Exactly one value is held at a time, so a file attachment and web search
mode can never be active together.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NoTool:
    """Plain chat, no grounding."""


@dataclass(frozen=True)
class FileAttachment:
    """Extracted text of an attached file.

    Attributes:
        name: Original file name.
        text: Full extracted text (truncated only when composed).
    """

    name: str
    text: str


@dataclass(frozen=True)
class WebSearch:
    """Ground the next turn in live web search results."""


PendingTool = NoTool | FileAttachment | WebSearch
