"""Builds the per-turn system message from the pending tool state.

Decision order, first match wins:
    1. File attached   -> answer only from the file text (truncated)
    2. Web search mode -> answer from live search results
    3. Plain chat      -> no internet access, be concise

The composed text is sent with one request and never stored in a session.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, assert_never

from private_chat.config import AppConfig, get_app_config
from private_chat.models.session import SystemMessage
from private_chat.models.tools import FileAttachment, NoTool, PendingTool, WebSearch
from private_chat.search.web_search import SearchError, SearchSummary

logger = logging.getLogger(__name__)

FILE_INSTRUCTION = (
    "You are a helpful, private AI assistant. Answer the user's question using only "
    "the content of the attached file below. If the answer is not in the file, say so."
)
WEB_INSTRUCTION = (
    "You are a helpful AI assistant with live web access. Use the web search results "
    "below to answer the user's question and mention the sources you rely on."
)
PLAIN_INSTRUCTION = (
    "You are a helpful, private AI assistant. You do not have internet access. Be concise."
)


class WebSearcher(Protocol):
    async def search(self, query: str, credential: str | None) -> SearchSummary: ...


@dataclass(frozen=True)
class ComposedContext:
    """System instruction and optional context block for one turn."""

    system_instruction: str
    context_block: str | None = None

    def to_system_message(self) -> SystemMessage:
        """Join instruction and context block into a single system message."""
        if self.context_block is None:
            return SystemMessage(content=self.system_instruction)
        return SystemMessage(content=f"{self.system_instruction}\n\n{self.context_block}")


class ContextComposer:
    """Chooses grounding for a turn and renders it as system text."""

    def __init__(self, searcher: WebSearcher, config: AppConfig | None = None) -> None:
        """Initialize the composer.

        Args:
            searcher: Web search adapter used in web search mode.
            config: Optional application configuration.
                    Loads from environment if not provided.
        """
        self._searcher = searcher
        self._config = config or get_app_config()

    def _file_context(self, attachment: FileAttachment) -> ComposedContext:
        budget = self._config.max_file_context_chars
        text = attachment.text[:budget]
        if len(attachment.text) > budget:
            logger.info(
                f"Truncated {attachment.name} from {len(attachment.text)} to {budget} characters"
            )
        return ComposedContext(
            system_instruction=FILE_INSTRUCTION,
            context_block=f"Attached file: {attachment.name}\n\n{text}",
        )

    async def _web_context(self, query: str) -> ComposedContext:
        try:
            summary = await self._searcher.search(query, self._config.search_api_key)
        except SearchError as e:
            logger.warning(f"Web search failed ({e.kind.value}): {e}")
            block = f"Web search failed: {e}"
        else:
            block = f'Web search results for "{query}":\n\n{summary.to_text()}'
        return ComposedContext(system_instruction=WEB_INSTRUCTION, context_block=block)

    async def compose(self, tool: PendingTool, query: str) -> ComposedContext:
        """Compose the system instruction and context block for a turn.

        Search failures never abort the turn; their message becomes the
        context block instead.

        Args:
            tool: Pending tool state captured at submission.
            query: The user's raw query text.

        Returns:
            ComposedContext for the request's system message.
        """
        if isinstance(tool, FileAttachment):
            return self._file_context(tool)
        if isinstance(tool, WebSearch):
            return await self._web_context(query)
        if isinstance(tool, NoTool):
            return ComposedContext(system_instruction=PLAIN_INSTRUCTION)
        assert_never(tool)
