"""Unit tests for per-turn context composition."""

import pytest_check as check

from private_chat.chat.composer import (
    FILE_INSTRUCTION,
    PLAIN_INSTRUCTION,
    WEB_INSTRUCTION,
    ComposedContext,
    ContextComposer,
)
from private_chat.config import AppConfig
from private_chat.models.tools import FileAttachment, NoTool, WebSearch
from private_chat.search.web_search import (
    MISSING_CREDENTIAL_MESSAGE,
    SearchError,
    SearchFailure,
)
from tests.conftest import FakeSearcher


class TestFileContext:
    """Tests for file-grounded turns."""

    async def test_file_text_and_name_are_embedded(
        self, searcher: FakeSearcher, app_config: AppConfig
    ) -> None:
        """The block names the file and carries its text."""
        composer = ContextComposer(searcher, app_config)

        composed = await composer.compose(
            FileAttachment(name="report.pdf", text="Revenue was $5M"), "What was revenue?"
        )

        check.equal(composed.system_instruction, FILE_INSTRUCTION)
        check.is_in("report.pdf", composed.context_block)
        check.is_in("Revenue was $5M", composed.context_block)
        check.equal(searcher.calls, [])

    async def test_long_file_text_is_truncated_to_prefix(
        self, searcher: FakeSearcher, app_config: AppConfig
    ) -> None:
        """Only the first max_file_context_chars characters are sent."""
        text = "".join(str(i % 10) for i in range(500))
        composer = ContextComposer(searcher, app_config)

        composed = await composer.compose(FileAttachment(name="big.txt", text=text), "q")

        budget = app_config.max_file_context_chars
        check.is_true(composed.context_block.endswith(text[:budget]))
        check.is_not_in(text[: budget + 1], composed.context_block)


class TestWebContext:
    """Tests for web-search-grounded turns."""

    async def test_results_are_embedded(
        self, searcher: FakeSearcher, app_config: AppConfig
    ) -> None:
        """The raw query and configured credential go to the searcher."""
        composer = ContextComposer(searcher, app_config)

        composed = await composer.compose(WebSearch(), "today's weather")

        check.equal(searcher.calls, [("today's weather", app_config.search_api_key)])
        check.equal(composed.system_instruction, WEB_INSTRUCTION)
        check.is_in("Sunny, 21C", composed.context_block)
        check.is_in("today's weather", composed.context_block)

    async def test_missing_credential_becomes_error_block(self, app_config: AppConfig) -> None:
        """Search failures degrade the turn instead of aborting it."""
        searcher = FakeSearcher(
            error=SearchError(SearchFailure.MISSING_CREDENTIAL, MISSING_CREDENTIAL_MESSAGE)
        )
        composer = ContextComposer(searcher, app_config)

        composed = await composer.compose(WebSearch(), "today's weather")

        check.equal(composed.system_instruction, WEB_INSTRUCTION)
        check.is_in(MISSING_CREDENTIAL_MESSAGE, composed.context_block)

    async def test_network_error_becomes_error_block(self, app_config: AppConfig) -> None:
        """Network failures are reported in the block too."""
        searcher = FakeSearcher(
            error=SearchError(SearchFailure.NETWORK_ERROR, "Search request failed: timeout")
        )

        composed = await ContextComposer(searcher, app_config).compose(WebSearch(), "q")

        assert composed.context_block == "Web search failed: Search request failed: timeout"


class TestPlainContext:
    """Tests for ungrounded turns."""

    async def test_plain_mode_has_no_block(
        self, searcher: FakeSearcher, app_config: AppConfig
    ) -> None:
        """Without tools the model is told it is offline."""
        composed = await ContextComposer(searcher, app_config).compose(NoTool(), "Hello")

        check.equal(composed.system_instruction, PLAIN_INSTRUCTION)
        check.is_none(composed.context_block)
        check.equal(searcher.calls, [])


class TestSystemMessage:
    """Tests for joining instruction and block."""

    def test_instruction_and_block_are_joined(self) -> None:
        message = ComposedContext("Be brief.", "Context here").to_system_message()

        check.equal(message.role, "system")
        check.equal(message.content, "Be brief.\n\nContext here")

    def test_instruction_alone(self) -> None:
        assert ComposedContext("Be brief.").to_system_message().content == "Be brief."
