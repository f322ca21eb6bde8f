"""Pytest fixtures and shared test configuration.

Provides reusable fixtures and fake adapters for unit and integration tests.

Fixtures:
    - app_config: AppConfig with no search key and a temporary storage path
    - storage: SQLite key-value storage in a temporary directory
    - store: SessionStore over that storage
    - engine / searcher / extractor: Fakes for the external adapters
    - orchestrator: ChatOrchestrator wired with the fakes

Fakes record what they were asked so tests can assert on requests.
"""

from collections.abc import AsyncGenerator, Sequence
from pathlib import Path

import pytest

from private_chat.chat.composer import ContextComposer
from private_chat.chat.orchestrator import ChatOrchestrator
from private_chat.config import AppConfig
from private_chat.models.session import RequestMessage
from private_chat.parsing.extraction import ExtractedText, ExtractionError
from private_chat.search.web_search import SearchError, SearchResult, SearchSummary
from private_chat.sessions.storage import SqliteStorage
from private_chat.sessions.store import SessionStore


class FakeEngine:
    """Inference engine that streams a fixed list of deltas."""

    def __init__(
        self,
        deltas: Sequence[str] = ("Hello", " there", "!"),
        ready: bool = True,
        fail_after: int | None = None,
    ) -> None:
        self.deltas = list(deltas)
        self.ready = ready
        self.status_text = "Ready" if ready else "Error: inference engine unavailable."
        self.fail_after = fail_after
        self.requests: list[list[RequestMessage]] = []

    async def stream(self, messages: Sequence[RequestMessage]) -> AsyncGenerator[str]:
        self.requests.append(list(messages))
        for i, delta in enumerate(self.deltas):
            if self.fail_after is not None and i == self.fail_after:
                raise RuntimeError("engine crashed mid-stream")
            yield delta


class FakeSearcher:
    """Web searcher returning canned results or raising a canned error."""

    def __init__(self, error: SearchError | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    async def search(self, query: str, credential: str | None) -> SearchSummary:
        self.calls.append((query, credential))
        if self.error is not None:
            raise self.error
        return SearchSummary(
            query=query,
            results=[
                SearchResult(rank=1, title="Forecast", snippet="Sunny, 21C", url="https://w.test")
            ],
        )


class FakeExtractor:
    """Extractor returning fixed text or raising a canned error."""

    def __init__(self, text: str = "extracted text", error: ExtractionError | None = None) -> None:
        self.text = text
        self.error = error

    async def extract(self, name: str, content_type: str | None, data: bytes) -> ExtractedText:
        if self.error is not None:
            raise self.error
        return ExtractedText(name=name, content_type=content_type or "", text=self.text)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Return configuration isolated from the environment.

    Returns:
        AppConfig with no search key and storage under tmp_path.
    """
    return AppConfig(
        search_api_key="",
        storage_path=tmp_path / "chat.db",
        max_file_context_chars=100,
    )


@pytest.fixture
def storage(app_config: AppConfig) -> SqliteStorage:
    return SqliteStorage(app_config.storage_path)


@pytest.fixture
def store(storage: SqliteStorage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def searcher() -> FakeSearcher:
    return FakeSearcher()


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def orchestrator(
    store: SessionStore,
    engine: FakeEngine,
    searcher: FakeSearcher,
    extractor: FakeExtractor,
    app_config: AppConfig,
) -> ChatOrchestrator:
    """Create an orchestrator wired with fake adapters.

    Returns:
        ChatOrchestrator over a temporary SQLite store.
    """
    return ChatOrchestrator(
        store=store,
        engine=engine,
        composer=ContextComposer(searcher, app_config),
        extractor=extractor,
    )
