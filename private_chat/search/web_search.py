"""Web search adapter over the Brave Search API.

Returns a short ranked text summary suitable for injecting into a system
message. The result count is capped to keep the context small.
"""

import logging
from enum import Enum

import httpx
from pydantic import BaseModel, ValidationError

from private_chat.config import AppConfig, get_app_config

logger = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 3
PLACEHOLDER_CREDENTIALS = frozenset(
    {"your_api_key", "your-api-key", "your-api-key-here", "changeme", "xxx", "none"}
)
MISSING_CREDENTIAL_MESSAGE = "No web search API key is configured."


class SearchFailure(str, Enum):
    """Why a search produced no results."""

    MISSING_CREDENTIAL = "missing-credential"
    PROVIDER_ERROR = "provider-error"
    NETWORK_ERROR = "network-error"


class SearchError(Exception):
    """Raised when a web search fails.

    Attributes:
        kind: Failure category.
    """

    def __init__(self, kind: SearchFailure, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class SearchResult(BaseModel):
    """One ranked search hit.

    Attributes:
        rank: 1-based position in the provider's ranking.
        title: Page title.
        snippet: Provider description of the page.
        url: Page address.
    """

    rank: int
    title: str
    snippet: str
    url: str = ""


class SearchSummary(BaseModel):
    """Ranked results for one query.

    Attributes:
        query: The query as sent to the provider.
        results: At most MAX_SEARCH_RESULTS hits, best first.
    """

    query: str
    results: list[SearchResult]

    def to_text(self) -> str:
        """Render the results as a plain-text block."""
        if not self.results:
            return "No results found."
        entries = []
        for result in self.results:
            entry = f"{result.rank}. {result.title}\n{result.snippet}"
            if result.url:
                entry += f"\nSource: {result.url}"
            entries.append(entry)
        return "\n\n".join(entries)


class _BraveItem(BaseModel):
    title: str = ""
    description: str = ""
    url: str = ""


class _BraveWeb(BaseModel):
    results: list[_BraveItem] = []


class _BraveResponse(BaseModel):
    web: _BraveWeb = _BraveWeb()


def is_placeholder_credential(credential: str | None) -> bool:
    """Return True for absent, blank or obviously placeholder API keys."""
    if not credential or not credential.strip():
        return True
    return credential.strip().lower() in PLACEHOLDER_CREDENTIALS


class WebSearchAdapter:
    """Client for the web search provider."""

    def __init__(
        self,
        config: AppConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Optional application configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport (used by tests).
        """
        self._config = config or get_app_config()
        self._transport = transport

    async def search(self, query: str, credential: str | None) -> SearchSummary:
        """Search the web and return the top ranked results.

        Args:
            query: The user's raw query text.
            credential: Provider API key.

        Returns:
            SearchSummary with at most MAX_SEARCH_RESULTS results.

        Raises:
            SearchError: If the credential is missing, the request fails,
                or the provider response is malformed.
        """
        if is_placeholder_credential(credential):
            raise SearchError(SearchFailure.MISSING_CREDENTIAL, MISSING_CREDENTIAL_MESSAGE)

        headers = {"X-Subscription-Token": credential.strip(), "Accept": "application/json"}
        params = {"q": query, "count": MAX_SEARCH_RESULTS}

        async with httpx.AsyncClient(
            timeout=self._config.search_timeout, transport=self._transport
        ) as client:
            try:
                response = await client.get(
                    self._config.search_endpoint, headers=headers, params=params
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise SearchError(
                    SearchFailure.PROVIDER_ERROR,
                    f"Search provider returned HTTP {e.response.status_code}",
                ) from e
            except httpx.RequestError as e:
                raise SearchError(
                    SearchFailure.NETWORK_ERROR, f"Search request failed: {e}"
                ) from e

        try:
            payload = _BraveResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise SearchError(
                SearchFailure.PROVIDER_ERROR, "Search provider returned a malformed response"
            ) from e

        results = [
            SearchResult(
                rank=rank,
                title=item.title.strip(),
                snippet=item.description.strip(),
                url=item.url.strip(),
            )
            for rank, item in enumerate(payload.web.results[:MAX_SEARCH_RESULTS], start=1)
        ]
        logger.info(f"Web search returned {len(results)} results for {query!r}")
        return SearchSummary(query=query, results=results)
