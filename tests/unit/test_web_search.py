"""Unit tests for the web search adapter.

The provider is replaced with httpx.MockTransport; no network access.
"""

from pathlib import Path

import httpx
import pytest
import pytest_check as check

from private_chat.config import AppConfig
from private_chat.search.web_search import (
    MAX_SEARCH_RESULTS,
    MISSING_CREDENTIAL_MESSAGE,
    SearchError,
    SearchFailure,
    WebSearchAdapter,
)

ENDPOINT = "https://search.test/res/v1/web/search"


def _adapter(tmp_path: Path, handler) -> WebSearchAdapter:
    config = AppConfig(storage_path=tmp_path / "chat.db", search_endpoint=ENDPOINT)
    return WebSearchAdapter(config, transport=httpx.MockTransport(handler))


def _brave_payload(count: int) -> dict:
    return {
        "web": {
            "results": [
                {
                    "title": f"Result {i}",
                    "description": f"Snippet {i}",
                    "url": f"https://example.com/{i}",
                }
                for i in range(1, count + 1)
            ]
        }
    }


class TestSearchSuccess:
    """Tests for successful provider responses."""

    async def test_results_are_ranked_and_capped(self, tmp_path: Path) -> None:
        """At most three results are kept, in provider order."""
        adapter = _adapter(tmp_path, lambda request: httpx.Response(200, json=_brave_payload(5)))

        summary = await adapter.search("today's weather", "real-key")

        check.equal(len(summary.results), MAX_SEARCH_RESULTS)
        check.equal([r.rank for r in summary.results], [1, 2, 3])
        check.equal(summary.results[0].title, "Result 1")
        check.equal(summary.query, "today's weather")

    async def test_request_carries_query_count_and_key(self, tmp_path: Path) -> None:
        """The credential goes in the subscription header; count is capped."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_brave_payload(1))

        await _adapter(tmp_path, handler).search("python 3.13", "  real-key  ")

        request = seen[0]
        check.equal(request.headers["X-Subscription-Token"], "real-key")
        check.equal(request.url.params["q"], "python 3.13")
        check.equal(request.url.params["count"], str(MAX_SEARCH_RESULTS))

    async def test_summary_text_lists_results(self, tmp_path: Path) -> None:
        """Rendered summary contains titles, snippets and sources."""
        adapter = _adapter(tmp_path, lambda request: httpx.Response(200, json=_brave_payload(2)))

        text = (await adapter.search("q", "key")).to_text()

        check.is_in("1. Result 1\nSnippet 1\nSource: https://example.com/1", text)
        check.is_in("2. Result 2", text)

    async def test_empty_results_render_placeholder(self, tmp_path: Path) -> None:
        """No hits is not an error."""
        adapter = _adapter(tmp_path, lambda request: httpx.Response(200, json={"web": {}}))

        summary = await adapter.search("q", "key")

        check.equal(summary.results, [])
        check.equal(summary.to_text(), "No results found.")


class TestSearchFailures:
    """Tests for failure kinds."""

    @pytest.mark.parametrize("credential", [None, "", "   ", "your-api-key-here", "CHANGEME"])
    async def test_missing_credential_makes_no_request(
        self, tmp_path: Path, credential: str | None
    ) -> None:
        """Absent or placeholder keys fail before any HTTP call."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_brave_payload(1))

        with pytest.raises(SearchError) as exc_info:
            await _adapter(tmp_path, handler).search("q", credential)

        check.equal(exc_info.value.kind, SearchFailure.MISSING_CREDENTIAL)
        check.equal(str(exc_info.value), MISSING_CREDENTIAL_MESSAGE)
        check.equal(calls, [])

    async def test_http_error_is_provider_error(self, tmp_path: Path) -> None:
        """Non-2xx responses are provider errors."""
        adapter = _adapter(tmp_path, lambda request: httpx.Response(429, json={}))

        with pytest.raises(SearchError) as exc_info:
            await adapter.search("q", "key")

        check.equal(exc_info.value.kind, SearchFailure.PROVIDER_ERROR)
        check.is_in("429", str(exc_info.value))

    async def test_malformed_body_is_provider_error(self, tmp_path: Path) -> None:
        """Unparseable provider payloads are provider errors."""
        adapter = _adapter(tmp_path, lambda request: httpx.Response(200, text="<html>oops"))

        with pytest.raises(SearchError) as exc_info:
            await adapter.search("q", "key")

        assert exc_info.value.kind is SearchFailure.PROVIDER_ERROR

    async def test_connection_failure_is_network_error(self, tmp_path: Path) -> None:
        """Transport failures are network errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SearchError) as exc_info:
            await _adapter(tmp_path, handler).search("q", "key")

        assert exc_info.value.kind is SearchFailure.NETWORK_ERROR
