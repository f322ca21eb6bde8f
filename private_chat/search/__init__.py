"""Web search grounding.

Wraps the search provider behind one call that returns a capped, ranked
text summary or a typed failure.
"""

from private_chat.search.web_search import (
    MAX_SEARCH_RESULTS,
    MISSING_CREDENTIAL_MESSAGE,
    SearchError,
    SearchFailure,
    SearchResult,
    SearchSummary,
    WebSearchAdapter,
)

__all__ = [
    "MAX_SEARCH_RESULTS",
    "MISSING_CREDENTIAL_MESSAGE",
    "SearchError",
    "SearchFailure",
    "SearchResult",
    "SearchSummary",
    "WebSearchAdapter",
]
