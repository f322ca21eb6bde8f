"""Application settings with environment variable loading.

Covers everything outside the inference engine: the search credential,
durable storage location, and the size and time budgets for file context.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

BRAVE_SEARCH_ENDPOINT = "https://api.search.brave.com/res/v1/web/search"
_DEFAULT_STORAGE_PATH = Path(__file__).parent.parent / "data" / "chat.db"


class AppConfig(BaseModel):
    """Configuration for storage, search and file handling.

    Attributes:
        search_api_key: Web search credential (empty when not configured).
        search_endpoint: Search provider URL.
        search_timeout: Seconds before a search request is abandoned.
        storage_path: SQLite file holding the durable session snapshot.
        max_file_context_chars: Characters of file text injected per turn.
        extraction_timeout: Seconds allowed for extracting one file.
        max_file_size: Largest accepted upload in bytes.
    """

    search_api_key: str = Field(
        default_factory=lambda: os.getenv("SEARCH_API_KEY", os.getenv("BRAVE_API_KEY", "")),
        description="Web search API key",
    )
    search_endpoint: str = Field(
        default_factory=lambda: os.getenv("SEARCH_ENDPOINT", BRAVE_SEARCH_ENDPOINT),
        description="Web search provider endpoint",
    )
    search_timeout: float = Field(default=12.0, gt=0)
    storage_path: Path = Field(
        default_factory=lambda: Path(os.getenv("CHAT_STORAGE_PATH", str(_DEFAULT_STORAGE_PATH))),
        description="SQLite file for persisted sessions",
    )
    max_file_context_chars: int = Field(
        default=4000,
        ge=1,
        description="Maximum characters of file text sent to the model",
    )
    extraction_timeout: float = Field(default=60.0, gt=0)
    max_file_size: int = Field(default=10 * 1024 * 1024, ge=1)


def get_app_config() -> AppConfig:
    """Create application configuration from environment.

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig()
