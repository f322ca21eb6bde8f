"""Inference engine configuration with environment variable loading.

Targets any OpenAI-compatible server running locally (Ollama, llama-server,
LM Studio) via LLM_BASE_URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class EngineConfig(BaseModel):
    """Configuration for the local inference engine.

    Attributes:
        base_url: OpenAI-compatible API base URL of the local server.
        api_key: API key sent to the server. Local servers ignore it.
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        request_timeout: Seconds before a request to the server is abandoned.
    """

    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL", "http://localhost:11434/v1"),
        description="OpenAI-compatible base URL of the local model server",
    )
    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", "local"),
        description="API key for the model server",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "llama3.2:3b"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    request_timeout: float = Field(default=120.0, gt=0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that the API key is non-empty; the client refuses blank keys."""
        if not v or not v.strip():
            raise ValueError("API key must not be blank. Unset LLM_API_KEY to use the default")
        return v.strip()


def get_engine_config() -> EngineConfig:
    """Create engine configuration from environment.

    Returns:
        Configured EngineConfig instance.
    """
    return EngineConfig()
