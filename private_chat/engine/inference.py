"""Streaming chat completions from a local OpenAI-compatible model server.

The adapter probes the server once at startup. After that it either is
ready and streams text deltas, or carries a terminal status string that
the UI shows in place of the input.
"""

import logging
from collections.abc import AsyncGenerator, Sequence

from openai import AsyncOpenAI

from private_chat.engine.config import EngineConfig, get_engine_config
from private_chat.models.session import AssistantMessage, SystemMessage, UserMessage

logger = logging.getLogger(__name__)

STATUS_NOT_STARTED = "Starting..."
STATUS_READY = "Ready"
STATUS_UNAVAILABLE = "Error: inference engine unavailable."


class EngineUnavailableError(Exception):
    """Raised when a request is made before the engine is ready."""

    pass


class InferenceAdapter:
    """Wraps AsyncOpenAI for streaming chat completions.

    Attributes:
        ready: Whether the readiness probe succeeded.
        status_text: "Ready", a progress string, or a terminal error string.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Optional engine configuration.
                    Loads from environment if not provided.
            client: Optional preconfigured client (used by tests).
        """
        self._config = config or get_engine_config()
        self._client = client or AsyncOpenAI(
            base_url=self._config.base_url,
            api_key=self._config.api_key,
            timeout=self._config.request_timeout,
        )
        self.ready = False
        self.status_text = STATUS_NOT_STARTED

    async def initialize(self) -> bool:
        """Probe the model server once and record readiness.

        Failure is terminal: it is not retried automatically.

        Returns:
            True if the engine is ready.
        """
        self.status_text = f"Connecting to {self._config.base_url}..."
        try:
            models = await self._client.models.list()
        except Exception as e:
            logger.error(f"Inference engine unavailable at {self._config.base_url}: {e}")
            self.ready = False
            self.status_text = STATUS_UNAVAILABLE
            return False

        available = {model.id for model in models.data}
        if available and self._config.model_name not in available:
            logger.warning(
                f"Model {self._config.model_name!r} not listed by server "
                f"(available: {', '.join(sorted(available))})"
            )

        self.ready = True
        self.status_text = STATUS_READY
        logger.info(f"Inference engine ready: {self._config.model_name}")
        return True

    async def stream(
        self,
        messages: Sequence[SystemMessage | UserMessage | AssistantMessage],
    ) -> AsyncGenerator[str]:
        """Stream response text for a full request message list.

        Args:
            messages: Ordered request messages, system message first.

        Yields:
            Non-empty text deltas in arrival order.

        Raises:
            EngineUnavailableError: If the engine is not ready.
        """
        if not self.ready:
            raise EngineUnavailableError(self.status_text)

        response_stream = await self._client.chat.completions.create(
            model=self._config.model_name,
            messages=[message.model_dump() for message in messages],
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            stream=True,
        )

        async for chunk in response_stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                yield delta


# Module-level singleton instance
_inference_adapter: InferenceAdapter | None = None


def get_inference_adapter() -> InferenceAdapter:
    """Get or create the global inference adapter.

    Returns:
        The InferenceAdapter instance.
    """
    global _inference_adapter
    if _inference_adapter is None:
        _inference_adapter = InferenceAdapter()
    return _inference_adapter
