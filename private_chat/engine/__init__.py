"""Local inference engine access.

Talks to an OpenAI-compatible model server on this machine (Ollama,
llama-server) and exposes its chat completions as an async stream of
text deltas.
"""

from private_chat.engine.config import EngineConfig, get_engine_config
from private_chat.engine.inference import (
    EngineUnavailableError,
    InferenceAdapter,
    get_inference_adapter,
)

__all__ = [
    "EngineConfig",
    "EngineUnavailableError",
    "InferenceAdapter",
    "get_engine_config",
    "get_inference_adapter",
]
