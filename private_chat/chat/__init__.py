"""Turn orchestration.

Responsibilities:
    - Composing per-turn system instructions from file or web context
    - Enforcing file / web search exclusivity
    - Streaming model deltas into the session that submitted the turn
"""

from private_chat.chat.composer import ComposedContext, ContextComposer
from private_chat.chat.orchestrator import ChatOrchestrator, get_orchestrator

__all__ = ["ChatOrchestrator", "ComposedContext", "ContextComposer", "get_orchestrator"]
