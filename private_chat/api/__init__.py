"""FastAPI endpoints for Private Chat.

Read-only HTTP routes alongside the chat UI.

Endpoints:
    - GET /health: Service health status
    - GET /status: Engine readiness and turn state
    - GET /sessions: Session summaries
    - GET /sessions/{id}/messages: Session history
"""

from private_chat.api.app import create_app

__all__ = ["create_app"]
