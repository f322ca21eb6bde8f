"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Session sidebar: create, select and delete conversations
    - Message display that follows the stream as it arrives
    - File upload and web search toggle for the next turn
    - Engine status line; input disabled until the engine is ready

Contains no business logic. Every action is delegated to the orchestrator.
"""
