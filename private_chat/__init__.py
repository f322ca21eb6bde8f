"""Private Chat - a local-first assistant that talks to a model on your machine.

Grounds replies in an uploaded document or live web results, never both,
and keeps every conversation across restarts.

Components:
    - models: Sessions, messages and pending tool state
    - sessions: Durable storage and the session store
    - parsing: Text extraction from PDFs, images and plain text
    - search: Web search provider adapter
    - engine: Streaming chat completions from the local model
    - chat: Context composition and turn orchestration
    - api: Health and read-only session endpoints
    - ui: Web interface for chat interactions
"""

__version__ = "0.1.0"
