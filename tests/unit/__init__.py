"""Unit tests for individual components in isolation.

Coverage:
    - models/: Title derivation and snapshot serialization
    - sessions/: Storage and session store invariants
    - parsing/: PDF, OCR and plain-text extraction
    - search/: Provider response handling and failure kinds
    - engine/: Configuration, readiness and delta streaming
    - chat/: Context composition and the turn state machine
"""
