"""Test package for Private Chat.

Structure:
    - unit/: Individual component tests with fake adapters
    - integration/: Full turns through real components and the HTTP API

External services (model server, search provider, Tesseract) are never
contacted; their clients are faked or patched.
"""
