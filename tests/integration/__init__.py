"""Integration tests for components working together as a system.

Coverage:
    - Complete turns through the real store, composer and extractor
    - Persistence across store restarts
    - HTTP status and session routes
"""
