"""
Test Suite
==========

Test suite matching the carousel_renderer/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: API contract tests through the FastAPI test client
- e2e: Rendering with a real Chromium browser
"""
