"""
Funda E2E Test Suite

Tests are organized into:
- unit/: Unit tests for helpers and page objects against mocked pages
- e2e/: Browser scenarios against the live site (marked e2e, deselected by default)
"""
