"""Funda E2E - Page Object Model test suite for funda.nl"""

__version__ = "1.0.0"
