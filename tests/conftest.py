"""Pytest configuration and shared fixtures for the wikilang test suite.

This module registers the hypothesis profiles and test markers, and provides
small fixtures shared across the unit tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from wikilang.options import VimwikiParserOptions
from wikilang.parsers import VimwikiParser

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=500, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=100)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "property: Property-based tests driven by hypothesis")


@pytest.fixture
def parser() -> VimwikiParser:
    """Parser with default options."""
    return VimwikiParser()


@pytest.fixture
def strict_parser() -> VimwikiParser:
    """Parser that raises on the first recoverable error, with line numbers."""
    return VimwikiParser(VimwikiParserOptions(strict=True, compute_line_columns=True))
