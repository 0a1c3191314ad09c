"""
Pytest configuration and shared fixtures for merkletree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures.merkle_fixtures import DEMO_LEAVES, make_engine  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def demo_leaves():
    """The five sample transactions."""
    return list(DEMO_LEAVES)


@pytest.fixture
def demo_engine():
    """A SHA-256 engine holding the five sample transactions."""
    return make_engine(DEMO_LEAVES)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep MERKLETREE_* variables from the developer's shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MERKLETREE_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
