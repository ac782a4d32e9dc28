"""
Pytest configuration and shared fixtures for the account tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_account = _common.make_account
make_tree = _common.make_tree
DEFAULT_CIRCUIT = _common.DEFAULT_CIRCUIT

from plasma.config.runtime import set_default_config
from plasma.state.account_hasher import fast_account_hasher, pedersen_account_hasher


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(scope="session")
def fast_hasher():
    """Provide a shared sha256-backed account hasher."""
    return fast_account_hasher(DEFAULT_CIRCUIT)


@pytest.fixture(scope="session")
def pedersen_hasher():
    """Provide a shared Pedersen account hasher (generators cached across tests)."""
    return pedersen_account_hasher(DEFAULT_CIRCUIT)


@pytest.fixture
def empty_tree(fast_hasher):
    """Provide an empty depth-3 account tree using the fast hasher."""
    return make_tree(depth=3, hasher=fast_hasher)


@pytest.fixture(autouse=True)
def _reset_default_config():
    """Keep the process-wide default config from leaking between tests."""
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
