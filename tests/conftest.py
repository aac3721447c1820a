"""
Pytest configuration and shared fixtures for Threadline tests.

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

CHIAPAS_ITEMS = _common.CHIAPAS_ITEMS
make_evidence_item = _common.make_evidence_item
make_structured_chain = _common.make_structured_chain
make_signing_key = _common.make_signing_key
make_signed_statement = _common.make_signed_statement


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def chiapas_items():
    """The three-event Chiapas evidence chain."""
    return list(CHIAPAS_ITEMS)


@pytest.fixture
def structured_chain():
    """The Chiapas chain as structured EvidenceItem objects."""
    return make_structured_chain()


@pytest.fixture
def signing_key():
    """A deterministic Ed25519 signing key."""
    return make_signing_key()


@pytest.fixture
def signed_statement(signing_key):
    """A statement signed with the default length-prefixed message."""
    return make_signed_statement(signing_key)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep THREADLINE_* variables from the host out of every test."""
    import os

    for name in list(os.environ):
        if name.startswith("THREADLINE_"):
            monkeypatch.delenv(name, raising=False)

    from core.config.runtime import set_default_config
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
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
