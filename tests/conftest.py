"""
Pytest configuration and shared fixtures for BlockCast resolution tests.

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

make_claim = _common.make_claim
make_evidence_item = _common.make_evidence_item
make_evidence_list = _common.make_evidence_list
make_analysis_text = _common.make_analysis_text
make_analysis_result = _common.make_analysis_result
make_entities_json = _common.make_entities_json
routing_response_fn = _common.routing_response_fn


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def claim():
    """Provide a default Claim for tests."""
    return make_claim()


@pytest.fixture
def evidence():
    """Provide the default three-source evidence list."""
    return make_evidence_list()


@pytest.fixture
def analysis_text():
    """Provide a well-formed labelled analysis response."""
    return make_analysis_text()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer env vars from leaking into configuration tests."""
    from core.config import set_default_config

    for name in (
        "BLOCKCAST_LLM_PROVIDER",
        "BLOCKCAST_LLM_MODEL",
        "BLOCKCAST_LLM_API_KEY",
        "BLOCKCAST_DEBUG",
        "BLOCKCAST_HTTP_PROXY",
        "BLOCKCAST_LOG_LEVEL",
        "BLOCKCAST_MARKET_VALIDATED_THRESHOLD",
        "BLOCKCAST_EVIDENCE_CONTRADICTS_THRESHOLD",
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)

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
