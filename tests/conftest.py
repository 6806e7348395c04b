"""Pytest configuration and shared fixtures for the engine test suite.

This module provides:
- Deterministic test environment setup (no EMLAB_* overrides leak in)
- Common fixtures for configs and reference values
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Add project root for imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from emlab.config import EngineConfig


# ---------------------------------------------------------------------------
# Environment Setup
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Strip EMLAB_* variables so configuration tests start from defaults."""
    for key in [k for k in os.environ if k.startswith("EMLAB_")]:
        del os.environ[key]
    os.environ.setdefault("PYTHONHASHSEED", "0")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def default_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def fine_window_config() -> EngineConfig:
    """Helmholtz window narrowed to ±2% of the samples."""
    return EngineConfig(helmholtz_window_fraction=0.02)
