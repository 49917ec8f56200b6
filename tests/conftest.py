"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import common_helpers...' works,
and gives every test freshly loaded settings.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from common_helpers.config.settings import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Clear settings-related env vars and the settings cache around each test."""
    monkeypatch.delenv("COMMON_HELPERS_FLOAT_ERRORS", raising=False)
    reset_settings()
    yield
    reset_settings()
