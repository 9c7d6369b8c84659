"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import datekit...' works, and
pins the default timezone so tests do not depend on the developer's .env.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from datekit.config.settings import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def utc_settings(monkeypatch):
    """Run every test with DATEKIT_DEFAULT_TIMEZONE=UTC and fresh cached settings."""
    monkeypatch.setenv("DATEKIT_DEFAULT_TIMEZONE", "UTC")
    monkeypatch.setenv("DATEKIT_LOG_LEVEL", "WARNING")
    reset_settings()
    yield
    reset_settings()
