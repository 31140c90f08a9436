"""Pytest configuration shared by all suites."""

from __future__ import annotations

import pytest

from sqlite3_builder.config import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Make environment changes made by a test visible to get_settings()."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
