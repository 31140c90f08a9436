"""Configuration management for sqlite3-builder.

Usage:
    >>> from sqlite3_builder.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.DATABASE_URL)
"""

from sqlite3_builder.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
