"""
Unit tests for environment-based settings.
"""

import pytest
from pydantic import ValidationError

from sqlite3_builder.config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("DATABASE_URL", "LOG_LEVEL", "DB_POOL_SIZE", "DB_POOL_TIMEOUT", "DB_ECHO"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        """Defaults point at an in-memory database."""
        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///:memory:"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.DB_POOL_SIZE == 5
        assert settings.DB_POOL_TIMEOUT == 30.0
        assert settings.DB_ECHO is False

    def test_environment_overrides(self, monkeypatch):
        """Environment variables override defaults."""
        monkeypatch.setenv("DATABASE_URL", "sqlite:///books.db")
        monkeypatch.setenv("DB_POOL_SIZE", "12")
        monkeypatch.setenv("DB_ECHO", "true")

        settings = Settings(_env_file=None)

        assert settings.get_database_connection_string() == "sqlite:///books.db"
        assert settings.DB_POOL_SIZE == 12
        assert settings.DB_ECHO is True

    def test_log_level_is_uppercased(self, monkeypatch):
        """LOG_LEVEL accepts any case."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        """Unknown log levels are rejected."""
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_pool_size_must_be_positive(self, monkeypatch):
        """A zero pool size is rejected."""
        monkeypatch.setenv("DB_POOL_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self):
        """get_settings returns the same instance until the cache is cleared."""
        assert get_settings() is get_settings()
