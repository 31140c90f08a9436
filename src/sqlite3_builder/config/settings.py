"""
Configuration management for sqlite3-builder.

This module provides environment-based configuration using Pydantic BaseSettings,
so the execution layer can be pointed at different SQLite databases without
code changes.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SQLITE3_BUILDER_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Fields map one-to-one to uppercase environment variables:
    - DATABASE_URL: SQLAlchemy URL of the SQLite database
    - LOG_LEVEL: Logging level (uppercase)
    - DB_POOL_SIZE: Connection pool size
    - DB_POOL_TIMEOUT: Seconds to wait for a pooled connection
    - DB_ECHO: Echo every statement through SQLAlchemy's own logger
    """

    DATABASE_URL: str = Field(
        default="sqlite:///:memory:",
        validation_alias="DATABASE_URL",
        description="SQLAlchemy database URL",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    DB_POOL_SIZE: int = Field(
        default=5,
        ge=1,
        validation_alias="DB_POOL_SIZE",
        description="Database connection pool size",
    )
    DB_POOL_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        validation_alias="DB_POOL_TIMEOUT",
        description="Seconds to wait for a pooled connection",
    )
    DB_ECHO: bool = Field(
        default=False,
        validation_alias="DB_ECHO",
        description="Echo SQL through SQLAlchemy",
    )

    model_config = SettingsConfigDict(
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level

    def get_database_connection_string(self) -> str:
        """Return the database URL used to build the SQLAlchemy engine."""
        return self.DATABASE_URL


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings instance loaded from the environment and .env file
    """
    return Settings()
