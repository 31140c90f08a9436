"""Unit tests for structured logging framework.

Tests cover:
- get_logger returns a structlog BoundLogger
- JSON output with ISO timestamps, level and logger name
- Sanitization of sensitive fields
- Context binding
"""

import json
import logging

import pytest

from sqlite3_builder.utils.logging import (
    REDACTED_VALUE,
    bind_context,
    get_logger,
    sanitize_for_logging,
)


@pytest.mark.unit
def test_get_logger_returns_bound_logger() -> None:
    """Verify get_logger returns a structlog BoundLogger."""
    logger = get_logger("test_module")

    assert hasattr(logger, "bind")
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")


@pytest.mark.unit
def test_get_logger_name_preserved(caplog: pytest.LogCaptureFixture) -> None:
    """Verify logger name is preserved in JSON output."""
    caplog.set_level(logging.INFO)

    logger = get_logger("my_test_logger")
    logger.info("test_event")

    assert len(caplog.records) >= 1
    log_data = json.loads(caplog.records[-1].message)
    assert log_data.get("logger") == "my_test_logger"


@pytest.mark.unit
def test_json_output_structure(caplog: pytest.LogCaptureFixture) -> None:
    """Verify JSON output contains timestamp, level and event."""
    caplog.set_level(logging.INFO)

    get_logger("structure_test").info("statement_rendered", statement_kind="select")

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["event"] == "statement_rendered"
    assert log_data["level"] == "info"
    assert log_data["statement_kind"] == "select"
    assert "T" in log_data["timestamp"]


@pytest.mark.unit
def test_sensitive_event_fields_are_redacted(caplog: pytest.LogCaptureFixture) -> None:
    """Verify the processor chain redacts sensitive keys."""
    caplog.set_level(logging.INFO)

    get_logger("redaction_test").info(
        "connector_configured", password="hunter2", database="books.db"
    )

    log_data = json.loads(caplog.records[-1].message)
    assert log_data["password"] == REDACTED_VALUE
    assert log_data["database"] == "books.db"


@pytest.mark.unit
@pytest.mark.parametrize(
    "key", ["password", "DB_PASSWORD", "access_token", "client_secret", "DATABASE_URL"]
)
def test_sanitize_for_logging_redacts(key: str) -> None:
    """Verify sensitive keys are redacted case-insensitively."""
    sanitized = sanitize_for_logging({key: "value", "user": "admin"})

    assert sanitized[key] == REDACTED_VALUE
    assert sanitized["user"] == "admin"


@pytest.mark.unit
def test_sanitize_for_logging_handles_nested_dicts() -> None:
    """Verify nested dictionaries are sanitized."""
    data = {"user": "admin", "auth": {"password": "secret123", "token": "abc123"}}
    sanitized = sanitize_for_logging(data)

    assert sanitized["user"] == "admin"
    assert sanitized["auth"]["password"] == REDACTED_VALUE
    assert sanitized["auth"]["token"] == REDACTED_VALUE


@pytest.mark.unit
def test_sanitize_for_logging_keeps_sql() -> None:
    """Verify rendered statements are logged as-is."""
    sql = "SELECT * FROM books WHERE title = 'x';"
    assert sanitize_for_logging({"sql": sql}) == {"sql": sql}


@pytest.mark.unit
def test_context_binding_persists(caplog: pytest.LogCaptureFixture) -> None:
    """Verify bound context persists across log statements."""
    caplog.set_level(logging.INFO)

    logger = bind_context(database="books.db", statement_kind="select")
    logger.info("first_event", row_count=1)
    logger.info("second_event", row_count=2)

    assert len(caplog.records) >= 2
    for record in caplog.records[-2:]:
        log_data = json.loads(record.message)
        assert log_data.get("database") == "books.db"
        assert log_data.get("statement_kind") == "select"
