"""
Unit tests for SQLiteConnector and StatementExecutor.

Runs built statements against an in-memory SQLite database.
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import QueuePool, StaticPool

from sqlite3_builder.infrastructure.sql import NoTableNameError, SqlBuilder, quote
from sqlite3_builder.io.connectors.exceptions import (
    NoValueError,
    UnsupportedValueTypeError,
)
from sqlite3_builder.io.connectors.sqlite_connector import (
    SQLiteConnector,
    StatementExecutor,
    to_json_value,
)


@pytest.fixture
def connector():
    """Create an in-memory connector with a books table."""
    connector = SQLiteConnector("sqlite:///:memory:")
    with connector.get_connection() as conn:
        conn.exec_driver_sql(
            "CREATE TABLE books (id INTEGER PRIMARY KEY, title TEXT, price INTEGER, rating REAL)"
        )
    yield connector
    connector.dispose()


@pytest.fixture
def executor(connector):
    """Executor bound to a connection with two books inserted."""
    with connector.get_connection() as conn:
        executor = StatementExecutor(conn)
        executor.exec(
            SqlBuilder.insert_into("books")
            .fields(["title", "price"])
            .values([quote("Don Quixote"), 200])
            .values([quote("Philosopher's Stone"), 80])
        )
        yield executor


class TestToJsonValue:
    """Tests for cell conversion."""

    @pytest.mark.parametrize("value", [None, 0, 42, -7, "", "text"])
    def test_supported_values_pass_through(self, value):
        """Null, integers and strings are returned unchanged."""
        assert to_json_value(value) == value

    @pytest.mark.parametrize("value", [1.5, b"blob", True])
    def test_unsupported_values(self, value):
        """Other types raise UnsupportedValueTypeError."""
        with pytest.raises(UnsupportedValueTypeError) as exc_info:
            to_json_value(value, sql="SELECT 1;")
        assert exc_info.value.type_name == type(value).__name__
        assert exc_info.value.sql == "SELECT 1;"


class TestSQLiteConnector:
    """Tests for engine and connection management."""

    def test_in_memory_uses_static_pool(self, connector):
        """In-memory databases share a single connection."""
        assert connector.in_memory is True
        assert isinstance(connector.engine.pool, StaticPool)

    def test_file_database_uses_queue_pool(self, tmp_path):
        """File databases get a sized connection pool."""
        connector = SQLiteConnector(f"sqlite:///{tmp_path / 'books.db'}", pool_size=3)
        try:
            assert connector.in_memory is False
            assert isinstance(connector.engine.pool, QueuePool)
            assert connector.engine.pool.size() == 3
        finally:
            connector.dispose()

    def test_defaults_from_settings(self, monkeypatch):
        """Unset arguments fall back to settings."""
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        monkeypatch.setenv("DB_POOL_SIZE", "7")
        connector = SQLiteConnector()
        try:
            assert connector.database_url == "sqlite://"
            assert connector.pool_size == 7
            assert connector.in_memory is True
        finally:
            connector.dispose()

    def test_commit_on_success(self, connector):
        """Statements are committed when the block exits cleanly."""
        with connector.get_connection() as conn:
            StatementExecutor(conn).exec(
                SqlBuilder.insert_into("books").field("title").values([quote("Emma")])
            )
        with connector.get_connection() as conn:
            count = StatementExecutor(conn).get_int(
                SqlBuilder.select_from("books").field("COUNT(*)")
            )
        assert count == 1

    def test_rollback_on_error(self, connector):
        """Statements are rolled back when the block raises."""
        with pytest.raises(RuntimeError):
            with connector.get_connection() as conn:
                StatementExecutor(conn).exec(
                    SqlBuilder.insert_into("books").field("title").values([quote("Emma")])
                )
                raise RuntimeError("boom")
        with connector.get_connection() as conn:
            count = StatementExecutor(conn).get_int(
                SqlBuilder.select_from("books").field("COUNT(*)")
            )
        assert count == 0


class TestStatementExecutor:
    """Tests for executing built statements."""

    def test_get_all_rows(self, executor):
        """get returns every row as a list of values."""
        rows = executor.get(
            SqlBuilder.select_from("books").fields(["title", "price"]).order_asc("price")
        )
        assert rows == [["Philosopher's Stone", 80], ["Don Quixote", 200]]

    def test_get_no_rows(self, executor):
        """get returns an empty list when nothing matches."""
        rows = executor.get(SqlBuilder.select_from("books").and_where_gt("price", 1000))
        assert rows == []

    def test_get_row(self, executor):
        """get_row returns the first row only."""
        row = executor.get_row(
            SqlBuilder.select_from("books").fields(["id", "title"]).order_desc("price")
        )
        assert row == [1, "Don Quixote"]

    def test_get_row_empty(self, executor):
        """get_row returns an empty list when nothing matches."""
        row = executor.get_row(SqlBuilder.select_from("books").and_where_is_null("title"))
        assert row == []

    def test_get_value_null(self, executor):
        """A NULL cell converts to None."""
        value = executor.get_value(
            SqlBuilder.select_from("books").field("rating").and_where_eq("id", 1)
        )
        assert value is None

    def test_get_value_no_rows(self, executor):
        """get_value raises NoValueError when nothing matches."""
        with pytest.raises(NoValueError, match="no value"):
            executor.get_value(SqlBuilder.select_from("books").and_where_eq("id", 99))

    def test_get_int_and_str(self, executor):
        """Typed single-value accessors."""
        assert executor.get_int(SqlBuilder.select_from("books").field("MAX(price)")) == 200
        title = executor.get_str(
            SqlBuilder.select_from("books").field("title").and_where_eq("price", 80)
        )
        assert title == "Philosopher's Stone"

    def test_get_int_wrong_type(self, executor):
        """get_int rejects non-integer values."""
        with pytest.raises(UnsupportedValueTypeError):
            executor.get_int(SqlBuilder.select_from("books").field("title").limit(1))

    def test_get_str_wrong_type(self, executor):
        """get_str rejects non-string values."""
        with pytest.raises(UnsupportedValueTypeError):
            executor.get_str(SqlBuilder.select_from("books").field("price").limit(1))

    def test_unsupported_cell_type(self, executor):
        """REAL values are outside the supported conversions."""
        executor.exec(
            SqlBuilder.update_table("books").set("rating", "4.5").and_where_eq("id", 1)
        )
        with pytest.raises(UnsupportedValueTypeError) as exc_info:
            executor.get(SqlBuilder.select_from("books").field("rating"))
        assert exc_info.value.type_name == "float"

    def test_get_cursor_is_lazy_iterator(self, executor):
        """get_cursor yields converted rows one by one."""
        cursor = executor.get_cursor(
            SqlBuilder.select_from("books").field("price").order_asc("price")
        )
        assert next(cursor) == [80]
        assert list(cursor) == [[200]]

    def test_update_and_delete(self, executor):
        """UPDATE and DELETE run through exec."""
        executor.exec(
            SqlBuilder.update_table("books")
            .set_str("title", "[SOLD!] Don Quixote")
            .and_where_eq("id", 1)
        )
        executor.exec(SqlBuilder.delete_from("books").and_where_lt("price", 100))
        assert executor.get(SqlBuilder.select_from("books").field("title")) == [
            ["[SOLD!] Don Quixote"]
        ]

    def test_insert_from_select(self, executor):
        """INSERT ... SELECT copies rows."""
        query = SqlBuilder.select_from("books").fields(["title", "price * 2"]).query()
        executor.exec(
            SqlBuilder.insert_into("books").fields(["title", "price"]).select(query)
        )
        total = executor.get_int(SqlBuilder.select_from("books").field("SUM(price)"))
        assert total == (200 + 80) * 3

    def test_structural_error_before_execution(self, executor):
        """Builder errors surface before touching the database."""
        with pytest.raises(NoTableNameError):
            executor.get(SqlBuilder.select_from(""))

    def test_driver_errors_propagate(self, executor):
        """SQL errors from the driver are not wrapped."""
        with pytest.raises(OperationalError):
            executor.get(SqlBuilder.select_from("missing_table"))
