"""
SQLite connector for executing built statements.

This module provides pooled connection acquisition through SQLAlchemy and an
executor that runs SqlBuilder statements, converting each result cell into a
JSON-like value (null, integer or string).
"""

from contextlib import contextmanager
from typing import Any, Generator, Iterator, List, Optional, Sequence, Tuple, Union

from sqlalchemy import Connection, CursorResult, Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import QueuePool, StaticPool

from sqlite3_builder.config.settings import get_settings
from sqlite3_builder.infrastructure.sql import SqlBuilder
from sqlite3_builder.utils.logging import get_logger

from .exceptions import NoValueError, UnsupportedValueTypeError

logger = get_logger(__name__)

JSONValue = Union[None, int, str]


def to_json_value(value: Any, sql: Optional[str] = None) -> JSONValue:
    """
    Convert a database cell into a JSON-like value.

    Args:
        value: Raw value returned by the driver
        sql: Statement that produced the value, kept for error context

    Returns:
        None, int or str

    Raises:
        UnsupportedValueTypeError: For any other value type (float, bytes, ...)
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise UnsupportedValueTypeError(type(value).__name__, sql=sql)


class SQLiteConnector:
    """
    Connector for SQLite databases.

    Owns one SQLAlchemy engine and its connection pool. In-memory databases
    share a single connection so every checkout sees the same data.

    Example:
        >>> connector = SQLiteConnector("sqlite:///books.db")
        >>> with connector.get_connection() as conn:
        ...     StatementExecutor(conn).get(SqlBuilder.select_from("books"))
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        pool_size: Optional[int] = None,
        pool_timeout: Optional[float] = None,
        echo: Optional[bool] = None,
    ):
        """
        Initialize the SQLite connector.

        Args:
            database_url: SQLAlchemy URL; defaults to DATABASE_URL from settings
            pool_size: Connection pool size; defaults to DB_POOL_SIZE
            pool_timeout: Checkout timeout in seconds; defaults to DB_POOL_TIMEOUT
            echo: Echo statements through SQLAlchemy; defaults to DB_ECHO
        """
        settings = get_settings()
        self.database_url = database_url or settings.get_database_connection_string()
        self.pool_size = pool_size or settings.DB_POOL_SIZE
        self.pool_timeout = pool_timeout or settings.DB_POOL_TIMEOUT
        self.echo = settings.DB_ECHO if echo is None else echo
        self.engine = self._create_engine()

        logger.info(
            "sqlite_connector_initialized",
            database=make_url(self.database_url).database,
            pool_size=self.pool_size,
            in_memory=self.in_memory,
        )

    @property
    def in_memory(self) -> bool:
        return make_url(self.database_url).database in (None, "", ":memory:")

    def _create_engine(self) -> Engine:
        if self.in_memory:
            return create_engine(
                self.database_url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=self.echo,
            )
        return create_engine(
            self.database_url,
            poolclass=QueuePool,
            pool_size=self.pool_size,
            pool_timeout=self.pool_timeout,
            echo=self.echo,
        )

    @contextmanager
    def get_connection(self) -> Generator[Connection, None, None]:
        """
        Get a pooled connection, committing on success and rolling back on error.

        Yields:
            SQLAlchemy Connection
        """
        with self.engine.connect() as conn:
            try:
                yield conn
            except Exception:
                logger.warning("sqlite_connection_rollback")
                conn.rollback()
                raise
            conn.commit()

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.debug("sqlite_connector_disposed")


class StatementExecutor:
    """
    Runs built statements on a connection and converts the results.

    The caller owns the connection and its transaction lifecycle.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _run(self, builder: SqlBuilder, event: str) -> Tuple[str, CursorResult]:
        sql = builder.sql()
        logger.debug(event, statement_kind=builder.kind.value, sql=sql)
        return sql, self.connection.exec_driver_sql(sql)

    @staticmethod
    def _convert_row(row: Sequence[Any], sql: str) -> List[JSONValue]:
        return [to_json_value(value, sql=sql) for value in row]

    def exec(self, builder: SqlBuilder) -> None:
        """Execute a statement, discarding any result."""
        self._run(builder, "exec_sql")

    def get(self, builder: SqlBuilder) -> List[List[JSONValue]]:
        """Fetch every row as a list of JSON-like values."""
        sql, result = self._run(builder, "get_rows_sql")
        return [self._convert_row(row, sql) for row in result]

    def get_row(self, builder: SqlBuilder) -> List[JSONValue]:
        """Fetch the first row, or an empty list when there are no rows."""
        sql, result = self._run(builder, "get_row_sql")
        row = result.first()
        if row is None:
            return []
        return self._convert_row(row, sql)

    def get_value(self, builder: SqlBuilder) -> JSONValue:
        """
        Fetch the first column of the first row.

        Raises:
            NoValueError: If the query returns no rows
            UnsupportedValueTypeError: If the value is not null, int or str
        """
        sql, result = self._run(builder, "get_value_sql")
        row = result.first()
        if row is None:
            raise NoValueError(sql=sql)
        return to_json_value(row[0], sql=sql)

    def get_int(self, builder: SqlBuilder) -> int:
        """Fetch a single integer value."""
        value = self.get_value(builder)
        if not isinstance(value, int):
            raise UnsupportedValueTypeError(type(value).__name__, sql=builder.sql())
        return value

    def get_str(self, builder: SqlBuilder) -> str:
        """Fetch a single string value."""
        value = self.get_value(builder)
        if not isinstance(value, str):
            raise UnsupportedValueTypeError(type(value).__name__, sql=builder.sql())
        return value

    def get_cursor(self, builder: SqlBuilder) -> Iterator[List[JSONValue]]:
        """
        Execute a query and return a lazy iterator over converted rows.

        The statement is rendered and executed immediately; rows are
        converted as they are consumed.
        """
        sql, result = self._run(builder, "get_cursor_sql")
        return (self._convert_row(row, sql) for row in result)
