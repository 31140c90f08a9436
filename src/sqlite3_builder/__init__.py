"""
sqlite3-builder - Fluent SQL statement assembly for SQLite.

Build SELECT, INSERT, UPDATE and DELETE statements through chained calls,
render them as statements or as fragments for subqueries and unions, and
run them on pooled SQLite connections.

Usage:
    >>> from sqlite3_builder import SqlBuilder, quote
    >>> SqlBuilder.insert_into("books").field("title").field("price").values(
    ...     [quote("In Search of Lost Time"), 150]
    ... ).sql()
    "INSERT INTO books (title, price) VALUES ('In Search of Lost Time', 150);"
"""

from sqlite3_builder.infrastructure.sql import (
    BuilderError,
    NoSetFieldsError,
    NoTableNameError,
    NoValuesError,
    SqlBuilder,
    StatementKind,
    escape,
    quote,
)

__version__ = "0.1.0"

__all__ = [
    "BuilderError",
    "NoSetFieldsError",
    "NoTableNameError",
    "NoValuesError",
    "SqlBuilder",
    "StatementKind",
    "escape",
    "quote",
]
