"""
SQL module for fluent statement assembly.

This module provides a stateful builder that renders SELECT, INSERT, UPDATE
and DELETE statements for SQLite, plus the escaping helpers callers use to
embed string literals in raw fragments.
"""

from .core.escape import escape, quote
from .core.statement import JoinKind, Statement, StatementKind
from .dialects.sqlite import SQLiteDialect
from .exceptions import BuilderError, NoSetFieldsError, NoTableNameError, NoValuesError
from .operations.builder import SqlBuilder

__all__ = [
    "escape",
    "quote",
    "JoinKind",
    "Statement",
    "StatementKind",
    "SQLiteDialect",
    "BuilderError",
    "NoTableNameError",
    "NoValuesError",
    "NoSetFieldsError",
    "SqlBuilder",
]
