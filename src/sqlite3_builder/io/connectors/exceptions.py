"""Execution exceptions for statements run through a connector.

Driver and connection failures are left to SQLAlchemy; these cover the
row-conversion boundary only.
"""

from typing import Dict, Optional


class ExecutionError(Exception):
    """Base error for statement execution and row conversion failures."""

    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        super().__init__(message)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "message": str(self),
            "sql": self.sql,
        }


class NoValueError(ExecutionError):
    """Raised when a single-value query returns no rows."""

    def __init__(self, sql: Optional[str] = None):
        super().__init__("no value returned", sql=sql)


class UnsupportedValueTypeError(ExecutionError):
    """Raised when a cell holds a type with no JSON-like counterpart."""

    def __init__(self, type_name: str, sql: Optional[str] = None):
        self.type_name = type_name
        super().__init__(f"unsupported value type: {type_name}", sql=sql)
