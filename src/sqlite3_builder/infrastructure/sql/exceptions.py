"""Structural errors raised while rendering SQL statements.

Every error carries the statement kind it was raised for so callers can log
it in structured form.
"""

from typing import Dict

from .core.statement import StatementKind


class BuilderError(ValueError):
    """Base error for statements that cannot be rendered."""

    message = "cannot build statement"

    def __init__(self, kind: StatementKind, message: str = ""):
        self.kind = kind
        super().__init__(message or self.message)

    def to_dict(self) -> Dict[str, str]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "statement_kind": self.kind.value,
            "message": str(self),
        }


class NoTableNameError(BuilderError):
    """Raised when the table name is missing or empty."""

    message = "no table name"


class NoValuesError(BuilderError):
    """Raised when an INSERT has neither value tuples nor a source query."""

    message = "no values"


class NoSetFieldsError(BuilderError):
    """Raised when an UPDATE has no SET assignments."""

    message = "no set fields"
