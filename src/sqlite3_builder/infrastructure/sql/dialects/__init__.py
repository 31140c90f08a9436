"""SQL dialect renderers."""

from .sqlite import SQLiteDialect

__all__ = ["SQLiteDialect"]
