"""High-level SQL statement builders."""

from .builder import SqlBuilder

__all__ = ["SqlBuilder"]
