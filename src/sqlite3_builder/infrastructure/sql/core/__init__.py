"""Core SQL utilities package."""

from .escape import escape, quote
from .statement import JoinKind, Statement, StatementKind

__all__ = [
    "escape",
    "quote",
    "JoinKind",
    "Statement",
    "StatementKind",
]
