"""Database connectors for executing built statements.

Keep this package import lightweight: the SQLAlchemy-backed connector is
loaded lazily so importing the exceptions does not build an engine or
configure logging.
"""

from __future__ import annotations

import importlib
from typing import Any

from .exceptions import ExecutionError, NoValueError, UnsupportedValueTypeError

__all__ = [
    "ExecutionError",
    "NoValueError",
    "UnsupportedValueTypeError",
    "SQLiteConnector",
    "StatementExecutor",
    "to_json_value",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "SQLiteConnector": (".sqlite_connector", "SQLiteConnector"),
    "StatementExecutor": (".sqlite_connector", "StatementExecutor"),
    "to_json_value": (".sqlite_connector", "to_json_value"),
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = _LAZY_IMPORTS[name]
    module = importlib.import_module(module_name, __name__)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(_LAZY_IMPORTS.keys())))
