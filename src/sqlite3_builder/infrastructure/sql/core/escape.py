"""
SQL string literal escaping utilities.

Provides functions for safely embedding literal string values inside raw
SQL fragments. The builder never escapes caller-supplied field, condition
or join text implicitly; these helpers are the only sanctioned mechanism.
"""

from typing import Any


def escape(value: Any) -> str:
    """
    Escape a value for use inside a single-quoted SQL string literal.

    Args:
        value: Any value convertible to a display string

    Returns:
        The string with every single quote doubled

    Examples:
        >>> escape("O'Brien")
        "O''Brien"
        >>> escape("Hello, 'World'")
        "Hello, ''World''"
    """
    return str(value).replace("'", "''")


def quote(value: Any) -> str:
    """
    Escape a value and wrap it in single quotes.

    Args:
        value: Any value convertible to a display string

    Returns:
        A complete SQL string literal

    Examples:
        >>> quote("Hello, 'World'")
        "'Hello, ''World'''"
        >>> quote(150)
        "'150'"
    """
    return f"'{escape(value)}'"
