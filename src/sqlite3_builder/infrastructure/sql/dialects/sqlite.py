"""
SQLite-specific SQL rendering.

Turns accumulated Statement state into SQL text. Rendering is pure: the same
Statement always yields the same string, so a builder can be rendered,
mutated and rendered again.
"""

from typing import List, Optional

from ..core.statement import Statement, StatementKind
from ..exceptions import NoSetFieldsError, NoTableNameError, NoValuesError


class SQLiteDialect:
    """SQLite SQL dialect implementation."""

    name = "sqlite"

    def render(self, statement: Statement, terminated: bool = True) -> str:
        """
        Render a complete statement of any kind.

        Args:
            statement: Accumulated statement state
            terminated: Append the trailing semicolon

        Returns:
            SQL statement or bare query fragment

        Raises:
            NoTableNameError: If the table name is empty
            NoValuesError: If an INSERT has no values and no source query
            NoSetFieldsError: If an UPDATE has no assignments
        """
        if statement.kind is StatementKind.SELECT:
            text = self.build_select(statement)
        elif statement.kind is StatementKind.INSERT:
            text = self.build_insert(statement)
        elif statement.kind is StatementKind.UPDATE:
            text = self.build_update(statement)
        else:
            text = self.build_delete(statement)
        return f"{text};" if terminated else text

    def build_select(self, statement: Statement) -> str:
        """Build an unterminated SELECT query."""
        self._require_table(statement)
        parts = [
            f"{self._select_head(statement)} FROM {statement.table}",
        ]
        if statement.joins:
            parts.append(" ".join(statement.joins))
        if statement.group_by:
            parts.append(f"GROUP BY {', '.join(statement.group_by)}")
        if statement.having:
            parts.append(f"HAVING {statement.having}")
        where = self.build_where(statement.wheres)
        if where:
            parts.append(where)
        if statement.order_by:
            parts.append(f"ORDER BY {', '.join(statement.order_by)}")
        if statement.limit is not None:
            parts.append(f"LIMIT {statement.limit}")
        if statement.offset is not None:
            parts.append(f"OFFSET {statement.offset}")
        return " ".join(parts) + "".join(statement.unions)

    def build_select_values(self, statement: Statement) -> str:
        """Build a value-only pseudo-select with no FROM clause."""
        return self._select_head(statement) + "".join(statement.unions)

    def build_insert(self, statement: Statement) -> str:
        """Build an unterminated INSERT statement."""
        self._require_table(statement)
        head = f"INSERT INTO {statement.table}"
        if statement.fields:
            head = f"{head} ({', '.join(statement.fields)})"
        if statement.select is not None:
            return f"{head} {statement.select}"
        if not statement.values:
            raise NoValuesError(statement.kind)
        return f"{head} VALUES {', '.join(statement.values)}"

    def build_update(self, statement: Statement) -> str:
        """Build an unterminated UPDATE statement."""
        self._require_table(statement)
        if not statement.sets:
            raise NoSetFieldsError(statement.kind)
        text = f"UPDATE {statement.table} SET {', '.join(statement.sets)}"
        return self._append_where(text, statement.wheres)

    def build_delete(self, statement: Statement) -> str:
        """Build an unterminated DELETE statement."""
        self._require_table(statement)
        return self._append_where(f"DELETE FROM {statement.table}", statement.wheres)

    def build_where(self, wheres: List[str]) -> Optional[str]:
        """
        Build the WHERE clause shared by SELECT, UPDATE and DELETE.

        A single entry is emitted bare; several entries are parenthesized
        one by one and joined with AND.

        Args:
            wheres: WHERE entries, each one OR-chain

        Returns:
            "WHERE ..." text, or None when there are no conditions
        """
        if not wheres:
            return None
        if len(wheres) == 1:
            return f"WHERE {wheres[0]}"
        return "WHERE " + " AND ".join(f"({cond})" for cond in wheres)

    def _append_where(self, text: str, wheres: List[str]) -> str:
        where = self.build_where(wheres)
        return f"{text} {where}" if where else text

    def _select_head(self, statement: Statement) -> str:
        fields = ", ".join(statement.fields) if statement.fields else "*"
        distinct = "DISTINCT " if statement.distinct else ""
        return f"SELECT {distinct}{fields}"

    @staticmethod
    def _require_table(statement: Statement) -> None:
        if not statement.table:
            raise NoTableNameError(statement.kind)
