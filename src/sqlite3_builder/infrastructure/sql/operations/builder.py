"""
Fluent SQL statement builder.

Accumulates clauses through chained calls and renders them with a dialect.
Every accumulator returns the builder itself so calls can be chained.
"""

from typing import Any, Iterable, Optional, Protocol

from ..core.escape import quote
from ..core.statement import JoinKind, Statement, StatementKind
from ..dialects.sqlite import SQLiteDialect


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def render(self, statement: Statement, terminated: bool = True) -> str: ...
    def build_select_values(self, statement: Statement) -> str: ...


class SqlBuilder:
    """
    Fluent builder for SELECT, INSERT, UPDATE and DELETE statements.

    Example:
        >>> from sqlite3_builder.infrastructure.sql import SqlBuilder
        >>> SqlBuilder.select_from("books").field("id").field("name").and_where(
        ...     "salary > 25000"
        ... ).sql()
        'SELECT id, name FROM books WHERE salary > 25000;'
    """

    def __init__(
        self, kind: StatementKind, table: Any, dialect: Optional[Dialect] = None
    ):
        """
        Initialize the SqlBuilder.

        Args:
            kind: Statement kind to build
            table: Target table, comma separated table list or subquery
            dialect: SQL dialect used for rendering (SQLite by default)
        """
        self.statement = Statement(kind=kind, table=str(table))
        self.dialect = dialect or SQLiteDialect()

    @classmethod
    def select_from(cls, table: Any) -> "SqlBuilder":
        """Create a SELECT builder. Accepts a table list or a subquery."""
        return cls(StatementKind.SELECT, table)

    @classmethod
    def insert_into(cls, table: Any) -> "SqlBuilder":
        """Create an INSERT builder."""
        return cls(StatementKind.INSERT, table)

    @classmethod
    def update_table(cls, table: Any) -> "SqlBuilder":
        """Create an UPDATE builder."""
        return cls(StatementKind.UPDATE, table)

    @classmethod
    def delete_from(cls, table: Any) -> "SqlBuilder":
        """Create a DELETE builder."""
        return cls(StatementKind.DELETE, table)

    @property
    def kind(self) -> StatementKind:
        return self.statement.kind

    # Joins

    def natural(self) -> "SqlBuilder":
        """Prefix the next join with NATURAL."""
        self.statement.natural = True
        return self

    def left(self) -> "SqlBuilder":
        """Make the next join a LEFT JOIN."""
        self.statement.join_kind = JoinKind.LEFT
        return self

    def left_outer(self) -> "SqlBuilder":
        """Make the next join a LEFT OUTER JOIN."""
        self.statement.join_kind = JoinKind.LEFT_OUTER
        return self

    def right(self) -> "SqlBuilder":
        """Make the next join a RIGHT JOIN."""
        self.statement.join_kind = JoinKind.RIGHT
        return self

    def inner(self) -> "SqlBuilder":
        """Make the next join an INNER JOIN."""
        self.statement.join_kind = JoinKind.INNER
        return self

    def cross(self) -> "SqlBuilder":
        """Make the next join a CROSS JOIN."""
        self.statement.join_kind = JoinKind.CROSS
        return self

    def join(
        self,
        table: Any,
        operator: Optional[str] = None,
        constraint: Optional[str] = None,
    ) -> "SqlBuilder":
        """
        Push a join fragment.

        The join keyword comes from ``operator`` when given (e.g. "LEFT OUTER"),
        otherwise from the modifiers set since the previous join. Modifiers are
        consumed by this call.

        Args:
            table: Joined table expression
            operator: Explicit join type placed before JOIN
            constraint: Raw constraint text appended verbatim (e.g. "ON a = b")

        Returns:
            The same builder

        Examples:
            >>> SqlBuilder.select_from("books AS b").left_outer().join(
            ...     "shops AS s"
            ... ).on("b.id = s.book").sql()
            'SELECT * FROM books AS b LEFT OUTER JOIN shops AS s ON b.id = s.book;'
        """
        if operator:
            keyword = f"{operator} JOIN"
        else:
            prefix = []
            if self.statement.natural:
                prefix.append(JoinKind.NATURAL.value)
            if self.statement.join_kind is not None:
                prefix.append(self.statement.join_kind.value)
            keyword = " ".join(prefix + ["JOIN"])
        text = f"{keyword} {table}"
        if constraint:
            text = f"{text} {constraint}"
        self.statement.push_join(text)
        return self

    def on(self, constraint: Any) -> "SqlBuilder":
        """Attach an ON constraint to the most recent join."""
        self.statement.extend_last_join(f"ON {constraint}")
        return self

    def on_eq(self, c1: Any, c2: Any) -> "SqlBuilder":
        """Attach an "ON c1 = c2" constraint to the most recent join."""
        return self.on(f"{c1} = {c2}")

    # Projection and assignments

    def distinct(self) -> "SqlBuilder":
        """Emit SELECT DISTINCT."""
        self.statement.distinct = True
        return self

    def fields(self, fields: Iterable[Any]) -> "SqlBuilder":
        """Append several fields."""
        self.statement.fields.extend(str(f) for f in fields)
        return self

    def set_fields(self, fields: Iterable[Any]) -> "SqlBuilder":
        """Replace the field list wholesale."""
        self.statement.fields = [str(f) for f in fields]
        return self

    def field(self, field: Any) -> "SqlBuilder":
        """Append one field or expression."""
        self.statement.fields.append(str(field))
        return self

    def set_field(self, field: Any) -> "SqlBuilder":
        """
        Replace the field list with a single field.

        Lets one builder render a COUNT query first and a result query next.

        Examples:
            >>> builder = SqlBuilder.select_from("books").field("COUNT(id)")
            >>> builder.sql()
            'SELECT COUNT(id) FROM books;'
            >>> builder.set_field("title").sql()
            'SELECT title FROM books;'
        """
        self.statement.fields = [str(field)]
        return self

    def set(self, field: Any, value: Any) -> "SqlBuilder":
        """Append a "field = value" assignment with the value emitted verbatim."""
        self.statement.sets.append(f"{field} = {value}")
        return self

    def set_str(self, field: Any, value: Any) -> "SqlBuilder":
        """Append a "field = 'value'" assignment with the value escaped and quoted."""
        return self.set(field, quote(value))

    def values(self, values: Iterable[Any]) -> "SqlBuilder":
        """Append one tuple of raw values to the INSERT."""
        self.statement.values.append(f"({', '.join(str(v) for v in values)})")
        return self

    def select(self, query: Any) -> "SqlBuilder":
        """Use a SELECT query as the INSERT source instead of VALUES."""
        self.statement.select = str(query)
        return self

    # Grouping

    def group_by(self, field: Any) -> "SqlBuilder":
        self.statement.group_by.append(str(field))
        return self

    def having(self, cond: Any) -> "SqlBuilder":
        self.statement.having = str(cond)
        return self

    # WHERE, new top-level entries

    def and_where(self, cond: Any) -> "SqlBuilder":
        """
        Push a new WHERE condition.

        Separate entries are ANDed together; once there is more than one,
        each is wrapped in parentheses.
        """
        self.statement.push_where(str(cond))
        return self

    def and_where_eq(self, field: Any, value: Any) -> "SqlBuilder":
        return self.and_where(f"{field} = {value}")

    def and_where_ne(self, field: Any, value: Any) -> "SqlBuilder":
        return self.and_where(f"{field} <> {value}")

    def and_where_gt(self, field: Any, value: Any) -> "SqlBuilder":
        return self.and_where(f"{field} > {value}")

    def and_where_ge(self, field: Any, value: Any) -> "SqlBuilder":
        return self.and_where(f"{field} >= {value}")

    def and_where_lt(self, field: Any, value: Any) -> "SqlBuilder":
        return self.and_where(f"{field} < {value}")

    def and_where_le(self, field: Any, value: Any) -> "SqlBuilder":
        return self.and_where(f"{field} <= {value}")

    def and_where_like(self, field: Any, mask: Any) -> "SqlBuilder":
        """Push "field LIKE 'mask'" with the mask escaped."""
        return self.and_where(_like(field, mask))

    def and_where_like_left(self, field: Any, mask: Any) -> "SqlBuilder":
        """Push "field LIKE 'mask%'"."""
        return self.and_where(_like(field, f"{mask}%"))

    def and_where_like_right(self, field: Any, mask: Any) -> "SqlBuilder":
        """Push "field LIKE '%mask'"."""
        return self.and_where(_like(field, f"%{mask}"))

    def and_where_like_any(self, field: Any, mask: Any) -> "SqlBuilder":
        """Push "field LIKE '%mask%'"."""
        return self.and_where(_like(field, f"%{mask}%"))

    def and_where_not_like(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.and_where(_like(field, mask, negate=True))

    def and_where_not_like_left(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.and_where(_like(field, f"{mask}%", negate=True))

    def and_where_not_like_right(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.and_where(_like(field, f"%{mask}", negate=True))

    def and_where_not_like_any(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.and_where(_like(field, f"%{mask}%", negate=True))

    def and_where_is_null(self, field: Any) -> "SqlBuilder":
        return self.and_where(f"{field} IS NULL")

    def and_where_is_not_null(self, field: Any) -> "SqlBuilder":
        return self.and_where(f"{field} IS NOT NULL")

    def and_where_in(self, field: Any, values: Iterable[Any]) -> "SqlBuilder":
        """Push "field IN (v1, v2, ...)" with the values emitted verbatim."""
        return self.and_where(_in(field, values))

    def and_where_not_in(self, field: Any, values: Iterable[Any]) -> "SqlBuilder":
        return self.and_where(_in(field, values, negate=True))

    def and_where_between(self, field: Any, low: Any, high: Any) -> "SqlBuilder":
        return self.and_where(f"{field} BETWEEN {low} AND {high}")

    # WHERE, extending the last entry with OR

    def or_where(self, cond: Any) -> "SqlBuilder":
        """
        OR a condition onto the most recent WHERE entry.

        OR-chains bind inside a single entry, so
        ``and_where("a").or_where("b").and_where("c")`` renders as
        ``WHERE (a OR b) AND (c)``.
        """
        self.statement.extend_last_where(str(cond))
        return self

    def or_where_eq(self, field: Any, value: Any) -> "SqlBuilder":
        return self.or_where(f"{field} = {value}")

    def or_where_ne(self, field: Any, value: Any) -> "SqlBuilder":
        return self.or_where(f"{field} <> {value}")

    def or_where_gt(self, field: Any, value: Any) -> "SqlBuilder":
        return self.or_where(f"{field} > {value}")

    def or_where_ge(self, field: Any, value: Any) -> "SqlBuilder":
        return self.or_where(f"{field} >= {value}")

    def or_where_lt(self, field: Any, value: Any) -> "SqlBuilder":
        return self.or_where(f"{field} < {value}")

    def or_where_le(self, field: Any, value: Any) -> "SqlBuilder":
        return self.or_where(f"{field} <= {value}")

    def or_where_like(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, mask))

    def or_where_like_left(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, f"{mask}%"))

    def or_where_like_right(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, f"%{mask}"))

    def or_where_like_any(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, f"%{mask}%"))

    def or_where_not_like(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, mask, negate=True))

    def or_where_not_like_left(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, f"{mask}%", negate=True))

    def or_where_not_like_right(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, f"%{mask}", negate=True))

    def or_where_not_like_any(self, field: Any, mask: Any) -> "SqlBuilder":
        return self.or_where(_like(field, f"%{mask}%", negate=True))

    def or_where_is_null(self, field: Any) -> "SqlBuilder":
        return self.or_where(f"{field} IS NULL")

    def or_where_is_not_null(self, field: Any) -> "SqlBuilder":
        return self.or_where(f"{field} IS NOT NULL")

    def or_where_in(self, field: Any, values: Iterable[Any]) -> "SqlBuilder":
        return self.or_where(_in(field, values))

    def or_where_not_in(self, field: Any, values: Iterable[Any]) -> "SqlBuilder":
        return self.or_where(_in(field, values, negate=True))

    def or_where_between(self, field: Any, low: Any, high: Any) -> "SqlBuilder":
        return self.or_where(f"{field} BETWEEN {low} AND {high}")

    # Unions, ordering, pagination

    def union(self, query: Any) -> "SqlBuilder":
        """Append "UNION <query>" after the primary query."""
        self.statement.unions.append(f" UNION {query}")
        return self

    def union_all(self, query: Any) -> "SqlBuilder":
        """Append "UNION ALL <query>" after the primary query."""
        self.statement.unions.append(f" UNION ALL {query}")
        return self

    def order_by(self, field: Any, desc: bool) -> "SqlBuilder":
        self.statement.order_by.append(f"{field} DESC" if desc else str(field))
        return self

    def order_asc(self, field: Any) -> "SqlBuilder":
        return self.order_by(field, False)

    def order_desc(self, field: Any) -> "SqlBuilder":
        return self.order_by(field, True)

    def limit(self, limit: int) -> "SqlBuilder":
        self.statement.limit = int(limit)
        return self

    def offset(self, offset: int) -> "SqlBuilder":
        self.statement.offset = int(offset)
        return self

    # Rendering

    def sql(self) -> str:
        """
        Render the complete statement terminated with a semicolon.

        Raises:
            NoTableNameError: If the table name is empty
            NoValuesError: If an INSERT has no values and no source query
            NoSetFieldsError: If an UPDATE has no assignments
        """
        return self.dialect.render(self.statement)

    def query(self) -> str:
        """Render the statement as a bare fragment without the semicolon."""
        return self.dialect.render(self.statement, terminated=False)

    def subquery(self) -> str:
        """Render the fragment wrapped in parentheses."""
        return f"({self.query()})"

    def subquery_as(self, name: Any) -> str:
        """Render the parenthesized fragment followed by "AS name"."""
        return f"{self.subquery()} AS {name}"

    def query_values(self) -> str:
        """Render "SELECT <fields>" with no FROM clause."""
        return self.dialect.build_select_values(self.statement)


def _like(field: Any, mask: str, negate: bool = False) -> str:
    operator = "NOT LIKE" if negate else "LIKE"
    return f"{field} {operator} {quote(mask)}"


def _in(field: Any, values: Iterable[Any], negate: bool = False) -> str:
    operator = "NOT IN" if negate else "IN"
    return f"{field} {operator} ({', '.join(str(v) for v in values)})"
