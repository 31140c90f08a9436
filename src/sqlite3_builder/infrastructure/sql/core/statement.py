"""
Clause-state model for SQL statements under construction.

A Statement holds everything accumulated by the fluent builder. It owns
plain strings only; rendering lives in the dialect module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class StatementKind(Enum):
    """Kind of SQL statement a builder produces."""

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class JoinKind(Enum):
    """Join-type modifiers that prefix the next JOIN keyword."""

    NATURAL = "NATURAL"
    LEFT = "LEFT"
    LEFT_OUTER = "LEFT OUTER"
    RIGHT = "RIGHT"
    INNER = "INNER"
    CROSS = "CROSS"


@dataclass
class Statement:
    """
    Mutable state of a single SQL statement.

    Attributes:
        kind: Statement kind, fixed at construction
        table: Target table, table list or subquery-as-table expression
        distinct: Emit SELECT DISTINCT
        fields: Select column list or Insert column list
        joins: Fully rendered join fragments
        sets: "field = value" assignments (Update)
        values: Parenthesized value tuples (Insert)
        select: Source query used instead of VALUES (Insert)
        group_by: Grouping expressions
        having: HAVING condition
        wheres: WHERE entries, each one OR-chain
        order_by: "field" or "field DESC" fragments
        limit: LIMIT value
        offset: OFFSET value
        unions: Rendered " UNION [ALL] <query>" fragments
        natural: Pending NATURAL modifier for the next join
        join_kind: Pending join-type modifier for the next join
    """

    kind: StatementKind
    table: str
    distinct: bool = False
    fields: List[str] = field(default_factory=list)
    joins: List[str] = field(default_factory=list)
    sets: List[str] = field(default_factory=list)
    values: List[str] = field(default_factory=list)
    select: Optional[str] = None
    group_by: List[str] = field(default_factory=list)
    having: Optional[str] = None
    wheres: List[str] = field(default_factory=list)
    order_by: List[str] = field(default_factory=list)
    limit: Optional[int] = None
    offset: Optional[int] = None
    unions: List[str] = field(default_factory=list)
    natural: bool = False
    join_kind: Optional[JoinKind] = None

    def push_where(self, cond: str) -> None:
        """Append a new independent WHERE entry."""
        self.wheres.append(cond)

    def extend_last_where(self, cond: str) -> None:
        """OR a condition onto the most recent WHERE entry."""
        if not self.wheres:
            self.wheres.append(cond)
            return
        self.wheres[-1] = f"{self.wheres[-1]} OR {cond}"

    def push_join(self, join: str) -> None:
        """Append a rendered join fragment and reset pending modifiers."""
        self.joins.append(join)
        self.natural = False
        self.join_kind = None

    def extend_last_join(self, text: str) -> None:
        """Append text to the most recent join fragment."""
        if self.joins:
            self.joins[-1] = f"{self.joins[-1]} {text}"
