"""
Query model.

Queries carry the target table name by value so they stay valid after the
driver mutates or drops its live table.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Tuple, Union

from pysimgen.core.schema import Column, Table, Value
from pysimgen.model.predicate import Predicate

__all__ = [
    "QueryKind",
    "Create",
    "Select",
    "Insert",
    "Delete",
    "Query",
    "Remaining",
]


class QueryKind(enum.Enum):
    CREATE = "create"
    SELECT = "select"
    INSERT = "insert"
    DELETE = "delete"


def _column_definition(col: Column) -> str:
    """Generate column definition SQL"""
    parts = [col.name, str(col.column_type)]
    if col.is_primary_key:
        parts.append("PRIMARY KEY")
    if not col.is_nullable:
        parts.append("NOT NULL")
    if col.is_unique and not col.is_primary_key:
        parts.append("UNIQUE")
    return " ".join(parts)


@dataclass(frozen=True)
class Create:
    table: Table
    kind = QueryKind.CREATE

    def to_sql(self) -> str:
        """Generate CREATE TABLE statement"""
        cols = ", ".join(_column_definition(c) for c in self.table.columns)
        return f"CREATE TABLE {self.table.name} ({cols});"


@dataclass(frozen=True)
class Select:
    table: str
    predicate: Predicate
    kind = QueryKind.SELECT

    def to_sql(self) -> str:
        return f"SELECT * FROM {self.table} WHERE {self.predicate.to_sql()};"


@dataclass(frozen=True)
class Insert:
    table: str
    values: Tuple[Tuple[Value, ...], ...]
    kind = QueryKind.INSERT

    @property
    def rows(self) -> List[List[Value]]:
        return [list(row) for row in self.values]

    def to_sql(self) -> str:
        rows = ", ".join(
            "(" + ", ".join(v.to_sql() for v in row) + ")" for row in self.values
        )
        return f"INSERT INTO {self.table} VALUES {rows};"


@dataclass(frozen=True)
class Delete:
    table: str
    predicate: Predicate
    kind = QueryKind.DELETE

    def to_sql(self) -> str:
        return f"DELETE FROM {self.table} WHERE {self.predicate.to_sql()};"


Query = Union[Create, Select, Insert, Delete]


@dataclass
class Remaining:
    """Budget of operations still to be generated, owned by the driver."""
    create: float = 0.0
    read: float = 0.0
    write: float = 0.0
