"""
Unified Table Model for PySimGen.

Tables are owned by the simulation driver; generators only read them.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from pysimgen.core.errors import MalformedInput
from pysimgen.core.types import INTEGER_MAX, INTEGER_MIN, ColumnType, column_type_from_sql

__all__ = [
    "Value",
    "NULL",
    "Column",
    "Table",
]

_PAYLOAD_TYPES = {
    ColumnType.INTEGER: (int,),
    ColumnType.FLOAT: (float,),
    ColumnType.TEXT: (str,),
    ColumnType.BLOB: (bytes,),
}


@dataclass(frozen=True)
class Value:
    """A typed cell value. ``type`` is None for NULL.

    Values of the same type are totally ordered. Ordering across types, or
    against NULL, is undefined and raises TypeError.
    """
    type: Optional[ColumnType]
    data: Any = None

    def __post_init__(self):
        if self.type is None:
            if self.data is not None:
                raise TypeError("NULL carries no payload")
            return
        expected = _PAYLOAD_TYPES[self.type]
        if isinstance(self.data, bool) or not isinstance(self.data, expected):
            raise TypeError(f"{self.type} value cannot hold {type(self.data).__name__}")
        if self.type is ColumnType.FLOAT and not math.isfinite(self.data):
            raise ValueError(f"FLOAT values must be finite, got {self.data!r}")
        if self.type is ColumnType.INTEGER and not INTEGER_MIN <= self.data <= INTEGER_MAX:
            raise ValueError(f"INTEGER values must fit in 64 bits, got {self.data!r}")

    @classmethod
    def integer(cls, data: int) -> "Value":
        return cls(ColumnType.INTEGER, data)

    @classmethod
    def float_(cls, data: float) -> "Value":
        return cls(ColumnType.FLOAT, float(data))

    @classmethod
    def text(cls, data: str) -> "Value":
        return cls(ColumnType.TEXT, data)

    @classmethod
    def blob(cls, data: bytes) -> "Value":
        return cls(ColumnType.BLOB, bytes(data))

    @property
    def is_null(self) -> bool:
        return self.type is None

    def _check_comparable(self, other: "Value") -> None:
        if not isinstance(other, Value):
            raise TypeError(f"Cannot compare Value with {type(other).__name__}")
        if self.is_null or other.is_null:
            raise TypeError("NULL is not ordered")
        if self.type is not other.type:
            raise TypeError(f"Cannot compare {self.type} with {other.type}")

    def __lt__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data < other.data

    def __gt__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data > other.data

    def __le__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data <= other.data

    def __ge__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data >= other.data

    def to_sql(self) -> str:
        """Render as a SQL literal."""
        if self.type is None:
            return "NULL"
        if self.type is ColumnType.INTEGER:
            return str(self.data)
        if self.type is ColumnType.FLOAT:
            return repr(self.data)
        if self.type is ColumnType.TEXT:
            return "'" + self.data.replace("'", "''") + "'"
        return f"X'{self.data.hex().upper()}'"

    def __str__(self) -> str:
        return self.to_sql()


NULL = Value(None)


@dataclass(frozen=True)
class Column:
    """Column definition/metadata"""
    name: str
    column_type: ColumnType
    is_nullable: bool = True
    is_primary_key: bool = False
    is_unique: bool = False


@dataclass
class Table:
    """Table schema plus its current rows."""
    name: str
    columns: List[Column]
    rows: List[List[Value]] = field(default_factory=list)

    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column_index(self, name: str) -> int:
        for i, c in enumerate(self.columns):
            if c.name == name:
                return i
        raise KeyError(f"Table '{self.name}' has no column '{name}'")

    def column_values(self, index: int) -> List[Value]:
        """All values of one column across the current rows."""
        return [row[index] for row in self.rows]

    def validate(self) -> None:
        if not self.columns:
            raise MalformedInput(f"Table '{self.name}' has no columns")
        _check_unique_names(self.name, self.columns)
        for row in self.rows:
            self.validate_row(row)

    def validate_row(self, row: Sequence[Value]) -> None:
        if len(row) != len(self.columns):
            raise MalformedInput(
                f"Row has {len(row)} values but table '{self.name}' has {len(self.columns)} columns"
            )

    @classmethod
    def from_list(cls, name: str, columns_list: List[Dict[str, Any]], rows=None):
        """Factory to create from simple list-of-dicts format.

        Column types may be given as ``ColumnType`` or as SQL type names.
        Row cells may be given as ``Value`` or as plain Python payloads
        (None becomes NULL).
        """
        cols = []
        for c in columns_list:
            ctype = c.get('column_type') or c.get('data_type') or c.get('type') or 'text'
            if not isinstance(ctype, ColumnType):
                ctype = column_type_from_sql(ctype)
            cols.append(Column(
                name=c['name'],
                column_type=ctype,
                is_nullable=c.get('is_nullable', True),
                is_primary_key=c.get('is_primary_key', False),
                is_unique=c.get('is_unique', False),
            ))

        _check_unique_names(name, cols)

        table_rows = []
        for row in rows or []:
            if len(row) != len(cols):
                raise MalformedInput(
                    f"Row has {len(row)} values but table '{name}' has {len(cols)} columns"
                )
            table_rows.append([
                cell if isinstance(cell, Value) else _wrap(col.column_type, cell)
                for col, cell in zip(cols, row)
            ])

        return cls(name=name, columns=cols, rows=table_rows)


def _check_unique_names(table_name: str, columns: Sequence[Column]) -> None:
    seen = set()
    for c in columns:
        if c.name in seen:
            raise MalformedInput(f"Table '{table_name}' has duplicate column '{c.name}'")
        seen.add(c.name)


def _wrap(column_type: ColumnType, payload: Any) -> Value:
    if payload is None:
        return NULL
    if column_type is ColumnType.FLOAT:
        return Value.float_(payload)
    return Value(column_type, payload)
