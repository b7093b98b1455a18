"""
Predicate model.

A predicate is an immutable tree: comparison leaves over one column, AND/OR
connectives over any number of children, and the constants TRUE and FALSE.
An empty AND is true and an empty OR is false.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from pysimgen.core.schema import Table, Value

__all__ = ["PredicateKind", "Predicate"]


class PredicateKind(enum.Enum):
    EQ = "="
    NEQ = "!="
    GT = ">"
    LT = "<"
    AND = "AND"
    OR = "OR"
    TRUE = "TRUE"
    FALSE = "FALSE"


_COMPARISONS = (PredicateKind.EQ, PredicateKind.NEQ, PredicateKind.GT, PredicateKind.LT)
_CONNECTIVES = (PredicateKind.AND, PredicateKind.OR)


@dataclass(frozen=True)
class Predicate:
    kind: PredicateKind
    column: Optional[str] = None
    value: Optional[Value] = None
    children: Tuple["Predicate", ...] = ()

    # -------------------------- Constructors --------------------------

    @classmethod
    def eq(cls, column: str, value: Value) -> "Predicate":
        return cls(PredicateKind.EQ, column, value)

    @classmethod
    def neq(cls, column: str, value: Value) -> "Predicate":
        return cls(PredicateKind.NEQ, column, value)

    @classmethod
    def gt(cls, column: str, value: Value) -> "Predicate":
        return cls(PredicateKind.GT, column, value)

    @classmethod
    def lt(cls, column: str, value: Value) -> "Predicate":
        return cls(PredicateKind.LT, column, value)

    @classmethod
    def and_(cls, children: Sequence["Predicate"]) -> "Predicate":
        return cls(PredicateKind.AND, children=tuple(children))

    @classmethod
    def or_(cls, children: Sequence["Predicate"]) -> "Predicate":
        return cls(PredicateKind.OR, children=tuple(children))

    @classmethod
    def true_(cls) -> "Predicate":
        return cls(PredicateKind.TRUE)

    @classmethod
    def false_(cls) -> "Predicate":
        return cls(PredicateKind.FALSE)

    # -------------------------- Inspection --------------------------

    @property
    def is_comparison(self) -> bool:
        return self.kind in _COMPARISONS

    @property
    def is_connective(self) -> bool:
        return self.kind in _CONNECTIVES

    def leaves(self) -> Iterator["Predicate"]:
        """Yield every non-connective node, depth first."""
        if self.is_connective:
            for child in self.children:
                yield from child.leaves()
        else:
            yield self

    def columns(self) -> set:
        """Names of all columns referenced by the predicate."""
        return {leaf.column for leaf in self.leaves() if leaf.is_comparison}

    def depth(self) -> int:
        if not self.is_connective or not self.children:
            return 1
        return 1 + max(child.depth() for child in self.children)

    # -------------------------- Evaluation --------------------------

    def test(self, row: Sequence[Value], table: Table) -> bool:
        """Evaluate against one row of ``table``.

        A comparison involving NULL is unknown and therefore not satisfied.
        """
        if self.kind is PredicateKind.TRUE:
            return True
        if self.kind is PredicateKind.FALSE:
            return False
        if self.kind is PredicateKind.AND:
            return all(child.test(row, table) for child in self.children)
        if self.kind is PredicateKind.OR:
            return any(child.test(row, table) for child in self.children)

        cell = row[table.column_index(self.column)]
        if cell.is_null or self.value.is_null:
            return False
        if self.kind is PredicateKind.EQ:
            return cell == self.value
        if self.kind is PredicateKind.NEQ:
            return cell != self.value
        if self.kind is PredicateKind.GT:
            return cell > self.value
        return cell < self.value

    # -------------------------- Rendering --------------------------

    def to_sql(self) -> str:
        if self.is_comparison:
            return f"{self.column} {self.kind.value} {self.value.to_sql()}"
        if self.kind is PredicateKind.TRUE:
            return "TRUE"
        if self.kind is PredicateKind.FALSE:
            return "FALSE"
        if not self.children:
            return "TRUE" if self.kind is PredicateKind.AND else "FALSE"
        sep = f" {self.kind.value} "
        return "(" + sep.join(child.to_sql() for child in self.children) + ")"

    def __str__(self) -> str:
        return self.to_sql()
