"""
Query Generator.

Produces one statement at a time against a table, either with fixed
relative frequencies or with weights taken from the driver's remaining
operation budget.
"""

import logging
import random
from typing import Optional, Sequence

from pysimgen.core.choice import frequency, pick
from pysimgen.core.config import GenerationConfig
from pysimgen.core.schema import Table
from pysimgen.generation.predicate import arbitrary_predicate
from pysimgen.generation.table import arbitrary_row, arbitrary_table
from pysimgen.model.query import (
    Create, Delete, Insert, Query, QueryKind, Remaining, Select,
)

logger = logging.getLogger(__name__)

__all__ = [
    "create_query",
    "select_query",
    "insert_query",
    "delete_query",
    "arbitrary_query",
    "budgeted_query",
]


def create_query(rng: random.Random, config: Optional[GenerationConfig] = None) -> Create:
    return Create(table=arbitrary_table(rng, config))


def select_query(
    rng: random.Random, tables: Sequence[Table], config: Optional[GenerationConfig] = None
) -> Select:
    """SELECT from one of ``tables`` with an arbitrary compound predicate."""
    table = pick(tables, rng)
    return Select(table=table.name, predicate=arbitrary_predicate(rng, table, config))


def insert_query(
    rng: random.Random, table: Table, config: Optional[GenerationConfig] = None
) -> Insert:
    """INSERT of 1..max_insert_rows-1 rows of arbitrary values."""
    config = config or GenerationConfig()
    table.validate()
    num_rows = rng.randint(1, config.max_insert_rows - 1)
    values = tuple(tuple(arbitrary_row(rng, table)) for _ in range(num_rows))
    return Insert(table=table.name, values=values)


def delete_query(
    rng: random.Random, table: Table, config: Optional[GenerationConfig] = None
) -> Delete:
    return Delete(table=table.name, predicate=arbitrary_predicate(rng, table, config))


def _build_query(
    kind: QueryKind, rng: random.Random, table: Table, config: Optional[GenerationConfig]
) -> Query:
    if kind is QueryKind.CREATE:
        return create_query(rng, config)
    if kind is QueryKind.SELECT:
        return select_query(rng, [table], config)
    if kind is QueryKind.INSERT:
        return insert_query(rng, table, config)
    return delete_query(rng, table, config)


def arbitrary_query(
    rng: random.Random, table: Table, config: Optional[GenerationConfig] = None
) -> Query:
    """One statement chosen by the configured relative frequencies."""
    config = config or GenerationConfig()
    kind = frequency(
        [
            (config.create_weight, QueryKind.CREATE),
            (config.select_weight, QueryKind.SELECT),
            (config.insert_weight, QueryKind.INSERT),
            (config.delete_weight, QueryKind.DELETE),
        ],
        rng,
    )
    logger.debug("Generating %s query for table %s", kind.value, table.name)
    return _build_query(kind, rng, table, config)


def budgeted_query(
    rng: random.Random,
    table: Table,
    remaining: Remaining,
    config: Optional[GenerationConfig] = None,
) -> Query:
    """One statement weighted by the remaining create/read/write budget.

    DELETE is never produced in this mode.
    """
    kind = frequency(
        [
            (remaining.create, QueryKind.CREATE),
            (remaining.read, QueryKind.SELECT),
            (remaining.write, QueryKind.INSERT),
            (0.0, QueryKind.DELETE),
        ],
        rng,
    )
    logger.debug("Generating %s query for table %s with budget %s", kind.value, table.name, remaining)
    return _build_query(kind, rng, table, config)
