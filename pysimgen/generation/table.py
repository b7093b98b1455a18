"""
Random table and row generation.

Produces the schemas wrapped by CREATE queries and fills tables with rows
for the driver, the CLI and the tests.
"""

import logging
import random
from typing import List, Optional

from pysimgen.core.choice import frequency, pick
from pysimgen.core.config import GenerationConfig
from pysimgen.core.schema import Column, Table, Value
from pysimgen.core.types import ColumnType
from pysimgen.core.valgen import ValueGenerator

logger = logging.getLogger(__name__)

__all__ = ["random_name", "arbitrary_column_type", "arbitrary_table", "arbitrary_row", "populate"]

_ADJECTIVES = [
    "amber", "brisk", "calm", "dusty", "eager", "faint", "gentle", "hollow",
    "icy", "jolly", "keen", "lucky", "mellow", "noble", "odd", "proud",
    "quiet", "rapid", "silent", "tidy", "upbeat", "vivid", "witty", "young",
]

_NOUNS = [
    "anchor", "badger", "cactus", "dune", "ember", "falcon", "glacier", "harbor",
    "island", "jungle", "kettle", "lantern", "meadow", "nebula", "orchard", "pebble",
    "quarry", "river", "summit", "thicket", "valley", "willow", "yarrow", "zephyr",
]

# Weighted data type coverage
_TYPE_WEIGHTS = [
    (40, ColumnType.INTEGER),
    (15, ColumnType.FLOAT),
    (35, ColumnType.TEXT),
    (10, ColumnType.BLOB),
]


def random_name(rng: random.Random) -> str:
    return f"{pick(_ADJECTIVES, rng)}_{pick(_NOUNS, rng)}"


def arbitrary_column_type(rng: random.Random) -> ColumnType:
    return frequency(_TYPE_WEIGHTS, rng)


def arbitrary_table(rng: random.Random, config: Optional[GenerationConfig] = None) -> Table:
    """A table with a random name, 1..max_columns uniquely named columns and no rows."""
    config = config or GenerationConfig()
    name = random_name(rng)
    num_columns = rng.randint(1, config.max_columns)

    columns: List[Column] = []
    seen = set()
    while len(columns) < num_columns:
        col_name = random_name(rng)
        if col_name in seen:
            continue
        seen.add(col_name)
        columns.append(Column(col_name, arbitrary_column_type(rng)))

    logger.debug("Generated table %s with %d columns", name, len(columns))
    return Table(name=name, columns=columns)


def arbitrary_row(rng: random.Random, table: Table) -> List[Value]:
    """One row of arbitrary non-NULL values, one per column."""
    valgen = ValueGenerator(rng)
    return [valgen.generate(c.column_type) for c in table.columns]


def populate(rng: random.Random, table: Table, count: int) -> Table:
    """Return a copy of ``table`` with ``count`` arbitrary rows appended."""
    rows = [list(r) for r in table.rows]
    rows.extend(arbitrary_row(rng, table) for _ in range(count))
    return Table(name=table.name, columns=list(table.columns), rows=rows)
