"""
PySimGen Library API - Simple interface for query and predicate generation
"""

import dataclasses
import logging
import random
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

from pysimgen.core.config import GenerationConfig
from pysimgen.core.schema import Table, Value
from pysimgen.generation.predicate import compound_predicate, predicate_for_row
from pysimgen.generation.query import arbitrary_query, budgeted_query
from pysimgen.generation.table import arbitrary_table, populate
from pysimgen.model.predicate import Predicate
from pysimgen.model.query import Query, Remaining


__all__ = [
    "Table",
    "SimGen",
    "create_simgen",
]


class SimGen:
    """Main PySimGen API - seeded generator over a set of known tables.

    Every call draws from one ``random.Random`` seeded from the config, so
    a run is replayed by constructing a new instance with the same seed and
    issuing the same calls.
    """

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = dataclasses.replace(config) if config is not None else GenerationConfig()
        self.rng = random.Random(self.config.seed)
        self.tables: Dict[str, Table] = {}

    def reseed(self, seed: Optional[int]) -> None:
        self.config.seed = seed
        self.rng = random.Random(seed)

    def add_table(self, table: Table):
        """Add a table definition"""
        self.tables[table.name] = table

    def add_tables(self, tables: Sequence[Table]):
        """Add multiple table definitions"""
        for table in tables:
            self.add_table(table)

    def get_table(self, name: str) -> Table:
        if name not in self.tables:
            available = ", ".join(sorted(self.tables.keys())) or "(none)"
            raise ValueError(f"Table '{name}' not found. Available: {available}")
        return self.tables[name]

    def random_table(self, rows: int = 0) -> Table:
        """Generate a random table with ``rows`` arbitrary rows and register it."""
        table = populate(self.rng, arbitrary_table(self.rng, self.config), rows)
        self.add_table(table)
        logger.debug("Registered random table %s (%d rows)", table.name, rows)
        return table

    def generate_query(self, table_name: str, remaining: Optional[Remaining] = None) -> Query:
        table = self.get_table(table_name)
        if remaining is not None:
            return budgeted_query(self.rng, table, remaining, self.config)
        return arbitrary_query(self.rng, table, self.config)

    def generate_queries(
        self, table_name: str, count: int = 10, remaining: Optional[Remaining] = None
    ) -> List[Query]:
        return [self.generate_query(table_name, remaining) for _ in range(count)]

    def predicate(self, table_name: str, outcome: bool = True) -> Predicate:
        """Compound predicate over a table's column distributions."""
        return compound_predicate(self.rng, self.get_table(table_name), outcome, self.config)

    def predicate_for_row(
        self, table_name: str, row: Sequence[Value], outcome: bool = True
    ) -> Predicate:
        """Nested predicate evaluating to exactly ``outcome`` on ``row``."""
        return predicate_for_row(self.rng, self.get_table(table_name), row, outcome)


def create_simgen(seed: Optional[int] = None, **overrides) -> SimGen:
    """Factory: configuration from PYSIMGEN_* environment variables plus overrides."""
    return SimGen(GenerationConfig.from_env(seed=seed, **overrides))
