"""
Generation Configuration.

Knobs shared by the generators, with environment overrides for use from
the simulation driver or the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

__all__ = ["GenerationConfig", "ENV_PREFIX"]

ENV_PREFIX = "PYSIMGEN_"


@dataclass
class GenerationConfig:
    """Configuration for query and predicate generation."""

    seed: Optional[int] = None

    # Relative statement frequencies (frequency mode)
    create_weight: float = 1.0
    select_weight: float = 100.0
    insert_weight: float = 100.0
    delete_weight: float = 0.0  # DELETE generation stays implemented but disabled

    # Compound predicates
    and_probability: float = 0.7
    max_fanout: int = 3

    # Inserts produce between 1 and max_insert_rows - 1 rows
    max_insert_rows: int = 10

    # Random tables
    max_columns: int = 10

    def __post_init__(self):
        self.and_probability = max(0.0, min(1.0, self.and_probability))
        self.max_fanout = max(0, self.max_fanout)
        self.max_insert_rows = max(2, self.max_insert_rows)
        self.max_columns = max(1, self.max_columns)
        for name in ("create_weight", "select_weight", "insert_weight", "delete_weight"):
            setattr(self, name, max(0.0, float(getattr(self, name))))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "GenerationConfig":
        """Build a config from PYSIMGEN_* variables; keyword overrides win."""
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.name in ("seed", "max_fanout", "max_insert_rows", "max_columns"):
                values[f.name] = int(raw)
            else:
                values[f.name] = float(raw)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
