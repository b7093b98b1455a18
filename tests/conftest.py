"""Test configuration to ensure the local package is importable.

Adds the repository root to sys.path so `import pysimgen` works when running
tests without installing the package, and provides shared table fixtures.
"""

import os
import random
import sys

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from pysimgen.core.schema import Column, Table, Value  # noqa: E402
from pysimgen.core.types import ColumnType  # noqa: E402


@pytest.fixture
def rng():
    """A seeded random source."""
    return random.Random(42)


@pytest.fixture
def int_table():
    """One integer column x with rows [1], [2], [3]."""
    return Table(
        name="t",
        columns=[Column("x", ColumnType.INTEGER)],
        rows=[[Value.integer(1)], [Value.integer(2)], [Value.integer(3)]],
    )


@pytest.fixture
def mixed_table():
    """One column of every type, three rows."""
    return Table.from_list(
        "mixed",
        [
            {"name": "id", "type": "INTEGER"},
            {"name": "score", "type": "REAL"},
            {"name": "label", "type": "VARCHAR(20)"},
            {"name": "payload", "type": "BLOB"},
        ],
        rows=[
            [1, 0.5, "alpha", b"\x00\x01"],
            [2, -3.25, "beta", b"\xff"],
            [3, 1e6, "", b""],
        ],
    )
