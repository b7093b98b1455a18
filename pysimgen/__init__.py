"""
PySimGen - Python Simulation Query Generator

Randomized, seed-reproducible queries and truth-characterized predicates
for database simulation testing.
"""

__version__ = "1.0.0"

from .core.schema import Table, Column, Value, NULL
from .core.types import ColumnType
from .model.predicate import Predicate
from .model.query import Create, Select, Insert, Delete, Remaining
from .api import SimGen, create_simgen

__all__ = [
    'Table', 'Column', 'Value', 'NULL', 'ColumnType',
    'Predicate', 'Create', 'Select', 'Insert', 'Delete', 'Remaining',
    'SimGen', 'create_simgen'
]
