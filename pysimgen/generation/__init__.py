"""Generators for tables, predicates and queries"""

from .predicate import (
    simple_predicate, compound_predicate, arbitrary_predicate,
    true_predicate_for_row, false_predicate_for_row, predicate_for_row,
)
from .query import arbitrary_query, budgeted_query
from .table import arbitrary_table, populate

__all__ = [
    'simple_predicate', 'compound_predicate', 'arbitrary_predicate',
    'true_predicate_for_row', 'false_predicate_for_row', 'predicate_for_row',
    'arbitrary_query', 'budgeted_query', 'arbitrary_table', 'populate'
]
