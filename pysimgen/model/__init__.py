"""Query and predicate data model"""

from .predicate import Predicate, PredicateKind
from .query import Create, Select, Insert, Delete, Query, QueryKind, Remaining

__all__ = [
    'Predicate', 'PredicateKind',
    'Create', 'Select', 'Insert', 'Delete', 'Query', 'QueryKind', 'Remaining'
]
