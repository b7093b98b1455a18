"""
Predicate Generators.

Three flavours of generated predicates:

- simple predicates: one comparison on a random column, whose operator and
  bound polarity follow a requested outcome relative to the column's
  observed values;
- compound predicates: an AND/OR of simple predicates whose child outcomes
  satisfy boolean algebra for the requested aggregate outcome;
- row-targeted predicates: arbitrarily nested predicates that evaluate to
  exactly the requested outcome on one concrete row.

Candidate branches are enum tags; a single dispatch function builds the one
that was chosen, so only the selected branch consumes randomness.
"""

import enum
import logging
import random
from typing import List, Optional, Sequence, Tuple

from pysimgen.core.choice import frequency, one_of, pick, pick_index
from pysimgen.core.config import GenerationConfig
from pysimgen.core.schema import Table, Value
from pysimgen.core.valgen import ValueGenerator
from pysimgen.model.predicate import Predicate, PredicateKind

logger = logging.getLogger(__name__)

__all__ = [
    "SimpleKind",
    "RowLeafKind",
    "FoldRule",
    "simple_predicate",
    "compound_predicate",
    "arbitrary_predicate",
    "comparison_from_value",
    "produce_true_predicate",
    "produce_false_predicate",
    "true_predicate_for_row",
    "false_predicate_for_row",
    "predicate_for_row",
]


class SimpleKind(enum.Enum):
    # outcome = true
    EQ_OBSERVED = "eq_observed"
    GT_ABOVE_ALL = "gt_above_all"
    LT_BELOW_ALL = "lt_below_all"
    # outcome = false
    NEQ_ARBITRARY = "neq_arbitrary"
    GT_BELOW_ALL = "gt_below_all"
    LT_ABOVE_ALL = "lt_above_all"


class RowLeafKind(enum.Enum):
    # true for the row
    EQ_VALUE = "eq_value"
    NEQ_OTHER = "neq_other"
    GT_LESSER = "gt_lesser"
    LT_GREATER = "lt_greater"
    # false for the row
    NEQ_VALUE = "neq_value"
    EQ_OTHER = "eq_other"
    GT_GREATER = "gt_greater"
    LT_LESSER = "lt_lesser"


class FoldRule(enum.Enum):
    """Ways to merge a window of labelled predicates into the accumulator.

    Written for a true accumulator; the false synthesizer uses the dual
    (AND and OR swapped, TRUE replaced by FALSE).
    """
    OR_ANY = "acc OR (OR window)"
    OR_ALL = "acc OR (AND window)"
    AND_SATISFIED = "acc AND (window made true)"


# ----------------------------------------------------------------------------
# Simple predicates
# ----------------------------------------------------------------------------

def _can_exceed(valgen: ValueGenerator, values: Sequence[Value]) -> bool:
    observed = [v for v in values if not v.is_null]
    return not observed or valgen.has_greater(max(observed))


def _can_undercut(valgen: ValueGenerator, values: Sequence[Value]) -> bool:
    observed = [v for v in values if not v.is_null]
    return not observed or valgen.has_lesser(min(observed))


def _build_simple(kind: SimpleKind, valgen: ValueGenerator, column, values) -> Predicate:
    name, ctype = column.name, column.column_type
    if kind is SimpleKind.EQ_OBSERVED:
        return Predicate.eq(name, valgen.generate_from(values, ctype))
    if kind is SimpleKind.GT_ABOVE_ALL:
        return Predicate.gt(name, valgen.greater_than_all(values, ctype))
    if kind is SimpleKind.LT_BELOW_ALL:
        return Predicate.lt(name, valgen.less_than_all(values, ctype))
    if kind is SimpleKind.NEQ_ARBITRARY:
        return Predicate.neq(name, valgen.generate(ctype))
    if kind is SimpleKind.GT_BELOW_ALL:
        return Predicate.gt(name, valgen.less_than_all(values, ctype))
    return Predicate.lt(name, valgen.greater_than_all(values, ctype))


def simple_predicate(rng: random.Random, table: Table, outcome: bool) -> Predicate:
    """A single comparison on a random column of ``table``.

    The outcome selects the operator/bound polarity relative to the
    column's observed values; it is a column-level label, not a guarantee
    for any particular row.
    """
    table.validate()
    valgen = ValueGenerator(rng)

    index = pick_index(len(table.columns), rng)
    column = table.columns[index]
    values = table.column_values(index)

    exceed = int(_can_exceed(valgen, values))
    undercut = int(_can_undercut(valgen, values))
    if outcome:
        candidates = [
            (1, SimpleKind.EQ_OBSERVED),
            (exceed, SimpleKind.GT_ABOVE_ALL),
            (undercut, SimpleKind.LT_BELOW_ALL),
        ]
    else:
        candidates = [
            (1, SimpleKind.NEQ_ARBITRARY),
            (undercut, SimpleKind.GT_BELOW_ALL),
            (exceed, SimpleKind.LT_ABOVE_ALL),
        ]
    kind = frequency(candidates, rng)
    return _build_simple(kind, valgen, column, values)


# ----------------------------------------------------------------------------
# Compound predicates
# ----------------------------------------------------------------------------

def _outcome_labels(rng: random.Random, count: int, required: bool) -> List[bool]:
    """Random child outcomes with at least one equal to ``required``."""
    labels = [rng.random() < 0.5 for _ in range(count)]
    if labels and required not in labels:
        labels[rng.randrange(len(labels))] = required
    return labels


def compound_predicate(
    rng: random.Random,
    table: Table,
    outcome: bool,
    config: Optional[GenerationConfig] = None,
) -> Predicate:
    """An AND or OR of 0..max_fanout simple predicates with aggregate ``outcome``."""
    config = config or GenerationConfig()
    table.validate()

    if rng.random() < config.and_probability:
        # AND is true when every child is, false when at least one child is false
        count = rng.randint(0, config.max_fanout)
        if outcome:
            labels = [True] * count
        else:
            labels = _outcome_labels(rng, count, False)
        logger.debug("AND of %d children for outcome %s: %s", count, outcome, labels)
        return Predicate.and_([simple_predicate(rng, table, b) for b in labels])

    # OR is true when at least one child is, false when every child is false
    count = rng.randint(0, config.max_fanout)
    if outcome:
        labels = _outcome_labels(rng, count, True)
    else:
        labels = [False] * count
    logger.debug("OR of %d children for outcome %s: %s", count, outcome, labels)
    return Predicate.or_([simple_predicate(rng, table, b) for b in labels])


def arbitrary_predicate(
    rng: random.Random, table: Table, config: Optional[GenerationConfig] = None
) -> Predicate:
    """Compound predicate with a fair-coin outcome, as used by SELECT and DELETE."""
    outcome = rng.random() < 0.5
    return compound_predicate(rng, table, outcome, config)


def comparison_from_value(rng: random.Random, column_name: str, value: Value) -> Predicate:
    """Eq, Gt or Lt on ``column_name`` anchored at ``value``."""
    valgen = ValueGenerator(rng)
    kind = frequency(
        [
            (1, PredicateKind.EQ),
            (int(valgen.has_greater(value)), PredicateKind.GT),
            (int(valgen.has_lesser(value)), PredicateKind.LT),
        ],
        rng,
    )
    if kind is PredicateKind.EQ:
        return Predicate.eq(column_name, value)
    if kind is PredicateKind.GT:
        return Predicate.gt(column_name, valgen.greater_than(value))
    return Predicate.lt(column_name, valgen.less_than(value))


# ----------------------------------------------------------------------------
# Row-targeted predicates
# ----------------------------------------------------------------------------

def _build_row_leaf(kind: RowLeafKind, valgen: ValueGenerator, name: str, value: Value) -> Predicate:
    if kind is RowLeafKind.EQ_VALUE:
        return Predicate.eq(name, value)
    if kind is RowLeafKind.NEQ_OTHER:
        return Predicate.neq(name, valgen.different_from(value))
    if kind is RowLeafKind.GT_LESSER:
        return Predicate.gt(name, valgen.less_than(value))
    if kind is RowLeafKind.LT_GREATER:
        return Predicate.lt(name, valgen.greater_than(value))
    if kind is RowLeafKind.NEQ_VALUE:
        return Predicate.neq(name, value)
    if kind is RowLeafKind.EQ_OTHER:
        return Predicate.eq(name, valgen.different_from(value))
    if kind is RowLeafKind.GT_GREATER:
        return Predicate.gt(name, valgen.greater_than(value))
    return Predicate.lt(name, valgen.less_than(value))


def _produce_row_leaf(rng: random.Random, table: Table, row: Sequence[Value], outcome: bool) -> Predicate:
    # NULL cells make every comparison unknown, so only non-NULL cells are usable
    usable = [i for i, v in enumerate(row) if not v.is_null]
    if not usable:
        logger.warning("Row of table %s holds only NULLs, using a constant leaf", table.name)
        return Predicate.true_() if outcome else Predicate.false_()

    index = pick(usable, rng)
    name, value = table.columns[index].name, row[index]
    valgen = ValueGenerator(rng)
    greater = int(valgen.has_greater(value))
    lesser = int(valgen.has_lesser(value))
    other = int(greater or lesser)

    if outcome:
        candidates = [
            (1, RowLeafKind.EQ_VALUE),
            (other, RowLeafKind.NEQ_OTHER),
            (lesser, RowLeafKind.GT_LESSER),
            (greater, RowLeafKind.LT_GREATER),
        ]
    else:
        candidates = [
            (1, RowLeafKind.NEQ_VALUE),
            (other, RowLeafKind.EQ_OTHER),
            (greater, RowLeafKind.GT_GREATER),
            (lesser, RowLeafKind.LT_LESSER),
        ]
    kind = frequency(candidates, rng)
    return _build_row_leaf(kind, valgen, name, value)


def produce_true_predicate(rng: random.Random, table: Table, row: Sequence[Value]) -> Predicate:
    """A single comparison that is true for ``row``."""
    return _produce_row_leaf(rng, table, row, True)


def produce_false_predicate(rng: random.Random, table: Table, row: Sequence[Value]) -> Predicate:
    """A single comparison that is false for ``row``."""
    return _produce_row_leaf(rng, table, row, False)


def _fold(
    rule: FoldRule,
    outcome: bool,
    accumulator: Predicate,
    window: List[Tuple[bool, Predicate]],
) -> Predicate:
    # For a true accumulator OR absorbs and AND must be fed something true.
    # For a false one the roles of AND and OR are swapped.
    absorbing = Predicate.or_ if outcome else Predicate.and_
    preserving = Predicate.and_ if outcome else Predicate.or_
    constant = Predicate.true_ if outcome else Predicate.false_

    predicates = [p for _, p in window]
    if rule is FoldRule.OR_ANY:
        return absorbing([accumulator, absorbing(predicates)])
    if rule is FoldRule.OR_ALL:
        return absorbing([accumulator, preserving(predicates)])

    if all(label == outcome for label, _ in window):
        side = preserving(predicates)
    elif any(label == outcome for label, _ in window):
        side = absorbing(predicates)
    else:
        side = absorbing(predicates + [constant()])
    return preserving([accumulator, side])


def predicate_for_row(rng: random.Random, table: Table, row: Sequence[Value], outcome: bool) -> Predicate:
    """A nested predicate that evaluates to exactly ``outcome`` on ``row``.

    Leaves of both polarities are folded one window at a time into an
    accumulator that starts with a leaf of the requested polarity; every
    fold rule keeps the accumulator's value, so the result holds no matter
    which random choices were made.
    """
    table.validate()
    table.validate_row(row)

    matching = [_produce_row_leaf(rng, table, row, outcome) for _ in range(rng.randint(1, 4))]
    opposing = [_produce_row_leaf(rng, table, row, not outcome) for _ in range(rng.randint(1, 4))]

    result = matching.pop()
    pending = [(outcome, p) for p in matching] + [(not outcome, p) for p in opposing]
    rng.shuffle(pending)

    while pending:
        size = rng.randint(0, min(3, len(pending)))
        window, pending = pending[:size], pending[size:]
        rule = one_of(list(FoldRule), rng)
        logger.debug("Folding %d predicates with %s", len(window), rule.value)
        result = _fold(rule, outcome, result, window)

    return result


def true_predicate_for_row(rng: random.Random, table: Table, row: Sequence[Value]) -> Predicate:
    """A predicate guaranteed true for ``row``."""
    return predicate_for_row(rng, table, row, True)


def false_predicate_for_row(rng: random.Random, table: Table, row: Sequence[Value]) -> Predicate:
    """A predicate guaranteed false for ``row``."""
    return predicate_for_row(rng, table, row, False)
