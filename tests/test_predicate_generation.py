"""Tests for simple, compound and row-targeted predicate generation."""

import random

import pytest

from pysimgen.core.choice import pick
from pysimgen.core.config import GenerationConfig
from pysimgen.core.errors import MalformedInput
from pysimgen.core.schema import Column, NULL, Table, Value
from pysimgen.core.types import ColumnType, FLOAT_MAX, INTEGER_MAX, INTEGER_MIN
from pysimgen.generation.predicate import (
    arbitrary_predicate,
    comparison_from_value,
    compound_predicate,
    false_predicate_for_row,
    predicate_for_row,
    produce_false_predicate,
    produce_true_predicate,
    simple_predicate,
    true_predicate_for_row,
)
from pysimgen.generation.table import arbitrary_table, populate
from pysimgen.model.predicate import PredicateKind


def _random_case(seed):
    """A random populated table and one of its rows."""
    rng = random.Random(seed)
    table = populate(rng, arbitrary_table(rng), rng.randint(1, 5))
    return rng, table, pick(table.rows, rng)


class TestSimplePredicate:
    """Test single-column predicates."""

    @pytest.mark.parametrize("outcome", [True, False])
    def test_references_existing_columns(self, mixed_table, outcome):
        names = set(mixed_table.column_names())
        for seed in range(300):
            predicate = simple_predicate(random.Random(seed), mixed_table, outcome)
            assert predicate.is_comparison
            assert predicate.column in names

    def test_deterministic_with_seed(self, int_table):
        first = simple_predicate(random.Random(1234), int_table, True)
        second = simple_predicate(random.Random(1234), int_table, True)
        assert first == second

    def test_true_uses_every_operator(self, int_table):
        kinds = {simple_predicate(random.Random(seed), int_table, True).kind for seed in range(1000)}
        assert kinds == {PredicateKind.EQ, PredicateKind.GT, PredicateKind.LT}

    def test_false_operators(self, int_table):
        kinds = {simple_predicate(random.Random(seed), int_table, False).kind for seed in range(1000)}
        assert kinds == {PredicateKind.NEQ, PredicateKind.GT, PredicateKind.LT}

    def test_true_bound_polarity(self, int_table):
        for seed in range(300):
            predicate = simple_predicate(random.Random(seed), int_table, True)
            if predicate.kind is PredicateKind.EQ:
                assert predicate.value in int_table.column_values(0)
            elif predicate.kind is PredicateKind.GT:
                assert predicate.value > Value.integer(3)
            else:
                assert predicate.value < Value.integer(1)

    def test_false_bound_polarity(self, int_table):
        for seed in range(300):
            predicate = simple_predicate(random.Random(seed), int_table, False)
            if predicate.kind is PredicateKind.GT:
                assert predicate.value < Value.integer(1)
            elif predicate.kind is PredicateKind.LT:
                assert predicate.value > Value.integer(3)

    def test_exhausted_bounds_are_avoided(self):
        table = Table("edge", [Column("x", ColumnType.INTEGER)],
                      rows=[[Value.integer(INTEGER_MAX)], [Value.integer(INTEGER_MIN)]])
        for seed in range(300):
            for outcome in (True, False):
                predicate = simple_predicate(random.Random(seed), table, outcome)
                assert predicate.kind in (PredicateKind.EQ, PredicateKind.NEQ)

    def test_empty_table(self, rng):
        table = Table("empty", [Column("x", ColumnType.TEXT)])
        for _ in range(50):
            assert simple_predicate(rng, table, True).value.type is ColumnType.TEXT

    def test_zero_columns_rejected(self, rng):
        with pytest.raises(MalformedInput):
            simple_predicate(rng, Table("none", []), True)


class TestCompoundPredicate:
    """Test AND/OR predicates over simple children."""

    @pytest.mark.parametrize("outcome", [True, False])
    def test_fanout_and_shape(self, mixed_table, outcome):
        for seed in range(300):
            predicate = compound_predicate(random.Random(seed), mixed_table, outcome)
            assert predicate.kind in (PredicateKind.AND, PredicateKind.OR)
            assert 0 <= len(predicate.children) <= 3
            assert all(child.is_comparison for child in predicate.children)

    def test_connective_bias(self, int_table):
        kinds = [compound_predicate(random.Random(seed), int_table, True).kind for seed in range(2000)]
        share = kinds.count(PredicateKind.AND) / len(kinds)
        assert 0.65 < share < 0.75

    def test_and_true_has_only_true_children(self, int_table):
        # True children are Eq / Gt / Lt; false children introduce Neq
        for seed in range(500):
            predicate = compound_predicate(random.Random(seed), int_table, True)
            if predicate.kind is PredicateKind.AND:
                assert all(c.kind is not PredicateKind.NEQ for c in predicate.children)

    def test_or_false_has_only_false_children(self, int_table):
        for seed in range(500):
            predicate = compound_predicate(random.Random(seed), int_table, False)
            if predicate.kind is PredicateKind.OR:
                assert all(c.kind is not PredicateKind.EQ for c in predicate.children)

    def test_config_knobs(self, int_table):
        config = GenerationConfig(and_probability=0.0, max_fanout=1)
        for seed in range(100):
            predicate = compound_predicate(random.Random(seed), int_table, True, config)
            assert predicate.kind is PredicateKind.OR
            assert len(predicate.children) <= 1

    @pytest.mark.parametrize("outcome", [True, False])
    def test_empty_table_does_not_fail(self, outcome):
        table = Table("empty", [Column("a", ColumnType.INTEGER), Column("b", ColumnType.BLOB)])
        for seed in range(200):
            compound_predicate(random.Random(seed), table, outcome)

    def test_zero_columns_rejected(self, rng):
        with pytest.raises(MalformedInput):
            compound_predicate(rng, Table("none", []), False)

    def test_arbitrary_predicate(self, mixed_table):
        kinds = {arbitrary_predicate(random.Random(seed), mixed_table).kind for seed in range(100)}
        assert kinds == {PredicateKind.AND, PredicateKind.OR}


class TestComparisonFromValue:
    """Test value-anchored comparisons."""

    def test_anchored(self):
        anchor = Value.integer(10)
        for seed in range(200):
            predicate = comparison_from_value(random.Random(seed), "c", anchor)
            assert predicate.column == "c"
            if predicate.kind is PredicateKind.EQ:
                assert predicate.value == anchor
            elif predicate.kind is PredicateKind.GT:
                assert predicate.value > anchor
            else:
                assert predicate.value < anchor

    def test_boundary_anchor(self):
        anchor = Value.integer(INTEGER_MAX)
        kinds = {comparison_from_value(random.Random(s), "c", anchor).kind for s in range(100)}
        assert PredicateKind.GT not in kinds


class TestRowLeaves:
    """Test single comparisons with a known truth value for a row."""

    def test_true_leaves(self, mixed_table):
        for seed in range(300):
            rng = random.Random(seed)
            row = pick(mixed_table.rows, rng)
            assert produce_true_predicate(rng, mixed_table, row).test(row, mixed_table)

    def test_false_leaves(self, mixed_table):
        for seed in range(300):
            rng = random.Random(seed)
            row = pick(mixed_table.rows, rng)
            assert not produce_false_predicate(rng, mixed_table, row).test(row, mixed_table)

    def test_null_cells_are_skipped(self, rng):
        table = Table("t", [Column("a", ColumnType.INTEGER), Column("b", ColumnType.TEXT)])
        row = [NULL, Value.text("k")]
        for _ in range(100):
            assert produce_true_predicate(rng, table, row).column == "b"

    def test_all_null_row_uses_constants(self, rng):
        table = Table("t", [Column("a", ColumnType.INTEGER)])
        assert produce_true_predicate(rng, table, [NULL]).kind is PredicateKind.TRUE
        assert produce_false_predicate(rng, table, [NULL]).kind is PredicateKind.FALSE


class TestRowTargetedSynthesis:
    """The synthesized predicate evaluates to the requested outcome on its row."""

    def test_true_for_row(self):
        for seed in range(500):
            rng, table, row = _random_case(seed)
            predicate = true_predicate_for_row(rng, table, row)
            assert predicate.test(row, table), (seed, predicate.to_sql())

    def test_false_for_row(self):
        for seed in range(500):
            rng, table, row = _random_case(seed)
            predicate = false_predicate_for_row(rng, table, row)
            assert not predicate.test(row, table), (seed, predicate.to_sql())

    @pytest.mark.parametrize("outcome", [True, False])
    def test_every_column_type(self, mixed_table, outcome):
        for seed in range(200):
            rng = random.Random(seed)
            row = pick(mixed_table.rows, rng)
            predicate = predicate_for_row(rng, mixed_table, row, outcome)
            assert predicate.test(row, mixed_table) is outcome

    @pytest.mark.parametrize("outcome", [True, False])
    def test_boundary_values(self, outcome):
        table = Table.from_list(
            "edge",
            [{"name": "i", "type": "INTEGER"}, {"name": "f", "type": "REAL"},
             {"name": "s", "type": "TEXT"}, {"name": "b", "type": "BLOB"}],
        )
        rows = [
            [Value.integer(INTEGER_MAX), Value.float_(FLOAT_MAX), Value.text(""), Value.blob(b"")],
            [Value.integer(INTEGER_MIN), Value.float_(-FLOAT_MAX), Value.text("z"), Value.blob(b"\xff")],
        ]
        for seed in range(200):
            rng = random.Random(seed)
            row = rows[seed % 2]
            assert predicate_for_row(rng, table, row, outcome).test(row, table) is outcome

    @pytest.mark.parametrize("outcome", [True, False])
    def test_rows_with_nulls(self, outcome):
        table = Table("t", [Column("a", ColumnType.INTEGER), Column("b", ColumnType.TEXT)])
        for row in ([NULL, Value.text("x")], [NULL, NULL]):
            for seed in range(100):
                predicate = predicate_for_row(random.Random(seed), table, row, outcome)
                assert predicate.test(row, table) is outcome

    def test_builds_nested_shapes(self, mixed_table):
        depths = set()
        for seed in range(200):
            rng = random.Random(seed)
            depths.add(true_predicate_for_row(rng, mixed_table, mixed_table.rows[0]).depth())
        assert max(depths) >= 3

    def test_deterministic_with_seed(self, mixed_table):
        row = mixed_table.rows[1]
        first = true_predicate_for_row(random.Random(99), mixed_table, row)
        second = true_predicate_for_row(random.Random(99), mixed_table, row)
        assert first == second

    def test_does_not_mutate_inputs(self, mixed_table):
        row = list(mixed_table.rows[0])
        snapshot = [list(r) for r in mixed_table.rows]
        false_predicate_for_row(random.Random(5), mixed_table, row)
        assert row == mixed_table.rows[0]
        assert mixed_table.rows == snapshot

    @pytest.mark.parametrize("outcome", [True, False])
    def test_duplicate_column_names_rejected(self, outcome):
        table = Table("dup", [Column("x", ColumnType.INTEGER), Column("x", ColumnType.INTEGER)],
                      rows=[[Value.integer(1), Value.integer(500)]])
        with pytest.raises(MalformedInput):
            predicate_for_row(random.Random(0), table, table.rows[0], outcome)

    @pytest.mark.parametrize("outcome", [True, False])
    def test_always_mixes_both_polarities(self, int_table, outcome):
        row = int_table.rows[1]
        for seed in range(200):
            predicate = predicate_for_row(random.Random(seed), int_table, row, outcome)
            labels = {leaf.test(row, int_table) for leaf in predicate.leaves()}
            assert labels == {True, False}, (seed, predicate.to_sql())

    def test_row_width_mismatch_rejected(self, int_table, rng):
        with pytest.raises(MalformedInput):
            true_predicate_for_row(rng, int_table, [Value.integer(1), Value.integer(2)])

    def test_zero_columns_rejected(self, rng):
        with pytest.raises(MalformedInput):
            false_predicate_for_row(rng, Table("none", []), [])
