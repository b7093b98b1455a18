"""
PySimGen Runner

Purpose:
- Provide a simple CLI to inspect what the generators produce for a random table
- Useful for replaying a seed reported by the simulation driver

Usage examples:
  # Random schema with a few rows
  python -m pysimgen.runner table --rows 5 --seed 42

  # 20 queries by fixed frequencies
  python -m pysimgen.runner queries --count 20 --seed 7

  # Queries weighted by a remaining create/read/write budget
  python -m pysimgen.runner queries --count 20 --budget 1,50,50

  # Predicate guaranteed false for a random row
  python -m pysimgen.runner predicate --outcome false --seed 3

Notes:
- Defaults for generation knobs can be provided via PYSIMGEN_* env vars; CLI flags override them.
"""
from __future__ import annotations

import sys
import argparse
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

from pysimgen.api import SimGen, create_simgen
from pysimgen.core.errors import GenerationError
from pysimgen.model.query import Create, Insert, Remaining


def _parse_budget(raw: str) -> Remaining:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError("budget must be CREATE,READ,WRITE")
    try:
        create, read, write = (float(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid budget: {raw!r}")
    return Remaining(create=create, read=read, write=write)


def _parse_outcome(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("true", "t", "1", "yes"):
        return True
    if value in ("false", "f", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"invalid outcome: {raw!r}")


def _emit(lines: List[str], output: Optional[str]) -> None:
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            for line in lines:
                f.write(line + "\n")
        print(f"Saved {len(lines)} statements to {output}")
    else:
        for line in lines:
            print(line)


def action_table(simgen: SimGen, args: argparse.Namespace) -> int:
    table = simgen.random_table(rows=args.rows)
    lines = [Create(table=table).to_sql()]
    if table.rows:
        lines.append(Insert(table=table.name, values=tuple(tuple(r) for r in table.rows)).to_sql())
    _emit(lines, args.output)
    return 0


def action_queries(simgen: SimGen, args: argparse.Namespace) -> int:
    table = simgen.random_table(rows=args.rows)
    queries = simgen.generate_queries(table.name, count=args.count, remaining=args.budget)
    counts = {}
    for q in queries:
        counts[q.kind.value] = counts.get(q.kind.value, 0) + 1
    logger.info("Generated %d queries for %s: %s", len(queries), table.name, counts)
    _emit([Create(table=table).to_sql()] + [q.to_sql() for q in queries], args.output)
    return 0


def action_predicate(simgen: SimGen, args: argparse.Namespace) -> int:
    table = simgen.random_table(rows=max(1, args.rows))
    row = table.rows[simgen.rng.randrange(len(table.rows))]
    predicate = simgen.predicate_for_row(table.name, row, args.outcome)
    result = predicate.test(row, table)
    lines = [
        Create(table=table).to_sql(),
        "-- row: (" + ", ".join(v.to_sql() for v in row) + ")",
        f"-- expected: {args.outcome} evaluated: {result} depth: {predicate.depth()}",
        predicate.to_sql(),
    ]
    _emit(lines, args.output)
    if result != args.outcome:
        logger.error("Predicate evaluated to %s, expected %s", result, args.outcome)
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pysimgen.runner", description="PySimGen Runner")

    # Parent parser for shared arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic generation")
    parent_parser.add_argument("--rows", type=int, default=5, help="Rows to populate the random table with")
    parent_parser.add_argument("--output", default=None, help="Write statements to a file instead of stdout")
    parent_parser.add_argument("--verbose", action="store_true", help="Log generation decisions")

    subparsers = p.add_subparsers(dest="mode", required=True)

    # table
    subparsers.add_parser("table", help="Generate a random table", parents=[parent_parser])

    # queries
    parser_queries = subparsers.add_parser("queries", help="Generate queries for a random table", parents=[parent_parser])
    parser_queries.add_argument("--count", type=int, default=10, help="Number of queries to generate")
    parser_queries.add_argument("--budget", type=_parse_budget, default=None, help="Remaining budget as CREATE,READ,WRITE")
    parser_queries.add_argument("--delete-weight", type=float, default=None, help="Relative frequency of DELETE (default 0)")

    # predicate
    parser_predicate = subparsers.add_parser("predicate", help="Generate a predicate for a random row", parents=[parent_parser])
    parser_predicate.add_argument("--outcome", type=_parse_outcome, default=True, help="Required truth value (true/false)")

    return p


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    simgen = create_simgen(seed=args.seed, delete_weight=getattr(args, "delete_weight", None))

    try:
        if args.mode == "table":
            return action_table(simgen, args)
        elif args.mode == "queries":
            return action_queries(simgen, args)
        elif args.mode == "predicate":
            return action_predicate(simgen, args)
        else:  # pragma: no cover
            logger.error("Unknown mode: %s", args.mode)
            return 2
    except GenerationError as e:
        logger.error("Generation failed: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
