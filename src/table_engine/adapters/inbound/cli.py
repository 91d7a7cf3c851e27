"""Command-line demo for the table engine.

Builds two small sample tables and prints a fixed sequence of query
results: full scans, projections, range filters, a left join (alone and
followed by a projection) and LIKE filters.

Usage:
    table-engine [--log-level LEVEL] [--log-format {json,console}] [--margin N]
    python -m table_engine
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence, TextIO

from table_engine.application import TableEngine
from table_engine.domain.entities import Table, TableError
from table_engine.domain.value_objects import ValueKind
from table_engine.infrastructure.config import Config, get_config
from table_engine.infrastructure.logging import get_logger, setup_logging
from table_engine.infrastructure.tracing import setup_tracing

FRUITS = [
    (1, "apple", 50),
    (2, "banana", 100),
    (3, "citrus", None),
    (4, "dorian", 256),
    (5, "elderberries", 512),
    (6, "figs", 1024),
    (7, "grapefruit", 2048),
    (8, "honeydew melon", 4096),
]

DATES = [
    (1, "2019/12/20"),
    (2, "2019/12/21"),
    (3, "2019/12/22"),
    (4, "2019/12/23"),
    (8, "2019/12/27"),
    (13, "2020/01/01"),
]


def load_sample_tables(engine: TableEngine) -> None:
    """Create and fill ``table1`` (fruits) and ``table2`` (dates)."""
    engine.create_table(
        "table1",
        [("id", ValueKind.INTEGER), ("name", ValueKind.TEXT), ("price", ValueKind.INTEGER)],
    )
    for fruit_id, name, price in FRUITS:
        engine.insert("table1", [("id", fruit_id), ("name", name), ("price", price)])

    engine.create_table("table2", [("id", ValueKind.INTEGER), ("date", ValueKind.TEXT)])
    for fruit_id, date in DATES:
        engine.insert("table2", [("id", fruit_id), ("date", date)])


def run_demo(engine: TableEngine, out: TextIO) -> None:
    """Print the demo query sequence to ``out``."""

    def section(title: str) -> None:
        out.write(f"\n====[ {title} ]====\n")

    def show(table: Table) -> None:
        out.write(engine.render(table))

    section("table1 ALL")
    show(engine.get_table("table1"))

    section("table1 SELECT")
    show(engine.select("table1", ["name"]))
    show(engine.select("table1", ["name", "price"]))

    section("table1 WHERE <")
    show(engine.less_than("table1", "id", 10))
    show(engine.less_than("table1", "price", 250))

    section("table2 ALL")
    show(engine.get_table("table2"))

    section("table1:table2 LEFT JOIN")
    show(engine.left_join("table1", "table2", "id"))

    section("table1:table2 LEFT JOIN => SELECT")
    show(engine.select(engine.left_join("table1", "table2", "id"), ["name", "date"]))

    section("table1 WHERE LIKE")
    for pattern in ("apple", "______", "%s", "%ri%"):
        show(engine.like("table1", "name", pattern))


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="table-engine",
        description="Run the in-memory table engine demo queries.",
    )
    parser.add_argument(
        "--log-level",
        default=config.observability.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-format",
        default=config.observability.log_format,
        choices=["json", "console"],
    )
    parser.add_argument(
        "--margin",
        default=config.render.margin,
        type=int,
        help="spaces before each grid line",
    )
    return parser


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """Entry point. Returns the process exit code."""
    base = get_config()
    parser = build_parser(base)
    args = parser.parse_args(argv)
    if not 0 <= args.margin <= 8:
        parser.error(f"--margin must be between 0 and 8, got {args.margin}")

    config = base.model_copy(
        update={
            "render": base.render.model_copy(update={"margin": args.margin}),
            "observability": base.observability.model_copy(
                update={"log_level": args.log_level, "log_format": args.log_format}
            ),
        }
    )

    setup_logging(config.observability)
    tracer = setup_tracing(config.observability)

    logger = get_logger(__name__)
    engine = TableEngine(config=config, tracer=tracer)
    try:
        load_sample_tables(engine)
        run_demo(engine, out or sys.stdout)
    except TableError as e:
        logger.error("demo_failed", error=str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
