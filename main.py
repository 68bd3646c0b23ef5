"""
main.py
-------
Command-line entry point: run one query against the configured database.

Usage:
    python main.py "SELECT * FROM users WHERE id = %s" --param 42

Responsibilities:
    - Initialize the shared connection pool from the environment.
    - Execute the query and print the result set.
    - Close the pool on the way out.
"""

import argparse
import sys
from typing import Optional, Sequence

import psycopg2

from db.connection import close_pool, init_pool, query
from models.query_result import QueryResult
from utils.logger import get_logger

logger = get_logger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a SQL statement on the configured PostgreSQL database.")
    parser.add_argument("sql", help="Statement to run, with %%s placeholders.")
    parser.add_argument(
        "-p", "--param",
        dest="params",
        action="append",
        default=[],
        help="Positional parameter value (repeat for each placeholder).",
    )
    return parser.parse_args(argv)


def format_result(result: QueryResult) -> str:
    """Render a result set as tab-separated lines, header first."""
    if not result.columns:
        return result.status or ""
    lines = ["\t".join(result.columns)]
    lines.extend("\t".join(str(value) for value in row) for row in result.rows)
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the query given on the command line. Returns the exit code."""
    args = _parse_args(argv)

    try:
        init_pool()
        result = query(args.sql, args.params)
    except psycopg2.Error as e:
        logger.error(f"Query could not be executed: {e}")
        return 1
    finally:
        close_pool()

    print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
