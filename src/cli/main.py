"""topscores CLI entry point.

This module maps ``topscores <file> <count>`` onto the pipeline and
prints the results as JSON. Fatal errors become an exit code of 1.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import sys
from typing import Sequence

from core.config import TopScoresConfig
from core.constants import RESULT_JSON_INDENT
from core.errors import TopScoresError
from core.logging_config import configure_logging
from ingest.pipeline import compute_top_scores


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="topscores",
        description="Print the highest scores recorded in a score log",
    )
    parser.add_argument("source", help="Score log file, one <score>:<json> record per line")
    parser.add_argument("count", type=_positive_count, help="Number of results to print")
    parser.add_argument(
        "--distinct-scores",
        action="store_true",
        default=None,
        help="Keep only the last record of each duplicated score",
    )
    parser.add_argument("--encoding", help="Override TOPSCORES_ENCODING for this command")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the topscores CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.encoding)
        configure_logging(config.log_level)
        results = compute_top_scores(
            args.source,
            args.count,
            config,
            distinct_scores=args.distinct_scores,
        )
    except TopScoresError as error:
        print(str(error), file=sys.stderr)
        return 1
    payload = [result.as_dict() for result in results]
    print(json.dumps(payload, indent=RESULT_JSON_INDENT))
    return 0


def _build_config(encoding: str | None) -> TopScoresConfig:
    """Build runtime config with an optional encoding override."""
    config = TopScoresConfig.from_env()
    if encoding:
        config = replace(config, encoding=encoding)
    return config


def _positive_count(raw_value: str) -> int:
    """Parse the count argument as an integer greater than zero."""
    try:
        count = int(raw_value)
    except ValueError as error:
        raise argparse.ArgumentTypeError(
            f"number of records must be a number, got '{raw_value}'"
        ) from error
    if count <= 0:
        raise argparse.ArgumentTypeError(
            f"number of records must be greater than 0, got {count}"
        )
    return count
