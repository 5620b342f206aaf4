"""Command-line interface for php-modfather."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from modfather.pipeline import ANALYSIS_TYPES, OUTPUT_FORMATS, run


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="php-modfather",
        description="Analyze PHP monoliths and generate dependency graphs.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Directories or files containing PHP code to analyze",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-n",
        "--graph-name",
        default=None,
        help="Name of the DOT graph (default: from composer.json, else php_dependencies)",
    )
    parser.add_argument(
        "-t",
        "--analysis-type",
        choices=ANALYSIS_TYPES,
        default="class",
        help="Granularity of the graph, or 'recommend' for a modularization report",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="dot",
        dest="output_format",
        help="Graph output format (ignored for 'recommend')",
    )
    parser.add_argument(
        "--include-external",
        action="store_true",
        default=None,
        help="Include classes referenced but not defined in the analyzed code",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory name to skip (repeatable; vendor/ is always skipped)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("modfather").setLevel(logging.DEBUG)

    text = run(
        args.paths,
        output=args.output,
        graph_name=args.graph_name,
        analysis_type=args.analysis_type,
        output_format=args.output_format,
        include_external=args.include_external,
        exclude=args.exclude,
    )
    if args.output is None:
        sys.stdout.write(text)
