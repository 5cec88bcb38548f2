"""
cli.py: command-line front end for merging delimited files on shared columns.

Usage example:
  csv-merger -k Username users.csv departments.csv -o merged.csv --report missing.json

The example above will:
- Index both files on the Username column
- Union the remaining columns of both files into one row per Username
- Warn about usernames that are duplicated or not present in every file
- Save merged.csv and a JSON report of keys missing from some file
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from typing import List, Optional, Sequence

from .config import DEFAULT_DELIMITER, DEFAULT_SEPARATOR, MergeOptions
from .diagnostics import missing_key_report
from .io_utils import load_datasets, write_delimited
from .pipeline import merge_datasets

logger = logging.getLogger(__name__)


def _split_columns(values: Optional[Sequence[str]], header: Sequence[str]) -> List[str]:
    """Keep exact header names verbatim; split anything else on commas."""
    columns: List[str] = []
    for value in values or []:
        if value in header:
            columns.append(value)
        else:
            columns.extend(part for part in value.split(',') if part)
    return columns


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="csv-merger",
        description="Merge two or more delimited files on shared identifying columns.",
    )
    p.add_argument("paths", nargs="+", help="Delimited files to merge (at least two)")
    p.add_argument("-k", "--identity", action="append", required=True,
                   help="Identifying column(s). Repeat the flag or pass a comma-separated list; exact column names are used verbatim")
    p.add_argument("-d", "--delimiter", default=DEFAULT_DELIMITER, help="Input and output delimiter (default: ,)")
    p.add_argument("--separator", default=DEFAULT_SEPARATOR,
                   help="Token joining key values in the JSON report")
    p.add_argument("--allow-duplicates", action="store_true",
                   help="Keep rows with repeated identifying values instead of dropping them")
    p.add_argument("-o", "--output", help="Where to write the merged file (default: stdout)")
    p.add_argument("--report", help="Optional path for a JSON report of keys missing from some file")
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log progress details")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)

    options = MergeOptions(
        key_columns=list(args.identity),
        delimiter=args.delimiter,
        separator=args.separator,
        allow_duplicates=args.allow_duplicates,
    )

    try:
        options.validate()
        datasets = load_datasets(paths=args.paths, delimiter=options.delimiter)
        options.key_columns = _split_columns(args.identity, datasets[0].header)
        outcome = merge_datasets(datasets, options)
    except (ValueError, OSError, csv.Error) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        write_delimited(outcome.columns, outcome.rows, args.output, options.delimiter)
    else:
        write_delimited(outcome.columns, outcome.rows, sys.stdout, options.delimiter)

    if args.report:
        report = missing_key_report(outcome.result, options.separator)
        with open(args.report, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2)
        logger.info("Wrote missing-key report to %s", args.report)

    return 0


if __name__ == "__main__":
    sys.exit(main())
