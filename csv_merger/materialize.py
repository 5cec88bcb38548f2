from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .merging import MergeResult, MergedRecord


def output_columns(result: MergeResult, key_columns: Sequence[str]) -> List[str]:
    return list(key_columns) + list(result.columns)


def max_duplicate_count(record: MergedRecord) -> int:
    counts = [len(values) for values in record.values() if values is not None]
    return max(counts + [1])


def materialize(
    result: MergeResult,
    key_columns: Sequence[str],
    allow_duplicates: bool = False,
) -> Tuple[List[str], List[Dict[str, str]]]:
    """Flatten merged records into output rows.

    With `allow_duplicates` each key expands to as many rows as its longest
    bucket. Buckets of different columns are paired by position only, so row
    i does not necessarily combine values that came from one source row.
    """
    columns = output_columns(result, key_columns)
    rows: List[Dict[str, str]] = []

    for key, record in result.records.items():
        repeat = max_duplicate_count(record) if allow_duplicates else 1
        for i in range(repeat):
            row: Dict[str, str] = dict(zip(key_columns, key))
            for column in result.columns:
                values = record[column]
                row[column] = values[i] if values is not None and i < len(values) else ''
            rows.append(row)

    return columns, rows
