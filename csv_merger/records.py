from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

Row = Mapping[str, Optional[str]]


@dataclass(frozen=True)
class Dataset:
    """Rows of one input plus its ordered header."""

    header: Tuple[str, ...]
    rows: Tuple[Row, ...]
    name: str = ''

    def __len__(self) -> int:
        return len(self.rows)


def extract_header(rows: Iterable[Mapping[str, Any]]) -> List[str]:
    """Ordered union of the column names seen across `rows`."""
    header: List[str] = []
    seen = set()
    for row in rows:
        for column in row.keys():
            if column not in seen:
                seen.add(column)
                header.append(column)
    return header


def dataset_from_rows(
    rows: Iterable[Mapping[str, Any]],
    header: Optional[Sequence[str]] = None,
    name: str = '',
) -> Dataset:
    materialized: List[Dict[str, Optional[str]]] = []
    for row in rows:
        materialized.append({
            column: (None if value is None else str(value))
            for column, value in row.items()
        })

    if header is None:
        header = extract_header(materialized)
    else:
        header = list(header)
        if len(set(header)) != len(header):
            raise ValueError(f"Dataset {name or '(unnamed)'} has repeated column names: {header}")

    return Dataset(header=tuple(header), rows=tuple(materialized), name=name)


def common_columns(headers: Sequence[Sequence[str]]) -> List[str]:
    """Columns present in every header, in the first header's order."""
    if not headers:
        return []
    shared = set(headers[0])
    for header in headers[1:]:
        shared &= set(header)
    return [column for column in headers[0] if column in shared]
