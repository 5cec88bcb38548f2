from __future__ import annotations

import csv
import io
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .config import DEFAULT_DELIMITER
from .records import Dataset, dataset_from_rows

logger = logging.getLogger(__name__)


def _resolve_path(file_obj):
    if isinstance(file_obj, (str, os.PathLike)):
        return file_obj
    return file_obj.name if hasattr(file_obj, 'name') else file_obj


def _source_name(file_obj) -> str:
    path = _resolve_path(file_obj)
    if hasattr(path, 'read'):
        return '<stream>'
    return os.path.basename(str(path))


def read_delimited(file_obj, delimiter: str = DEFAULT_DELIMITER) -> Dataset:
    """Read a delimited file from an uploaded file, a file handle or a path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    name = _source_name(file_obj)
    try:
        if hasattr(file_obj, 'read'):
            if hasattr(file_obj, 'seek'):
                file_obj.seek(0)
            content = file_obj.read()
            if isinstance(content, bytes):
                content = content.decode('utf-8-sig')
            reader = csv.DictReader(io.StringIO(content), delimiter=delimiter)
            rows = list(reader)
        else:
            with open(_resolve_path(file_obj), 'r', newline='', encoding='utf-8-sig') as f:
                reader = csv.DictReader(f, delimiter=delimiter)
                rows = list(reader)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        logger.error("Failed to read delimited file %s: %s", name, exc)
        raise

    header = reader.fieldnames or []
    # Surplus cells land under a None key and have no column to merge into.
    rows = [{k: v for k, v in row.items() if k is not None} for row in rows]
    logger.info("Loaded %s: %d rows, %d columns", name, len(rows), len(header))
    return dataset_from_rows(rows, header=header, name=name)


def _cell_to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NA or value is pd.NaT:
        return None
    return str(value)


def from_records(obj, name: str = '') -> Dataset:
    """Wrap an in-memory table (DataFrame or sequence of mappings) as a Dataset."""
    if isinstance(obj, Dataset):
        return obj
    if isinstance(obj, pd.DataFrame):
        header = [str(c) for c in obj.columns]
        rows = [
            {column: _cell_to_text(value) for column, value in zip(header, values)}
            for values in obj.itertuples(index=False, name=None)
        ]
        return dataset_from_rows(rows, header=header, name=name)
    if isinstance(obj, Mapping) or isinstance(obj, (str, bytes)):
        raise ValueError(f"Unsupported in-memory dataset type: {type(obj).__name__}")

    rows = []
    for row in obj:
        if not isinstance(row, Mapping):
            raise ValueError(f"Rows of in-memory datasets must be mappings, got {type(row).__name__}")
        rows.append({str(k): _cell_to_text(v) for k, v in row.items()})
    return dataset_from_rows(rows, name=name)


def load_datasets(
    paths: Optional[Sequence[Any]] = None,
    objects: Optional[Sequence[Any]] = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> List[Dataset]:
    if paths and objects:
        raise ValueError("Pass either file paths or in-memory datasets, not both.")
    if not paths and not objects:
        raise ValueError("Provide at least two datasets to merge.")

    if paths:
        datasets = [read_delimited(p, delimiter) for p in paths]
    else:
        datasets = [from_records(obj, name=f"object {i}") for i, obj in enumerate(objects, 1)]

    if len(datasets) < 2:
        raise ValueError(f"At least two datasets are required to merge, got {len(datasets)}.")
    return datasets


def write_delimited(
    columns: Sequence[str],
    rows: Iterable[Dict[str, str]],
    path,
    delimiter: str = DEFAULT_DELIMITER,
) -> None:
    """Write rows to `path`, or to an open text handle."""
    if hasattr(path, 'write'):
        # Text streams such as stdout already translate newlines.
        writer = csv.DictWriter(path, fieldnames=list(columns), delimiter=delimiter, lineterminator='\n')
        writer.writeheader()
        writer.writerows(rows)
        return

    path = Path(path)
    try:
        with path.open('w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=list(columns), delimiter=delimiter)
            writer.writeheader()
            writer.writerows(rows)
    except OSError as exc:
        logger.error("Failed to write delimited file %s: %s", path, exc)
        raise
    logger.info("Wrote merged output to %s", path)


def to_dataframe(columns: Sequence[str], rows: Sequence[Dict[str, str]]) -> pd.DataFrame:
    return pd.DataFrame(list(rows), columns=list(columns))
