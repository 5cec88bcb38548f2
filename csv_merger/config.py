"""
Merge configuration.

Defaults live in this module so the CLI and the web app share them.
`CSV_MERGER_OUTPUT_DIR` overrides where the web app writes merged files.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

DEFAULT_DELIMITER: str = ","

# Only used to flatten composite keys into string labels for reports.
DEFAULT_SEPARATOR: str = "#Merge-Csv-Separator#"

OUTPUT_DIR: Path = Path(os.getenv("CSV_MERGER_OUTPUT_DIR") or tempfile.gettempdir())


def validate_key_columns(key_columns) -> List[str]:
    if key_columns is None:
        raise ValueError("Select at least one identifying column.")
    if isinstance(key_columns, str):
        key_columns = [key_columns]

    columns = list(key_columns)
    if not columns:
        raise ValueError("Select at least one identifying column.")
    for column in columns:
        if not isinstance(column, str) or not column:
            raise ValueError(f"Invalid identifying column name: {column!r}")

    seen = set()
    for column in columns:
        if column in seen:
            raise ValueError(f"Identifying column '{column}' was given more than once.")
        seen.add(column)
    return columns


@dataclass
class MergeOptions:
    key_columns: List[str] = field(default_factory=list)
    delimiter: str = DEFAULT_DELIMITER
    separator: str = DEFAULT_SEPARATOR
    allow_duplicates: bool = False

    def validate(self) -> "MergeOptions":
        self.key_columns = validate_key_columns(self.key_columns)
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {self.delimiter!r}.")
        if not isinstance(self.separator, str) or not self.separator:
            raise ValueError("Key separator must be a non-empty string.")
        self.allow_duplicates = bool(self.allow_duplicates)
        return self
