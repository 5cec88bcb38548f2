from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .keys import format_key


class FatalSchemaError(ValueError):
    """Headers cannot be merged; nothing is produced."""

    def __init__(self, message: str, dataset=None, column: str | None = None):
        super().__init__(message)
        self.dataset = dataset
        self.column = column


@dataclass(frozen=True)
class DuplicateKeyWarning:
    dataset: int
    key: Tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Duplicate identifying entry found in dataset {self.dataset}: {format_key(self.key)}"


@dataclass(frozen=True)
class MissingKeyWarning:
    key: Tuple[str, ...]
    found_in: Tuple[int, ...]
    missing_from: Tuple[int, ...]

    @property
    def message(self) -> str:
        found = ", ".join(str(i) for i in self.found_in)
        missing = ", ".join(str(i) for i in self.missing_from)
        return (
            f"Identifying entry '{format_key(self.key)}' was not found in all datasets. "
            f"Found in dataset(s): {found}. Missing from: {missing}."
        )
