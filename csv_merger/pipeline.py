from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from .config import MergeOptions
from .diagnostics import missing_key_warnings, report_warnings
from .errors import DuplicateKeyWarning, MissingKeyWarning
from .headers import validate_headers
from .indexing import build_index
from .materialize import materialize
from .merging import MergeResult, cross_reference
from .records import Dataset

logger = logging.getLogger(__name__)

MergeWarning = Union[DuplicateKeyWarning, MissingKeyWarning]


@dataclass(frozen=True)
class MergeOutcome:
    columns: List[str]
    rows: List[Dict[str, str]]
    warnings: List[MergeWarning]
    result: MergeResult

    @property
    def duplicate_warnings(self) -> List[DuplicateKeyWarning]:
        return [w for w in self.warnings if isinstance(w, DuplicateKeyWarning)]

    @property
    def missing_warnings(self) -> List[MissingKeyWarning]:
        return [w for w in self.warnings if isinstance(w, MissingKeyWarning)]


def merge_datasets(datasets: Sequence[Dataset], options: MergeOptions) -> MergeOutcome:
    """Validate, index, cross-reference and flatten `datasets`.

    Raises FatalSchemaError before doing any work if the headers cannot be
    merged on `options.key_columns`.
    """
    options.validate()
    if len(datasets) < 2:
        raise ValueError(f"At least two datasets are required to merge, got {len(datasets)}.")

    key_columns = options.key_columns
    validate_headers([d.header for d in datasets], key_columns)

    indexes = []
    warnings: List[MergeWarning] = []
    for position, dataset in enumerate(datasets):
        index, duplicates = build_index(dataset, position, key_columns, options.allow_duplicates)
        indexes.append(index)
        warnings.extend(duplicates)

    result = cross_reference(indexes)
    warnings.extend(missing_key_warnings(result))
    report_warnings(warnings)

    columns, rows = materialize(result, key_columns, options.allow_duplicates)
    logger.info("Merged %d datasets into %d rows and %d columns", len(datasets), len(rows), len(columns))
    return MergeOutcome(columns=columns, rows=rows, warnings=warnings, result=result)
