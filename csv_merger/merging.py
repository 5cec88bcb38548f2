from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple

from .indexing import DatasetIndex, Key

logger = logging.getLogger(__name__)

Values = Tuple[str, ...]
MergedRecord = Mapping[str, Optional[Values]]


@dataclass(frozen=True)
class MergeResult:
    """Outcome of cross-referencing every dataset against every other.

    `records` maps each key to its merged record; a column that never received
    a contribution is None. `missing` holds 0-based dataset positions that lack
    the key and only contains keys with at least one such dataset.
    """

    columns: Tuple[str, ...]
    records: Mapping[Key, MergedRecord]
    missing: Mapping[Key, FrozenSet[int]]
    dataset_count: int


def union_columns(indexes: Sequence[DatasetIndex]) -> List[str]:
    columns: List[str] = []
    for index in indexes:
        columns.extend(c for c in index.columns if c not in columns)
    return columns


def contribute_fields(record: Dict[str, Optional[Values]], values: Mapping[str, List[str]]) -> None:
    for column, column_values in values.items():
        if record.get(column) is None:
            record[column] = tuple(column_values)


def cross_reference(indexes: Sequence[DatasetIndex]) -> MergeResult:
    columns = union_columns(indexes)
    records: Dict[Key, Dict[str, Optional[Values]]] = {}
    missing: Dict[Key, Set[int]] = {}

    for source in indexes:
        for target in indexes:
            if target.position == source.position:
                continue
            for key in source.buckets:
                record = records.get(key)
                if record is None:
                    record = records[key] = dict.fromkeys(columns)
                if key in target:
                    contribute_fields(record, target.values_for(key))
                else:
                    contribute_fields(record, source.values_for(key))
                    missing.setdefault(key, set()).add(target.position)

    logger.info(
        "Cross-referenced %d datasets: %d keys, %d not present everywhere",
        len(indexes), len(records), len(missing),
    )
    return MergeResult(
        columns=tuple(columns),
        records=MappingProxyType({k: MappingProxyType(v) for k, v in records.items()}),
        missing=MappingProxyType({k: frozenset(v) for k, v in missing.items()}),
        dataset_count=len(indexes),
    )
