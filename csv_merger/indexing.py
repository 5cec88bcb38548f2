from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .errors import DuplicateKeyWarning
from .keys import extract_key
from .records import Dataset, Row

logger = logging.getLogger(__name__)

Key = Tuple[str, ...]


@dataclass(frozen=True)
class DatasetIndex:
    """Rows of one dataset grouped by composite key.

    `position` is 0-based; `columns` holds the non-key header in order.
    """

    position: int
    columns: Tuple[str, ...]
    buckets: Dict[Key, List[Row]]

    def __contains__(self, key: Key) -> bool:
        return key in self.buckets

    def values_for(self, key: Key) -> Dict[str, List[str]]:
        """Column -> values of every row in the key's bucket, '' for absent cells."""
        bucket = self.buckets[key]
        return {
            column: ['' if row.get(column) is None else row.get(column) for row in bucket]
            for column in self.columns
        }


def build_index(
    dataset: Dataset,
    position: int,
    key_columns: Sequence[str],
    allow_duplicates: bool = False,
) -> Tuple[DatasetIndex, List[DuplicateKeyWarning]]:
    keys = set(key_columns)
    columns = tuple(column for column in dataset.header if column not in keys)

    buckets: Dict[Key, List[Row]] = {}
    duplicates: List[DuplicateKeyWarning] = []
    for row in dataset.rows:
        key = extract_key(row, key_columns)
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = [row]
        elif allow_duplicates:
            bucket.append(row)
        else:
            duplicates.append(DuplicateKeyWarning(dataset=position + 1, key=key))

    logger.debug(
        "Dataset %d: %d rows indexed under %d keys (%d duplicates dropped)",
        position + 1, len(dataset.rows), len(buckets), len(duplicates),
    )
    return DatasetIndex(position=position, columns=columns, buckets=buckets), duplicates
