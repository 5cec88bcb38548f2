from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .errors import FatalSchemaError

logger = logging.getLogger(__name__)


def validate_headers(headers: Sequence[Sequence[str]], key_columns: Sequence[str]) -> None:
    """Fail unless every header has the key columns and no other column is shared.

    Dataset numbers in error messages are 1-based.
    """
    for position, header in enumerate(headers, 1):
        present = set(header)
        for column in key_columns:
            if column not in present:
                raise FatalSchemaError(
                    f"Identifying column '{column}' is missing from dataset {position}.",
                    dataset=position,
                    column=column,
                )

    keys = set(key_columns)
    owners: Dict[str, List[int]] = {}
    for position, header in enumerate(headers, 1):
        for column in header:
            if column in keys:
                continue
            owners.setdefault(column, []).append(position)

    for column, positions in owners.items():
        if len(positions) > 1:
            raise FatalSchemaError(
                f"Column '{column}' appears in datasets "
                f"{', '.join(str(p) for p in positions)} and is not an identifying column. "
                "Either add it to the identifying columns or concatenate the data instead of merging it.",
                dataset=tuple(positions),
                column=column,
            )

    logger.debug("Headers of %d datasets validated against key columns %s", len(headers), list(key_columns))
