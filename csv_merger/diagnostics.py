from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from .errors import DuplicateKeyWarning, MissingKeyWarning
from .keys import encode_key
from .merging import MergeResult

logger = logging.getLogger(__name__)


def missing_key_warnings(result: MergeResult) -> List[MissingKeyWarning]:
    """One warning per key absent from at least one dataset, indices 1-based."""
    warnings: List[MissingKeyWarning] = []
    for key, absent in result.missing.items():
        missing_from = tuple(sorted(p + 1 for p in absent))
        found_in = tuple(
            p + 1 for p in range(result.dataset_count) if p not in absent
        )
        warnings.append(MissingKeyWarning(key=key, found_in=found_in, missing_from=missing_from))
    return warnings


def report_warnings(warnings: Iterable[DuplicateKeyWarning | MissingKeyWarning]) -> int:
    count = 0
    for warning in warnings:
        logger.warning(warning.message)
        count += 1
    return count


def missing_key_report(result: MergeResult, separator: str) -> Dict[str, Dict[str, Any]]:
    report: Dict[str, Dict[str, Any]] = {}
    for warning in missing_key_warnings(result):
        report[encode_key(warning.key, separator)] = {
            'found_in': list(warning.found_in),
            'missing_from': list(warning.missing_from),
        }
    return report
