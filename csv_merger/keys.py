from __future__ import annotations

from typing import Any, Mapping, Sequence, Tuple

KEY_DISPLAY_SEPARATOR = ", "


def normalize_key_component(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def extract_key(row: Mapping[str, Any], key_columns: Sequence[str]) -> Tuple[str, ...]:
    """Build the composite key of a row; absent values become ''."""
    return tuple(normalize_key_component(row.get(column)) for column in key_columns)


def format_key(key: Sequence[str]) -> str:
    return KEY_DISPLAY_SEPARATOR.join(key)


def encode_key(key: Sequence[str], separator: str) -> str:
    """Flatten a composite key into one string label.

    Only used where a string is required (JSON object keys). Lookups always
    go through the tuple, so a value containing `separator` cannot collide.
    """
    if not separator:
        raise ValueError("Key separator must be a non-empty string.")
    return separator.join(key)

