from __future__ import annotations

from typing import Sequence

from ..models.config_models import KeyColumnConfig

"""Key column selection by header label or position.

Users name key columns the way they see them (header labels) or by 0-based
position. Labels are resolved against the comparison's resolved headers; the
first column carrying the label wins.
"""

__all__ = [
    "KeyColumnError",
    "parse_key_token",
    "resolve_key_columns",
]


class KeyColumnError(ValueError):
    """Raised when a key column label is not among the header labels."""


def parse_key_token(token: str) -> int | str:
    """CLI helper: ``"3"`` -> 3 (position), anything else stays a label."""
    stripped = token.strip()
    if stripped.isdigit():
        return int(stripped)
    return stripped


def resolve_key_columns(spec: Sequence[int | str] | None, headers: Sequence[str]) -> KeyColumnConfig | None:
    """Turn a mixed label / position list into a KeyColumnConfig.

    Returns None for an empty selection (position mode). Positions are kept
    as given, even past the last header: they read as empty cells downstream.
    """
    if not spec:
        return None
    indexes: list[int] = []
    names: list[str] = []
    for item in spec:
        if isinstance(item, int):
            indexes.append(item)
            names.append(headers[item] if 0 <= item < len(headers) else f"Column {item + 1}")
            continue
        label = str(item).strip()
        try:
            position = list(headers).index(label)
        except ValueError:
            raise KeyColumnError(f"key column not found: {label!r} (headers: {list(headers)})") from None
        indexes.append(position)
        names.append(label)
    return KeyColumnConfig(column_indexes=tuple(indexes), column_names=tuple(names))
