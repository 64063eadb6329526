from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from ..models.cell import Row, cell_at
from ..models.comparison import MatchKey
from ..models.config_models import KeyColumnConfig

"""Match key construction.

Position mode (no key columns): the key is the 1-based row position.

Key-column mode: the key-column values are joined with ``KEY_SEPARATOR``.
Base keys occurring more than once within one side get an occurrence suffix
(``|||#1``, ``|||#2`` ... in row order) so duplicate rows pair up 1-to-1 in
order between the two sides. Keys are computed in two passes: a histogram of
base keys, then a streaming pass assigning the running ordinal.

A row whose key columns are all blank has no identifiable key. It is never
offered for matching and gets a synthesized key (``added_<n>`` on the updated
side, ``deleted_<n>`` on the original side).
"""

__all__ = [
    "KEY_SEPARATOR",
    "KeyedRow",
    "base_key",
    "build_keys",
]

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|||"


@dataclass(frozen=True)
class KeyedRow:
    key: MatchKey
    row: Row
    row_index: int  # 1-based position in its dataset
    matchable: bool = True


def base_key(row: Row, column_indexes: Sequence[int]) -> str | None:
    """Joined key-column text, or None when every key part is blank."""
    parts = [cell_at(row, i).as_text() for i in column_indexes]
    if all(p.strip() == "" for p in parts):
        return None
    return KEY_SEPARATOR.join(parts)


def build_keys(
    dataset: Sequence[Row],
    key_columns: KeyColumnConfig | None,
    *,
    unmatched_prefix: str,
) -> list[KeyedRow]:
    """Assign a MatchKey to every row of one dataset.

    Args:
        dataset: data rows of one side
        key_columns: key selection; None or empty -> position mode
        unmatched_prefix: prefix of synthesized keys for rows without an
            identifiable key ("added" / "deleted")
    """
    if key_columns is None or key_columns.is_empty:
        return [KeyedRow(key=i, row=row, row_index=i) for i, row in enumerate(dataset, start=1)]

    indexes = key_columns.column_indexes
    bases = [base_key(row, indexes) for row in dataset]

    # 1st pass: base key -> occurrence count
    occurrences = Counter(b for b in bases if b is not None)
    duplicated = {b: n for b, n in occurrences.items() if n > 1}
    if duplicated:
        logger.debug("duplicate base keys: %d (rows=%d)", len(duplicated), sum(duplicated.values()))

    # 2nd pass: running ordinal per duplicated base key
    ordinals: dict[str, int] = {}
    keyed: list[KeyedRow] = []
    for i, (row, base) in enumerate(zip(dataset, bases), start=1):
        if base is None:
            keyed.append(KeyedRow(key=f"{unmatched_prefix}_{i}", row=row, row_index=i, matchable=False))
            continue
        key = base
        if base in duplicated:
            ordinals[base] = ordinals.get(base, 0) + 1
            key = f"{base}{KEY_SEPARATOR}#{ordinals[base]}"
        keyed.append(KeyedRow(key=key, row=row, row_index=i))
    return keyed
