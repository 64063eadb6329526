from __future__ import annotations

from dataclasses import dataclass

"""Comparison configuration dataclasses.

KeyColumnConfig and HeaderRowConfig are the two knobs of ``compare()``:
which columns identify a row, and which input row carries the column labels.
"""

__all__ = [
    "HeaderRowConfig",
    "KeyColumnConfig",
]


@dataclass(frozen=True)
class KeyColumnConfig:
    """Ordered key column selection.

    An empty ``column_indexes`` behaves like no selection at all (rows are then
    matched by position).
    """
    column_indexes: tuple[int, ...]  # 0-based 列位置 (順序はキー連結順)
    column_names: tuple[str, ...] = ()  # 表示用ラベル (マッチングには使わない)

    @property
    def is_empty(self) -> bool:
        return len(self.column_indexes) == 0


@dataclass(frozen=True)
class HeaderRowConfig:
    """1-based number of the row holding the column headers.

    Rows up to and including it are excluded from the compared data.
    """
    row_number: int = 1

    def __post_init__(self) -> None:
        if self.row_number < 1:
            raise ValueError(f"header row must be >= 1 (got {self.row_number})")
