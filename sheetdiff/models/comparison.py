from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from .cell import CellValue, Row

"""Comparison result models.

RowChange is the output unit of the comparison engine; ComparisonResult bundles
header labels, the ordered RowChange list and the summary counters.
All models are frozen and created once per ``compare()`` call.
"""

__all__ = [
    "CellChange",
    "ChangeType",
    "ComparisonResult",
    "ComparisonSummary",
    "MatchKey",
    "RowChange",
]

# key-column mode -> str, position mode -> 1-based int
MatchKey: TypeAlias = str | int


class ChangeType(Enum):
    """Classification of one output row.

    - ADDED: row only exists in the updated sheet
    - DELETED: row only exists in the original sheet
    - MODIFIED: matched pair with at least one differing cell
    - UNCHANGED: matched pair with identical cells
    """
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class CellChange:
    old_value: CellValue
    new_value: CellValue


@dataclass(frozen=True)
class RowChange:
    """One classified row plus its data and provenance indices.

    ``row_data`` holds the updated-side row when the row exists there, otherwise
    the original-side row. ``original_row_data`` and ``changes`` are only set for
    MODIFIED rows.
    """
    change_type: ChangeType
    key: MatchKey
    row_data: Row
    original_row_data: Row | None = None
    changes: dict[int, CellChange] | None = None  # 列位置 (0-based) -> 変更前後
    original_row_index: int | None = None  # 1-based, original 側に存在しない場合 None
    updated_row_index: int | None = None  # 1-based, updated 側に存在しない場合 None

    @property
    def sort_index(self) -> int:
        """Ordering position: original index when present, else updated index."""
        if self.original_row_index is not None:
            return self.original_row_index
        if self.updated_row_index is not None:
            return self.updated_row_index
        raise ValueError(f"row change {self.key!r} has no row index")


@dataclass(frozen=True)
class ComparisonSummary:
    added: int = 0
    deleted: int = 0
    modified: int = 0
    unchanged: int = 0
    total_original: int = 0  # original 側データ行数 (マッチ結果に依らない)
    total_updated: int = 0  # updated 側データ行数

    def count(self, change_type: ChangeType) -> int:
        return getattr(self, change_type.value)


@dataclass(frozen=True)
class ComparisonResult:
    headers: list[str]
    rows: list[RowChange]
    summary: ComparisonSummary

    @staticmethod
    def empty() -> ComparisonResult:
        return ComparisonResult(headers=[], rows=[], summary=ComparisonSummary())

    @property
    def has_differences(self) -> bool:
        s = self.summary
        return (s.added + s.deleted + s.modified) > 0
