from __future__ import annotations

from ..models.cell import Row, cell_at
from ..models.comparison import CellChange, ChangeType, MatchKey, RowChange

"""Cell level diff of a matched row pair."""

__all__ = [
    "diff_cells",
    "diff_pair",
    "rows_equal",
]


def rows_equal(original: Row, updated: Row) -> bool:
    width = max(len(original), len(updated))
    return all(cell_at(original, i) == cell_at(updated, i) for i in range(width))


def diff_cells(original: Row, updated: Row) -> dict[int, CellChange]:
    """Changed column positions with their before / after values.

    Cells past the end of the shorter row count as ABSENT; equal positions are
    left out of the map.
    """
    changes: dict[int, CellChange] = {}
    for i in range(max(len(original), len(updated))):
        old_value = cell_at(original, i)
        new_value = cell_at(updated, i)
        if old_value != new_value:
            changes[i] = CellChange(old_value=old_value, new_value=new_value)
    return changes


def diff_pair(
    key: MatchKey,
    original: Row,
    original_index: int,
    updated: Row,
    updated_index: int,
) -> RowChange:
    """Classify a matched pair as UNCHANGED or MODIFIED."""
    changes = diff_cells(original, updated)
    if not changes:
        return RowChange(
            change_type=ChangeType.UNCHANGED,
            key=key,
            row_data=updated,
            original_row_index=original_index,
            updated_row_index=updated_index,
        )
    return RowChange(
        change_type=ChangeType.MODIFIED,
        key=key,
        row_data=updated,
        original_row_data=original,
        changes=changes,
        original_row_index=original_index,
        updated_row_index=updated_index,
    )
