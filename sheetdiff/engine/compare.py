from __future__ import annotations

import logging

from ..models.comparison import ComparisonResult
from ..models.config_models import HeaderRowConfig, KeyColumnConfig
from .aggregator import aggregate
from .headers import Grid, resolve_headers, split_dataset
from .keys import build_keys
from .matcher import match_rows

"""Comparison entry point.

Pipeline: header resolution -> key building (both sides) -> row matching and
cell diff -> summary / ordering. Pure and synchronous; no I/O.
"""

__all__ = [
    "compare",
]

logger = logging.getLogger(__name__)


def compare(
    original_grid: Grid,
    updated_grid: Grid,
    key_columns: KeyColumnConfig | None = None,
    header_row: HeaderRowConfig | int = 1,
) -> ComparisonResult:
    """Compare two raw sheet grids.

    Args:
        original_grid: rows of the original sheet, header rows included. Cells
            may be raw Python / pandas values or CellValue instances.
        updated_grid: rows of the updated sheet, same layout.
        key_columns: key column selection; None (or empty) matches rows by
            position.
        header_row: 1-based header row number (or HeaderRowConfig).

    Returns:
        ComparisonResult with header labels, ordered RowChange list and summary.
        Never raises for well-formed grids.
    """
    if isinstance(header_row, int):
        header_row = HeaderRowConfig(header_row)
    row_number = header_row.row_number

    if len(original_grid) == 0 and len(updated_grid) == 0:
        return ComparisonResult.empty()

    headers = resolve_headers(original_grid, updated_grid, row_number)
    original_rows = split_dataset(original_grid, row_number)
    updated_rows = split_dataset(updated_grid, row_number)

    mode = "position" if key_columns is None or key_columns.is_empty else f"key{list(key_columns.column_indexes)}"
    logger.debug(
        "compare mode=%s header_row=%d original_rows=%d updated_rows=%d",
        mode, row_number, len(original_rows), len(updated_rows),
    )

    original_keyed = build_keys(original_rows, key_columns, unmatched_prefix="deleted")
    updated_keyed = build_keys(updated_rows, key_columns, unmatched_prefix="added")
    changes = match_rows(original_keyed, updated_keyed)
    rows, summary = aggregate(changes, len(original_rows), len(updated_rows))
    return ComparisonResult(headers=headers, rows=rows, summary=summary)
