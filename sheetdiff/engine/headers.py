from __future__ import annotations

from typing import Any, Sequence

from ..models.cell import CellKind, CellValue, Row, to_row

"""Header row resolution.

The header row only labels the output columns; it never takes part in row
matching. Everything up to and including the header row is stripped from the
data that gets compared.
"""

__all__ = [
    "Grid",
    "header_label",
    "header_labels",
    "resolve_headers",
    "split_dataset",
]

Grid = Sequence[Sequence[Any]]


def header_label(cell: CellValue, position: int) -> str:
    """Label of one header cell (``position`` is 0-based).

    - TIMESTAMP -> ``YYYY-MM-DD``
    - ABSENT / blank after trim -> ``Column {position + 1}``
    - otherwise the trimmed literal text
    """
    if cell.kind is CellKind.TIMESTAMP:
        return cell.value.date().isoformat()  # type: ignore[union-attr]
    text = cell.as_text().strip()
    if text == "":
        return f"Column {position + 1}"
    return text


def header_labels(row: Sequence[Any]) -> list[str]:
    return [header_label(CellValue.of(v), i) for i, v in enumerate(row)]


def resolve_headers(original_grid: Grid, updated_grid: Grid, header_row: int) -> list[str]:
    """Pick the header row from whichever side is long enough, original first."""
    if len(original_grid) >= header_row:
        return header_labels(original_grid[header_row - 1])
    if len(updated_grid) >= header_row:
        return header_labels(updated_grid[header_row - 1])
    return []


def split_dataset(grid: Grid, header_row: int) -> tuple[Row, ...]:
    """Data rows strictly below the header row, converted to CellValue rows."""
    if len(grid) <= header_row:
        return ()
    return tuple(to_row(raw) for raw in grid[header_row:])
