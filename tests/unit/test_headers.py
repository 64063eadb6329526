from __future__ import annotations

from datetime import datetime

from sheetdiff.engine.headers import header_labels, resolve_headers, split_dataset
from sheetdiff.models.cell import CellValue


def test_header_labels_rules():
    labels = header_labels([" Name ", None, datetime(2024, 3, 1, 15, 30), "   ", 2024.0, True])
    assert labels == ["Name", "Column 2", "2024-03-01", "Column 4", "2024", "true"]


def test_resolve_headers_prefers_original():
    original = [["id", "name"], [1, "a"]]
    updated = [["ID", "NAME"], [1, "a"]]
    assert resolve_headers(original, updated, 1) == ["id", "name"]


def test_resolve_headers_falls_back_to_updated():
    original = [["title"]]
    updated = [["title"], ["id", "qty"], [1, 2]]
    assert resolve_headers(original, updated, 2) == ["id", "qty"]


def test_resolve_headers_beyond_both_grids_is_empty():
    assert resolve_headers([["a"]], [["b"]], 3) == []


def test_split_dataset_strips_header_and_leading_rows():
    grid = [["report"], ["id", "name"], [1, "a"], [2, "b"]]
    rows = split_dataset(grid, 2)
    assert len(rows) == 2
    assert rows[0] == (CellValue.of(1), CellValue.of("a"))


def test_split_dataset_header_only_or_short_grid():
    assert split_dataset([["id"]], 1) == ()
    assert split_dataset([["id"]], 5) == ()
