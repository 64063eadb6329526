from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..models.cell import Row
from ..models.comparison import ChangeType, ComparisonResult, RowChange

"""Comparison report output.

Rows are exported as JSON Lines, one RowChange per line::

    {"type": "modified", "key": "A|||#2", "original_row": 2, "updated_row": 2,
     "data": {"id": "A", "qty": 9}, "changes": {"qty": {"old": 2, "new": 9}}}

Cell values are labeled with the resolved header labels (positions past the
last header use ``Column {n}``). Filtering never mutates the result.
"""

__all__ = [
    "filter_rows",
    "parse_change_types",
    "result_to_records",
    "row_change_to_record",
    "write_report",
]


def parse_change_types(text: str) -> set[ChangeType]:
    """``"added,modified"`` -> {ADDED, MODIFIED}; raises ValueError on unknown names."""
    types: set[ChangeType] = set()
    for part in text.split(","):
        name = part.strip().lower()
        if not name:
            continue
        try:
            types.add(ChangeType(name))
        except ValueError:
            valid = ", ".join(t.value for t in ChangeType)
            raise ValueError(f"unknown change type: {name!r} (valid: {valid})") from None
    return types


def filter_rows(result: ComparisonResult, types: Iterable[ChangeType] | None) -> list[RowChange]:
    """Rows whose change type is in ``types`` (None -> all rows), order kept."""
    if types is None:
        return list(result.rows)
    wanted = set(types)
    return [r for r in result.rows if r.change_type in wanted]


def _label(headers: Sequence[str], position: int) -> str:
    if position < len(headers):
        return headers[position]
    return f"Column {position + 1}"


def _unique_labels(headers: Sequence[str], width: int) -> list[str]:
    labels: list[str] = []
    seen: set[str] = set()
    for i in range(width):
        label = _label(headers, i)
        # 同名ヘッダは位置を付記して区別
        if label in seen:
            label = f"{label} ({i + 1})"
        seen.add(label)
        labels.append(label)
    return labels


def _row_values(row: Row, width: int) -> list[Any]:
    return [row[i].to_python() if i < len(row) else None for i in range(width)]


def row_change_to_record(change: RowChange, headers: Sequence[str]) -> dict[str, Any]:
    width = max(len(change.row_data), len(headers), *(p + 1 for p in (change.changes or {})))
    labels = _unique_labels(headers, width)
    record: dict[str, Any] = {
        "type": change.change_type.value,
        "key": change.key,
        "original_row": change.original_row_index,
        "updated_row": change.updated_row_index,
        "data": dict(zip(labels, _row_values(change.row_data, width))),
    }
    if change.changes:
        record["changes"] = {
            labels[pos]: {"old": c.old_value.to_python(), "new": c.new_value.to_python()}
            for pos, c in sorted(change.changes.items())
        }
    return record


def result_to_records(
    result: ComparisonResult, types: Iterable[ChangeType] | None = None
) -> list[dict[str, Any]]:
    return [row_change_to_record(r, result.headers) for r in filter_rows(result, types)]


def write_report(result: ComparisonResult, path: Path, types: Iterable[ChangeType] | None = None) -> Path:
    """Write the (optionally filtered) rows as JSON Lines and return ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for record in result_to_records(result, types):
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    return path
