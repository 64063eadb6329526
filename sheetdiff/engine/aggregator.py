from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..models.comparison import ChangeType, ComparisonSummary, RowChange

"""Summary counting and deterministic ordering of RowChange entries."""

__all__ = [
    "aggregate",
    "order_rows",
    "summarize",
]


def summarize(rows: Iterable[RowChange], total_original: int, total_updated: int) -> ComparisonSummary:
    """Count rows per change type.

    ``total_original`` / ``total_updated`` are the dataset sizes, independent of
    how the rows were classified.
    """
    counts = Counter(r.change_type for r in rows)
    return ComparisonSummary(
        added=counts[ChangeType.ADDED],
        deleted=counts[ChangeType.DELETED],
        modified=counts[ChangeType.MODIFIED],
        unchanged=counts[ChangeType.UNCHANGED],
        total_original=total_original,
        total_updated=total_updated,
    )


def order_rows(rows: Iterable[RowChange]) -> list[RowChange]:
    # sorted() は安定ソート: 同じ位置の行は出力順を維持
    return sorted(rows, key=lambda r: r.sort_index)


def aggregate(
    rows: list[RowChange], total_original: int, total_updated: int
) -> tuple[list[RowChange], ComparisonSummary]:
    return order_rows(rows), summarize(rows, total_original, total_updated)
