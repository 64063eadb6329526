from __future__ import annotations

from ..models.comparison import ComparisonSummary
from ..models.processing_result import BatchResult

"""SUMMARY line rendering.

Single comparison:
    SUMMARY added={a} deleted={d} modified={m} unchanged={u} original_rows={o} updated_rows={n}
Batch run:
    SUMMARY comparisons={t}/{t} success={s} failed={f} added={a} deleted={d}
    modified={m} unchanged={u} elapsed_sec={e}
"""

__all__ = [
    "format_seconds",
    "render_batch_summary_line",
    "render_summary_line",
]


def format_seconds(seconds: float) -> str:
    """Integral values without decimals, tiny values without scientific notation."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return str(round(seconds, 3))


def render_summary_line(summary: ComparisonSummary) -> str:
    """Render the SUMMARY line of a single comparison.

    Examples:
        >>> render_summary_line(ComparisonSummary(added=1, modified=1, unchanged=1,
        ...                                       total_original=2, total_updated=3))
        'SUMMARY added=1 deleted=0 modified=1 unchanged=1 original_rows=2 updated_rows=3'
    """
    return (
        f"SUMMARY added={summary.added} "
        f"deleted={summary.deleted} "
        f"modified={summary.modified} "
        f"unchanged={summary.unchanged} "
        f"original_rows={summary.total_original} "
        f"updated_rows={summary.total_updated}"
    )


def render_batch_summary_line(result: BatchResult) -> str:
    total = result.total_comparisons
    return (
        f"SUMMARY comparisons={total}/{total} "
        f"success={result.success_comparisons} "
        f"failed={result.failed_comparisons} "
        f"added={result.added} "
        f"deleted={result.deleted} "
        f"modified={result.modified} "
        f"unchanged={result.unchanged} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
