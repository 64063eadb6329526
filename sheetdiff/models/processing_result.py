from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch run result models.

Aggregates per-comparison statistics of a ``run`` invocation into the figures
reported on the batch SUMMARY line.
"""


@dataclass(frozen=True)
class ComparisonStat:
    """Per-comparison outcome (one entry of the batch config)."""
    name: str  # 比較名 (config の name)
    status: str  # success/failed
    added: int = 0
    deleted: int = 0
    modified: int = 0
    unchanged: int = 0
    elapsed_seconds: float = 0.0
    report_path: str | None = None  # 出力した JSON Lines レポート
    error: str | None = None  # 失敗理由


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results of a batch run."""
    success_comparisons: int
    failed_comparisons: int
    added: int
    deleted: int
    modified: int
    unchanged: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    comparison_stats: list[ComparisonStat] | None = None

    @property
    def total_comparisons(self) -> int:
        return self.success_comparisons + self.failed_comparisons
