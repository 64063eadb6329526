from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Sequence

from ..config.loader import ComparisonJobConfig, CompareConfig
from ..engine.compare import compare
from ..engine.headers import resolve_headers
from ..excel.reader import ReaderError, SheetNotFoundError, read_grid
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.comparison import ComparisonResult
from ..models.processing_result import BatchResult, ComparisonStat
from .key_columns import KeyColumnError, resolve_key_columns
from .progress import ProgressTracker
from .report import write_report

"""File level comparison and batch orchestration.

``compare_files`` is the file-to-result path shared by the CLI ``compare``
command and the batch runner: read both sheets, resolve key column labels
against the resolved headers, run the engine.

``run_all`` processes every configured comparison in order. A comparison that
fails on input (unreadable workbook, missing sheet, unknown key column) is
recorded in the error log and the run continues with the next one.
"""

__all__ = [
    "compare_files",
    "run_all",
    "run_comparison",
]

logger = logging.getLogger(__name__)


def compare_files(
    original: Path,
    updated: Path,
    *,
    sheet: str | None = None,
    updated_sheet: str | None = None,
    header_row: int = 1,
    key_columns: Sequence[int | str] | None = None,
    na_strings: Sequence[str] | None = None,
) -> ComparisonResult:
    """Read two sheets and compare them.

    Raises:
        ReaderError: workbook unreadable / sheet missing
        KeyColumnError: a key column label is not a header label
    """
    na = list(na_strings) if na_strings else None
    original_grid = read_grid(original, sheet, na)
    updated_grid = read_grid(updated, updated_sheet if updated_sheet is not None else sheet, na)
    logger.debug(
        "read original=%s (%d rows) updated=%s (%d rows)",
        original, len(original_grid), updated, len(updated_grid),
    )
    headers = resolve_headers(original_grid, updated_grid, header_row)
    key_cfg = resolve_key_columns(key_columns, headers)
    return compare(original_grid, updated_grid, key_cfg, header_row)


def _error_type(exc: Exception) -> str:
    if isinstance(exc, SheetNotFoundError):
        return "SHEET_NOT_FOUND"
    if isinstance(exc, KeyColumnError):
        return "KEY_COLUMN_NOT_FOUND"
    if isinstance(exc, OSError):
        return "REPORT_WRITE_ERROR"
    return "WORKBOOK_READ_ERROR"


def _failed_path(exc: Exception, job: ComparisonJobConfig) -> tuple[str, str]:
    if isinstance(exc, SheetNotFoundError):
        return str(exc.path), exc.sheet_name
    return str(job.original), job.sheet or ""


def run_comparison(job: ComparisonJobConfig, output_directory: Path | None = None) -> ComparisonStat:
    """Run one configured comparison and write its report.

    Raises the input errors of ``compare_files`` and OSError on report write.
    """
    start = datetime.now(UTC)
    result = compare_files(
        job.original,
        job.updated,
        sheet=job.sheet,
        updated_sheet=job.updated_sheet,
        header_row=job.header_row,
        key_columns=job.key_columns,
        na_strings=job.na_strings,
    )
    report_path: Path | None = None
    if output_directory is not None:
        report_path = write_report(result, output_directory / f"{job.name}.jsonl")
    elapsed = (datetime.now(UTC) - start).total_seconds()
    s = result.summary
    return ComparisonStat(
        name=job.name,
        status="success",
        added=s.added,
        deleted=s.deleted,
        modified=s.modified,
        unchanged=s.unchanged,
        elapsed_seconds=elapsed,
        report_path=str(report_path) if report_path is not None else None,
    )


def run_all(config: CompareConfig, error_log: ErrorLogBuffer | None = None) -> BatchResult:
    """Process all configured comparisons.

    Args:
        config: loaded batch config
        error_log: buffer for failed comparisons (a fresh one when None);
            flushed once at the end of the run

    Returns:
        BatchResult with summed change counts and per-comparison stats
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    stats: list[ComparisonStat] = []
    with ProgressTracker(len(config.comparisons), description="Comparing") as progress:
        for job in config.comparisons:
            progress.start(job.name)
            try:
                stat = run_comparison(job, config.output_directory)
            except (ReaderError, KeyColumnError, OSError) as e:
                file, sheet = _failed_path(e, job)
                error_log.append(ErrorRecord.create(job.name, file, sheet, _error_type(e), str(e)))
                logger.error(f"{job.name}: {e}")
                stat = ComparisonStat(name=job.name, status="failed", error=str(e))
            else:
                logger.info(
                    f"{job.name}: added={stat.added} deleted={stat.deleted} "
                    f"modified={stat.modified} unchanged={stat.unchanged}"
                )
            stats.append(stat)
            progress.finish(success=(stat.status == "success"))

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    ok = [s for s in stats if s.status == "success"]
    return BatchResult(
        success_comparisons=len(ok),
        failed_comparisons=len(stats) - len(ok),
        added=sum(s.added for s in ok),
        deleted=sum(s.deleted for s in ok),
        modified=sum(s.modified for s in ok),
        unchanged=sum(s.unchanged for s in ok),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        comparison_stats=stats,
    )
