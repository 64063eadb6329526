from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sheetdiff.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from sheetdiff.excel.reader import ReaderError, list_sheets, read_headers
from sheetdiff.logging.init import enable_debug, log_summary, setup_logging
from sheetdiff.models.cell import CellValue
from sheetdiff.models.comparison import ChangeType, ComparisonResult, RowChange
from sheetdiff.services.key_columns import KeyColumnError, parse_key_token
from sheetdiff.services.report import filter_rows, parse_change_types, write_report
from sheetdiff.services.runner import compare_files, run_all
from sheetdiff.services.summary import render_batch_summary_line, render_summary_line

"""CLI entrypoint.

Commands:
- compare ORIGINAL UPDATED : compare one sheet pair, print changed rows + SUMMARY
- sheets FILE              : list sheet names
- headers FILE             : list column labels of the header row
- run                      : batch mode driven by config/compare.yml

Exit codes: 0 success, 1 fatal (input / config error), 2 partial batch failure.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_SHOW_ROWS = 20


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {text}")
    return value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheetdiff", description="Compare two versions of a spreadsheet sheet")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("compare", help="Compare two sheets")
    c.add_argument("original", type=Path, help="Original workbook (.xlsx/.csv)")
    c.add_argument("updated", type=Path, help="Updated workbook (.xlsx/.csv)")
    c.add_argument("--sheet", help="Sheet name (default: first sheet)")
    c.add_argument("--updated-sheet", help="Sheet name in the updated workbook (default: --sheet)")
    c.add_argument("--header-row", type=_positive_int, default=1, help="1-based header row number")
    c.add_argument(
        "--key", action="append", default=[], metavar="COLUMN",
        help="Key column label or 0-based position (repeatable); rows are matched by position when omitted",
    )
    c.add_argument("--only", help="Comma separated change types to show/export (added,deleted,modified,unchanged)")
    c.add_argument("--output", type=Path, help="Write rows as JSON Lines to this path")
    c.add_argument("--show", type=int, default=DEFAULT_SHOW_ROWS, help="Max changed rows to print (0: none)")

    s = sub.add_parser("sheets", help="List sheet names")
    s.add_argument("file", type=Path)

    h = sub.add_parser("headers", help="List column labels")
    h.add_argument("file", type=Path)
    h.add_argument("--sheet")
    h.add_argument("--header-row", type=_positive_int, default=1)

    r = sub.add_parser("run", help="Run the comparisons of a batch config")
    r.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Batch config YAML")
    return p.parse_args(argv)


def _format_cell(cell: CellValue) -> str:
    return "<empty>" if cell.is_absent else cell.as_text()


def _describe_row(change: RowChange, headers: list[str]) -> str:
    where = f"{change.original_row_index or '-'}->{change.updated_row_index or '-'}"
    line = f"{change.change_type.value} key={change.key} rows={where}"
    if change.changes:
        parts = []
        for pos, c in sorted(change.changes.items()):
            label = headers[pos] if pos < len(headers) else f"Column {pos + 1}"
            parts.append(f"{label}: {_format_cell(c.old_value)} -> {_format_cell(c.new_value)}")
        line += " " + "; ".join(parts)
    return line


def _print_rows(logger, result: ComparisonResult, types: set[ChangeType] | None, limit: int) -> None:
    if types is None:
        # 既定では差分のある行のみ表示
        types = {ChangeType.ADDED, ChangeType.DELETED, ChangeType.MODIFIED}
    rows = filter_rows(result, types)
    for change in rows[:limit]:
        logger.info(_describe_row(change, result.headers))
    if len(rows) > limit > 0:
        logger.info(f"... {len(rows) - limit} more rows")


def _cmd_compare(args: argparse.Namespace, logger) -> int:
    try:
        types = parse_change_types(args.only) if args.only else None
    except ValueError as e:
        logger.error(f"--only: {e}")
        return EXIT_FATAL

    try:
        result = compare_files(
            args.original,
            args.updated,
            sheet=args.sheet,
            updated_sheet=args.updated_sheet,
            header_row=args.header_row,
            key_columns=[parse_key_token(k) for k in args.key],
        )
    except (ReaderError, KeyColumnError) as e:
        logger.error(str(e))
        return EXIT_FATAL

    logger.info(f"headers={result.headers}")
    _print_rows(logger, result, types, max(args.show, 0))
    if args.output is not None:
        try:
            path = write_report(result, args.output, types)
        except OSError as e:
            logger.error(f"cannot write report {args.output}: {e}")
            return EXIT_FATAL
        logger.info(f"report written: {path}")
    log_summary(render_summary_line(result.summary)[len("SUMMARY "):])
    return EXIT_SUCCESS_ALL


def _cmd_sheets(args: argparse.Namespace, logger) -> int:
    try:
        names = list_sheets(args.file)
    except ReaderError as e:
        logger.error(str(e))
        return EXIT_FATAL
    for name in names:
        print(name)
    return EXIT_SUCCESS_ALL


def _cmd_headers(args: argparse.Namespace, logger) -> int:
    try:
        labels = read_headers(args.file, args.sheet, args.header_row)
    except ReaderError as e:
        logger.error(str(e))
        return EXIT_FATAL
    for i, label in enumerate(labels):
        print(f"{i}\t{label}")
    return EXIT_SUCCESS_ALL


def _cmd_run(args: argparse.Namespace, logger) -> int:
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"Running {len(cfg.comparisons)} comparisons from: {args.config}")
    result = run_all(cfg)
    # log_summary がラベルを付けるので "SUMMARY " を除去
    log_summary(render_batch_summary_line(result)[len("SUMMARY "):])
    if result.failed_comparisons > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


COMMANDS = {
    "compare": _cmd_compare,
    "sheets": _cmd_sheets,
    "headers": _cmd_headers,
    "run": _cmd_run,
}


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: 空リスト [] を渡されたときに sys.argv[1:] を読まないよう None のみ判定
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug(logger)

    return COMMANDS[args.command](args, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
