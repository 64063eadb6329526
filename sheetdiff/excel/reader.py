from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Any

import pandas as pd

from ..engine.headers import header_labels
from ..models.cell import Row, to_row

"""Spreadsheet reader (collaborator of the comparison engine).

Decodes a workbook into sheet names and, per sheet, a grid of CellValue rows.
pandas (openpyxl engine for .xlsx) does the decoding; this module only maps
its output onto the cell model and turns failures into ReaderError subclasses.

- Sheets are read without header inference (header=None); choosing the header
  row is the engine's job.
- pandas' default NA strings ("NA", "N/A", "null" ...) are NOT converted, text
  cells are compared literally. ``na_strings`` opts individual strings back in.
- Supported inputs are .xlsx (openpyxl) and .csv. Blank CSV lines are kept
  as empty rows, the same as blank worksheet rows.
- .csv files are treated as a workbook with a single sheet named after the
  file stem. CSV has no cell types: plain integers / decimals are read as
  numbers, everything else stays text.
"""

__all__ = [
    "ReaderError",
    "SheetNotFoundError",
    "WorkbookReadError",
    "list_sheets",
    "read_grid",
    "read_headers",
]

CSV_SUFFIXES = {".csv"}
# 先頭ゼロ付き (例: "007") はコードとして文字列のまま
_INT_RE = re.compile(r"-?(?:0|[1-9]\d*)")
_DECIMAL_RE = re.compile(r"-?(?:0|[1-9]\d*)\.\d+")


class ReaderError(Exception):
    """Base class for workbook input errors."""


class WorkbookReadError(ReaderError):
    """Raised when the file is missing or cannot be decoded."""


class SheetNotFoundError(ReaderError):
    """Raised when the requested sheet is not present in the workbook."""

    def __init__(self, path: Path, sheet_name: str, available: list[str]) -> None:
        super().__init__(f'Sheet "{sheet_name}" was not found in the file {path.name} (available: {available})')
        self.path = path
        self.sheet_name = sheet_name
        self.available = available


def _coerce_csv_cell(value: Any) -> Any:
    """CSV cells arrive as text; integers and decimals become numbers."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if _INT_RE.fullmatch(text):
        return int(text)
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return value


def _csv_width(path: Path) -> int:
    """Widest line of a CSV file (0 for an empty file)."""
    with path.open(newline="", encoding="utf-8") as f:
        return max((len(fields) for fields in csv.reader(f)), default=0)


def _is_csv(path: Path) -> bool:
    return path.suffix.lower() in CSV_SUFFIXES


def _open_workbook(path: Path) -> pd.ExcelFile:
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    try:
        return pd.ExcelFile(path)
    except Exception as e:  # pandas / openpyxl は形式ごとに異なる例外を投げる
        raise WorkbookReadError(f"cannot read workbook {path}: {e}") from e


def list_sheets(path: Path) -> list[str]:
    """Sheet names in workbook order."""
    path = Path(path)
    if _is_csv(path):
        if not path.exists():
            raise WorkbookReadError(f"file not found: {path}")
        return [path.stem]
    with _open_workbook(path) as xls:
        return [str(name) for name in xls.sheet_names]


def _read_frame(path: Path, sheet_name: str | None, na_strings: list[str] | None) -> pd.DataFrame:
    # 空セルのみ既定で NaN 扱い (数値列の型推論を保つ)
    na_values = ["", *(na_strings or [])]
    if _is_csv(path):
        if not path.exists():
            raise WorkbookReadError(f"file not found: {path}")
        if sheet_name is not None and sheet_name != path.stem:
            raise SheetNotFoundError(path, sheet_name, [path.stem])
        try:
            width = _csv_width(path)
            if width == 0:
                return pd.DataFrame()
            # 空行も行として残す (行位置を xlsx と揃える)
            df = pd.read_csv(
                path,
                header=None,
                names=list(range(width)),
                dtype=str,
                keep_default_na=False,
                na_values=na_values,
                skip_blank_lines=False,
                encoding="utf-8",
            )
            return df.map(_coerce_csv_cell)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (OSError, UnicodeDecodeError, csv.Error, pd.errors.ParserError) as e:
            raise WorkbookReadError(f"cannot read csv {path}: {e}") from e

    with _open_workbook(path) as xls:
        names = [str(n) for n in xls.sheet_names]
        if sheet_name is None:
            if not names:
                raise WorkbookReadError(f"workbook has no sheets: {path}")
            sheet_name = names[0]
        if sheet_name not in names:
            raise SheetNotFoundError(path, sheet_name, names)
        try:
            # keep_default_na=False: "NA" 等の文字列をそのまま残す
            return xls.parse(sheet_name, header=None, keep_default_na=False, na_values=na_values)
        except Exception as e:  # 破損シートは openpyxl / pandas 固有の例外を投げる
            raise WorkbookReadError(f"cannot read sheet {sheet_name!r} of {path}: {e}") from e


def _frame_to_grid(df: pd.DataFrame) -> list[Row]:
    if df.empty:
        return []
    raw_rows: list[list[Any]] = df.astype(object).values.tolist()
    return [to_row(r) for r in raw_rows]


def read_grid(path: Path, sheet_name: str | None = None, na_strings: list[str] | None = None) -> list[Row]:
    """Read one sheet as a list of CellValue rows (header rows included).

    Parameters
    ----------
    path: .xlsx workbook or .csv path
    sheet_name: sheet to read; None -> first sheet
    na_strings: strings to treat as empty cells (e.g. ['N/A'])

    Raises
    ------
    WorkbookReadError: file missing or undecodable
    SheetNotFoundError: ``sheet_name`` not in the workbook
    """
    df = _read_frame(Path(path), sheet_name, na_strings)
    return _frame_to_grid(df)


def read_headers(path: Path, sheet_name: str | None = None, header_row: int = 1) -> list[str]:
    """Column labels of a single file's header row (empty when the row is absent)."""
    grid = read_grid(path, sheet_name)
    if len(grid) == 0 or header_row > len(grid):
        return []
    return header_labels(grid[header_row - 1])
