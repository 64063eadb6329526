# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from sheetdiff.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logger():
    # 各テストで stdout ハンドラを capsys の差し替え後に作り直す
    reset_logging()
    yield
    reset_logging()


def make_workbook(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    p = directory / name
    with pd.ExcelWriter(p) as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


@pytest.fixture()
def workbook_factory(temp_workdir: Path):
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        return make_workbook(temp_workdir / "data", name, sheets)
    return _make


@pytest.fixture()
def orders_workbooks(workbook_factory) -> tuple[Path, Path]:
    original = workbook_factory(
        "orders_v1.xlsx",
        {
            "Orders": [
                ["Order", "Item", "Qty"],
                ["A", "pen", 1],
                ["A", "ink", 2],
                ["B", "pad", 5],
            ]
        },
    )
    updated = workbook_factory(
        "orders_v2.xlsx",
        {
            "Orders": [
                ["Order", "Item", "Qty"],
                ["A", "pen", 1],
                ["A", "ink", 9],
                ["C", "cap", 3],
            ]
        },
    )
    return original, updated


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_directory: ./reports
comparisons:
  - name: orders
    original: data/orders_v1.xlsx
    updated: data/orders_v2.xlsx
    sheet: Orders
    header_row: 1
    key_columns: [Order]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "compare.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
