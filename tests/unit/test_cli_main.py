from __future__ import annotations

import json
from pathlib import Path

from sheetdiff.cli import main

"""CLI command tests (compare / sheets / headers / run)."""


def _out_lines(capsys) -> list[str]:
    return capsys.readouterr().out.strip().splitlines()


def test_compare_prints_changed_rows_and_summary(orders_workbooks, capsys):
    original, updated = orders_workbooks
    code = main(["compare", str(original), str(updated), "--key", "Order"])
    lines = _out_lines(capsys)

    assert code == 0
    assert lines[0] == "INFO headers=['Order', 'Item', 'Qty']"
    assert lines[1:4] == [
        "INFO modified key=A|||#2 rows=2->2 Qty: 2 -> 9",
        "INFO added key=C rows=-->3",
        "INFO deleted key=B rows=3->-",
    ]
    assert lines[-1] == "SUMMARY added=1 deleted=1 modified=1 unchanged=1 original_rows=3 updated_rows=3"


def test_compare_position_mode(orders_workbooks, capsys):
    original, updated = orders_workbooks
    code = main(["compare", str(original), str(updated)])
    lines = _out_lines(capsys)

    assert code == 0
    assert lines[-1] == "SUMMARY added=0 deleted=0 modified=2 unchanged=1 original_rows=3 updated_rows=3"


def test_compare_only_and_output(orders_workbooks, temp_workdir: Path, capsys):
    original, updated = orders_workbooks
    out = temp_workdir / "reports" / "orders.jsonl"
    code = main([
        "compare", str(original), str(updated),
        "--key", "0", "--only", "added,deleted", "--output", str(out),
    ])
    lines = _out_lines(capsys)

    assert code == 0
    assert not any(line.startswith("INFO modified") for line in lines)
    records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
    assert [r["type"] for r in records] == ["added", "deleted"]
    assert records[0]["data"] == {"Order": "C", "Item": "cap", "Qty": 3}


def test_compare_show_limit(orders_workbooks, capsys):
    original, updated = orders_workbooks
    main(["compare", str(original), str(updated), "--key", "Order", "--show", "1"])
    lines = _out_lines(capsys)
    assert "INFO ... 2 more rows" in lines


def test_compare_unknown_key_column(orders_workbooks, capsys):
    original, updated = orders_workbooks
    code = main(["compare", str(original), str(updated), "--key", "Ordr"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR key column not found: 'Ordr'" in out


def test_compare_missing_sheet(orders_workbooks, capsys):
    original, updated = orders_workbooks
    code = main(["compare", str(original), str(updated), "--sheet", "Nope"])
    assert code == 1
    assert "ERROR" in capsys.readouterr().out


def test_compare_bad_only(orders_workbooks, capsys):
    original, updated = orders_workbooks
    code = main(["compare", str(original), str(updated), "--only", "renamed"])
    assert code == 1
    assert "ERROR --only: unknown change type" in capsys.readouterr().out


def test_sheets_command(workbook_factory, capsys):
    path = workbook_factory("multi.xlsx", {"First": [["a"]], "Second": [["b"]]})
    assert main(["sheets", str(path)]) == 0
    assert _out_lines(capsys) == ["First", "Second"]


def test_headers_command(orders_workbooks, capsys):
    original, _ = orders_workbooks
    assert main(["headers", str(original), "--sheet", "Orders"]) == 0
    assert _out_lines(capsys) == ["0\tOrder", "1\tItem", "2\tQty"]


def test_headers_missing_file(temp_workdir: Path, capsys):
    assert main(["headers", str(temp_workdir / "nope.xlsx")]) == 1
    assert "ERROR" in capsys.readouterr().out


def test_debug_flag(orders_workbooks, capsys):
    original, updated = orders_workbooks
    code = main(["--debug", "compare", str(original), str(updated), "--key", "Order"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG read original=" in out


def test_run_command(write_config: Path, orders_workbooks, temp_workdir: Path, capsys):
    code = main(["run", "--config", str(write_config)])
    lines = _out_lines(capsys)

    assert code == 0
    assert (temp_workdir / "reports" / "orders.jsonl").exists()
    assert "INFO orders: added=1 deleted=1 modified=1 unchanged=1" in lines
    assert lines[-1].startswith("SUMMARY comparisons=1/1 success=1 failed=0 added=1 deleted=1 modified=1 unchanged=1")


def test_compare_unwritable_output(orders_workbooks, temp_workdir: Path, capsys):
    original, updated = orders_workbooks
    blocker = temp_workdir / "reports"
    blocker.write_text("not a directory", encoding="utf-8")
    code = main(["compare", str(original), str(updated), "--output", str(blocker / "r.jsonl")])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR cannot write report" in out
    assert "SUMMARY" not in out
