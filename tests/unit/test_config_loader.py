from __future__ import annotations
import pytest
from pathlib import Path
from sheetdiff.config.loader import load_config, ConfigError


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.output_directory == Path("reports")
    (job,) = cfg.comparisons
    assert job.name == "orders"
    assert job.original == Path("data/orders_v1.xlsx")
    assert job.sheet == "Orders"
    assert job.updated_sheet == "Orders"  # 省略時は sheet と同じ
    assert job.header_row == 1
    assert job.key_columns == ("Order",)


def test_load_config_defaults(write_config: Path):
    write_config.write_text(
        "comparisons:\n  - name: a\n    original: x.xlsx\n    updated: y.xlsx\n", encoding="utf-8"
    )
    cfg = load_config(write_config)
    assert cfg.output_directory is None
    job = cfg.comparisons[0]
    assert job.sheet is None and job.updated_sheet is None
    assert job.header_row == 1
    assert job.key_columns == ()


def test_load_config_mixed_key_columns(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("key_columns: [Order]", "key_columns: [Order, 2]")
    write_config.write_text(text, encoding="utf-8")
    assert load_config(write_config).comparisons[0].key_columns == ("Order", 2)


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("comparisons: [\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("    updated: data/orders_v2.xlsx\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_rejects_header_row_zero(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("header_row: 1", "header_row: 0")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_duplicate_names(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + (
        "  - name: orders\n    original: a.xlsx\n    updated: b.xlsx\n"
    )
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "duplicate comparison name" in str(e.value)
