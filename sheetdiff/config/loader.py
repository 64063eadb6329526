from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Batch config loader.

Responsibilities:
- Load the YAML batch file (default ``config/compare.yml``)
- Validate it against ``config_schema.json`` (shipped next to this module)
- Apply defaults (header_row=1, updated_sheet=sheet, no key columns)
- Reject duplicate comparison names (report file names derive from them)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/compare.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ComparisonJobConfig:
    name: str
    original: Path
    updated: Path
    sheet: str | None = None  # None -> 先頭シート
    updated_sheet: str | None = None  # None -> sheet と同じ
    header_row: int = 1
    key_columns: tuple[int | str, ...] = ()  # ラベル or 0-based 位置
    na_strings: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompareConfig:
    comparisons: list[ComparisonJobConfig]
    output_directory: Path | None = None


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _job_from_dict(raw: dict[str, Any]) -> ComparisonJobConfig:
    sheet = raw.get("sheet")
    return ComparisonJobConfig(
        name=raw["name"],
        original=Path(raw["original"]),
        updated=Path(raw["updated"]),
        sheet=sheet,
        updated_sheet=raw.get("updated_sheet", sheet),
        header_row=raw.get("header_row", 1),
        key_columns=tuple(raw.get("key_columns", [])),
        na_strings=tuple(raw.get("na_strings", [])),
    )


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> CompareConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    jobs = [_job_from_dict(raw) for raw in data["comparisons"]]
    seen: set[str] = set()
    for job in jobs:
        if job.name in seen:
            raise ConfigError(f"duplicate comparison name: {job.name}")
        seen.add(job.name)

    out = data.get("output_directory")
    return CompareConfig(
        comparisons=jobs,
        output_directory=Path(out) if out else None,
    )
