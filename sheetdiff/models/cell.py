from __future__ import annotations

import numbers
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, TypeAlias

import numpy as np
import pandas as pd

"""Cell value model for sheet comparison.

A worksheet cell is one of text / number / boolean / timestamp / absent.
The raw values handed over by pandas (numpy scalars, NaN, NaT, Timestamp ...)
are folded into the closed ``CellValue`` variant once, at the boundary, so the
comparison engine only ever matches over ``CellKind``.

Equality is structural (dataclass eq over kind + payload):
- timestamps are equal iff they denote the same instant
- numbers compare by value (1 == 1.0), text / boolean literally
- two absent cells are equal; a boolean never equals a number
"""

__all__ = [
    "ABSENT",
    "CellKind",
    "CellValue",
    "Row",
    "cell_at",
    "to_row",
]


class CellKind(Enum):
    """Tag of a CellValue."""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    ABSENT = "absent"


@dataclass(frozen=True)
class CellValue:
    kind: CellKind
    value: str | int | float | bool | datetime | None = None  # ABSENT のときは None

    @staticmethod
    def of(raw: Any) -> CellValue:
        """Fold a raw Python / pandas value into a CellValue.

        ``None``, NaN, NaT, ``pd.NA`` and the empty string become ABSENT.
        Booleans are checked before numbers (``bool`` is an ``int`` subclass).
        ``date`` values are widened to midnight ``datetime``.
        """
        if isinstance(raw, CellValue):
            return raw
        if raw is None:
            return ABSENT
        if isinstance(raw, np.datetime64):
            raw = pd.Timestamp(raw)
        elif isinstance(raw, np.generic):
            raw = raw.item()
        if isinstance(raw, bool):
            return CellValue(CellKind.BOOLEAN, raw)
        if pd.api.types.is_scalar(raw) and pd.isna(raw):
            return ABSENT
        if isinstance(raw, pd.Timestamp):
            raw = raw.to_pydatetime()
        if isinstance(raw, datetime):
            return CellValue(CellKind.TIMESTAMP, raw)
        if isinstance(raw, date):
            return CellValue(CellKind.TIMESTAMP, datetime(raw.year, raw.month, raw.day))
        if isinstance(raw, numbers.Real):
            return CellValue(CellKind.NUMBER, raw)
        if isinstance(raw, str):
            if raw == "":
                return ABSENT
            return CellValue(CellKind.TEXT, raw)
        return CellValue(CellKind.TEXT, str(raw))

    @property
    def is_absent(self) -> bool:
        return self.kind is CellKind.ABSENT

    def as_text(self) -> str:
        """Literal string form used for match keys.

        TIMESTAMP -> full ISO timestamp, ABSENT -> "", NUMBER without a
        trailing ".0" for integral floats, BOOLEAN -> "true"/"false".
        """
        if self.kind is CellKind.ABSENT:
            return ""
        if self.kind is CellKind.TIMESTAMP:
            return self.value.isoformat()  # type: ignore[union-attr]
        if self.kind is CellKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is CellKind.NUMBER:
            return _format_number(self.value)  # type: ignore[arg-type]
        return str(self.value)

    def to_python(self) -> Any:
        """JSON friendly payload (timestamps as ISO strings, ABSENT as None)."""
        if self.kind is CellKind.TIMESTAMP:
            return self.value.isoformat()  # type: ignore[union-attr]
        if self.kind is CellKind.NUMBER and isinstance(self.value, float) and self.value.is_integer():
            return int(self.value)
        return self.value


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


ABSENT = CellValue(CellKind.ABSENT)

Row: TypeAlias = tuple[CellValue, ...]


def cell_at(row: Row, index: int) -> CellValue:
    """Return the cell at ``index``; positions outside the row read as ABSENT."""
    if index < 0 or index >= len(row):
        return ABSENT
    return row[index]


def to_row(raw_row: Iterable[Any]) -> Row:
    return tuple(CellValue.of(v) for v in raw_row)
