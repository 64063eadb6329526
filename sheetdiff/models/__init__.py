"""Domain models for the sheet comparison tool.

This package contains the cell value variant, the comparison result types and
the configuration / batch result dataclasses used throughout the application.
"""

from .cell import ABSENT, CellKind, CellValue, Row
from .comparison import CellChange, ChangeType, ComparisonResult, ComparisonSummary, RowChange
from .config_models import HeaderRowConfig, KeyColumnConfig

__all__ = [
    # Cell values
    "ABSENT",
    "CellKind",
    "CellValue",
    "Row",
    # Comparison results
    "CellChange",
    "ChangeType",
    "ComparisonResult",
    "ComparisonSummary",
    "RowChange",
    # Configuration models
    "HeaderRowConfig",
    "KeyColumnConfig",
]
