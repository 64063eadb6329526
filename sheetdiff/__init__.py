"""Row and cell level comparison of two versions of a spreadsheet sheet."""

from .engine.compare import compare
from .models.comparison import ChangeType, ComparisonResult
from .models.config_models import HeaderRowConfig, KeyColumnConfig

__all__ = [
    "ChangeType",
    "ComparisonResult",
    "HeaderRowConfig",
    "KeyColumnConfig",
    "compare",
]

__version__ = "0.1.0"
