"""Sheet comparison engine (header resolution, key building, matching, diff)."""

from .compare import compare
from .headers import resolve_headers, split_dataset
from .keys import KEY_SEPARATOR, build_keys

__all__ = [
    "KEY_SEPARATOR",
    "build_keys",
    "compare",
    "resolve_headers",
    "split_dataset",
]
