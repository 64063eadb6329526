from __future__ import annotations


def main(argv: list[str] | None = None) -> int:
    # __main__ の二重 import を避けるため遅延 import (python -m sheetdiff.cli)
    from .__main__ import main as _main

    return _main(argv)


__all__ = ["main"]
