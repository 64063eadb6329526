from __future__ import annotations

import logging
from typing import Sequence

from ..models.comparison import ChangeType, MatchKey, RowChange
from .differ import diff_pair
from .keys import KeyedRow

"""Row matching between the original and updated datasets.

The lookup dict is the sole owner of not-yet-matched original rows: a hit pops
the entry (so every original row pairs at most once), whatever is left after
all updated rows were probed becomes DELETED output.
"""

__all__ = [
    "match_rows",
]

logger = logging.getLogger(__name__)


def match_rows(original: Sequence[KeyedRow], updated: Sequence[KeyedRow]) -> list[RowChange]:
    """Pair keyed rows and emit one RowChange per original / updated row.

    Emission order: updated rows in order (matched or ADDED), then the
    unmatched original rows in original order (DELETED).
    """
    # dict は挿入順を保持 -> 残りの DELETED も元の行順で出る
    lookup: dict[MatchKey, KeyedRow] = {}
    unmatchable: list[KeyedRow] = []
    for entry in original:
        # 区切り文字を含むセル値でキーが衝突した場合、後続行は照合対象外
        if entry.matchable and entry.key not in lookup:
            lookup[entry.key] = entry
        else:
            unmatchable.append(entry)

    changes: list[RowChange] = []
    for entry in updated:
        hit = lookup.pop(entry.key, None) if entry.matchable else None
        if hit is None:
            changes.append(
                RowChange(
                    change_type=ChangeType.ADDED,
                    key=entry.key,
                    row_data=entry.row,
                    updated_row_index=entry.row_index,
                )
            )
            continue
        changes.append(diff_pair(entry.key, hit.row, hit.row_index, entry.row, entry.row_index))

    leftovers = sorted([*lookup.values(), *unmatchable], key=lambda e: e.row_index)
    for entry in leftovers:
        changes.append(
            RowChange(
                change_type=ChangeType.DELETED,
                key=entry.key,
                row_data=entry.row,
                original_row_index=entry.row_index,
            )
        )
    logger.debug(
        "matched=%d added=%d deleted=%d",
        len(original) - len(leftovers),
        len(updated) - (len(original) - len(leftovers)),
        len(leftovers),
    )
    return changes
