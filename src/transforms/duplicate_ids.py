"""Duplicate id guard.

This module rejects inputs where valid records share an id. It runs
over the entire input before ranking, independent of requested count.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from core.errors import DuplicateIdError
from core.types import ScoreRecord, ValidScoreRecord

_MAX_REPORTED_IDS = 5


def ensure_unique_ids(records: Iterable[ScoreRecord]) -> None:
    """Fail when two valid records carry the same id.

    Invalid records contribute no id and are skipped. Ids may be any
    JSON value and are compared by their canonical JSON text, so ``7``
    and ``"7"`` are distinct ids.

    Args:
        records: Parsed score records.

    Raises:
        DuplicateIdError: If any id repeats among valid records.
    """
    seen_keys: set[str] = set()
    reported_keys: set[str] = set()
    duplicate_ids: list[Any] = []
    for record in records:
        if not isinstance(record, ValidScoreRecord):
            continue
        key = _id_key(record.record_id)
        if key not in seen_keys:
            seen_keys.add(key)
            continue
        if key not in reported_keys:
            reported_keys.add(key)
            duplicate_ids.append(record.record_id)
    if duplicate_ids:
        raise DuplicateIdError(
            "ids are not unique across the data set: "
            f"{_format_ids(duplicate_ids)}. Remove or rename duplicate records and retry.",
            duplicate_ids=tuple(duplicate_ids),
        )


def _id_key(record_id: Any) -> str:
    """Build a hashable comparison key for a JSON id value."""
    return json.dumps(record_id, sort_keys=True)


def _format_ids(duplicate_ids: list[Any]) -> str:
    """Render a bounded list of ids for error messages."""
    shown = ", ".join(repr(record_id) for record_id in duplicate_ids[:_MAX_REPORTED_IDS])
    hidden_count = len(duplicate_ids) - _MAX_REPORTED_IDS
    if hidden_count > 0:
        return f"{shown} and {hidden_count} more"
    return shown
