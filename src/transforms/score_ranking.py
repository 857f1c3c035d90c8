"""Winner classification and ranking transform.

Both rules apply "last occurrence wins": among valid records sharing a
score, the one latest in the input is the winner and sorts first.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from core.types import InvalidScoreRecord, RankedRecord, ScoreRecord, ValidScoreRecord

# Scored keys start with a non-positive value, so unscored records sort last.
_UNSCORED_KEY = (1, 0)


def attach_original_indexes(records: Iterable[ScoreRecord]) -> list[RankedRecord]:
    """Wrap records with their zero-based input position.

    Args:
        records: Parsed records in input order.

    Returns:
        Ranked records carrying ``original_index``.
    """
    return [
        RankedRecord(record=record, original_index=index)
        for index, record in enumerate(records)
    ]


def classify_winners(ranked_records: Iterable[RankedRecord]) -> list[RankedRecord]:
    """Mark the winner of each score value.

    Invalid records carry no comparable score and are always winners.

    Args:
        ranked_records: Records with original indexes.

    Returns:
        New records in the same order with ``is_winner`` set.
    """
    ranked_records = list(ranked_records)
    winner_index_by_score: dict[int, int] = {}
    for ranked in ranked_records:
        if isinstance(ranked.record, ValidScoreRecord):
            current = winner_index_by_score.get(ranked.record.score, -1)
            winner_index_by_score[ranked.record.score] = max(current, ranked.original_index)
    return [
        replace(ranked, is_winner=_is_winner(ranked, winner_index_by_score))
        for ranked in ranked_records
    ]


def rank_records(ranked_records: Iterable[RankedRecord]) -> list[RankedRecord]:
    """Sort records by score then original index, both descending.

    Invalid records rank at their salvaged score when one exists and
    after every scored record otherwise, keeping input order there.

    Args:
        ranked_records: Records with original indexes.

    Returns:
        New list in ranking order.
    """
    return sorted(ranked_records, key=_ranking_key)


def _is_winner(ranked: RankedRecord, winner_index_by_score: dict[int, int]) -> bool:
    """Return whether a record survives duplicate-score classification."""
    if isinstance(ranked.record, InvalidScoreRecord):
        return True
    return winner_index_by_score[ranked.record.score] == ranked.original_index


def _ranking_key(ranked: RankedRecord) -> tuple[int, int]:
    """Build an ascending sort key for descending score and index."""
    score = _ranking_score(ranked.record)
    if score is None:
        return _UNSCORED_KEY
    return (-score, -ranked.original_index)


def _ranking_score(record: ScoreRecord) -> int | None:
    """Return the score a record is ranked by, if any."""
    if isinstance(record, ValidScoreRecord):
        return record.score
    return record.salvaged_score
