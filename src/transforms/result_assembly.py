"""Result assembly with deferred validation.

This module sorts, truncates, and only then rejects invalid records.
An invalid record ranked beyond the requested count never fails a
request because it is never part of the answer.
"""

from __future__ import annotations

from typing import Iterable

from core.errors import MalformedRecordError
from core.types import InvalidScoreRecord, RankedRecord, ScoreResult, ValidScoreRecord
from transforms.score_ranking import classify_winners, rank_records


def assemble_results(
    ranked_records: Iterable[RankedRecord],
    count: int,
    distinct_scores: bool = False,
) -> list[ScoreResult]:
    """Build the top ``count`` results from indexed records.

    Args:
        ranked_records: Records with original indexes.
        count: Number of results requested, greater than zero.
        distinct_scores: Drop non-winner duplicates of a score before truncating.

    Returns:
        Results in ranking order.

    Raises:
        MalformedRecordError: If an invalid record lands in the top ``count``.
    """
    ordered = rank_records(classify_winners(ranked_records))
    if distinct_scores:
        ordered = [ranked for ranked in ordered if ranked.is_winner]
    top_records = ordered[:count]
    return [_to_result(record) for record in ensure_no_invalid_records(top_records)]


def ensure_no_invalid_records(
    ranked_records: list[RankedRecord],
) -> list[ValidScoreRecord]:
    """Fail on the first invalid record in ranking order.

    Args:
        ranked_records: Truncated records in ranking order.

    Returns:
        Valid payloads in ranking order.

    Raises:
        MalformedRecordError: Carrying the first invalid record's parse failure.
    """
    valid_records: list[ValidScoreRecord] = []
    for ranked in ranked_records:
        record = ranked.record
        if isinstance(record, InvalidScoreRecord):
            raise MalformedRecordError(
                record.failure_reason,
                failure_kind=record.failure_kind,
                raw_line=record.raw_line,
                original_index=ranked.original_index,
            )
        valid_records.append(record)
    return valid_records


def _to_result(record: ValidScoreRecord) -> ScoreResult:
    """Project a valid record onto the public result shape."""
    return ScoreResult(id=record.record_id, score=record.score)
