"""Shared typed models.

This module defines immutable data models passed between the parser,
ranking transforms, and result assembly to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from core.constants import DEFAULT_DISTINCT_SCORES, DOCUMENT_ID_FIELD


@dataclass(frozen=True)
class ValidScoreRecord:
    """Successfully parsed score line.

    Attributes:
        score: Non-negative signed 32-bit score.
        document: Read-only view of every top-level document field.
    """

    score: int
    document: Mapping[str, Any]

    @property
    def record_id(self) -> Any:
        """Return the document id, any JSON value."""
        return self.document[DOCUMENT_ID_FIELD]


@dataclass(frozen=True)
class InvalidScoreRecord:
    """Score line that failed to parse.

    Attributes:
        raw_line: Original line text.
        failure_kind: Machine-readable failure category.
        failure_reason: Human-readable failure message.
        salvaged_score: Parsed score when only the document was bad.
    """

    raw_line: str
    failure_kind: str
    failure_reason: str
    salvaged_score: int | None = None


ScoreRecord = Union[ValidScoreRecord, InvalidScoreRecord]


@dataclass(frozen=True)
class RankedRecord:
    """Score record positioned in the input sequence.

    Attributes:
        record: Parsed valid or invalid record.
        original_index: Zero-based input line position.
        is_winner: Winner flag, ``None`` until classified.
    """

    record: ScoreRecord
    original_index: int
    is_winner: bool | None = None


@dataclass(frozen=True)
class ScoreResult:
    """Public result row.

    Attributes:
        id: Document id of the scored record, usually a string.
        score: Record score.
    """

    id: Any
    score: int

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping."""
        return {"score": self.score, "id": self.id}


@dataclass(frozen=True)
class TopScoresOptions:
    """Top-scores request options.

    Attributes:
        source_path: Path to the score log file.
        count: Number of results requested, greater than zero.
        distinct_scores: Keep only the winner of each duplicated score.
    """

    source_path: str
    count: int
    distinct_scores: bool = DEFAULT_DISTINCT_SCORES
