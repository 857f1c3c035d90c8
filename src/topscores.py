"""Public SDK surface for topscores.

This module provides a stable import path for library users.
It re-exports the pipeline entry point, typed models, and errors.
"""

from __future__ import annotations

from core.config import TopScoresConfig
from core.errors import (
    DuplicateIdError,
    MalformedRecordError,
    ScoreConfigError,
    ScoreSourceError,
    TopScoresError,
)
from core.types import (
    InvalidScoreRecord,
    RankedRecord,
    ScoreRecord,
    ScoreResult,
    TopScoresOptions,
    ValidScoreRecord,
)
from ingest.pipeline import TopScoresRunner, compute_top_scores
from ingest.record_parser import parse_score_record

__all__ = [
    "DuplicateIdError",
    "InvalidScoreRecord",
    "MalformedRecordError",
    "RankedRecord",
    "ScoreConfigError",
    "ScoreRecord",
    "ScoreResult",
    "ScoreSourceError",
    "TopScoresConfig",
    "TopScoresError",
    "TopScoresOptions",
    "TopScoresRunner",
    "ValidScoreRecord",
    "compute_top_scores",
    "parse_score_record",
]
