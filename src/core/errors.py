"""topscores exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class TopScoresError(Exception):
    """Base exception for all topscores failures."""


class ScoreConfigError(TopScoresError):
    """Raised for invalid runtime configuration."""


class ScoreSourceError(TopScoresError, OSError):
    """Raised when the score log cannot be opened or read."""


class ScoreParseError(TopScoresError):
    """Raised inside the record parser for one malformed line.

    Never escapes the parser: the kind and message are stored on the
    resulting invalid record instead.
    """

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class DuplicateIdError(TopScoresError):
    """Raised when valid records share an id anywhere in the input."""

    def __init__(self, message: str, duplicate_ids: tuple[object, ...]) -> None:
        super().__init__(message)
        self.duplicate_ids = duplicate_ids


class MalformedRecordError(TopScoresError):
    """Raised when an invalid record reaches the truncated result set."""

    def __init__(
        self,
        message: str,
        failure_kind: str,
        raw_line: str,
        original_index: int,
    ) -> None:
        super().__init__(message)
        self.failure_kind = failure_kind
        self.raw_line = raw_line
        self.original_index = original_index
