"""Score line parser.

This module converts raw ``<score>:<json document>`` lines into tagged
valid or invalid records. Parsing never raises for malformed input:
failures are kept on the invalid record so they can be surfaced later
if that record reaches the result set.
"""

from __future__ import annotations

import json
import re
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from core.constants import (
    DOCUMENT_ID_FIELD,
    FAILURE_DOCUMENT_NOT_OBJECT,
    FAILURE_MALFORMED_DOCUMENT,
    FAILURE_MALFORMED_SCORE,
    FAILURE_MISSING_ID,
    FAILURE_NEGATIVE_SCORE,
    FAILURE_SCORE_OUT_OF_RANGE,
    INT32_MAX,
    INT32_MIN,
    MIN_SCORE,
    SCORE_DOCUMENT_SEPARATOR,
)
from core.errors import ScoreParseError
from core.logging_config import get_logger
from core.types import InvalidScoreRecord, ScoreRecord, ValidScoreRecord

_LOGGER = get_logger(__name__)
_INTEGER_PATTERN = re.compile(r"\s*[+-]?([0-9]+)\s*", re.ASCII)
# Any int32 value fits in this many significant digits.
_MAX_SCORE_DIGITS = len(str(INT32_MAX))
_MAX_PREVIEW_CHARS = 32


def parse_score_records(lines: Iterable[str]) -> list[ScoreRecord]:
    """Parse every line of a score log in order.

    Args:
        lines: Raw lines without terminators.

    Returns:
        One record per input line.
    """
    return [parse_score_record(line) for line in lines]


def parse_score_record(line: str) -> ScoreRecord:
    """Parse one score line into a valid or invalid record.

    Args:
        line: Raw line, e.g. ``10622876: {"id": "3c86..."}``.

    Returns:
        ``ValidScoreRecord`` on success, otherwise ``InvalidScoreRecord``.
    """
    score_text, document_text = _split_line(line)
    try:
        score = parse_score(score_text)
    except ScoreParseError as error:
        return _invalid_record(line, error, salvaged_score=None)
    try:
        document = parse_document(document_text)
    except ScoreParseError as error:
        return _invalid_record(line, error, salvaged_score=score)
    return ValidScoreRecord(score=score, document=document)


def parse_score(score_text: str) -> int:
    """Parse a non-negative signed 32-bit score.

    Args:
        score_text: Score segment of a line.

    Returns:
        Parsed score.

    Raises:
        ScoreParseError: If the segment is not an acceptable score.
    """
    match = _INTEGER_PATTERN.fullmatch(score_text)
    if match is None:
        raise ScoreParseError(
            FAILURE_MALFORMED_SCORE,
            f"could not parse a number from score string: {score_text!r}",
        )
    significant_digits = match.group(1).lstrip("0") or "0"
    if len(significant_digits) > _MAX_SCORE_DIGITS:
        raise ScoreParseError(
            FAILURE_SCORE_OUT_OF_RANGE,
            f"score should be a 32 bit integer, but is: {_score_preview(score_text)}",
        )
    sign = -1 if score_text.strip().startswith("-") else 1
    score = sign * int(significant_digits)
    if not INT32_MIN <= score <= INT32_MAX:
        raise ScoreParseError(
            FAILURE_SCORE_OUT_OF_RANGE,
            f"score should be a 32 bit integer, but is: {score}",
        )
    if score < MIN_SCORE:
        raise ScoreParseError(
            FAILURE_NEGATIVE_SCORE,
            f"score should be a non-negative number, but is: {score}",
        )
    return score


def parse_document(document_text: str | None) -> Mapping[str, Any]:
    """Parse a JSON object document that carries an ``id``.

    Args:
        document_text: Document segment of a line, ``None`` if absent.

    Returns:
        Read-only mapping of all top-level document fields.

    Raises:
        ScoreParseError: If the document is malformed or lacks an id.
    """
    if document_text is None:
        raise ScoreParseError(
            FAILURE_MALFORMED_DOCUMENT,
            "invalid json format: line has no document after the score",
        )
    try:
        document = json.loads(document_text)
    except (ValueError, RecursionError) as error:
        raise ScoreParseError(
            FAILURE_MALFORMED_DOCUMENT,
            f"invalid json format: {_describe_json_error(error)}\n {document_text}",
        ) from error
    if not isinstance(document, dict):
        raise ScoreParseError(
            FAILURE_DOCUMENT_NOT_OBJECT,
            f"document should be a JSON object, but is: {type(document).__name__}",
        )
    if DOCUMENT_ID_FIELD not in document:
        raise ScoreParseError(FAILURE_MISSING_ID, "document is missing id property.")
    return MappingProxyType(document)


def _split_line(line: str) -> tuple[str, str | None]:
    """Split a line at its first separator into score and document text."""
    score_text, separator, document_text = line.partition(SCORE_DOCUMENT_SEPARATOR)
    if not separator:
        return score_text, None
    return score_text, document_text


def _invalid_record(
    line: str,
    error: ScoreParseError,
    salvaged_score: int | None,
) -> InvalidScoreRecord:
    """Build an invalid record from a parse failure."""
    _LOGGER.debug("score_line_invalid", failure_kind=error.kind, reason=str(error))
    return InvalidScoreRecord(
        raw_line=line,
        failure_kind=error.kind,
        failure_reason=str(error),
        salvaged_score=salvaged_score,
    )


def _describe_json_error(error: Exception) -> str:
    """Return a short reason for a JSON decode failure."""
    if isinstance(error, json.JSONDecodeError):
        return error.msg
    if isinstance(error, RecursionError):
        return "document is nested too deeply"
    return str(error)


def _score_preview(score_text: str) -> str:
    """Return the score text, abbreviated when very long."""
    text = score_text.strip()
    if len(text) <= _MAX_PREVIEW_CHARS:
        return text
    return f"{text[:_MAX_PREVIEW_CHARS]}... ({len(text)} characters)"
