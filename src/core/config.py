"""Runtime configuration model for topscores.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_DISTINCT_SCORES,
    DEFAULT_ENCODING,
    DEFAULT_LOG_LEVEL,
    FALSE_ENV_VALUES,
    SUPPORTED_LOG_LEVELS,
    TRUE_ENV_VALUES,
)
from core.errors import ScoreConfigError


@dataclass(frozen=True)
class TopScoresConfig:
    """Validated runtime configuration.

    Attributes:
        encoding: Text encoding used to read score logs.
        distinct_scores: Default for keeping one record per score value.
        log_level: Minimum structured log level.
    """

    encoding: str = DEFAULT_ENCODING
    distinct_scores: bool = DEFAULT_DISTINCT_SCORES
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "TopScoresConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ScoreConfigError: If environment values are invalid.
        """
        encoding = _parse_encoding(os.getenv("TOPSCORES_ENCODING", DEFAULT_ENCODING))
        distinct_scores = _parse_bool(
            "TOPSCORES_DISTINCT_SCORES",
            os.getenv("TOPSCORES_DISTINCT_SCORES", str(DEFAULT_DISTINCT_SCORES)),
        )
        log_level = _parse_log_level(os.getenv("TOPSCORES_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(encoding=encoding, distinct_scores=distinct_scores, log_level=log_level)


def _parse_encoding(raw_value: str) -> str:
    """Validate a text encoding name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Canonical codec name.

    Raises:
        ScoreConfigError: If the codec is unknown.
    """
    try:
        return codecs.lookup(raw_value).name
    except LookupError as error:
        raise ScoreConfigError(
            f"Invalid TOPSCORES_ENCODING value: unknown codec '{raw_value}'. "
            "Set TOPSCORES_ENCODING to a codec name such as utf-8."
        ) from error


def _parse_bool(name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag value.

    Raises:
        ScoreConfigError: If value is not a recognized boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_ENV_VALUES:
        return True
    if normalized in FALSE_ENV_VALUES:
        return False
    raise ScoreConfigError(
        f"Invalid {name} value: expected boolean, got '{raw_value}'. "
        f"Use one of {TRUE_ENV_VALUES + FALSE_ENV_VALUES}."
    )


def _parse_log_level(raw_value: str) -> str:
    """Validate the minimum log level name."""
    normalized = raw_value.strip().lower()
    if normalized not in SUPPORTED_LOG_LEVELS:
        raise ScoreConfigError(
            f"Invalid TOPSCORES_LOG_LEVEL value: got '{raw_value}'. "
            f"Supported levels: {SUPPORTED_LOG_LEVELS}."
        )
    return normalized
