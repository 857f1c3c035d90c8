"""Top-scores orchestration.

This module coordinates line reading, parsing, the duplicate id guard,
ranking, and deferred validation for one top-scores request.
"""

from __future__ import annotations

from core.config import TopScoresConfig
from core.logging_config import configure_logging, get_logger
from core.types import (
    InvalidScoreRecord,
    ScoreRecord,
    ScoreResult,
    TopScoresOptions,
)
from ingest.line_source import read_score_lines
from ingest.record_parser import parse_score_records
from transforms.duplicate_ids import ensure_unique_ids
from transforms.result_assembly import assemble_results
from transforms.score_ranking import attach_original_indexes

_LOGGER = get_logger(__name__)


class TopScoresRunner:
    """Runner for a single top-scores request."""

    def __init__(self, options: TopScoresOptions, config: TopScoresConfig) -> None:
        self._options = options
        self._config = config

    def run(self) -> list[ScoreResult]:
        """Execute every stage and return the ranked results."""
        records = self._parse_records()
        self._check_unique_ids(records)
        ranked_records = attach_original_indexes(records)
        results = assemble_results(
            ranked_records,
            self._options.count,
            distinct_scores=self._options.distinct_scores,
        )
        _log_completion(self._options, len(records), len(results))
        return results

    def _parse_records(self) -> list[ScoreRecord]:
        with read_score_lines(self._options.source_path, self._config.encoding) as lines:
            records = parse_score_records(lines)
        invalid_count = sum(1 for record in records if isinstance(record, InvalidScoreRecord))
        _LOGGER.info(
            "score_lines_parsed",
            source_path=self._options.source_path,
            line_count=len(records),
            invalid_count=invalid_count,
        )
        return records

    def _check_unique_ids(self, records: list[ScoreRecord]) -> None:
        ensure_unique_ids(records)
        _LOGGER.info("score_ids_checked", source_path=self._options.source_path)


def compute_top_scores(
    source_path: str,
    count: int,
    config: TopScoresConfig | None = None,
    *,
    distinct_scores: bool | None = None,
) -> list[ScoreResult]:
    """Compute the highest scores recorded in a score log.

    Args:
        source_path: Path to the score log file.
        count: Number of results, a positive integer checked by the caller.
        config: Runtime configuration. When omitted it is read from the
            environment and its log level is applied; an explicit config
            leaves logging to the caller.
        distinct_scores: Override for the configured distinct-scores default.

    Returns:
        Up to ``count`` results, highest score first.

    Raises:
        ScoreSourceError: If the file cannot be read.
        DuplicateIdError: If valid records share an id.
        ScoreConfigError: If environment configuration is invalid.
        MalformedRecordError: If an invalid record ranks within ``count``.
    """
    runtime_config = config
    if runtime_config is None:
        runtime_config = TopScoresConfig.from_env()
        configure_logging(runtime_config.log_level)
    options = TopScoresOptions(
        source_path=source_path,
        count=count,
        distinct_scores=(
            runtime_config.distinct_scores if distinct_scores is None else distinct_scores
        ),
    )
    return TopScoresRunner(options, runtime_config).run()


def _log_completion(options: TopScoresOptions, input_count: int, output_count: int) -> None:
    """Log request completion with contextual metadata."""
    _LOGGER.info(
        "top_scores_computed",
        source_path=options.source_path,
        count=options.count,
        distinct_scores=options.distinct_scores,
        input_count=input_count,
        output_count=output_count,
    )
