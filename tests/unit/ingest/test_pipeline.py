"""Unit tests for top-scores orchestration."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import TopScoresConfig
from core.errors import DuplicateIdError, MalformedRecordError, ScoreSourceError
from core.types import ScoreResult
from ingest.pipeline import compute_top_scores
from tests.fixture_paths import fixture_path, score_line, write_score_log


def test_compute_top_scores_reads_example_file() -> None:
    """Example log should yield its three highest valid scores."""
    results = compute_top_scores(str(fixture_path("example-1.data")), 3)

    assert results == [
        ScoreResult(id="085a11e1b82b441184f4a193a3c9a13c", score=13214012),
        ScoreResult(id="84a0ccfec7d1475b8bfcae1945aea8f0", score=11446512),
        ScoreResult(id="7ec85fe3aa3c4dd599e23111e7abf5c1", score=11269569),
    ]


def test_compute_top_scores_rejects_malformed_line_inside_count() -> None:
    """Widening count to include the broken line should fail with its reason."""
    with pytest.raises(MalformedRecordError) as raised:
        compute_top_scores(str(fixture_path("example-1.data")), 4)

    assert raised.value.original_index == 3
    assert str(raised.value).startswith("invalid json format")
    assert "THIS IS NOT JSON" in raised.value.raw_line


def test_compute_top_scores_typical_scenario(tmp_path: Path) -> None:
    """Top two of three unique scores should come back highest first."""
    log_path = write_score_log(
        tmp_path,
        [score_line(100, "a"), score_line(200, "b"), score_line(50, "c")],
    )

    results = compute_top_scores(str(log_path), 2)

    assert [result.score for result in results] == [200, 100]


def test_compute_top_scores_duplicate_ids_fail_regardless_of_count(tmp_path: Path) -> None:
    """Duplicate ids anywhere should fail even when outside the cutoff."""
    log_path = write_score_log(
        tmp_path,
        [score_line(900, "top"), score_line(1, "a"), "broken", score_line(2, "a")],
    )

    with pytest.raises(DuplicateIdError):
        compute_top_scores(str(log_path), 1)


def test_compute_top_scores_accepts_crlf_logs(tmp_path: Path) -> None:
    """Windows line endings should parse like LF."""
    log_path = write_score_log(
        tmp_path,
        [score_line(3, "a"), score_line(3, "b")],
        newline="\r\n",
    )

    results = compute_top_scores(str(log_path), 1)

    assert results == [ScoreResult(id="b", score=3)]


def test_compute_top_scores_is_idempotent(tmp_path: Path) -> None:
    """Repeated runs over the same file should return identical results."""
    log_path = write_score_log(
        tmp_path,
        [score_line(score, f"id-{index}") for index, score in enumerate([5, 9, 5, 1, 9, 7])],
    )

    first = compute_top_scores(str(log_path), 4)
    second = compute_top_scores(str(log_path), 4)

    assert first == second
    assert [result.id for result in first] == ["id-4", "id-1", "id-5", "id-2"]


def test_compute_top_scores_uses_config_distinct_default(tmp_path: Path) -> None:
    """Configured distinct mode should apply unless overridden per call."""
    log_path = write_score_log(
        tmp_path,
        [score_line(8, "a"), score_line(8, "b"), score_line(2, "c")],
    )
    config = TopScoresConfig(distinct_scores=True)

    distinct = compute_top_scores(str(log_path), 2, config)
    overridden = compute_top_scores(str(log_path), 2, config, distinct_scores=False)

    assert [result.id for result in distinct] == ["b", "c"]
    assert [result.id for result in overridden] == ["b", "a"]


def test_compute_top_scores_raises_for_missing_file(tmp_path: Path) -> None:
    """Unreadable sources should fail immediately."""
    with pytest.raises(ScoreSourceError):
        compute_top_scores(str(tmp_path / "missing.data"), 1)


def test_compute_top_scores_logs_stage_events(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """TOPSCORES_LOG_LEVEL should apply when config comes from the environment."""
    monkeypatch.setenv("TOPSCORES_LOG_LEVEL", "info")
    log_path = write_score_log(tmp_path, [score_line(1, "a")])

    compute_top_scores(str(log_path), 1)
    captured = capsys.readouterr()

    assert '"event": "top_scores_computed"' in captured.err
    assert captured.out == ""


def test_compute_top_scores_explicit_config_keeps_caller_logging(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """An explicit config should not reconfigure logging."""
    log_path = write_score_log(tmp_path, [score_line(1, "a")])

    compute_top_scores(str(log_path), 1, TopScoresConfig(log_level="debug"))

    assert capsys.readouterr().err == ""


@pytest.mark.parametrize(
    "hostile_line",
    [
        "9" * 5000 + ': {"id": "x"}',
        '1: {"id": "x", "v": ' + "1" * 5000 + "}",
        "1: " + "[" * 100000,
    ],
)
def test_compute_top_scores_defers_hostile_lines_past_count(
    tmp_path: Path,
    hostile_line: str,
) -> None:
    """Lines that break number or nesting limits only matter inside the cutoff."""
    log_path = write_score_log(tmp_path, [score_line(50, "a"), hostile_line, score_line(40, "b")])

    results = compute_top_scores(str(log_path), 2)

    assert [result.id for result in results] == ["a", "b"]
    with pytest.raises(MalformedRecordError):
        compute_top_scores(str(log_path), 3)


def test_compute_top_scores_defers_undecodable_bytes(tmp_path: Path) -> None:
    """A bad byte in a low-ranked record should not fail the request."""
    log_path = tmp_path / "scores.data"
    log_path.write_bytes(b'9: {"id": "a"}\n1: {"id": "b", "n": "\xff"}\n')

    results = compute_top_scores(str(log_path), 1)

    assert results == [ScoreResult(id="a", score=9)]


def test_compute_top_scores_handles_numeric_ids(tmp_path: Path) -> None:
    """Numeric ids should be returned and checked for duplicates."""
    unique_path = write_score_log(tmp_path, ['5: {"id": 7}'])
    results = compute_top_scores(str(unique_path), 1)
    duplicate_dir = tmp_path / "dup"
    duplicate_dir.mkdir()
    duplicate_path = write_score_log(
        duplicate_dir,
        [score_line(9, "top"), '1: {"id": 7}', '2: {"id": 7}'],
    )

    assert results == [ScoreResult(id=7, score=5)]
    with pytest.raises(DuplicateIdError):
        compute_top_scores(str(duplicate_path), 1)


def test_compute_top_scores_ranks_first_line_after_byte_order_mark(tmp_path: Path) -> None:
    """A BOM-prefixed first line should rank by its score."""
    log_path = tmp_path / "scores.data"
    log_path.write_bytes(("\ufeff" + score_line(99, "first") + "\n" + score_line(1, "b")).encode())

    results = compute_top_scores(str(log_path), 1)

    assert results == [ScoreResult(id="first", score=99)]
