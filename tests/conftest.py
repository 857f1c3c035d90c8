"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear TOPSCORES_* overrides and restore default logging per test."""
    from core.logging_config import configure_logging

    for name in ("TOPSCORES_ENCODING", "TOPSCORES_DISTINCT_SCORES", "TOPSCORES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    configure_logging()
