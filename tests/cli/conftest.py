"""Shared fixtures for CLI tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_environment(tmp_path, monkeypatch) -> None:
    """Keep user settings out of CLI runs."""
    for var in (
        "DEPENDS_CONFIG",
        "DEPENDS_SOURCES",
        "DEPENDS_PACKAGES_FOLDER",
        "DEPENDS_TIMEOUT",
        "DEPENDS_MAX_CONCURRENCY",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)

