"""Shared fixtures for depends tests."""

from __future__ import annotations

import json
import pathlib
from typing import Any, Callable

import pytest

from tests.helpers import SAMPLE_TARGETS, build_nupkg, write_assets, write_project


@pytest.fixture
def nupkg_factory(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """Create ``.nupkg`` files in a flat ``feed`` directory under tmp_path."""
    feed = tmp_path / "feed"
    feed.mkdir()

    def _make(package_id: str, version: str, **kwargs: Any) -> pathlib.Path:
        return build_nupkg(feed / f"{package_id}.{version}.nupkg", package_id, version, **kwargs)

    return _make


@pytest.fixture
def feed_dir(tmp_path: pathlib.Path, nupkg_factory: Callable[..., pathlib.Path]) -> pathlib.Path:
    """The directory ``nupkg_factory`` writes to."""
    return tmp_path / "feed"


@pytest.fixture
def restored_project(tmp_path: pathlib.Path) -> pathlib.Path:
    """An SDK-style project with its restore artifact in place."""
    project_dir = tmp_path / "App"
    path = write_project(
        project_dir,
        package_references=[
            ("Newtonsoft.Json", "12.0.3"),
            ("Serilog", "2.10.0"),
            ("Microsoft.NETCore.App", None),
        ],
        references=[r"..\lib\Legacy.dll", "System.Xml"],
    )
    write_assets(project_dir, SAMPLE_TARGETS)
    return path


@pytest.fixture
def project_writer() -> Callable[..., pathlib.Path]:
    """Expose ``write_project`` to tests."""
    return write_project


@pytest.fixture
def assets_writer() -> Callable[..., pathlib.Path]:
    """Expose ``write_assets`` to tests."""
    return write_assets


@pytest.fixture
def sample_targets() -> dict[str, dict[str, dict[str, Any]]]:
    """A deep copy of ``SAMPLE_TARGETS``."""
    return json.loads(json.dumps(SAMPLE_TARGETS))
