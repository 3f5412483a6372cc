"""Tests for lock file target selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from depends.core.frameworks import TargetFramework
from depends.core.lockfile import LockFile, LockFileTarget, LockFileTargetLibrary
from depends.exceptions import LockFileError

NET6 = TargetFramework.parse("net6.0")


@pytest.fixture
def lock_file() -> LockFile:
    return LockFile(
        path=Path("obj/project.assets.json"),
        targets=[
            LockFileTarget(NET6, None, [LockFileTargetLibrary("Serilog", "2.10.0")]),
            LockFileTarget(NET6, "win-x64", [LockFileTargetLibrary("Serilog", "2.10.0")]),
        ],
    )


class TestGetTarget:
    """Framework and runtime identifier must both match."""

    def test_framework_only(self, lock_file: LockFile) -> None:
        assert lock_file.get_target(NET6).runtime_identifier is None

    def test_runtime_identifier_ignores_case(self, lock_file: LockFile) -> None:
        assert lock_file.get_target(NET6, "WIN-X64").runtime_identifier == "win-x64"

    def test_missing_runtime(self, lock_file: LockFile) -> None:
        with pytest.raises(LockFileError, match="net6.0/linux-x64"):
            lock_file.get_target(NET6, "linux-x64")

    def test_missing_framework_lists_available(self, lock_file: LockFile) -> None:
        with pytest.raises(LockFileError) as excinfo:
            lock_file.get_target(TargetFramework.parse("net472"))
        message = str(excinfo.value)
        assert "no target for net472" in message
        assert "available: net6.0, net6.0/win-x64" in message


class TestLibraries:
    """Library lookups and package/project discrimination."""

    def test_get_library_ignores_case(self, lock_file: LockFile) -> None:
        target = lock_file.get_target(NET6)
        assert target.get_library("SERILOG").version == "2.10.0"
        assert target.get_library("Nope") is None

    def test_is_package(self) -> None:
        assert LockFileTargetLibrary("A", "1.0.0").is_package
        assert LockFileTargetLibrary("A", "1.0.0", type="Package").is_package
        assert not LockFileTargetLibrary("A", "1.0.0", type="project").is_package
