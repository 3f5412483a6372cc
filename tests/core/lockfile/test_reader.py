"""Tests for reading project.assets.json."""

from __future__ import annotations

import json

import pytest

from depends.core.frameworks import TargetFramework
from depends.core.lockfile import read_lock_file
from depends.exceptions import LockFileError

NET6 = TargetFramework.parse("net6.0")


class TestReadLockFile:
    """Parsing targets and libraries."""

    def test_sample(self, tmp_path, assets_writer, sample_targets) -> None:
        path = assets_writer(tmp_path, sample_targets)
        lock_file = read_lock_file(path)
        assert lock_file.version == 3
        target = lock_file.get_target(NET6)
        serilog = target.get_library("Serilog")
        assert serilog.version == "2.10.0"
        assert serilog.dependencies == {"System.Memory": "4.5.4"}
        assert serilog.framework_assemblies == ["System.Net.Http"]
        assert serilog.runtime_assemblies == ["lib/netstandard2.1/Serilog.dll"]
        assert not target.get_library("Shared").is_package

    def test_full_framework_names_and_runtime(self, tmp_path, assets_writer) -> None:
        path = assets_writer(
            tmp_path,
            {
                ".NETCoreApp,Version=v3.1": {},
                ".NETCoreApp,Version=v3.1/win-x64": {"A/1.0.0": {"type": "package"}},
            },
        )
        lock_file = read_lock_file(path)
        target = lock_file.get_target(TargetFramework.parse("netcoreapp3.1"), "win-x64")
        assert [lib.name for lib in target.libraries] == ["A"]

    def test_utf8_bom(self, tmp_path) -> None:
        path = tmp_path / "project.assets.json"
        path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"version": 3, "targets": {}}).encode())
        assert read_lock_file(path).targets == []

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_lock_file(tmp_path / "project.assets.json")

    @pytest.mark.parametrize(
        "content, match",
        [
            ("{not json", "not valid JSON"),
            ("[]", "JSON object"),
            ('{"version": 3}', "targets"),
            ('{"targets": {"net6.0": {"NoVersion": {}}}}', "invalid library key"),
            ('{"targets": {"net6.0": {"A/1.0.0": []}}}', "must be an object"),
            ('{"targets": {"!!": {}}}', "invalid target"),
        ],
    )
    def test_malformed(self, tmp_path, content: str, match: str) -> None:
        path = tmp_path / "project.assets.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(LockFileError, match=match):
            read_lock_file(path)
