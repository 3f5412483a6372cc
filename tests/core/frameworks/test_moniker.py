"""Tests for TargetFramework parsing and formatting."""

from __future__ import annotations

import pytest

from depends.core.frameworks import ANY_FRAMEWORK, TargetFramework
from depends.core.frameworks.moniker import NET_CORE_APP, NET_FRAMEWORK, NET_STANDARD


class TestParse:
    """Short folder names and full framework names."""

    @pytest.mark.parametrize(
        "text, identifier, version",
        [
            ("net472", NET_FRAMEWORK, (4, 7, 2, 0)),
            ("net48", NET_FRAMEWORK, (4, 8, 0, 0)),
            ("netstandard2.0", NET_STANDARD, (2, 0, 0, 0)),
            ("netcoreapp3.1", NET_CORE_APP, (3, 1, 0, 0)),
            ("net6.0", NET_CORE_APP, (6, 0, 0, 0)),
            (".NETCoreApp,Version=v3.1", NET_CORE_APP, (3, 1, 0, 0)),
            (".NETFramework,Version=v4.7.2", NET_FRAMEWORK, (4, 7, 2, 0)),
            (".NETStandard2.0", NET_STANDARD, (2, 0, 0, 0)),
        ],
    )
    def test_known_monikers(self, text, identifier, version) -> None:
        framework = TargetFramework.parse(text)
        assert framework.identifier == identifier
        assert framework.version == version

    def test_platform_suffix(self) -> None:
        framework = TargetFramework.parse("net6.0-windows7.0")
        assert framework.identifier == NET_CORE_APP
        assert framework.platform == "windows"

    @pytest.mark.parametrize("text", ["", None, "any", "dotnet"])
    def test_any(self, text) -> None:
        assert TargetFramework.parse(text) is ANY_FRAMEWORK

    def test_unknown_identifier_kept(self) -> None:
        framework = TargetFramework.parse("uap10.0")
        assert framework.identifier == "uap"
        assert not framework.is_known

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ValueError):
            TargetFramework.parse("!!")


class TestFormatting:
    """Round-tripping to short and full names."""

    @pytest.mark.parametrize(
        "text, short",
        [
            ("net472", "net472"),
            (".NETFramework,Version=v4.8", "net48"),
            ("net6.0", "net6.0"),
            (".NETCoreApp,Version=v3.1", "netcoreapp3.1"),
            ("netstandard2.0", "netstandard2.0"),
            ("net6.0-windows", "net6.0-windows"),
        ],
    )
    def test_short_folder_name(self, text: str, short: str) -> None:
        assert TargetFramework.parse(text).short_folder_name() == short

    def test_full_name(self) -> None:
        assert TargetFramework.parse("net6.0").full_name() == ".NETCoreApp,Version=v6.0"
        assert ANY_FRAMEWORK.full_name() == "Any"

    def test_equality_across_spellings(self) -> None:
        assert TargetFramework.parse("net6.0") == TargetFramework.parse(".NETCoreApp,Version=v6.0")
