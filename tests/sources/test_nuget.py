"""Tests for NuGetFeedSource. All HTTP calls are mocked."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from depends.core.frameworks import TargetFramework
from depends.core.packages import PackageIdentity
from depends.exceptions import MetadataNotFoundError, MetadataSourceError
from depends.sources.nuget import NuGetFeedSource
from tests.helpers import build_nupkg, build_nuspec

INDEX_URL = "https://feed.example/v3/index.json"
BASE = "https://feed.example/v3-flatcontainer/"
INDEX: dict[str, Any] = {
    "version": "3.0.0",
    "resources": [
        {"@id": "https://feed.example/query", "@type": "SearchQueryService"},
        {"@id": BASE.rstrip("/"), "@type": "PackageBaseAddress/3.0.0"},
    ],
}
SERILOG = PackageIdentity.create("Serilog", "2.10.0")
NET6 = TargetFramework.parse("net6.0")


def _patch_fetch_json(return_value: Any) -> Any:
    return patch(
        "depends.sources.nuget.fetch_json",
        new_callable=AsyncMock,
        return_value=return_value,
    )


def _patch_fetch_bytes(**kwargs: Any) -> Any:
    return patch("depends.sources.nuget.fetch_bytes", new_callable=AsyncMock, **kwargs)


class TestServiceIndex:
    """Locating the package content resource."""

    def test_base_address(self) -> None:
        source = NuGetFeedSource(INDEX_URL)
        with _patch_fetch_json(INDEX):
            assert asyncio.run(source.package_base_address()) == BASE

    def test_base_address_cached(self) -> None:
        source = NuGetFeedSource(INDEX_URL)

        async def run() -> None:
            await source.package_base_address()
            await source.package_base_address()

        with _patch_fetch_json(INDEX) as mock_json:
            asyncio.run(run())
        assert mock_json.await_count == 1

    def test_type_list(self) -> None:
        index = {"resources": [{"@id": BASE, "@type": ["PackageBaseAddress/3.0.0", "Other"]}]}
        with _patch_fetch_json(index):
            assert asyncio.run(NuGetFeedSource(INDEX_URL).package_base_address()) == BASE

    def test_missing_index(self) -> None:
        with _patch_fetch_json(None):
            with pytest.raises(MetadataSourceError, match="not found"):
                asyncio.run(NuGetFeedSource(INDEX_URL).package_base_address())

    def test_missing_resource(self) -> None:
        with _patch_fetch_json({"resources": []}):
            with pytest.raises(MetadataSourceError, match="PackageBaseAddress"):
                asyncio.run(NuGetFeedSource(INDEX_URL).package_base_address())


class TestResolveDependencies:
    """Nuspec download and parsing."""

    def test_lowercased_url(self) -> None:
        nuspec = build_nuspec("Serilog", "2.10.0", groups={"netstandard2.0": [("System.Memory", "4.5.4")]})
        source = NuGetFeedSource(INDEX_URL)
        with _patch_fetch_json(INDEX), _patch_fetch_bytes(return_value=nuspec.encode()) as mock_bytes:
            info = asyncio.run(source.resolve_dependencies(SERILOG, NET6))
        assert mock_bytes.await_args.args[1] == f"{BASE}serilog/2.10.0/serilog.nuspec"
        assert info is not None
        assert [d.id for d in info.dependencies] == ["System.Memory"]
        assert info.source is source

    def test_not_found(self) -> None:
        with _patch_fetch_json(INDEX), _patch_fetch_bytes(return_value=None):
            info = asyncio.run(NuGetFeedSource(INDEX_URL).resolve_dependencies(SERILOG, NET6))
        assert info is None

    def test_feed_error_propagates(self) -> None:
        with _patch_fetch_json(INDEX), _patch_fetch_bytes(side_effect=MetadataSourceError("HTTP 500")):
            with pytest.raises(MetadataSourceError):
                asyncio.run(NuGetFeedSource(INDEX_URL).resolve_dependencies(SERILOG, NET6))


class TestPackageCache:
    """Downloaded archives land in the packages folder."""

    def test_download_writes_cache(self, tmp_path, nupkg_factory) -> None:
        data = nupkg_factory("Serilog", "2.10.0", lib_files=["lib/net6.0/Serilog.dll"]).read_bytes()
        cache = tmp_path / "packages"
        source = NuGetFeedSource(INDEX_URL, packages_folder=cache)
        with _patch_fetch_json(INDEX), _patch_fetch_bytes(return_value=data) as mock_bytes:
            assets = asyncio.run(source.get_assets(SERILOG))
        assert mock_bytes.await_args.args[1] == f"{BASE}serilog/2.10.0/serilog.2.10.0.nupkg"
        assert (cache / "serilog" / "2.10.0" / "serilog.2.10.0.nupkg").read_bytes() == data
        assert assets.lib_groups[0].items == ("lib/net6.0/Serilog.dll",)

    def test_cached_package_skips_network(self, tmp_path) -> None:
        cache = tmp_path / "packages"
        build_nupkg(cache / "serilog" / "2.10.0" / "serilog.2.10.0.nupkg", "Serilog", "2.10.0")
        source = NuGetFeedSource(INDEX_URL, packages_folder=cache)
        with _patch_fetch_json(INDEX) as mock_json, _patch_fetch_bytes() as mock_bytes:
            info = asyncio.run(source.resolve_dependencies(SERILOG, NET6))
        assert info is not None
        mock_json.assert_not_awaited()
        mock_bytes.assert_not_awaited()

    def test_missing_package_raises(self) -> None:
        with _patch_fetch_json(INDEX), _patch_fetch_bytes(return_value=None):
            with pytest.raises(MetadataNotFoundError):
                asyncio.run(NuGetFeedSource(INDEX_URL).get_assets(SERILOG))


class TestContextManager:
    """The source owns one pooled client while entered."""

    def test_client_lifecycle(self) -> None:
        source = NuGetFeedSource(INDEX_URL)

        async def run() -> None:
            async with source as entered:
                assert entered is source
                assert source._client is not None
            assert source._client is None

        asyncio.run(run())
