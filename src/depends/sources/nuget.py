"""NuGet v3 feed source.

Talks to a NuGet v3 server (``https://api.nuget.org/v3/index.json`` by
default) through the package content resource (``PackageBaseAddress``):

- ``{base}{id}/{version}/{id}.nuspec`` for dependency metadata;
- ``{base}{id}/{version}/{id}.{version}.nupkg`` for the package itself.

Ids and versions are lowercased in URLs, as the protocol requires.
Downloaded packages are cached under the packages folder using the global
packages folder layout, so later runs read them from disk.

Usage::

    async with NuGetFeedSource(NUGET_ORG_INDEX, packages_folder) as source:
        info = await source.resolve_dependencies(identity, framework)
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx

from depends.core.packages import PackageIdentity
from depends.exceptions import MetadataSourceError
from depends.sources.base import FeedSource
from depends.sources.http_client import DEFAULT_TIMEOUT, create_client, fetch_bytes, fetch_json
from depends.sources.nuspec import NuspecDocument, parse_nuspec
from depends.sources.package_reader import PackageArchive

logger = logging.getLogger(__name__)

NUGET_ORG_INDEX: str = "https://api.nuget.org/v3/index.json"

_PACKAGE_BASE_TYPE = "PackageBaseAddress/3.0.0"


def _store(path: Path, body: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(body)


class NuGetFeedSource(FeedSource):
    """Package source for a remote NuGet v3 feed.

    Args:
        index_url: URL of the feed's service index.
        packages_folder: Directory used to cache downloaded packages.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        index_url: str = NUGET_ORG_INDEX,
        packages_folder: str | Path | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._index_url = index_url
        self._packages_folder = Path(packages_folder) if packages_folder else None
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None
        self._base_address: str | None = None
        self._base_lock: asyncio.Lock | None = None

    @property
    def name(self) -> str:
        return self._index_url

    async def __aenter__(self) -> NuGetFeedSource:
        self._client = create_client(self._timeout)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str) -> bytes | None:
        if self._client is not None:
            return await fetch_bytes(self._client, url)
        async with create_client(self._timeout) as client:
            return await fetch_bytes(client, url)

    async def package_base_address(self) -> str:
        """Resolve and cache the ``PackageBaseAddress`` resource URL.

        Raises:
            MetadataSourceError: If the index is missing or lacks the resource.
        """
        if self._base_address is not None:
            return self._base_address
        if self._base_lock is None:
            self._base_lock = asyncio.Lock()
        async with self._base_lock:
            if self._base_address is None:
                self._base_address = await self._read_base_address()
        return self._base_address

    async def _read_base_address(self) -> str:
        if self._client is not None:
            index = await fetch_json(self._client, self._index_url)
        else:
            async with create_client(self._timeout) as client:
                index = await fetch_json(client, self._index_url)
        if index is None:
            raise MetadataSourceError(f"Service index not found: {self._index_url}")
        for resource in index.get("resources", []):
            types = resource.get("@type", "")
            if isinstance(types, str):
                types = [types]
            if _PACKAGE_BASE_TYPE in types and resource.get("@id"):
                base = str(resource["@id"])
                return base if base.endswith("/") else base + "/"
        raise MetadataSourceError(
            f"{self._index_url} does not offer {_PACKAGE_BASE_TYPE}"
        )

    @staticmethod
    def _path_parts(identity: PackageIdentity) -> tuple[str, str]:
        return identity.id.lower(), identity.version.to_normalized_string().lower()

    def _cache_path(self, identity: PackageIdentity) -> Path | None:
        if self._packages_folder is None:
            return None
        pkg_id, version = self._path_parts(identity)
        return self._packages_folder / pkg_id / version / f"{pkg_id}.{version}.nupkg"

    async def fetch_nuspec(self, identity: PackageIdentity) -> NuspecDocument | None:
        cached = self._cache_path(identity)
        if cached is not None and cached.is_file():
            return await asyncio.to_thread(PackageArchive(cached).read_nuspec)

        base = await self.package_base_address()
        pkg_id, version = self._path_parts(identity)
        body = await self._get(f"{base}{pkg_id}/{version}/{pkg_id}.nuspec")
        if body is None:
            logger.debug("%s not found on %s", identity, self._index_url)
            return None
        return parse_nuspec(body)

    async def fetch_package(self, identity: PackageIdentity) -> PackageArchive | None:
        cached = self._cache_path(identity)
        if cached is not None and cached.is_file():
            return PackageArchive(cached)

        base = await self.package_base_address()
        pkg_id, version = self._path_parts(identity)
        body = await self._get(f"{base}{pkg_id}/{version}/{pkg_id}.{version}.nupkg")
        if body is None:
            return None
        if cached is not None:
            await asyncio.to_thread(_store, cached, body)
            logger.info("Downloaded %s to %s", identity, cached)
            return PackageArchive(cached)
        return PackageArchive(body)
