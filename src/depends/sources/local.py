"""Local directory package feed.

Serves packages from a folder of ``.nupkg`` files, either flat
(``<id>.<version>.nupkg``) or hierarchical
(``<id>/<version>/<id>.<version>.nupkg``, the layout of the global
packages folder). Packages are indexed by the id and version in their
nuspec, not by file name, because ids may contain dots.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from depends.core.packages import PackageIdentity
from depends.core.versioning import NuGetVersion
from depends.exceptions import MetadataSourceError
from depends.sources.base import FeedSource
from depends.sources.nuspec import NuspecDocument
from depends.sources.package_reader import PackageArchive

logger = logging.getLogger(__name__)


class LocalFeedSource(FeedSource):
    """Package source reading ``.nupkg`` files from a directory.

    Args:
        directory: Root of the feed.
    """

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._index: dict[tuple[str, NuGetVersion], tuple[PackageArchive, NuspecDocument]] | None = None
        self._index_lock: asyncio.Lock | None = None

    @property
    def name(self) -> str:
        return str(self._directory)

    def _build_index(self) -> dict[tuple[str, NuGetVersion], tuple[PackageArchive, NuspecDocument]]:
        index: dict[tuple[str, NuGetVersion], tuple[PackageArchive, NuspecDocument]] = {}
        if not self._directory.is_dir():
            logger.warning("Local feed %s does not exist", self._directory)
            return index
        for path in sorted(self._directory.rglob("*.nupkg")):
            archive = PackageArchive(path)
            try:
                nuspec = archive.read_nuspec()
            except MetadataSourceError:
                logger.warning("Skipping unreadable package %s", path, exc_info=True)
                continue
            index.setdefault(nuspec.identity.key, (archive, nuspec))
        logger.debug("Indexed %d packages in %s", len(index), self._directory)
        return index

    async def _lookup(self, identity: PackageIdentity) -> tuple[PackageArchive, NuspecDocument] | None:
        if self._index is None:
            if self._index_lock is None:
                self._index_lock = asyncio.Lock()
            async with self._index_lock:
                if self._index is None:
                    # Walks the folder and opens every archive.
                    self._index = await asyncio.to_thread(self._build_index)
        return self._index.get(identity.key)

    async def fetch_nuspec(self, identity: PackageIdentity) -> NuspecDocument | None:
        entry = await self._lookup(identity)
        return entry[1] if entry else None

    async def fetch_package(self, identity: PackageIdentity) -> PackageArchive | None:
        entry = await self._lookup(identity)
        return entry[0] if entry else None
