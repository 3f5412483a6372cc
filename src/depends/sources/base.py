"""Base classes for package metadata sources.

Defines the ``PackageMetadataSource`` abstract base class the live
resolution engine talks to, and ``FeedSource``, which implements it on top
of two primitives every NuGet feed offers: reading a package's nuspec and
opening its ``.nupkg`` archive.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from depends.core.frameworks import TargetFramework
from depends.core.packages import PackageAssets, PackageDependencyInfo, PackageIdentity
from depends.exceptions import MetadataNotFoundError
from depends.sources.nuspec import NuspecDocument
from depends.sources.package_reader import PackageArchive

logger = logging.getLogger(__name__)


class PackageMetadataSource(ABC):
    """Abstract base class for package metadata sources.

    Sources may be remote and slow; the engine queries them concurrently.
    Sources holding connections are async context managers and are entered
    for the duration of one analysis.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this source (URL or directory)."""

    @abstractmethod
    async def resolve_dependencies(
        self, identity: PackageIdentity, framework: TargetFramework
    ) -> PackageDependencyInfo | None:
        """Return the package's direct dependencies for *framework*.

        Args:
            identity: The exact package version to look up.
            framework: The consuming project's target framework.

        Returns:
            Dependency info, or None if this source does not have the
            package.
        """

    @abstractmethod
    async def get_assets(self, identity: PackageIdentity) -> PackageAssets:
        """Return the asset groups the package ships.

        Raises:
            MetadataNotFoundError: If this source does not have the package.
        """

    async def __aenter__(self) -> PackageMetadataSource:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FeedSource(PackageMetadataSource):
    """A source backed by nuspec manifests and ``.nupkg`` archives.

    Subclasses implement ``fetch_nuspec`` and ``fetch_package``.
    """

    @abstractmethod
    async def fetch_nuspec(self, identity: PackageIdentity) -> NuspecDocument | None:
        """Return the package's manifest, or None if the feed lacks it."""

    @abstractmethod
    async def fetch_package(self, identity: PackageIdentity) -> PackageArchive | None:
        """Return the package archive, or None if the feed lacks it."""

    async def resolve_dependencies(
        self, identity: PackageIdentity, framework: TargetFramework
    ) -> PackageDependencyInfo | None:
        nuspec = await self.fetch_nuspec(identity)
        if nuspec is None:
            return None
        return PackageDependencyInfo(
            identity=nuspec.identity,
            dependencies=nuspec.dependencies_for(framework),
            source=self,
        )

    async def get_assets(self, identity: PackageIdentity) -> PackageAssets:
        archive = await self.fetch_package(identity)
        if archive is None:
            raise MetadataNotFoundError(identity)
        return await asyncio.to_thread(archive.read_assets)
