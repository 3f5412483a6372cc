"""Package metadata sources for live resolution.

Public API::

    from depends.sources import PackageMetadataSource, build_sources
    from depends.sources.local import LocalFeedSource
    from depends.sources.nuget import NuGetFeedSource
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from depends.sources.base import FeedSource, PackageMetadataSource
from depends.sources.local import LocalFeedSource
from depends.sources.nuget import NUGET_ORG_INDEX, NuGetFeedSource

if TYPE_CHECKING:
    from depends.config import Settings


def build_sources(settings: Settings) -> list[PackageMetadataSource]:
    """Create one source per configured entry, preserving order.

    Entries starting with ``http://`` or ``https://`` are NuGet v3 feeds;
    anything else is a local directory.
    """
    sources: list[PackageMetadataSource] = []
    for entry in settings.sources:
        if entry.lower().startswith(("http://", "https://")):
            sources.append(
                NuGetFeedSource(
                    entry,
                    packages_folder=settings.packages_folder,
                    timeout=settings.timeout,
                )
            )
        else:
            sources.append(LocalFeedSource(entry))
    return sources


__all__ = [
    "FeedSource",
    "LocalFeedSource",
    "NUGET_ORG_INDEX",
    "NuGetFeedSource",
    "PackageMetadataSource",
    "build_sources",
]
