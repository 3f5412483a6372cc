"""Concurrent transitive discovery of package metadata.

Starting from a root identity, every dependency edge spawns one task that
queries the configured sources for the dependency's lowest allowed version.
All tasks share one claim table, so each identity is queried at most once
no matter how many paths reach it; a task losing the claim returns without
issuing the query. Discovery returns only after every task has finished.

Cancelling the ``discover`` coroutine (for example through
``asyncio.wait_for``) cancels the whole fan-out. A failing query does the
same: its siblings are cancelled and awaited before the error propagates.
Claim tables and closures belong to a single ``discover`` call and are
discarded with it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Sequence
from typing import Any

from depends.core.frameworks import TargetFramework
from depends.core.packages import PackageDependencyInfo, PackageIdentity
from depends.core.resolution.closure import PackageClosure
from depends.exceptions import MetadataNotFoundError
from depends.sources.base import PackageMetadataSource

logger = logging.getLogger(__name__)


async def _gather_or_cancel(coros: list[Coroutine[Any, Any, None]]) -> None:
    """Run *coros* concurrently; if one fails, cancel and await the rest."""
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ClaimTable:
    """Insert-if-absent registry of identities already being resolved.

    ``claim`` checks and inserts without suspending, which makes it atomic
    with respect to other tasks on the same event loop.
    """

    def __init__(self) -> None:
        self._claimed: set[PackageIdentity] = set()

    def claim(self, identity: PackageIdentity) -> bool:
        """Return True for the first caller per identity, False afterwards."""
        if identity in self._claimed:
            return False
        self._claimed.add(identity)
        return True

    def __len__(self) -> int:
        return len(self._claimed)


class TransitiveDiscovery:
    """Discover the full metadata closure of a package.

    Args:
        sources: Metadata sources, queried in order; the first one that
            knows an identity answers for it.
        framework: Target framework used to pick dependency groups.
        max_concurrency: Upper bound on simultaneous source queries.
    """

    def __init__(
        self,
        sources: Sequence[PackageMetadataSource],
        framework: TargetFramework,
        max_concurrency: int = 16,
    ) -> None:
        self._sources = list(sources)
        self._framework = framework
        self._max_concurrency = max_concurrency

    async def discover(self, root: PackageIdentity) -> PackageClosure:
        """Return every package version transitively reachable from *root*.

        Identities that no source can resolve are skipped.
        """
        closure = PackageClosure()
        claims = ClaimTable()
        semaphore = asyncio.Semaphore(self._max_concurrency)
        await self._visit(root, closure, claims, semaphore)
        logger.info(
            "Discovered %d package versions from %s (%d identities queried)",
            len(closure), root, len(claims),
        )
        return closure

    async def _visit(
        self,
        identity: PackageIdentity,
        closure: PackageClosure,
        claims: ClaimTable,
        semaphore: asyncio.Semaphore,
    ) -> None:
        if not claims.claim(identity):
            return

        info = await self._query(identity, semaphore)
        if info is None:
            logger.debug("No source could resolve %s; skipping", identity)
            return
        if not closure.add(info):
            return

        children = []
        for dependency in info.dependencies:
            lowest = dependency.range.min_version
            if lowest is None:
                logger.debug(
                    "%s depends on %s %s without a lower bound; not followed",
                    info.identity, dependency.id, dependency.range,
                )
                continue
            child = PackageIdentity(dependency.id, lowest)
            children.append(self._visit(child, closure, claims, semaphore))
        if children:
            await _gather_or_cancel(children)

    async def _query(
        self, identity: PackageIdentity, semaphore: asyncio.Semaphore
    ) -> PackageDependencyInfo | None:
        for source in self._sources:
            async with semaphore:
                try:
                    info = await source.resolve_dependencies(identity, self._framework)
                except MetadataNotFoundError:
                    info = None
            if info is not None:
                return info
        return None
