"""Live resolution: build a package's graph from feed metadata.

Given a bare package identity and a target framework, the engine

1. discovers the transitive metadata closure concurrently,
2. selects one version per package with ``ConflictSolver``,
3. fetches each selected package's assets and adds the assemblies of the
   nearest compatible framework group,
4. adds one labeled edge per dependency between selected packages.

Only step 1 is concurrent. Assets are fetched one package at a time from
the source that resolved the package.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from contextlib import AsyncExitStack

from depends.core.frameworks import FrameworkReducer, TargetFramework
from depends.core.graph import DependencyGraph, Edge, GraphBuilder, Node
from depends.core.packages import (
    PackageAssets,
    PackageDependencyInfo,
    PackageIdentity,
    framework_assembly_file,
)
from depends.core.resolution.closure import PackageClosure
from depends.core.resolution.discovery import TransitiveDiscovery
from depends.core.resolution.solver import ConflictSolver, ResolutionPolicy
from depends.core.versioning import NuGetVersion, VersionRange
from depends.exceptions import UnsatisfiableConstraintsError
from depends.sources.base import PackageMetadataSource

logger = logging.getLogger(__name__)


def reduce_assemblies(assets: PackageAssets, framework: TargetFramework) -> list[Node]:
    """Return assembly nodes for the groups nearest to *framework*.

    Lib items keep only ``.dll`` files. A package without a compatible
    group contributes nothing.
    """
    reducer = FrameworkReducer()
    nodes: list[Node] = []

    nearest = reducer.get_nearest(framework, (g.framework for g in assets.lib_groups))
    if nearest is not None:
        for group in assets.lib_groups:
            if group.framework != nearest:
                continue
            nodes.extend(
                Node.assembly(item) for item in group.items if item.lower().endswith(".dll")
            )

    nearest = reducer.get_nearest(framework, (g.framework for g in assets.framework_groups))
    if nearest is not None:
        for group in assets.framework_groups:
            if group.framework == nearest:
                nodes.extend(Node.assembly(framework_assembly_file(n)) for n in group.items)

    return nodes


class LiveResolutionEngine:
    """Resolve a package against live metadata sources.

    Args:
        sources: Ordered metadata sources.
        max_concurrency: Upper bound on simultaneous metadata queries.
        policy: Version preference for conflict resolution.
        discovery_timeout: Seconds after which discovery is abandoned, or
            None for no limit.
    """

    def __init__(
        self,
        sources: Sequence[PackageMetadataSource],
        max_concurrency: int = 16,
        policy: ResolutionPolicy = ResolutionPolicy.LOWEST,
        discovery_timeout: float | None = None,
    ) -> None:
        self._sources = list(sources)
        self._max_concurrency = max_concurrency
        self._policy = policy
        self._discovery_timeout = discovery_timeout

    async def analyze(
        self,
        package_id: str,
        version: NuGetVersion | str,
        framework: TargetFramework | str,
    ) -> DependencyGraph:
        """Build the dependency graph of one package version.

        Raises:
            UnsatisfiableConstraintsError: If no consistent version set
                exists, including when the package itself cannot be found.
            asyncio.TimeoutError: If discovery exceeds the timeout.
            MetadataSourceError: If a feed fails.
        """
        identity = PackageIdentity.create(package_id, version)
        if not isinstance(framework, TargetFramework):
            framework = TargetFramework.parse(framework)

        async with AsyncExitStack() as stack:
            for source in self._sources:
                await stack.enter_async_context(source)

            closure = await self._discover(identity, framework)
            selected = self._select(identity, closure)
            return await self._assemble(identity, selected, framework)

    async def _discover(
        self, identity: PackageIdentity, framework: TargetFramework
    ) -> PackageClosure:
        discovery = TransitiveDiscovery(self._sources, framework, self._max_concurrency)
        if self._discovery_timeout is None:
            return await discovery.discover(identity)
        return await asyncio.wait_for(
            discovery.discover(identity), timeout=self._discovery_timeout
        )

    def _select(
        self, identity: PackageIdentity, closure: PackageClosure
    ) -> list[PackageDependencyInfo]:
        requirements = {identity.id: VersionRange.exact(identity.version)}
        resolution = ConflictSolver(closure, requirements, self._policy).resolve()
        if not resolution.success:
            raise UnsatisfiableConstraintsError(resolution.conflicts)

        selected = []
        for name, version in sorted(resolution.installed.items()):
            info = closure.get(name, version)
            if info is not None:
                selected.append(info)
        logger.info("Selected %d packages for %s", len(selected), identity)
        return selected

    async def _assemble(
        self,
        identity: PackageIdentity,
        selected: list[PackageDependencyInfo],
        framework: TargetFramework,
    ) -> DependencyGraph:
        package_nodes = {
            info.id.casefold(): Node.package(info.id, str(info.version)) for info in selected
        }
        root = package_nodes.get(identity.id.casefold()) or Node.package(
            identity.id, str(identity.version)
        )
        builder = GraphBuilder(root)

        for info in selected:
            node = package_nodes[info.id.casefold()]
            builder.add_node(node)
            if info.source is None:
                logger.debug("No source recorded for %s; assets skipped", info.identity)
                continue
            assets = await info.source.get_assets(info.identity)
            assemblies = reduce_assemblies(assets, framework)
            if not assemblies:
                logger.debug("%s ships no assemblies for %s", info.identity, framework)
            builder.add_nodes(assemblies)
            builder.add_edges(Edge(node, assembly) for assembly in assemblies)

        for info in selected:
            start = package_nodes[info.id.casefold()]
            for dep in info.dependencies:
                end = package_nodes.get(dep.id.casefold())
                if end is None:
                    logger.debug(
                        "%s dependency %s %s was not selected", info.identity, dep.id, dep.range
                    )
                    continue
                builder.add_edge(Edge(start, end, str(dep.range)))

        return builder.build()
