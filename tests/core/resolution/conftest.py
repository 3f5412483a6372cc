"""In-memory metadata source for resolution tests."""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import Iterable

import pytest

from depends.core.frameworks import TargetFramework
from depends.core.packages import (
    AssetGroup,
    PackageAssets,
    PackageDependency,
    PackageDependencyInfo,
    PackageIdentity,
)
from depends.core.versioning import VersionRange
from depends.exceptions import MetadataNotFoundError
from depends.sources.base import PackageMetadataSource


class FakeSource(PackageMetadataSource):
    """Serves packages from a dict and counts every query.

    ``packages`` maps ``"Id/Version"`` to a list of ``(dep_id, range)``
    pairs. ``assets`` maps ``"Id/Version"`` to ``{framework: [items]}``.
    """

    def __init__(
        self,
        packages: dict[str, list[tuple[str, str]]],
        assets: dict[str, dict[str, list[str]]] | None = None,
        framework_assemblies: dict[str, dict[str, list[str]]] | None = None,
        label: str = "fake",
    ) -> None:
        self._packages: dict[PackageIdentity, tuple[PackageDependency, ...]] = {}
        for key, deps in packages.items():
            pkg_id, version = key.split("/")
            self._packages[PackageIdentity.create(pkg_id, version)] = tuple(
                PackageDependency(d, VersionRange.parse(r)) for d, r in deps
            )
        self._assets = assets or {}
        self._framework_assemblies = framework_assemblies or {}
        self._label = label
        self.queries: Counter[PackageIdentity] = Counter()
        self.entered = 0
        self.exited = 0

    @property
    def name(self) -> str:
        return self._label

    async def resolve_dependencies(
        self, identity: PackageIdentity, framework: TargetFramework
    ) -> PackageDependencyInfo | None:
        self.queries[identity] += 1
        # Yield so sibling tasks interleave.
        await asyncio.sleep(0)
        for known, deps in self._packages.items():
            if known == identity:
                return PackageDependencyInfo(known, deps, source=self)
        return None

    async def get_assets(self, identity: PackageIdentity) -> PackageAssets:
        for known in self._packages:
            if known == identity:
                key = f"{known.id}/{known.version}"
                return PackageAssets(
                    lib_groups=_groups(self._assets.get(key, {}).items()),
                    framework_groups=_groups(self._framework_assemblies.get(key, {}).items()),
                )
        raise MetadataNotFoundError(identity)

    async def __aenter__(self) -> FakeSource:
        self.entered += 1
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.exited += 1


def _groups(items: Iterable[tuple[str, list[str]]]) -> tuple[AssetGroup, ...]:
    return tuple(AssetGroup(TargetFramework.parse(fw), tuple(names)) for fw, names in items)


@pytest.fixture
def fake_source_factory():
    """Build FakeSource instances."""
    return FakeSource


@pytest.fixture
def diamond_source() -> FakeSource:
    """A -> B, A -> C, B -> D [1.0,), C -> D [1.2,)."""
    return FakeSource(
        {
            "A/1.0.0": [("B", "1.0.0"), ("C", "1.0.0")],
            "B/1.0.0": [("D", "1.0.0")],
            "C/1.0.0": [("D", "1.2.0")],
            "D/1.0.0": [],
            "D/1.2.0": [],
        },
        assets={
            "A/1.0.0": {"netstandard2.0": ["lib/netstandard2.0/A.dll"]},
            "D/1.2.0": {"netstandard2.0": ["lib/netstandard2.0/D.dll"]},
        },
    )
