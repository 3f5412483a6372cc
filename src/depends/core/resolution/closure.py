"""The discovered package closure.

A ``PackageClosure`` holds every package version reached during
transitive discovery, possibly several versions of the same package
reached through different paths. It is the input of conflict resolution.
"""

from __future__ import annotations

from collections.abc import Iterator

from depends.core.packages import PackageDependency, PackageDependencyInfo
from depends.core.versioning import NuGetVersion


class PackageClosure:
    """Package versions available to the conflict solver.

    Keys are case-folded package ids; the first id spelling seen is kept
    for display.

    Thread safety: This class is NOT thread-safe. Discovery mutates it from
    a single event loop.
    """

    def __init__(self) -> None:
        self._packages: dict[tuple[str, NuGetVersion], PackageDependencyInfo] = {}
        self._display_ids: dict[str, str] = {}

    def add(self, info: PackageDependencyInfo) -> bool:
        """Insert *info* unless its identity is already present.

        Returns:
            True if the package was added, False if it was already known.
        """
        key = info.identity.key
        if key in self._packages:
            return False
        self._packages[key] = info
        self._display_ids.setdefault(key[0], info.id)
        return True

    @property
    def package_ids(self) -> set[str]:
        """Case-folded ids of every package in the closure."""
        return set(self._display_ids)

    def display_id(self, package_id: str) -> str:
        return self._display_ids.get(package_id.casefold(), package_id)

    def __contains__(self, package_id: object) -> bool:
        return isinstance(package_id, str) and package_id.casefold() in self._display_ids

    def __len__(self) -> int:
        return len(self._packages)

    def __iter__(self) -> Iterator[PackageDependencyInfo]:
        return iter(self._packages.values())

    def get(self, package_id: str, version: NuGetVersion) -> PackageDependencyInfo | None:
        return self._packages.get((package_id.casefold(), version))

    def get_versions(self, package_id: str) -> list[NuGetVersion]:
        """Return the known versions of a package, lowest first."""
        folded = package_id.casefold()
        return sorted(ver for (pid, ver) in self._packages if pid == folded)

    def get_dependencies(self, package_id: str, version: NuGetVersion) -> list[PackageDependency]:
        info = self.get(package_id, version)
        return list(info.dependencies) if info else []
