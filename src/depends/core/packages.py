"""Package identities, dependencies and shipped assets.

These are the value types exchanged between the live resolution engine and
package metadata sources. Package ids are case-insensitive throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from depends.core.frameworks import TargetFramework
from depends.core.versioning import NuGetVersion, VersionRange

if TYPE_CHECKING:
    from depends.sources.base import PackageMetadataSource


@dataclass(frozen=True, eq=False)
class PackageIdentity:
    """A package id at one exact version.

    Equality and hashing use the case-folded id and the parsed version,
    so ``Newtonsoft.Json 12.0`` equals ``newtonsoft.json 12.0.0``.
    """

    id: str
    version: NuGetVersion

    @classmethod
    def create(cls, package_id: str, version: NuGetVersion | str) -> PackageIdentity:
        if isinstance(version, str):
            version = NuGetVersion.parse(version)
        return cls(package_id, version)

    @property
    def key(self) -> tuple[str, NuGetVersion]:
        return self.id.casefold(), self.version

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.id} {self.version}"


@dataclass(frozen=True)
class PackageDependency:
    """A dependency on another package, as declared in package metadata.

    Attributes:
        id: The dependency's package id.
        range: Allowed versions.
    """

    id: str
    range: VersionRange = field(default_factory=VersionRange)


@dataclass(frozen=True)
class PackageDependencyInfo:
    """A resolved package and its direct dependencies for one framework.

    Attributes:
        identity: The package the metadata describes.
        dependencies: Direct dependencies for the queried framework.
        source: The metadata source that answered, used later to fetch
            the package's assets.
    """

    identity: PackageIdentity
    dependencies: tuple[PackageDependency, ...] = ()
    source: PackageMetadataSource | None = field(default=None, compare=False)

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def version(self) -> NuGetVersion:
        return self.identity.version


@dataclass(frozen=True)
class AssetGroup:
    """Items a package ships for one target framework.

    Attributes:
        framework: The framework the items were built for.
        items: Archive paths (lib items) or assembly names (framework
            assemblies).
    """

    framework: TargetFramework
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class PackageAssets:
    """All asset groups shipped by one package.

    Attributes:
        lib_groups: Compiled assemblies under ``lib/<tfm>/``.
        framework_groups: Platform-supplied assemblies the package
            references (``frameworkAssemblies`` in the nuspec).
    """

    lib_groups: tuple[AssetGroup, ...] = ()
    framework_groups: tuple[AssetGroup, ...] = ()


def framework_assembly_file(name: str) -> str:
    """Return the binary file name of a framework assembly reference.

    Package metadata names framework assemblies without an extension
    (``System.Net.Http``); graph nodes use file names, so ``.dll`` is
    appended when missing.
    """
    if name.lower().endswith((".dll", ".exe")):
        return name
    return f"{name}.dll"
