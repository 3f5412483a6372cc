"""Parsing of ``.nuspec`` package manifests.

Only the parts the dependency graph needs are read: id, version, the
dependency groups and the framework assembly references. Element names are
matched without their XML namespace because the nuspec schema namespace
changed across NuGet releases.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from depends.core.frameworks import ANY_FRAMEWORK, FrameworkReducer, TargetFramework
from depends.core.packages import AssetGroup, PackageDependency, PackageIdentity
from depends.core.versioning import VersionRange
from depends.exceptions import MetadataSourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyGroup:
    """Dependencies declared for one target framework."""

    framework: TargetFramework
    dependencies: tuple[PackageDependency, ...] = ()


@dataclass(frozen=True)
class NuspecDocument:
    """The parsed subset of a nuspec manifest.

    Attributes:
        identity: Package id and version.
        dependency_groups: Dependencies grouped by framework. Ungrouped
            dependencies form a single framework-agnostic group.
        framework_assemblies: Framework assembly names grouped by target
            framework.
    """

    identity: PackageIdentity
    dependency_groups: tuple[DependencyGroup, ...] = ()
    framework_assemblies: tuple[AssetGroup, ...] = ()

    def dependencies_for(self, framework: TargetFramework) -> tuple[PackageDependency, ...]:
        """Return the dependencies of the group nearest to *framework*.

        A package without a compatible group has no dependencies for that
        framework.
        """
        if not self.dependency_groups:
            return ()
        nearest = FrameworkReducer().get_nearest(
            framework, (g.framework for g in self.dependency_groups)
        )
        if nearest is None:
            return ()
        deps: list[PackageDependency] = []
        for group in self.dependency_groups:
            if group.framework == nearest:
                deps.extend(group.dependencies)
        return tuple(deps)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _child_text(element: ET.Element, name: str) -> str:
    for child in _children(element, name):
        return (child.text or "").strip()
    return ""


def _parse_framework(text: str | None) -> TargetFramework | None:
    try:
        return TargetFramework.parse(text)
    except ValueError:
        logger.debug("Ignoring unknown target framework %r", text)
        return None


def _parse_dependency(element: ET.Element) -> PackageDependency | None:
    dep_id = (element.get("id") or "").strip()
    if not dep_id:
        return None
    try:
        version_range = VersionRange.parse(element.get("version"))
    except ValueError:
        logger.debug("Ignoring invalid range %r on dependency %s", element.get("version"), dep_id)
        version_range = VersionRange()
    return PackageDependency(dep_id, version_range)


def parse_nuspec(data: bytes | str) -> NuspecDocument:
    """Parse nuspec XML content.

    Args:
        data: Raw nuspec bytes or text.

    Returns:
        The parsed ``NuspecDocument``.

    Raises:
        MetadataSourceError: If the XML is malformed or lacks id/version.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise MetadataSourceError(f"Malformed nuspec: {exc}") from exc

    metadata = next(iter(_children(root, "metadata")), None)
    if metadata is None:
        raise MetadataSourceError("Nuspec has no <metadata> element")

    package_id = _child_text(metadata, "id")
    version = _child_text(metadata, "version")
    if not package_id or not version:
        raise MetadataSourceError("Nuspec metadata lacks <id> or <version>")
    try:
        identity = PackageIdentity.create(package_id, version)
    except ValueError as exc:
        raise MetadataSourceError(f"Nuspec version is invalid: {version!r}") from exc

    groups: list[DependencyGroup] = []
    for deps_el in _children(metadata, "dependencies"):
        loose = [d for d in map(_parse_dependency, _children(deps_el, "dependency")) if d]
        if loose:
            groups.append(DependencyGroup(ANY_FRAMEWORK, tuple(loose)))
        for group_el in _children(deps_el, "group"):
            framework = _parse_framework(group_el.get("targetFramework"))
            if framework is None:
                continue
            deps = [d for d in map(_parse_dependency, _children(group_el, "dependency")) if d]
            groups.append(DependencyGroup(framework, tuple(deps)))

    assemblies: dict[TargetFramework, list[str]] = {}
    for fa_el in _children(metadata, "frameworkAssemblies"):
        for ref in _children(fa_el, "frameworkAssembly"):
            name = (ref.get("assemblyName") or "").strip()
            if not name:
                continue
            targets = (ref.get("targetFramework") or "").split(",")
            for target in targets:
                framework = _parse_framework(target)
                if framework is not None:
                    assemblies.setdefault(framework, []).append(name)

    return NuspecDocument(
        identity=identity,
        dependency_groups=tuple(groups),
        framework_assemblies=tuple(
            AssetGroup(fw, tuple(names)) for fw, names in assemblies.items()
        ),
    )
