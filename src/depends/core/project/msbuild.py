"""Static evaluation of MSBuild project files.

Reads ``.csproj``/``.fsproj``/``.vbproj`` XML without running MSBuild.
Property groups are applied in document order (later definitions win) and
``$(Name)`` references are expanded against the properties seen so far.
Conditions are not evaluated, and imported files (``Directory.Build.props``,
SDK targets) are not read. That is enough to locate the restore artifact
and to list the direct references of typical SDK-style projects.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from depends.core.frameworks import ANY_FRAMEWORK, TargetFramework
from depends.core.project.evaluation import (
    PackageReference,
    ProjectEvaluation,
    ProjectEvaluator,
    ProjectItem,
)
from depends.exceptions import InvalidInputError, ProjectEvaluationError

logger = logging.getLogger(__name__)

ASSETS_FILE_NAME = "project.assets.json"

_PROPERTY_RE = re.compile(r"\$\(([A-Za-z_][\w.]*)\)")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _to_path(value: str) -> str:
    return value.replace("\\", "/")


class MSBuildProjectEvaluator(ProjectEvaluator):
    """Evaluate project files by reading their XML."""

    def evaluate(
        self, project_path: str | Path, framework: str | None = None
    ) -> ProjectEvaluation:
        path = Path(project_path)
        try:
            root = ET.parse(path).getroot()
        except (OSError, ET.ParseError) as exc:
            raise ProjectEvaluationError(f"Unable to load project {path}: {exc}") from exc
        if _local(root.tag) != "Project":
            raise ProjectEvaluationError(f"{path} is not an MSBuild project")

        properties = self._reserved_properties(path)
        items: dict[str, list[ProjectItem]] = {}
        for group in root:
            kind = _local(group.tag)
            if kind == "PropertyGroup":
                for prop in group:
                    properties[_local(prop.tag)] = self._expand(prop.text or "", properties).strip()
            elif kind == "ItemGroup":
                for element in group:
                    item = self._read_item(element, properties)
                    if item is not None:
                        items.setdefault(item.item_type, []).append(item)

        evaluation = ProjectEvaluation(
            project_path=path,
            target_framework=self._select_framework(path, properties, framework),
            runtime_identifier=properties.get("RuntimeIdentifier") or None,
            is_modern_project=self._is_sdk_project(root),
            resolved_dependency_artifact_path=self._assets_path(path, properties),
            direct_package_references=[
                PackageReference(item.include, item.metadata.get("Version") or None)
                for item in items.get("PackageReference", [])
            ],
            direct_raw_references=[
                item.metadata.get("HintPath") or item.include
                for item in items.get("Reference", [])
            ],
            project_items_by_name=items,
        )
        logger.debug(
            "Evaluated %s for %s (%d package references)",
            path.name, evaluation.target_framework, len(evaluation.direct_package_references),
        )
        return evaluation

    @staticmethod
    def _reserved_properties(path: Path) -> dict[str, str]:
        directory = str(path.resolve().parent)
        return {
            "MSBuildProjectDirectory": directory,
            "MSBuildThisFileDirectory": directory + "/",
            "MSBuildProjectFile": path.name,
            "MSBuildProjectName": path.stem,
        }

    @staticmethod
    def _expand(value: str, properties: dict[str, str]) -> str:
        return _PROPERTY_RE.sub(lambda m: properties.get(m.group(1), ""), value)

    def _read_item(self, element: ET.Element, properties: dict[str, str]) -> ProjectItem | None:
        include = element.get("Include")
        if not include:
            # Update/Remove items modify items from imports.
            return None
        metadata = {
            key: self._expand(value, properties)
            for key, value in element.attrib.items()
            if key not in ("Include", "Condition")
        }
        for child in element:
            metadata[_local(child.tag)] = self._expand(child.text or "", properties).strip()
        return ProjectItem(_local(element.tag), self._expand(include, properties).strip(), metadata)

    @staticmethod
    def _is_sdk_project(root: ET.Element) -> bool:
        if root.get("Sdk"):
            return True
        for child in root:
            if _local(child.tag) == "Sdk" and child.get("Name"):
                return True
            if _local(child.tag) == "Import" and child.get("Sdk"):
                return True
        return False

    @staticmethod
    def _select_framework(
        path: Path, properties: dict[str, str], requested: str | None
    ) -> TargetFramework:
        declared = [
            f.strip()
            for f in (properties.get("TargetFrameworks") or properties.get("TargetFramework") or "").split(";")
            if f.strip()
        ]
        if not declared and properties.get("TargetFrameworkVersion"):
            # Legacy projects: "v4.7.2" means .NET Framework 4.7.2.
            declared = ["net" + properties["TargetFrameworkVersion"].lstrip("vV").replace(".", "")]

        try:
            frameworks = [TargetFramework.parse(f) for f in declared]
            wanted = TargetFramework.parse(requested) if requested else None
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        if wanted is None:
            return frameworks[0] if frameworks else ANY_FRAMEWORK
        if wanted in frameworks:
            return wanted
        raise InvalidInputError(
            f"{path.name} does not target {requested} "
            f"(targets: {', '.join(declared) or 'none'})"
        )

    @staticmethod
    def _assets_path(path: Path, properties: dict[str, str]) -> Path:
        directory = path.resolve().parent
        if properties.get("ProjectAssetsFile"):
            return directory / _to_path(properties["ProjectAssetsFile"])
        extensions = (
            properties.get("MSBuildProjectExtensionsPath")
            or properties.get("BaseIntermediateOutputPath")
            or "obj/"
        )
        return directory / _to_path(extensions) / ASSETS_FILE_NAME
