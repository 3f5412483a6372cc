"""The build evaluator contract.

A ``ProjectEvaluator`` turns a project file into a ``ProjectEvaluation``:
the handful of evaluated properties and items the lock-derived assembler
consumes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from depends.core.frameworks import TargetFramework


@dataclass(frozen=True)
class PackageReference:
    """A ``PackageReference`` item; ``version`` is None when implicit."""

    id: str
    version: str | None = None


@dataclass(frozen=True)
class ProjectItem:
    """One evaluated item: its type, include value and metadata."""

    item_type: str
    include: str
    metadata: dict[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass
class ProjectEvaluation:
    """Evaluated state of one project for one target framework.

    Attributes:
        project_path: The evaluated project file.
        target_framework: The framework the evaluation was made for.
        runtime_identifier: ``RuntimeIdentifier``, or None.
        is_modern_project: True for SDK-style projects.
        resolved_dependency_artifact_path: Where restore writes
            ``project.assets.json`` for this project.
        direct_package_references: ``PackageReference`` items.
        direct_raw_references: ``Reference`` items (hint paths where
            given, otherwise assembly names).
        project_items_by_name: Every evaluated item, grouped by item type.
    """

    project_path: Path
    target_framework: TargetFramework
    runtime_identifier: str | None = None
    is_modern_project: bool = True
    resolved_dependency_artifact_path: Path | None = None
    direct_package_references: list[PackageReference] = field(default_factory=list)
    direct_raw_references: list[str] = field(default_factory=list)
    project_items_by_name: dict[str, list[ProjectItem]] = field(default_factory=dict)

    def get_items(self, item_type: str) -> list[ProjectItem]:
        return self.project_items_by_name.get(item_type, [])


class ProjectEvaluator(ABC):
    """Abstract base class for build evaluators."""

    @abstractmethod
    def evaluate(
        self, project_path: str | Path, framework: str | None = None
    ) -> ProjectEvaluation:
        """Evaluate *project_path* for *framework* (default: its first).

        Raises:
            ProjectEvaluationError: If the project cannot be read.
            InvalidInputError: If the project does not target *framework*.
        """
