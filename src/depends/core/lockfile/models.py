"""Data models for the resolved-dependency artifact (``project.assets.json``).

Plain data holders; parsing lives in ``reader``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from depends.core.frameworks import TargetFramework
from depends.exceptions import LockFileError

EMPTY_FOLDER_MARKER = "_._"


# ---------------------------------------------------------------------------
# LockFileTargetLibrary: one resolved library for one target
# ---------------------------------------------------------------------------


@dataclass
class LockFileTargetLibrary:
    """A library restore selected for one framework/runtime target.

    Attributes:
        name: Library id (e.g., "Newtonsoft.Json").
        version: Selected version, as recorded.
        type: "package" or "project".
        dependencies: Dependency id -> recorded version range.
        framework_assemblies: Platform assemblies the package references.
        runtime_assemblies: Archive paths of the assemblies used at run
            time, possibly including the ``_._`` empty marker.
    """

    name: str
    version: str
    type: str = "package"
    dependencies: dict[str, str] = field(default_factory=dict)
    framework_assemblies: list[str] = field(default_factory=list)
    runtime_assemblies: list[str] = field(default_factory=list)

    @property
    def is_package(self) -> bool:
        return self.type.lower() == "package"


# ---------------------------------------------------------------------------
# LockFileTarget: one framework[/runtime] section
# ---------------------------------------------------------------------------


@dataclass
class LockFileTarget:
    """The libraries resolved for one framework and optional runtime."""

    framework: TargetFramework
    runtime_identifier: str | None = None
    libraries: list[LockFileTargetLibrary] = field(default_factory=list)

    def get_library(self, name: str) -> LockFileTargetLibrary | None:
        """Look up a library by id, ignoring case."""
        folded = name.casefold()
        for library in self.libraries:
            if library.name.casefold() == folded:
                return library
        return None


# ---------------------------------------------------------------------------
# LockFile
# ---------------------------------------------------------------------------


@dataclass
class LockFile:
    """A parsed ``project.assets.json``.

    Attributes:
        path: Where the artifact was read from.
        version: Artifact format version.
        targets: One entry per framework[/runtime] restore produced.
    """

    path: Path
    version: int = 3
    targets: list[LockFileTarget] = field(default_factory=list)

    def get_target(
        self,
        framework: TargetFramework,
        runtime_identifier: str | None = None,
    ) -> LockFileTarget:
        """Return the target for *framework* and *runtime_identifier*.

        A target with a runtime identifier only matches when the same
        identifier (ignoring case) is requested.

        Raises:
            LockFileError: If the artifact has no such target.
        """
        rid = (runtime_identifier or "").casefold() or None
        for target in self.targets:
            target_rid = (target.runtime_identifier or "").casefold() or None
            if target.framework == framework and target_rid == rid:
                return target
        wanted = framework.short_folder_name()
        if rid:
            wanted = f"{wanted}/{runtime_identifier}"
        available = ", ".join(_target_name(t) for t in self.targets) or "none"
        raise LockFileError(
            f"{self.path} has no target for {wanted} (available: {available})"
        )


def _target_name(target: LockFileTarget) -> str:
    name = target.framework.short_folder_name()
    if target.runtime_identifier:
        return f"{name}/{target.runtime_identifier}"
    return name
