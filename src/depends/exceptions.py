"""depends exception hierarchy.

All public exceptions inherit from DependsError, giving callers a single
base class to catch when they want to handle any depends-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations

from pathlib import Path


class DependsError(Exception):
    """Base exception for all depends errors."""


class InvalidInputError(DependsError, ValueError):
    """Raised when caller input is missing or malformed.

    Covers empty or nonexistent project paths, unknown file types and
    frameworks a project does not target.
    """


class UnsupportedProjectError(DependsError):
    """Raised for projects that are not in the SDK-style project format.

    Legacy ``packages.config`` era project files carry no resolved
    dependency artifact and cannot be analyzed.
    """


class ProjectEvaluationError(DependsError):
    """Raised when a project or solution file cannot be read or parsed."""


class MissingResolvedStateError(DependsError):
    """Raised when a project's ``project.assets.json`` does not exist.

    The artifact is produced by a package restore. The message names the
    expected path so the caller knows what to produce.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"{self.path} not found. Please run 'dotnet restore' first."
        )


class LockFileError(DependsError):
    """Raised when a resolved-dependency artifact is unreadable.

    Covers malformed JSON and artifacts holding no target for the
    evaluated framework and runtime identifier.
    """


class MetadataNotFoundError(DependsError):
    """Raised by a metadata source asked for a package it does not have.

    Discovery treats this as a soft failure: the identity is dropped from
    the closure and resolution carries on.
    """

    def __init__(self, identity: object) -> None:
        self.identity = identity
        super().__init__(f"Package {identity} was not found")


class MetadataSourceError(DependsError):
    """Raised when a package feed fails for a reason other than "not found".

    Covers HTTP errors, timeouts and malformed feed documents.
    """


class UnsatisfiableConstraintsError(DependsError):
    """Raised when no single version per package satisfies every range.

    ``conflicts`` holds the solver's human-readable diagnosis.
    """

    def __init__(self, conflicts: list[str]) -> None:
        self.conflicts = list(conflicts)
        super().__init__("; ".join(self.conflicts) or "Unsatisfiable constraints")
