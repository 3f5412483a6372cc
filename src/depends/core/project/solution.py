"""Reading Visual Studio solution (``.sln``) files."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath

from depends.exceptions import ProjectEvaluationError

logger = logging.getLogger(__name__)

SOLUTION_FOLDER_TYPE = "2150E333-8FDC-42A3-9474-1A3956D46DE8"
MSBUILD_PROJECT_EXTENSIONS = (".csproj", ".fsproj", ".vbproj")

_PROJECT_RE = re.compile(
    r'^Project\("\{(?P<type>[^}]+)\}"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"\s*,\s*"\{(?P<guid>[^}]+)\}"'
)


@dataclass(frozen=True)
class SolutionProject:
    """A project entry of a solution file."""

    name: str
    path: Path
    type_guid: str


def read_solution(solution_path: str | Path) -> list[SolutionProject]:
    """Return the MSBuild-format projects a solution lists, in file order.

    Solution folders and other project types (web sites, database
    projects...) are left out. Member paths are resolved against the
    solution's directory.

    Raises:
        ProjectEvaluationError: If the file cannot be read.
    """
    path = Path(solution_path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ProjectEvaluationError(f"Unable to read solution {path}: {exc}") from exc

    projects: list[SolutionProject] = []
    for line in text.splitlines():
        match = _PROJECT_RE.match(line.strip())
        if not match:
            continue
        type_guid = match.group("type").upper()
        relative = PureWindowsPath(match.group("path"))
        if type_guid == SOLUTION_FOLDER_TYPE:
            continue
        if relative.suffix.lower() not in MSBUILD_PROJECT_EXTENSIONS:
            logger.debug("Skipping non-MSBuild project %s", relative)
            continue
        projects.append(
            SolutionProject(
                name=match.group("name"),
                path=path.parent.joinpath(*relative.parts),
                type_guid=type_guid,
            )
        )
    logger.debug("%s lists %d projects", path.name, len(projects))
    return projects
