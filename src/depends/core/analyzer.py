"""Entry point tying the two graph construction paths together.

``DependencyAnalyzer`` chooses the path by caller intent: a bare package
identity goes through live resolution against the configured sources; a
project or solution file goes through its restore artifact.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from depends.config import Settings, load_settings
from depends.core.frameworks import TargetFramework
from depends.core.graph import DependencyGraph
from depends.core.packages import PackageIdentity
from depends.core.project import LockFileAssembler, ProjectEvaluator, SolutionAggregator
from depends.core.project.solution import MSBUILD_PROJECT_EXTENSIONS
from depends.core.resolution import LiveResolutionEngine, ResolutionPolicy
from depends.exceptions import InvalidInputError
from depends.sources import PackageMetadataSource, build_sources

logger = logging.getLogger(__name__)


def _existing_file(path: str | Path | None, what: str) -> Path:
    if path is None or not str(path).strip():
        raise InvalidInputError(f"{what} path must not be empty")
    resolved = Path(path)
    if not resolved.is_file():
        raise InvalidInputError(f"{what} path does not exist: {resolved}")
    return resolved


class DependencyAnalyzer:
    """Build dependency graphs for packages, projects and solutions.

    Args:
        settings: Source and limit settings; loaded from the environment
            when omitted.
        evaluator: Build evaluator for project analysis.
        sources: Metadata sources for package analysis; built from
            *settings* when omitted.
        policy: Version preference for live resolution.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        evaluator: ProjectEvaluator | None = None,
        sources: Sequence[PackageMetadataSource] | None = None,
        policy: ResolutionPolicy = ResolutionPolicy.LOWEST,
    ) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._assembler = LockFileAssembler(evaluator)
        self._sources = list(sources) if sources is not None else None
        self._policy = policy

    @property
    def settings(self) -> Settings:
        return self._settings

    async def analyze_package_async(
        self, package_id: str, version: str, framework: str
    ) -> DependencyGraph:
        """Resolve a package version against the metadata sources.

        Raises:
            InvalidInputError: If the id, version or framework is invalid.
            UnsatisfiableConstraintsError: If no consistent version set exists.
        """
        if not package_id or not package_id.strip():
            raise InvalidInputError("Package id must not be empty")
        try:
            identity = PackageIdentity.create(package_id.strip(), version)
            target = TargetFramework.parse(framework)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        sources = self._sources if self._sources is not None else build_sources(self._settings)
        engine = LiveResolutionEngine(
            sources,
            max_concurrency=self._settings.max_concurrency,
            policy=self._policy,
            discovery_timeout=self._settings.discovery_timeout,
        )
        logger.info("Analyzing package %s for %s", identity, target)
        return await engine.analyze(identity.id, identity.version, target)

    def analyze_package(self, package_id: str, version: str, framework: str) -> DependencyGraph:
        """Synchronous wrapper around ``analyze_package_async``."""
        return asyncio.run(self.analyze_package_async(package_id, version, framework))

    def analyze_project(
        self, project_path: str | Path, framework: str | None = None
    ) -> DependencyGraph:
        """Build a restored project's graph.

        Raises:
            InvalidInputError: If the path is empty or does not exist.
            UnsupportedProjectError: If the project is not SDK-style.
            MissingResolvedStateError: If the project was not restored.
        """
        path = _existing_file(project_path, "Project")
        logger.info("Analyzing project %s", path)
        return self._assembler.assemble(path, framework)

    def analyze_solution(
        self, solution_path: str | Path, framework: str | None = None
    ) -> DependencyGraph:
        """Build the aggregate graph of a solution's projects."""
        path = _existing_file(solution_path, "Solution")
        logger.info("Analyzing solution %s", path)
        return SolutionAggregator(self._assembler).aggregate(path, framework)

    def analyze(self, path: str | Path, framework: str | None = None) -> DependencyGraph:
        """Analyze a project or solution file, chosen by extension."""
        resolved = _existing_file(path, "Project")
        suffix = resolved.suffix.lower()
        if suffix == ".sln":
            return self.analyze_solution(resolved, framework)
        if suffix in MSBUILD_PROJECT_EXTENSIONS:
            return self.analyze_project(resolved, framework)
        raise InvalidInputError(
            f"Unsupported file type {resolved.suffix or '(none)'}: expected .sln, "
            + ", ".join(MSBUILD_PROJECT_EXTENSIONS)
        )
