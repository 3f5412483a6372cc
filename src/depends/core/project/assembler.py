"""Build a project's graph from its restore artifact.

The project must already be restored: ``project.assets.json`` records the
exact package versions selected for each framework/runtime, so no
resolution happens here. The graph contains

- one Package node per resolved package library, with an edge to each of
  its framework assemblies (``.dll`` appended) and runtime assemblies
  (the ``_._`` empty-folder marker excluded);
- one labeled edge per recorded dependency between packages;
- one edge from the project to each directly referenced package that has
  an explicit version, labeled with that version;
- one Assembly node and edge per raw ``Reference`` item.
"""

from __future__ import annotations

import logging
from pathlib import Path

from depends.core.graph import DependencyGraph, Edge, GraphBuilder, Node
from depends.core.lockfile import EMPTY_FOLDER_MARKER, LockFileTarget, read_lock_file
from depends.core.packages import framework_assembly_file
from depends.core.project.evaluation import ProjectEvaluation, ProjectEvaluator
from depends.core.project.msbuild import ASSETS_FILE_NAME, MSBuildProjectEvaluator
from depends.core.versioning import VersionRange
from depends.exceptions import LockFileError, MissingResolvedStateError, UnsupportedProjectError

logger = logging.getLogger(__name__)


def _range_label(raw: str) -> str:
    try:
        return str(VersionRange.parse(raw))
    except ValueError:
        logger.debug("Keeping unparsable range %r as recorded", raw)
        return raw


def _reference_file_name(reference: str) -> str:
    # "Foo, Version=1.0.0.0, Culture=neutral" names the assembly Foo.
    return framework_assembly_file(reference.split(",", 1)[0].strip())


class LockFileAssembler:
    """Assemble project graphs from evaluated projects and their artifacts.

    Args:
        evaluator: Build evaluator; defaults to the static MSBuild reader.
    """

    def __init__(self, evaluator: ProjectEvaluator | None = None) -> None:
        self._evaluator = evaluator or MSBuildProjectEvaluator()

    def assemble(self, project_path: str | Path, framework: str | None = None) -> DependencyGraph:
        """Evaluate *project_path* and build its graph.

        Raises:
            UnsupportedProjectError: If the project is not SDK-style.
            MissingResolvedStateError: If the project has not been restored.
            LockFileError: If the artifact lacks the evaluated target or a
                versioned direct package reference.
        """
        return self.assemble_evaluation(self._evaluator.evaluate(project_path, framework))

    def assemble_evaluation(self, evaluation: ProjectEvaluation) -> DependencyGraph:
        """Build the graph of an already evaluated project."""
        if not evaluation.is_modern_project:
            raise UnsupportedProjectError(
                f"{evaluation.project_path} is not an SDK-style project. "
                "Migrate it to PackageReference and the SDK project format."
            )

        artifact = evaluation.resolved_dependency_artifact_path
        if artifact is None:
            artifact = evaluation.project_path.parent / "obj" / ASSETS_FILE_NAME
        if not artifact.is_file():
            raise MissingResolvedStateError(artifact)

        target = read_lock_file(artifact).get_target(
            evaluation.target_framework, evaluation.runtime_identifier
        )
        project_node = Node.project(str(evaluation.project_path))
        builder = GraphBuilder(project_node)

        package_nodes = self._add_libraries(builder, target)
        self._add_direct_references(builder, project_node, evaluation, package_nodes, artifact)

        graph = builder.build()
        logger.info("Assembled %s: %r", project_node.id, graph)
        return graph

    @staticmethod
    def _add_libraries(builder: GraphBuilder, target: LockFileTarget) -> dict[str, Node]:
        libraries = [lib for lib in target.libraries if lib.is_package]
        package_nodes: dict[str, Node] = {}

        for library in libraries:
            node = Node.package(library.name, library.version)
            builder.add_node(node)
            package_nodes[library.name.casefold()] = node

            assemblies = [Node.assembly(framework_assembly_file(a)) for a in library.framework_assemblies]
            assemblies.extend(
                Node.assembly(path)
                for path in library.runtime_assemblies
                if Path(path).name != EMPTY_FOLDER_MARKER
            )
            builder.add_nodes(assemblies)
            builder.add_edges(Edge(node, assembly) for assembly in assemblies)

        for library in libraries:
            start = package_nodes[library.name.casefold()]
            for dep_id, raw_range in library.dependencies.items():
                end = package_nodes.get(dep_id.casefold())
                if end is None:
                    logger.debug(
                        "%s depends on %s, which is not a resolved package", library.name, dep_id
                    )
                    continue
                builder.add_edge(Edge(start, end, _range_label(raw_range)))

        return package_nodes

    @staticmethod
    def _add_direct_references(
        builder: GraphBuilder,
        project_node: Node,
        evaluation: ProjectEvaluation,
        package_nodes: dict[str, Node],
        artifact: Path,
    ) -> None:
        for reference in evaluation.direct_package_references:
            if not reference.version:
                # Implicit SDK references carry no version.
                continue
            end = package_nodes.get(reference.id.casefold())
            if end is None:
                raise LockFileError(
                    f"{project_node.id} references {reference.id} {reference.version}, "
                    f"which is missing from {artifact}. "
                    "Run 'dotnet restore' to refresh it."
                )
            builder.add_edge(Edge(project_node, end, reference.version))

        for raw in evaluation.direct_raw_references:
            assembly = Node.assembly(_reference_file_name(raw))
            builder.add_node(assembly)
            builder.add_edge(Edge(project_node, assembly))
