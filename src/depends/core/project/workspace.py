"""Aggregate the graphs of every project in a solution."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from depends.core.graph import DependencyGraph, Edge, GraphBuilder, Node
from depends.core.project.assembler import LockFileAssembler
from depends.core.project.solution import read_solution

logger = logging.getLogger(__name__)


class SolutionAggregator:
    """Merge per-project graphs under one solution root.

    A failing member aborts the whole aggregation; no partial graph is
    returned.
    """

    def __init__(self, assembler: LockFileAssembler | None = None) -> None:
        self._assembler = assembler or LockFileAssembler()

    def aggregate(self, solution_path: str | Path, framework: str | None = None) -> DependencyGraph:
        """Build the graph of every MSBuild project the solution lists."""
        projects = read_solution(solution_path)
        return self.aggregate_projects(
            Node.solution(str(solution_path)), (p.path for p in projects), framework
        )

    def aggregate_projects(
        self,
        root: Node,
        project_paths: Iterable[str | Path],
        framework: str | None = None,
    ) -> DependencyGraph:
        builder = GraphBuilder(root)
        count = 0
        for project_path in project_paths:
            graph = self._assembler.assemble(project_path, framework)
            builder.merge(graph)
            builder.add_edge(Edge(root, graph.root))
            count += 1
        logger.info("Aggregated %d projects under %s", count, root.id)
        return builder.build()
