"""Mutable staging object that accumulates a dependency graph.

A ``GraphBuilder`` is created with a root node, mutated by exactly one
assembly pass and frozen with ``build()``. Inserts are idempotent:
re-adding a node equal to a stored one keeps the stored node (and its
version), re-adding an equal edge is a no-op. Endpoints are not validated;
callers add nodes before or alongside the edges that use them.

Thread safety: This class is NOT thread-safe. A builder has a single owner.
"""

from __future__ import annotations

from collections.abc import Iterable

from depends.core.graph.models import DependencyGraph, Edge, Node


class GraphBuilder:
    """Accumulates nodes and edges, then freezes them into a graph.

    After ``build()`` the builder is frozen: further mutation raises
    ``RuntimeError``. Calling ``build()`` again returns an equal graph.
    """

    def __init__(self, root: Node) -> None:
        self._root = root
        self._nodes: dict[Node, Node] = {root: root}
        self._edges: dict[Edge, None] = {}
        self._frozen = False

    @property
    def root(self) -> Node:
        return self._root

    def add_node(self, node: Node) -> GraphBuilder:
        """Insert *node* unless an equal node is already present."""
        self._check_mutable()
        self._nodes.setdefault(node, node)
        return self

    def add_nodes(self, nodes: Iterable[Node]) -> GraphBuilder:
        for node in nodes:
            self.add_node(node)
        return self

    def add_edge(self, edge: Edge) -> GraphBuilder:
        """Insert *edge* unless an equal edge is already present."""
        self._check_mutable()
        self._edges.setdefault(edge, None)
        return self

    def add_edges(self, edges: Iterable[Edge]) -> GraphBuilder:
        for edge in edges:
            self.add_edge(edge)
        return self

    def get_node(self, node: Node) -> Node:
        """Return the stored node equal to *node*, or *node* itself."""
        return self._nodes.get(node, node)

    def merge(self, graph: DependencyGraph) -> GraphBuilder:
        """Union every node and edge of *graph* into this builder."""
        self.add_nodes(graph.nodes)
        self.add_edges(graph.edges)
        return self

    def build(self) -> DependencyGraph:
        """Freeze the accumulated state into an immutable graph."""
        self._frozen = True
        return DependencyGraph(
            self._root,
            frozenset(self._nodes.values()),
            frozenset(self._edges),
        )

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("GraphBuilder is frozen; build() was already called")
