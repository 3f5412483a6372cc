"""Flat records consumed by the diagram writers and the browser.

``walk_edges`` is the canonical traversal: depth-first from the root,
outgoing edges ordered by end node kind then id, each edge emitted at most
once. Emitting an edge at most once is what keeps the walk finite on
cyclic graphs; a cycle stops expanding once its closing edge was emitted.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from depends.core.graph import DependencyGraph, Edge, Node, NodeKind


@dataclass(frozen=True)
class EdgeRecord:
    """One emitted edge.

    Attributes:
        start_key: Id of the depending node.
        end_key: Id of the node depended upon.
        label: Requested version range; empty unless the end is a package.
        end_kind: Kind of the end node.
    """

    start_key: str
    end_key: str
    label: str
    end_kind: NodeKind

    @classmethod
    def from_edge(cls, edge: Edge, graph: DependencyGraph) -> EdgeRecord:
        start = graph.get_node(edge.start.id) or edge.start
        end = graph.get_node(edge.end.id) or edge.end
        label = edge.label if end.kind is NodeKind.PACKAGE else ""
        return cls(start.id, end.id, label, end.kind)


@dataclass(frozen=True)
class NodeRecord:
    """One catalog entry: id, kind and display label."""

    key: str
    kind: NodeKind
    display_label: str

    @classmethod
    def from_node(cls, node: Node) -> NodeRecord:
        return cls(node.id, node.kind, node.label)


def walk_edges(graph: DependencyGraph) -> Iterator[EdgeRecord]:
    """Yield the edges reachable from the root in canonical order."""
    visited: set[Edge] = set()
    stack = [iter(graph.outgoing(graph.root))]
    while stack:
        edge = next(stack[-1], None)
        if edge is None:
            stack.pop()
            continue
        if edge in visited:
            continue
        visited.add(edge)
        yield EdgeRecord.from_edge(edge, graph)
        stack.append(iter(graph.outgoing(edge.end)))


_KIND_ORDER = {kind: index for index, kind in enumerate(NodeKind)}


def node_catalog(graph: DependencyGraph) -> list[NodeRecord]:
    """Return every node, ordered by kind then id."""
    nodes = sorted(graph.nodes, key=lambda n: (_KIND_ORDER[n.kind], n.key))
    return [NodeRecord.from_node(n) for n in nodes]
