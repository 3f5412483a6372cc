"""Node, edge and graph value types.

Identity rules:

- Two nodes are equal iff their ids are equal ignoring case. Package
  ecosystems are case-insensitive, so ``Newtonsoft.Json`` and
  ``newtonsoft.json`` name the same node. The node kind and the package
  version do not take part in identity.
- Two edges are equal iff start, end and label are equal. Two edges between
  the same pair of nodes with different labels are distinct, which keeps
  every version range a dependency was requested with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PureWindowsPath


class NodeKind(str, Enum):
    """Discriminant for the kinds of node a dependency graph holds."""

    ASSEMBLY = "Assembly"
    PACKAGE = "Package"
    PROJECT = "Project"
    SOLUTION = "Solution"


def _file_name(path: str) -> str:
    # Project files in solutions use backslashes even on POSIX hosts.
    return PureWindowsPath(path).name


@dataclass(frozen=True, eq=False)
class Node:
    """A vertex in the dependency graph.

    One tagged representation covers every kind; ``version`` is only
    meaningful for package nodes and is display state, not identity.

    Attributes:
        id: The node key (project file name, package id, assembly file
            name or solution file name).
        kind: Which kind of node this is.
        version: Package version, ``None`` for other kinds.
    """

    id: str
    kind: NodeKind
    version: str | None = field(default=None)

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Node id must be a non-empty string")

    # -- Factories ----------------------------------------------------------

    @classmethod
    def project(cls, project_path: str) -> Node:
        """Create a project node keyed by the project's file name."""
        return cls(_file_name(project_path), NodeKind.PROJECT)

    @classmethod
    def package(cls, package_id: str, version: str) -> Node:
        """Create a package node keyed by package id."""
        return cls(package_id, NodeKind.PACKAGE, version)

    @classmethod
    def assembly(cls, assembly_name: str) -> Node:
        """Create an assembly node keyed by the binary's file name."""
        return cls(_file_name(assembly_name), NodeKind.ASSEMBLY)

    @classmethod
    def solution(cls, solution_path: str) -> Node:
        """Create the synthetic solution root keyed by its file name."""
        return cls(_file_name(solution_path), NodeKind.SOLUTION)

    # -- Identity -----------------------------------------------------------

    @property
    def key(self) -> str:
        """Normalized identity key."""
        return self.id.casefold()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def label(self) -> str:
        """Human-readable label; packages show ``id.version``."""
        if self.kind is NodeKind.PACKAGE and self.version:
            return f"{self.id}.{self.version}"
        return self.id

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Edge:
    """A directed "depends on" edge.

    Attributes:
        start: The depending node.
        end: The node depended upon.
        label: The version range originally requested, or ``""``.
    """

    start: Node
    end: Node
    label: str = ""

    def __post_init__(self) -> None:
        if self.label is None:
            object.__setattr__(self, "label", "")

    def __str__(self) -> str:
        marker = f"[{self.label}]" if self.label else ""
        return f"{self.start} -{marker}-> {self.end}"


class DependencyGraph:
    """An immutable, rooted dependency graph.

    Instances are created by ``GraphBuilder.build()``. The root is always
    a member of ``nodes``.
    """

    def __init__(
        self,
        root: Node,
        nodes: frozenset[Node],
        edges: frozenset[Edge],
    ) -> None:
        self._root = root
        self._nodes = nodes
        self._edges = edges
        self._by_key = {node.key: node for node in nodes}
        self._outgoing: dict[Node, list[Edge]] = {}
        self._incoming: dict[Node, list[Edge]] = {}
        for edge in edges:
            self._outgoing.setdefault(edge.start, []).append(edge)
            self._incoming.setdefault(edge.end, []).append(edge)

    @property
    def root(self) -> Node:
        return self._root

    @property
    def nodes(self) -> frozenset[Node]:
        return self._nodes

    @property
    def edges(self) -> frozenset[Edge]:
        return self._edges

    def get_node(self, node_id: str) -> Node | None:
        """Look up a node by id, ignoring case."""
        return self._by_key.get(node_id.casefold())

    def nodes_of_kind(self, kind: NodeKind) -> list[Node]:
        """Return the nodes of one kind sorted by id."""
        return sorted(
            (n for n in self._nodes if n.kind is kind), key=lambda n: n.key
        )

    def outgoing(self, node: Node) -> list[Edge]:
        """Return edges starting at *node*, sorted by end kind then end id."""
        return sorted(self._outgoing.get(node, ()), key=_edge_sort_key)

    def incoming(self, node: Node) -> list[Edge]:
        """Return edges ending at *node*, sorted by start kind then start id."""
        return sorted(
            self._incoming.get(node, ()),
            key=lambda e: (e.start.kind.value, e.start.key, e.label),
        )

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Edge):
            return item in self._edges
        return item in self._nodes

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(root={self._root.id!r}, "
            f"nodes={len(self._nodes)}, edges={len(self._edges)})"
        )


def _edge_sort_key(edge: Edge) -> tuple[str, str, str]:
    return edge.end.kind.value, edge.end.key, edge.label
