"""Dependency graph model.

Nodes stand for projects, packages, assemblies and solutions; edges stand
for "depends on" relationships, optionally labeled with the version range
that was requested. Graphs are immutable and produced by a
``GraphBuilder``, which deduplicates nodes and edges by identity while
they are accumulated.

Usage::

    from depends.core.graph import Edge, GraphBuilder, Node

    root = Node.package("Newtonsoft.Json", "12.0.3")
    builder = GraphBuilder(root)
    builder.add_edge(Edge(root, Node.assembly("Newtonsoft.Json.dll")))
    graph = builder.build()
"""

from depends.core.graph.builder import GraphBuilder
from depends.core.graph.models import DependencyGraph, Edge, Node, NodeKind

__all__ = [
    "DependencyGraph",
    "Edge",
    "GraphBuilder",
    "Node",
    "NodeKind",
]
