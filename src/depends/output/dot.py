"""Graphviz DOT output.

Usage::

    from depends.output import DotFileWriter

    DotFileWriter().write(graph, "depends.dot")
"""

from __future__ import annotations

from io import StringIO
from pathlib import Path
from typing import TextIO

from depends.core.graph import DependencyGraph, NodeKind
from depends.output.records import node_catalog, walk_edges

_NODE_STYLES: dict[NodeKind, str] = {
    NodeKind.PROJECT: "style=filled fillcolor=white",
    NodeKind.PACKAGE: "style=filled fillcolor=blue shape=box",
    NodeKind.ASSEMBLY: "style=filled fillcolor=grey",
    NodeKind.SOLUTION: "style=filled fillcolor=red",
}


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DotFileWriter:
    """Write a graph as a left-to-right Graphviz digraph.

    Edges come from the canonical traversal, so output is deterministic
    and finite for cyclic graphs. Edges to packages carry their version
    range label.
    """

    def __init__(self, graph_name: str = "depends") -> None:
        self.graph_name = graph_name

    def write_to(self, graph: DependencyGraph, stream: TextIO) -> None:
        stream.write(f"digraph {_quote(self.graph_name)} {{\n")
        stream.write("rankdir=LR;\n")
        for record in walk_edges(graph):
            edge = f"{_quote(record.start_key)} -> {_quote(record.end_key)}"
            if record.end_kind is NodeKind.PACKAGE:
                edge += f' [label={_quote(record.label)} color="blue"];'
            stream.write(edge + "\n")
        for node in node_catalog(graph):
            stream.write(
                f"{_quote(node.key)} [label={_quote(node.display_label)} {_NODE_STYLES[node.kind]}];\n"
            )
        stream.write("}\n")

    def render(self, graph: DependencyGraph) -> str:
        """Return the DOT text for *graph*."""
        buffer = StringIO()
        self.write_to(graph, buffer)
        return buffer.getvalue()

    def write(self, graph: DependencyGraph, output_path: str | Path) -> Path:
        """Write the DOT text to a file, creating parent directories."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(graph), encoding="utf-8")
        return path.resolve()
