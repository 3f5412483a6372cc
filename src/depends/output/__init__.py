"""Graph output: canonical records and the Graphviz DOT writer."""

from depends.output.dot import DotFileWriter
from depends.output.records import EdgeRecord, NodeRecord, node_catalog, walk_edges

__all__ = [
    "DotFileWriter",
    "EdgeRecord",
    "NodeRecord",
    "node_catalog",
    "walk_edges",
]
