"""Prepare a dependency graph for embedding in the HTML browser.

Pure transformations of a ``DependencyGraph`` into plain dictionaries that
serialise to JSON. The browser needs three things: the node catalog, the
canonical edge list, and a summary for the header.
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime, timezone
from typing import Any

from depends.core.graph import DependencyGraph, NodeKind
from depends.output.records import node_catalog, walk_edges


def prepare_summary(graph: DependencyGraph) -> dict[str, Any]:
    """Build the header summary.

    Returns:
        Dict with keys: root, root_kind, node_count, edge_count,
        kind_counts, generated_at.
    """
    counts = Counter(node.kind.value for node in graph.nodes)
    return {
        "root": graph.root.id,
        "root_kind": graph.root.kind.value,
        "node_count": len(graph.nodes),
        "edge_count": len(graph.edges),
        "kind_counts": {kind.value: counts.get(kind.value, 0) for kind in NodeKind},
        "generated_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    }


def prepare_nodes(graph: DependencyGraph) -> list[dict[str, str]]:
    """Flatten the node catalog into row-dicts (key, kind, label)."""
    return [
        {"key": n.key, "kind": n.kind.value, "label": n.display_label}
        for n in node_catalog(graph)
    ]


def prepare_edges(graph: DependencyGraph) -> list[dict[str, str]]:
    """Flatten the canonical edge walk into row-dicts.

    Edges unreachable from the root are not listed, matching the DOT
    output.
    """
    return [
        {
            "start": r.start_key,
            "end": r.end_key,
            "label": r.label,
            "end_kind": r.end_kind.value,
        }
        for r in walk_edges(graph)
    ]


def encode_browser_json(graph: DependencyGraph) -> str:
    """Produce the complete JSON payload for the browser template.

    The result is compact and safe to embed in a ``<script>`` tag.
    """
    payload: dict[str, Any] = {
        "summary": prepare_summary(graph),
        "nodes": prepare_nodes(graph),
        "edges": prepare_edges(graph),
    }
    return json.dumps(payload, separators=(",", ":")).replace("</", "<\\/")
