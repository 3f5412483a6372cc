"""Shared fixtures for browser test modules."""

from __future__ import annotations

import json

import pytest

from depends.core.graph import DependencyGraph, Edge, GraphBuilder, Node


@pytest.fixture()
def project_graph() -> DependencyGraph:
    """App -> Serilog -> System.Memory, plus one raw assembly reference."""
    app = Node.project("App.csproj")
    serilog = Node.package("Serilog", "2.10.0")
    memory = Node.package("System.Memory", "4.5.4")
    legacy = Node.assembly("Legacy.dll")
    return (
        GraphBuilder(app)
        .add_nodes([serilog, memory, legacy])
        .add_edges(
            [
                Edge(app, serilog, "2.10.0"),
                Edge(serilog, memory, "[4.5.4, )"),
                Edge(app, legacy),
            ]
        )
        .build()
    )


def extract_json_payload(html: str) -> dict:
    """Extract the embedded JSON payload from generated browser HTML.

    The payload sits between ``window.__DEPENDS_DATA__=`` and the closing
    ``;</script>`` tag.
    """
    marker = "window.__DEPENDS_DATA__="
    start = html.index(marker) + len(marker)
    end = html.index(";\n</script>", start)
    return json.loads(html[start:end])
