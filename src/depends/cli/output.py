"""Rich output formatting helpers for the depends CLI.

Node kinds are colored as in the DOT output: packages blue, assemblies
grey, projects white, solutions red.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from depends.browser import BrowserGenerator
from depends.core.graph import DependencyGraph, NodeKind
from depends.output import DotFileWriter, node_catalog, walk_edges

_KIND_STYLES: dict[NodeKind, str] = {
    NodeKind.PACKAGE: "bold blue",
    NodeKind.ASSEMBLY: "dim",
    NodeKind.PROJECT: "bold white",
    NodeKind.SOLUTION: "bold red",
}

FORMATS = ("summary", "dot", "html", "json")

console = Console()
error_console = Console(stderr=True)


def kind_style(kind: NodeKind) -> str:
    """Return the Rich style string for a node kind."""
    return _KIND_STYLES.get(kind, "white")


def fail(message: str) -> NoReturn:
    """Print *message* in red on stderr and exit with status 1."""
    error_console.print(f"[bold red]Error:[/bold red] {message}", highlight=False)
    sys.exit(1)


def print_graph_summary(graph: DependencyGraph, out: Console | None = None) -> None:
    """Print node counts per kind and the resolved packages to *out*."""
    out = out or console
    counts = Table(show_header=True, header_style="bold", box=None)
    counts.add_column("Kind")
    counts.add_column("Nodes", justify="right")
    for kind in NodeKind:
        n = len(graph.nodes_of_kind(kind))
        if n:
            counts.add_row(f"[{kind_style(kind)}]{kind.value}[/]", str(n))
    counts.add_row("Edges", str(len(graph.edges)))

    root = graph.root
    out.print(
        Panel(
            counts,
            title=f"[{kind_style(root.kind)}]{root.label}[/]",
            subtitle=root.kind.value,
            expand=False,
        )
    )

    packages = graph.nodes_of_kind(NodeKind.PACKAGE)
    if not packages:
        out.print("[dim]No packages.[/dim]")
        return

    table = Table(title="Packages", show_header=True, header_style="bold")
    table.add_column("Package", style="bold blue")
    table.add_column("Version")
    table.add_column("Assemblies", justify="right")
    table.add_column("Used by", justify="right")
    for package in packages:
        assemblies = [e for e in graph.outgoing(package) if e.end.kind is NodeKind.ASSEMBLY]
        table.add_row(
            package.id,
            package.version or "-",
            str(len(assemblies)),
            str(len(graph.incoming(package))),
        )
    out.print(table)


def graph_to_dict(graph: DependencyGraph) -> dict[str, Any]:
    """Serialise the node catalog and canonical edge walk."""
    return {
        "root": graph.root.id,
        "nodes": [
            {"id": n.key, "kind": n.kind.value, "label": n.display_label}
            for n in node_catalog(graph)
        ],
        "edges": [
            {
                "start": r.start_key,
                "end": r.end_key,
                "label": r.label,
                "end_kind": r.end_kind.value,
            }
            for r in walk_edges(graph)
        ],
    }


def emit_graph(graph: DependencyGraph, output_format: str, output: str | None) -> None:
    """Render *graph* in *output_format* to *output* or stdout."""
    if output_format == "summary":
        if output is None:
            print_graph_summary(graph)
            return
        path = _output_path(output)
        with path.open("w", encoding="utf-8") as handle:
            print_graph_summary(graph, Console(file=handle, width=100, no_color=True))
        console.print(f"[green]Wrote summary output to {path}[/green]")
        return

    if output_format == "dot":
        text = DotFileWriter().render(graph)
    elif output_format == "html":
        text = BrowserGenerator().render(graph)
    else:
        text = json.dumps(graph_to_dict(graph), indent=2)

    if output is None:
        click.echo(text, nl=not text.endswith("\n"))
        return
    path = _output_path(output)
    path.write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote {output_format} output to {path}[/green]")


def _output_path(output: str) -> Path:
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
