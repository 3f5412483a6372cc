"""Render a dependency graph as a self-contained HTML browser.

Usage::

    from depends.browser import BrowserGenerator

    gen = BrowserGenerator()
    html = gen.render(graph)
    Path("depends.html").write_text(html, encoding="utf-8")
"""

from __future__ import annotations

import html as html_mod
from pathlib import Path

from depends.browser.data_prep import encode_browser_json
from depends.browser.scripts import BROWSER_JS
from depends.browser.styles import BROWSER_CSS
from depends.browser.template import BROWSER_HTML
from depends.core.graph import DependencyGraph


class BrowserGenerator:
    """Render a graph into one HTML file with inline CSS, JS and data.

    The page has three panes: every node (filterable by name and kind),
    the package and assembly dependencies of the selected node, and the
    nodes depending on it.

    Attributes:
        title: Page title; defaults to one naming the graph root.
    """

    def __init__(self, title: str | None = None) -> None:
        self.title = title

    def render(self, graph: DependencyGraph) -> str:
        """Generate the HTML document for *graph*."""
        title = self.title or f"Dependencies of {graph.root.label}"

        html = BROWSER_HTML
        html = html.replace("{{TITLE}}", html_mod.escape(title))
        html = html.replace("{{CSS}}", BROWSER_CSS)
        html = html.replace("{{DATA}}", encode_browser_json(graph))
        html = html.replace("{{JS}}", BROWSER_JS)
        return html

    def write(self, graph: DependencyGraph, output_path: str | Path) -> Path:
        """Render and write the page, creating parent directories.

        Returns:
            The resolved ``Path`` of the written file.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(graph), encoding="utf-8")
        return path.resolve()
