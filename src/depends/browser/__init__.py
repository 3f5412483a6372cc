"""Interactive HTML browser for dependency graphs.

Produces a single self-contained HTML file with embedded CSS, JavaScript
and the graph as JSON.

Submodules:
    data_prep  -- Turns a DependencyGraph into JSON-safe dicts.
    template   -- HTML structure with placeholder markers.
    styles     -- Embedded CSS stylesheet.
    scripts    -- Embedded JavaScript for the three panes.
    generator  -- Orchestrates data preparation and template rendering.
"""

from depends.browser.generator import BrowserGenerator

__all__ = [
    "BrowserGenerator",
]
