"""HTML template for the dependency browser.

Placeholders: ``{{TITLE}}``, ``{{CSS}}``, ``{{DATA}}`` and ``{{JS}}``.
The page is self-contained: no external CDN, no server, no fetch calls.
"""

from __future__ import annotations

BROWSER_HTML: str = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{{TITLE}}</title>
<style>
{{CSS}}
</style>
</head>
<body>

<div class="header">
  <div>
    <h1>{{TITLE}}</h1>
    <div class="subtitle" id="root-info"></div>
  </div>
  <div class="timestamp" id="generated-ts"></div>
</div>

<div class="container">

  <div id="stats-grid" class="stats-grid"></div>

  <div class="panes">

    <!-- All nodes -->
    <div class="pane">
      <div class="pane-header"><h2>Nodes</h2></div>
      <div class="filters">
        <input id="filter-text" type="search" placeholder="Filter by name">
        <select id="filter-kind"></select>
      </div>
      <ul id="node-list" class="node-list"></ul>
    </div>

    <!-- Dependencies of the selection -->
    <div class="pane">
      <div class="pane-header"><h2>Depends on</h2><span id="selected-out"></span></div>
      <ul id="outgoing-list" class="edge-list"></ul>
    </div>

    <!-- Dependents of the selection -->
    <div class="pane">
      <div class="pane-header"><h2>Used by</h2><span id="selected-in"></span></div>
      <ul id="incoming-list" class="edge-list"></ul>
    </div>

  </div>

</div><!-- /container -->

<script>
window.__DEPENDS_DATA__={{DATA}};
</script>
<script>
{{JS}}
</script>
</body>
</html>"""
