"""Embedded CSS for the dependency browser.

Kind colors follow the DOT output: projects white, packages blue,
assemblies grey, solutions red.
"""

from __future__ import annotations

BROWSER_CSS: str = """
*,*::before,*::after{box-sizing:border-box;margin:0;padding:0}
body{font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,
  Oxygen,Ubuntu,sans-serif;background:#f1f5f9;color:#1e293b;line-height:1.5}
.header{background:#1a1a2e;color:#fff;padding:20px 32px;
  display:flex;align-items:center;justify-content:space-between;flex-wrap:wrap}
.header h1{font-size:1.4rem;font-weight:700;letter-spacing:-0.02em}
.header .subtitle{font-size:0.85rem;color:#94a3b8;margin-top:2px}
.header .timestamp{font-size:0.8rem;color:#64748b}
.container{max-width:1440px;margin:0 auto;padding:20px 16px}

/* --- Stat cards --- */
.stats-grid{display:grid;grid-template-columns:repeat(auto-fit,minmax(150px,1fr));
  gap:12px;margin-bottom:20px}
.stat-card{background:#fff;border-radius:10px;padding:14px;
  box-shadow:0 1px 3px rgba(0,0,0,.08);text-align:center;
  border-top:3px solid #e2e8f0}
.stat-card .value{font-size:1.6rem;font-weight:800;line-height:1.1}
.stat-card .label{font-size:0.78rem;color:#64748b;margin-top:4px;
  text-transform:uppercase;letter-spacing:0.04em}
.stat-card.Package{border-top-color:#2563eb}
.stat-card.Assembly{border-top-color:#6b7280}
.stat-card.Project{border-top-color:#cbd5e1}
.stat-card.Solution{border-top-color:#dc2626}

/* --- Panes --- */
.panes{display:grid;grid-template-columns:repeat(3,1fr);gap:16px}
.pane{background:#fff;border-radius:10px;box-shadow:0 1px 3px rgba(0,0,0,.08);
  display:flex;flex-direction:column;min-height:480px;max-height:78vh;overflow:hidden}
.pane-header{display:flex;align-items:baseline;justify-content:space-between;gap:8px;
  padding:12px 16px;background:#f8fafc;border-bottom:1px solid #e2e8f0}
.pane-header h2{font-size:1rem;font-weight:600}
.pane-header span{font-size:0.8rem;color:#64748b;overflow:hidden;
  text-overflow:ellipsis;white-space:nowrap}
.filters{display:flex;gap:8px;padding:10px 16px;border-bottom:1px solid #f1f5f9}
.filters input,.filters select{padding:5px 8px;border:1px solid #cbd5e1;
  border-radius:6px;font-size:0.82rem;background:#fff;color:#334155}
.filters input{flex:1;min-width:0}

/* --- Lists --- */
.node-list,.edge-list{list-style:none;overflow-y:auto;flex:1}
.node-list li,.edge-list li{padding:7px 16px;border-bottom:1px solid #f1f5f9;
  font-size:0.86rem;cursor:pointer;display:flex;gap:8px;align-items:center}
.node-list li:hover,.edge-list li:hover{background:#f8fafc}
.node-list li.selected{background:#eff6ff}
.edge-range{margin-left:auto;font-family:'SF Mono',SFMono-Regular,Menlo,
  Consolas,monospace;font-size:0.76rem;color:#64748b}

/* --- Kind badges --- */
.badge{display:inline-block;padding:1px 8px;border-radius:9999px;
  font-size:0.7rem;font-weight:600;text-transform:uppercase;letter-spacing:.03em}
.badge-Package{background:#dbeafe;color:#1d4ed8}
.badge-Assembly{background:#f3f4f6;color:#4b5563}
.badge-Project{background:#fff;color:#334155;border:1px solid #cbd5e1}
.badge-Solution{background:#fee2e2;color:#b91c1c}

.empty-state{text-align:center;padding:32px 16px;color:#94a3b8;font-size:0.9rem;
  cursor:default}

@media(max-width:900px){
  .panes{grid-template-columns:1fr}
  .pane{min-height:240px}
}
"""
