"""Embedded JavaScript for the dependency browser.

Renders the node list, filters it, and shows the outgoing and incoming
edges of the selected node. Vanilla ES5, no external libraries. All text
is inserted with ``textContent``.
"""

from __future__ import annotations

BROWSER_JS: str = r"""
(function(){
"use strict";
var D=window.__DEPENDS_DATA__;
if(!D){document.body.textContent="No data embedded.";return;}

var KINDS=["Package","Assembly","Project","Solution"];
var byKey={};
D.nodes.forEach(function(n){byKey[n.key]=n;});
var outgoing={},incoming={};
D.edges.forEach(function(e){
  (outgoing[e.start]=outgoing[e.start]||[]).push(e);
  (incoming[e.end]=incoming[e.end]||[]).push(e);
});

/* --- Header and stat cards --- */
var s=D.summary;
document.getElementById("root-info").textContent=s.root_kind+": "+s.root;
document.getElementById("generated-ts").textContent="Generated: "+s.generated_at;

function mkCard(val,label,cls){
  var d=document.createElement("div");
  d.className="stat-card "+cls;
  var vEl=document.createElement("div");
  vEl.className="value";vEl.textContent=String(val);
  var lEl=document.createElement("div");
  lEl.className="label";lEl.textContent=label;
  d.appendChild(vEl);d.appendChild(lEl);return d;
}
var statsEl=document.getElementById("stats-grid");
KINDS.forEach(function(k){
  if(s.kind_counts[k])statsEl.appendChild(mkCard(s.kind_counts[k],k+"s",k));
});
statsEl.appendChild(mkCard(s.edge_count,"Edges","total"));

/* --- List helpers --- */
function clear(el){while(el.firstChild)el.removeChild(el.firstChild);}
function badge(kind){
  var sp=document.createElement("span");
  sp.className="badge badge-"+kind;sp.textContent=kind;return sp;
}
function empty(el,text){
  var li=document.createElement("li");
  li.className="empty-state";li.textContent=text;el.appendChild(li);
}

var listEl=document.getElementById("node-list");
var outEl=document.getElementById("outgoing-list");
var inEl=document.getElementById("incoming-list");
var selected=null;

function renderEdges(el,edges,pick,showRange){
  clear(el);
  if(edges.length===0){empty(el,"None");return;}
  edges.forEach(function(e){
    var key=pick(e),node=byKey[key];
    var li=document.createElement("li");
    li.appendChild(badge(node?node.kind:e.end_kind));
    li.appendChild(document.createTextNode(node?node.label:key));
    if(showRange&&e.label){
      var r=document.createElement("span");
      r.className="edge-range";r.textContent=e.label;li.appendChild(r);
    }
    li.addEventListener("click",function(){select(key);});
    el.appendChild(li);
  });
}

function select(key){
  selected=key;
  var node=byKey[key];
  document.getElementById("selected-out").textContent=node?node.label:"";
  document.getElementById("selected-in").textContent=node?node.label:"";
  var outs=(outgoing[key]||[]).filter(function(e){
    return e.end_kind==="Package"||e.end_kind==="Assembly";
  });
  renderEdges(outEl,outs,function(e){return e.end;},true);
  renderEdges(inEl,incoming[key]||[],function(e){return e.start;},true);
  Array.prototype.forEach.call(listEl.children,function(li){
    li.classList.toggle("selected",li.dataset.key===key);
  });
}

/* --- Node list with filters --- */
var textFilter=document.getElementById("filter-text");
var kindFilter=document.getElementById("filter-kind");
["ALL"].concat(KINDS).forEach(function(v){
  var o=document.createElement("option");o.value=v;o.textContent=v;
  kindFilter.appendChild(o);
});

function renderNodes(){
  var q=textFilter.value.toLowerCase(),k=kindFilter.value;
  var rows=D.nodes.filter(function(n){
    return(k==="ALL"||n.kind===k)&&n.label.toLowerCase().indexOf(q)!==-1;
  });
  clear(listEl);
  if(rows.length===0){empty(listEl,"No nodes match the current filters.");return;}
  rows.forEach(function(n){
    var li=document.createElement("li");
    li.dataset.key=n.key;
    if(n.key===selected)li.className="selected";
    li.appendChild(badge(n.kind));
    li.appendChild(document.createTextNode(n.label));
    li.addEventListener("click",function(){select(n.key);});
    listEl.appendChild(li);
  });
}
textFilter.addEventListener("input",renderNodes);
kindFilter.addEventListener("change",renderNodes);

renderNodes();
select(s.root);
})();
"""
