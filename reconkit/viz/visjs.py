"""HTML page that draws the graph with vis.js."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TextIO

from .graph import NODE_COLORS, Edge, Node

PAGE_TITLE = "OWASP Amass Network Mapping"
VIS_VERSION = "4.21.0"
_VIS_BASE = f"https://cdnjs.cloudflare.com/ajax/libs/vis/{VIS_VERSION}/vis.min"

# Display settings handed to vis.Network.
NETWORK_OPTIONS = {
    "nodes": {
        "shape": "dot",
        "size": 25,
        "color": {"border": "rgb(23,32,42)"},
        "font": {"size": 12, "face": "Tahoma", "align": "center"},
    },
    "edges": {
        "color": {"color": "rgb(166,172,175)", "hover": "black"},
        "font": {"color": "rgb(166,172,175)", "size": 12, "align": "middle"},
        "width": 0.15,
        "hoverWidth": 0.5,
    },
    "interaction": {"hover": True, "tooltipDelay": 200, "zoomView": True},
    "physics": {
        "forceAtlas2Based": {
            "gravitationalConstant": -26,
            "centralGravity": 0.005,
            "springLength": 230,
            "springConstant": 0.18,
        },
        "maxVelocity": 50,
        "solver": "forceAtlas2Based",
        "timestep": 0.2,
        "stabilization": {"iterations": 50},
    },
}

_CONTAINER_ID = "thenetwork"
_CONTAINER_STYLE = {"width": "1200px", "height": "800px", "border": "1px solid lightgray"}


def _page_head() -> str:
    style = "\n".join(f"      {key}: {value};" for key, value in _CONTAINER_STYLE.items())
    options = json.dumps(NETWORK_OPTIONS, indent=2)
    parts = [
        "<!doctype html>",
        "<html>",
        "<head>",
        '  <meta http-equiv="content-type" content="text/html; charset=UTF8">',
        f"  <title>{PAGE_TITLE}</title>",
        "",
        f'  <script type="text/javascript" src="{_VIS_BASE}.js"></script>',
        f'  <link type="text/css" rel="stylesheet" href="{_VIS_BASE}.css">',
        "",
        '  <style type="text/css">',
        f"    #{_CONTAINER_ID} {{",
        style,
        "    }",
        "  </style>",
        "</head>",
        "<body>",
        f"<h2>{PAGE_TITLE}</h2>",
        f'<div id="{_CONTAINER_ID}"></div>',
        '<script type="text/javascript">',
        "  var network;",
        "",
        "  function redrawAll() {",
        f"    var container = document.getElementById('{_CONTAINER_ID}');",
        f"    var options = {options};",
    ]
    return "\n".join(parts) + "\n"


def _page_tail() -> str:
    parts = [
        "",
        "    var data = {nodes: nodes, edges: edges};",
        "    network = new vis.Network(container, data, options);",
        "  }",
        "",
        "  redrawAll()",
        "</script>",
        "</body>",
        "</html>",
    ]
    return "\n".join(parts) + "\n"


HTML_START = _page_head()
HTML_END = _page_tail()

# Node types whose tooltip also names the data source.
_SOURCED_TYPES = frozenset({"subdomain", "domain", "ns", "mx"})


def _node_line(number: int, node: Node) -> str | None:
    color = NODE_COLORS.get(node.type)
    if color is None:
        return None
    title = node.title
    if node.type in _SOURCED_TYPES:
        title += ", Source: " + node.source
    return f"{{id: {number}, title: '{title}', color: {{background: '{color}'}}}},\n"


def write_visjs_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write an HTML page that displays the graph with vis.js; nodes are numbered from one."""
    output.write(HTML_START)

    node_lines = (_node_line(number, node) for number, node in enumerate(nodes, start=1))
    output.write("var nodes = [\n" + "".join(line for line in node_lines if line) + "];\n")

    edge_lines = "".join(
        f"{{from: {edge.from_ + 1}, to: {edge.to + 1}, title: '{edge.title}'}},\n"
        for edge in edges
    )
    output.write("var edges = [\n" + edge_lines + "];\n")

    output.write(HTML_END)