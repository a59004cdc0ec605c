"""Graphistry edge-list JSON for the graph."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from typing import Any, TextIO

from .graph import Edge, Node

GRAPHISTRY_COLORS: dict[str, int] = {
    "subdomain": 3,
    "domain": 5,
    "address": 7,
    "ptr": 10,
    "ns": 0,
    "mx": 9,
    "netblock": 4,
    "as": 1,
}

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_JS_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _graph_name(now: datetime) -> str:
    return f"OWASP_Amass_{_MONTHS[now.month - 1]}_{now.day}_{now:%Y_%H_%M_%S}"


def _encode(document: dict[str, Any]) -> str:
    text = json.dumps(document, indent=2, ensure_ascii=False)
    for char, escaped in _JS_UNSAFE.items():
        text = text.replace(char, escaped)
    return text + "\n"


def write_graphistry_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write the graph as a Graphistry edge-list JSON document."""
    labels = [
        {
            "node": str(idx),
            "pointLabel": node.label,
            "pointTitle": node.title,
            "pointColor": GRAPHISTRY_COLORS.get(node.type, 0),
            "type": node.type,
            "source": node.source,
        }
        for idx, node in enumerate(nodes)
    ]
    graph = [
        {"src": str(edge.from_), "dst": str(edge.to), "edgeTitle": edge.title}
        for edge in edges
    ]
    document = {
        "name": _graph_name(datetime.now()),
        "type": "edgelist",
        "bindings": {"sourceField": "src", "destinationField": "dst", "idField": "node"},
        "graph": graph or None,
        "labels": labels or None,
    }
    output.write(_encode(document))