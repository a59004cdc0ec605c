"""Gephi Graph Exchange XML Format (GEXF) output for the graph."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TextIO

from .graph import Edge, Node

XML_NS = "http://www.gephi.org/gexf"
XML_NS_VIZ = "http://www.gephi.org/gexf/viz"

GEXF_VERSION = "1.3"
CREATOR = "OWASP Amass"
DESCRIPTION = "OWASP Amass Network Mapping"

# RGB colours by node type.
GEXF_COLORS: dict[str, tuple[int, int, int]] = {
    "subdomain": (34, 153, 84),
    "domain": (242, 44, 13),
    "address": (243, 156, 18),
    "ptr": (237, 243, 26),
    "ns": (26, 243, 240),
    "mx": (142, 68, 173),
    "netblock": (243, 26, 188),
    "as": (26, 69, 243),
}

_PREFIX = "  "
_INDENT = "    "

_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(char, char) for char in text)


@dataclass
class _Element:
    name: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[_Element] = field(default_factory=list)
    text: str = ""

    def render(self, depth: int, out: list[str]) -> None:
        if out:
            out.append("\n")
        attrs = "".join(f' {key}="{_escape(value)}"' for key, value in self.attrs)
        out.append(f"{_PREFIX}{_INDENT * depth}<{self.name}{attrs}>")
        if self.text:
            out.append(_escape(self.text))
        for child in self.children:
            child.render(depth + 1, out)
        if self.children:
            out.append(f"\n{_PREFIX}{_INDENT * depth}")
        out.append(f"</{self.name}>")


def _node_element(idx: int, node: Node) -> _Element:
    attrs = [("id", str(idx))]
    if node.label:
        attrs.append(("label", node.label))
    values = _Element(
        "attvalues",
        children=[
            _Element("attvalue", [("for", "0"), ("value", node.title)]),
            _Element("attvalue", [("for", "1"), ("value", node.source)]),
            _Element("attvalue", [("for", "2"), ("value", node.type)]),
        ],
    )
    children = [values]
    color = GEXF_COLORS.get(node.type)
    if color is not None:
        red, green, blue = color
        children.append(
            _Element("viz:color", [("r", str(red)), ("g", str(green)), ("b", str(blue))])
        )
    return _Element("node", attrs, children)


def _edge_element(idx: int, edge: Edge) -> _Element:
    attrs = [("id", str(idx))]
    if edge.label:
        attrs.append(("label", edge.label))
    attrs += [("source", str(edge.from_)), ("target", str(edge.to))]
    return _Element("edge", attrs)


def write_gexf_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write the graph as a GEXF document for Gephi."""
    meta = _Element(
        "meta",
        [("lastmodifieddate", datetime.now(timezone.utc).strftime("%Y-%m-%d"))],
        [_Element("creator", text=CREATOR), _Element("description", text=DESCRIPTION)],
    )
    attributes = _Element(
        "attributes",
        [("class", "node")],
        [
            _Element("attribute", [("id", "0"), ("title", "Title"), ("type", "string")]),
            _Element("attribute", [("id", "1"), ("title", "Source"), ("type", "string")]),
            _Element("attribute", [("id", "2"), ("title", "Type"), ("type", "string")]),
        ],
    )
    graph_children = [attributes]
    if nodes:
        graph_children.append(
            _Element("nodes", children=[_node_element(i, n) for i, n in enumerate(nodes)])
        )
    if edges:
        graph_children.append(
            _Element("edges", children=[_edge_element(i, e) for i, e in enumerate(edges)])
        )
    graph = _Element("graph", [("mode", "static"), ("defaultedgetype", "directed")], graph_children)
    document = _Element(
        "gexf",
        [("xmlns", XML_NS), ("version", GEXF_VERSION), ("xmlns:viz", XML_NS_VIZ)],
        [meta, graph],
    )

    parts: list[str] = []
    document.render(0, parts)
    output.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    output.write("".join(parts))