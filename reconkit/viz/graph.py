"""Nodes and edges of a discovery graph, as handed to the visualisation writers."""

from __future__ import annotations

from dataclasses import dataclass

_NODE_TYPES = ("subdomain", "domain", "address", "ptr", "ns", "mx", "netblock", "as")
_TYPE_COLORS = ("green", "red", "orange", "yellow", "cyan", "purple", "pink", "blue")

# Display colours by node type, shared by the HTML and DOT writers.
NODE_COLORS: dict[str, str] = dict(zip(_NODE_TYPES, _TYPE_COLORS))


@dataclass
class Node:
    """A graph vertex: a name, address, netblock or autonomous system."""

    id: int = 0
    type: str = ""
    label: str = ""
    title: str = ""
    source: str = ""


@dataclass
class Edge:
    """A directed relation between two nodes, given by their positions in the node list."""

    from_: int
    to: int
    label: str = ""
    title: str = ""