"""Graphviz DOT description of the graph."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from .graph import NODE_COLORS, Edge, Node

GRAPH_NAME = "OWASP Amass Network Mapping"


def write_dot_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write the graph in DOT form; nodes are numbered from one."""
    parts = [f"\ndigraph {GRAPH_NAME} {{\n"]
    for idx, node in enumerate(nodes, start=1):
        color = NODE_COLORS.get(node.type, "")
        parts.append(
            f'\n        node [label="{node.label}",color="{color}",'
            f'type="{node.type}",source="{node.source}"]; n{idx};\n'
        )
    parts.append("\n\n")
    for edge in edges:
        parts.append(f'\n        n{edge.from_ + 1} -> n{edge.to + 1} [label="{edge.label}"];\n')
    parts.append("\n}\n")
    output.write("".join(parts))