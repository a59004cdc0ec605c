"""Maltego CSV table built from the graph."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from ..network import net_first_last
from .graph import Edge, Node

MALTEGO_TYPES = (
    "maltego.Domain",
    "maltego.DNSName",
    "maltego.NSRecord",
    "maltego.MXRecord",
    "maltego.IPv4Address",
    "maltego.Netblock",
    "maltego.AS",
    "maltego.Company",
    "maltego.DNSName",
)

_TYPE_COLUMNS = {
    "domain": 0,
    "subdomain": 1,
    "ptr": 8,
    "cname": 8,
    "address": 4,
    "ns": 2,
    "mx": 3,
    "netblock": 5,
    "as": 6,
    "company": 7,
}


def _cidr_to_netblock(cidr: str) -> str:
    if "/" not in cidr:
        return ""
    try:
        first, last = net_first_last(cidr)
    except ValueError:
        return ""
    return f"{first}-{last}"


def _cell(data: str, kind: str) -> tuple[int, str]:
    value = _cidr_to_netblock(data) if kind == "netblock" else data
    return _TYPE_COLUMNS.get(kind, 0), value


def _write_row(output: TextIO, data1: str, type1: str, data2: str, type2: str) -> None:
    row = [""] * len(MALTEGO_TYPES)
    for column, value in (_cell(data1, type1), _cell(data2, type2)):
        row[column] = value
    output.write(",".join(row) + "\n")


def _next_node(node_id: int, forward: bool, edge: Edge) -> int | None:
    if forward:
        return edge.to if edge.from_ == node_id else None
    return edge.from_ if edge.to == node_id else None


def _company(title: str) -> str:
    parts = title.split(":")
    if len(parts) < 3:
        raise ValueError(f"autonomous system title {title!r} names no company")
    return parts[2].strip().replace(",", "")


def write_maltego_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write the graph as a CSV table that Maltego can import.

    Traversal starts from every autonomous system node; each node is visited once.
    Raises ValueError when an AS node's title does not carry a company name.
    """
    visited: set[int] = set()

    def traverse(node_id: int) -> None:
        node = nodes[node_id]
        d1, t1 = node.label, node.type
        forward = t1 in ("netblock", "as")
        if node_id in visited:
            return
        visited.add(node_id)

        if t1 == "as":
            _write_row(output, d1, t1, _company(node.title), "company")

        for edge in edges:
            sub_forward = forward
            target = _next_node(node_id, forward, edge)
            if target is None and t1 in ("subdomain", "domain"):
                sub_forward = True
                target = _next_node(node_id, sub_forward, edge)
            if target is None:
                continue
            d2, t2 = nodes[target].label, nodes[target].type
            if "cname" in edge.title:
                if sub_forward:
                    _write_row(output, d1, "cname", d2, t2)
                else:
                    _write_row(output, d1, t1, d2, "cname")
            else:
                _write_row(output, d1, t1, d2, t2)
            traverse(target)

    output.write(",".join(MALTEGO_TYPES) + "\n")
    for idx, node in enumerate(nodes):
        if node.type == "as":
            traverse(idx)