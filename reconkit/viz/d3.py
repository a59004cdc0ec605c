"""HTML page that draws the graph with a D3 force simulation."""

from __future__ import annotations

from collections.abc import Sequence
from string import Template
from typing import TextIO

from .graph import NODE_COLORS, Edge, Node

_PAGE = Template(
    """
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>OWASP Amass Network Mapping</title>
<script src="https://d3js.org/d3.v4.min.js"></script>
<style>
div#tooltip { position: absolute; display: inline-block; padding: 10px;
  font-family: 'Open Sans', sans-serif; color: #000; background-color: #fff;
  border: 1px solid #999; border-radius: 2px; pointer-events: none;
  opacity: 0; z-index: 1; }
</style>
</head>
<body>
<div id="graphDiv"></div>
<div id="tooltip"></div>
<script>
var graph = {
    nodes: [
    ${nodes}
    ],
    edges: [
    ${edges}
    ]
};

var width = window.innerWidth, height = window.innerHeight;
var canvas = d3.select("#graphDiv").append("canvas")
    .attr("class", "mainCanvas")
    .attr("width", width + "px")
    .attr("height", height + "px")
    .node();
var ctx = canvas.getContext("2d");
var baseRadius = 5,
    max = ${max_num},
    view = d3.zoomIdentity,
    hovered = null;

function share(n) { return max > 0 ? n.num / max : 0; }
function radius(n) { return 1.5 * baseRadius + 3 * baseRadius * share(n); }
function pairShare(e) {
    return (share(graph.nodes[e.source.id]) + share(graph.nodes[e.target.id])) / 2;
}

var simulation = d3.forceSimulation(graph.nodes)
    .force("link", d3.forceLink(graph.edges)
        .id(function (d) { return d.id; })
        .distance(function (e) { return 60 * pairShare(e); })
        .strength(function (e) { return 1 - pairShare(e); }))
    .force("charge", d3.forceManyBody()
        .strength(function (n) { return -100 - 300 * share(n); })
        .distanceMax(width * 2))
    .force("collide", d3.forceCollide(function (n) { return radius(n) + 1; }))
    .force("center", d3.forceCenter(width / 2, height / 2))
    .on("tick", draw);

function findNode(x, y) {
    var px = view.invertX(x), py = view.invertY(y);
    for (var i = graph.nodes.length - 1; i >= 0; i--) {
        var n = graph.nodes[i], dx = px - n.x, dy = py - n.y, rad = radius(n);
        if (dx * dx + dy * dy < rad * rad) { return n; }
    }
    return null;
}

function drawEdge(e) {
    var dx = e.target.x - e.source.x, dy = e.target.y - e.source.y;
    ctx.beginPath();
    ctx.moveTo(e.source.x, e.source.y);
    ctx.lineTo(e.target.x, e.target.y);
    ctx.strokeStyle = "#aaa";
    ctx.stroke();
    ctx.save();
    ctx.textAlign = "center";
    ctx.translate(e.source.x + dx / 2, e.source.y + dy / 2);
    var angle = Math.atan2(dy, dx);
    ctx.rotate(dx < 0 ? angle - Math.PI : angle);
    ctx.fillStyle = "#aaa";
    ctx.fillText(e.label, 0, 0);
    ctx.restore();
}

function drawNode(n) {
    ctx.beginPath();
    ctx.moveTo(n.x, n.y);
    ctx.arc(n.x, n.y, radius(n), 0, 2 * Math.PI);
    ctx.fillStyle = n.color;
    ctx.strokeStyle = "#333333";
    ctx.stroke();
    ctx.fill();
}

function draw() {
    ctx.save();
    ctx.clearRect(0, 0, width, height);
    ctx.translate(view.x, view.y);
    ctx.scale(view.k, view.k);
    graph.edges.forEach(drawEdge);
    graph.nodes.forEach(drawNode);
    ctx.restore();
    var tip = d3.select("#tooltip");
    if (hovered) {
        tip.style("opacity", 0.8)
            .style("top", view.applyY(hovered.y) + 5 + "px")
            .style("left", view.applyX(hovered.x) + 5 + "px")
            .html(hovered.label);
    } else {
        tip.style("opacity", 0);
    }
}

d3.select(canvas)
    .call(d3.drag().container(canvas)
        .subject(function () {
            var n = findNode(d3.event.x, d3.event.y);
            if (n) { n.x = view.applyX(n.x); n.y = view.applyY(n.y); }
            return n;
        })
        .on("start", function () {
            if (!d3.event.active) { simulation.alphaTarget(0.3).restart(); }
            d3.event.subject.fx = view.invertX(d3.event.subject.x);
            d3.event.subject.fy = view.invertY(d3.event.subject.y);
        })
        .on("drag", function () {
            d3.event.subject.fx = view.invertX(d3.event.x);
            d3.event.subject.fy = view.invertY(d3.event.y);
        })
        .on("end", function () {
            if (!d3.event.active) { simulation.alphaTarget(0); }
            d3.event.subject.fx = null;
            d3.event.subject.fy = null;
        }))
    .call(d3.zoom().scaleExtent([0.1, 8]).on("zoom", function () {
        view = d3.event.transform;
        draw();
    }))
    .on("mousemove", function () {
        var p = d3.mouse(this);
        hovered = findNode(p[0], p[1]);
        draw();
    });

draw();
</script>
</body>
</html>
"""
)


def _check_index(index: int, count: int) -> None:
    if not 0 <= index < count:
        raise IndexError(f"edge refers to node {index}, but there are {count} nodes")


def write_d3_data(output: TextIO, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """Write an HTML page that displays the graph with D3.

    Raises IndexError when an edge refers to a node that does not exist.
    """
    counts = [0] * len(nodes)
    for edge in edges:
        _check_index(edge.from_, len(nodes))
        _check_index(edge.to, len(nodes))
        counts[edge.from_] += 1
        counts[edge.to] += 1

    node_lines = []
    for idx, (node, num) in enumerate(zip(nodes, counts)):
        label = node.title
        if node.source:
            label += ", Source: " + node.source
        color = NODE_COLORS.get(node.type, "")
        node_lines.append(
            f'\n        {{id: {idx}, num: {num}, label: "{label}", color: "{color}" }},\n    '
        )

    edge_lines = [
        f'\n        {{source: {edge.from_}, target: {edge.to}, label: "{edge.title}" }},\n    '
        for edge in edges
    ]

    output.write(
        _PAGE.substitute(
            nodes="".join(node_lines),
            edges="".join(edge_lines),
            max_num=max(counts, default=0),
        )
    )