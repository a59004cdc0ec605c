import io
import re

import pytest

from reconkit.viz.d3 import write_d3_data
from reconkit.viz.graph import Edge, Node

NODE_RE = re.compile(r'\{id: (\d+), num: (\d+), label: "([^"]*)", color: "([^"]*)" \},')
EDGE_RE = re.compile(r'\{source: (\d+), target: (\d+), label: "([^"]*)" \},')
MAX_RE = re.compile(r"max = (\d+),")


def render(nodes, edges):
    buf = io.StringIO()
    write_d3_data(buf, nodes, edges)
    return buf.getvalue()


@pytest.fixture
def sample():
    nodes = [
        Node(0, "domain", "example.com", "Domain: example.com", "DNS"),
        Node(1, "subdomain", "www.example.com", "Name: www.example.com", "Crtsh"),
        Node(2, "address", "192.0.2.1", "Address: 192.0.2.1"),
    ]
    edges = [
        Edge(0, 1, "root_of", "root_of"),
        Edge(1, 2, "a_record", "a_record"),
        Edge(0, 2, "a_record", "a_record"),
    ]
    return nodes, edges


def test_page_is_a_complete_html_document(sample):
    page = render(*sample)
    assert page.startswith("\n<!DOCTYPE html>")
    assert page.endswith("</html>\n")
    assert "<title>OWASP Amass Network Mapping</title>" in page


def test_nodes_carry_index_label_and_colour(sample):
    nodes, edges = sample
    found = NODE_RE.findall(render(nodes, edges))
    assert [int(idx) for idx, _, _, _ in found] == list(range(len(nodes)))
    labels = [label for _, _, label, _ in found]
    assert labels[0] == nodes[0].title + ", Source: " + nodes[0].source
    assert labels[2] == nodes[2].title
    assert [color for _, _, _, color in found] == ["red", "green", "orange"]


def test_edge_counts_sum_to_twice_the_edges_and_set_the_maximum(sample):
    nodes, edges = sample
    page = render(nodes, edges)
    nums = [int(num) for _, num, _, _ in NODE_RE.findall(page)]
    assert sum(nums) == 2 * len(edges)
    assert int(MAX_RE.search(page).group(1)) == max(nums)


def test_edges_follow_input_order(sample):
    nodes, edges = sample
    found = EDGE_RE.findall(render(nodes, edges))
    assert [(int(s), int(t), label) for s, t, label in found] == [
        (e.from_, e.to, e.title) for e in edges
    ]


def test_unknown_type_has_no_colour():
    found = NODE_RE.findall(render([Node(0, "cname", "x.example.com", "x")], []))
    assert found[0][3] == ""


def test_empty_graph_has_zero_maximum():
    page = render([], [])
    assert NODE_RE.findall(page) == []
    assert MAX_RE.search(page).group(1) == "0"


def test_edge_to_missing_node_raises():
    with pytest.raises(IndexError):
        render([Node(0, "domain", "example.com", "example.com")], [Edge(0, 1)])