# tests/test_export.py
"""
Tests for download formats (graph_core/export.py).
"""
import json

from graph_core.export import to_adjacency_list, to_dot, to_json
from tests.conftest import build_graph


class TestDot:

    def test_undirected(self):
        g = build_graph([(0, 1, 2)])
        g.get_node(1).x = 10.5
        assert to_dot(g) == "\n".join([
            "graph G {",
            '    0 [pos="0,0!"];',
            '    1 [pos="10.5,0!"];',
            '    0 -- 1 [label="2"];',
            "}",
        ])

    def test_directed(self, directed_cycle):
        dot = to_dot(directed_cycle)
        assert dot.startswith("digraph G {")
        assert "    2 -> 0;" in dot
        assert "--" not in dot

    def test_empty(self, empty_graph):
        assert to_dot(empty_graph) == "graph G {\n}"


class TestAdjacencyList:

    def test_sample(self, sample_graph):
        lines = to_adjacency_list(sample_graph).split("\n")
        assert lines[0] == "0: 2, 4(2), 5"
        assert lines[3] == "3: 2"
        assert lines[4] == "4: 0(2), 1(1), 2(3), 5(1)"

    def test_directed_lists_successors_only(self, dag):
        assert to_adjacency_list(dag) == "0: 1, 2\n1: 2\n2:"

    def test_isolated_node(self):
        g = build_graph([(0, 1)], nodes=[2])
        assert to_adjacency_list(g).split("\n")[-1] == "2:"


class TestJson:

    def test_download_document_keys(self, sample_graph):
        data = json.loads(to_json(sample_graph))
        assert list(data) == ["nodes", "edges", "isDirected"]
        assert "is_directed" not in data

    def test_nodes_and_edges_match_graph_dict(self, sample_graph):
        data = json.loads(to_json(sample_graph))
        expected = sample_graph.to_json_dict()
        assert data["nodes"] == expected["nodes"]
        assert data["edges"] == expected["edges"]

    def test_directed_flag(self, directed_cycle):
        data = json.loads(to_json(directed_cycle))
        assert data["isDirected"] is True
        assert all(edge["directed"] for edge in data["edges"])

    def test_undirected_flag(self, sample_graph):
        assert json.loads(to_json(sample_graph))["isDirected"] is False
