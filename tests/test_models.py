# tests/test_models.py
"""
Tests for the Graph model (graph_core/models.py).

Covers:
    • Node add/remove, automatic ids, duplicate id error
    • Edge add/remove, unknown endpoints, parallel edges and self-loops
    • Cascade of edge removal when a node goes away
    • Endpoint resolution, snapshots and to_json_dict
"""
import pytest
from pydantic import ValidationError

from graph_core.errors import (
    DuplicateIdError,
    EdgeNotFoundError,
    GraphError,
    NodeNotFoundError,
    UnknownNodeError,
)
from graph_core.models import Edge, Graph, Node


# ═════════════════════════════════════════════════════════════════
#  NODES
# ═════════════════════════════════════════════════════════════════

class TestNodes:

    def test_first_auto_id_is_zero(self, empty_graph):
        node = empty_graph.add_node()
        assert node.id == 0
        assert empty_graph.node_count == 1

    def test_auto_id_is_max_plus_one(self, empty_graph):
        empty_graph.add_node(0)
        empty_graph.add_node(5)
        assert empty_graph.add_node().id == 6

    def test_ids_need_not_be_contiguous(self, empty_graph):
        empty_graph.add_node(3)
        empty_graph.add_node(10)
        assert empty_graph.node_ids() == [3, 10]

    def test_add_node_keeps_position(self, empty_graph):
        node = empty_graph.add_node(1, x=12.5, y=-4)
        assert (node.x, node.y) == (12.5, -4)

    def test_duplicate_id_raises(self, empty_graph):
        empty_graph.add_node(1)
        with pytest.raises(DuplicateIdError, match="already exists"):
            empty_graph.add_node(1)

    def test_duplicate_id_is_a_graph_error(self, empty_graph):
        empty_graph.add_node(1)
        with pytest.raises(GraphError):
            empty_graph.add_node(1)

    def test_negative_id_rejected(self, empty_graph):
        with pytest.raises(ValueError):
            empty_graph.add_node(-1)
        assert empty_graph.node_count == 0

    def test_get_node_returns_none_for_missing(self, sample_graph):
        assert sample_graph.get_node(99) is None

    def test_remove_node(self, empty_graph):
        empty_graph.add_node(0)
        empty_graph.remove_node(0)
        assert empty_graph.node_count == 0

    def test_remove_node_by_object(self, sample_graph):
        node = sample_graph.get_node(3)
        sample_graph.remove_node(node)
        assert not sample_graph.has_node(3)

    def test_remove_missing_node_raises(self, empty_graph):
        with pytest.raises(NodeNotFoundError, match="not found"):
            empty_graph.remove_node(7)

    def test_remove_node_cascades(self):
        g = Graph()
        g.add_node(0)
        g.add_node(1)
        g.add_edge(0, 1)
        g.remove_node(0)
        assert g.node_ids() == [1]
        assert g.edge_count == 0

    def test_remove_node_keeps_unrelated_edges(self, sample_graph):
        sample_graph.remove_node(4)
        assert sample_graph.edge_count == 4
        assert all(4 not in (e.source, e.target) for e in sample_graph.edges)


# ═════════════════════════════════════════════════════════════════
#  EDGES
# ═════════════════════════════════════════════════════════════════

class TestEdges:

    def test_add_edge(self, sample_graph):
        assert sample_graph.edge_count == 8

    def test_add_edge_accepts_nodes(self, empty_graph):
        a = empty_graph.add_node()
        b = empty_graph.add_node()
        edge = empty_graph.add_edge(a, b, 3)
        assert (edge.source, edge.target, edge.weight) == (0, 1, 3)

    def test_unknown_source_raises(self, empty_graph):
        empty_graph.add_node(0)
        with pytest.raises(UnknownNodeError, match="unknown node: 9"):
            empty_graph.add_edge(9, 0)

    def test_unknown_target_raises(self, empty_graph):
        empty_graph.add_node(0)
        with pytest.raises(UnknownNodeError):
            empty_graph.add_edge(0, 9)
        assert empty_graph.edge_count == 0

    def test_weight_absent_is_none_not_zero(self, empty_graph):
        empty_graph.add_node(0)
        empty_graph.add_node(1)
        unweighted = empty_graph.add_edge(0, 1)
        zero = empty_graph.add_edge(0, 1, 0)
        assert unweighted.weight is None
        assert zero.weight == 0

    def test_parallel_edges_allowed(self, empty_graph):
        empty_graph.add_node(0)
        empty_graph.add_node(1)
        first = empty_graph.add_edge(0, 1)
        second = empty_graph.add_edge(0, 1)
        assert first.id != second.id
        assert empty_graph.edge_count == 2

    def test_self_loop_allowed(self, empty_graph):
        empty_graph.add_node(0)
        edge = empty_graph.add_edge(0, 0)
        assert edge.is_self_loop

    def test_remove_edge_leaves_parallel_twin(self, empty_graph):
        empty_graph.add_node(0)
        empty_graph.add_node(1)
        first = empty_graph.add_edge(0, 1)
        second = empty_graph.add_edge(0, 1)
        empty_graph.remove_edge(first)
        assert [e.id for e in empty_graph.edges] == [second.id]

    def test_remove_edge_by_id(self, sample_graph):
        edge_id = sample_graph.edges[0].id
        sample_graph.remove_edge(edge_id)
        assert sample_graph.get_edge(edge_id) is None

    def test_remove_missing_edge_raises(self, sample_graph):
        with pytest.raises(EdgeNotFoundError):
            sample_graph.remove_edge("e-missing")

    def test_non_finite_weight_rejected(self):
        with pytest.raises(ValidationError):
            Edge(source=0, target=1, weight=float("nan"))

    def test_other_end(self):
        edge = Edge(source=2, target=5)
        assert edge.other_end(2) == 5
        assert edge.other_end(5) == 2

    def test_endpoints_resolve_to_nodes(self, sample_graph):
        edge = sample_graph.edges[1]
        source, target = sample_graph.endpoints(edge)
        assert isinstance(source, Node)
        assert (source.id, target.id) == (0, 4)
        assert source is sample_graph.get_node(0)

    def test_incident_edges(self, sample_graph):
        assert len(sample_graph.incident_edges(4)) == 4


# ═════════════════════════════════════════════════════════════════
#  WHOLE GRAPH
# ═════════════════════════════════════════════════════════════════

class TestGraph:

    def test_clear_keeps_directedness(self, directed_cycle):
        directed_cycle.clear()
        assert directed_cycle.node_count == 0
        assert directed_cycle.edge_count == 0
        assert directed_cycle.is_directed

    def test_set_directed(self, sample_graph):
        sample_graph.set_directed(True)
        assert sample_graph.is_directed

    def test_snapshot_is_independent(self, sample_graph):
        snap = sample_graph.snapshot()
        sample_graph.remove_node(0)
        assert snap.node_count == 6
        assert snap.edge_count == 8

    def test_to_json_dict_derives_edge_direction(self, directed_cycle):
        data = directed_cycle.to_json_dict()
        assert data["is_directed"] is True
        assert all(e["directed"] for e in data["edges"])
        assert "weight" not in data["edges"][0]

    def test_to_json_dict_includes_weight(self, sample_graph):
        data = sample_graph.to_json_dict()
        assert data["edges"][1]["weight"] == 2
        assert data["nodes"][0] == {"id": 0, "x": 0.0, "y": 0.0}

    def test_repr(self, sample_graph):
        assert repr(sample_graph) == "Graph(undirected, nodes=6, edges=8)"
