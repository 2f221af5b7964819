# tests/conftest.py
"""
Shared test fixtures.
Sample graph: the editor's default 6-node, 8-edge undirected graph,
partly weighted, containing the triangle 0-2-4.
"""
import pytest

from graph_core.models import Graph


SAMPLE_TEXT = "0 2\n0 4 2\n0 5\n1 4 1\n1 5 5\n2 3\n2 4 3\n4 5 1"


def build_graph(edges, directed: bool = False, nodes=None) -> Graph:
    """
    Build a graph from (source, target[, weight]) tuples.

    Nodes are the endpoints plus any extra ids in `nodes`, added in
    ascending order.
    """
    g = Graph(is_directed=directed)
    ids = set(nodes or [])
    for edge in edges:
        ids.update(edge[:2])
    for node_id in sorted(ids):
        g.add_node(node_id)
    for edge in edges:
        g.add_edge(*edge)
    return g


def edge_set(graph: Graph) -> list:
    """Sorted (source, target, weight) triples; undirected pairs normalised."""
    triples = []
    for e in graph.edges:
        s, t = e.source, e.target
        if not graph.is_directed and s > t:
            s, t = t, s
        triples.append((s, t, e.weight))
    return sorted(triples, key=lambda x: (x[0], x[1], -1 if x[2] is None else x[2]))


# ── Pytest fixtures ──────────────────────────────────────────────

@pytest.fixture
def sample_text() -> str:
    return SAMPLE_TEXT


@pytest.fixture
def sample_graph() -> Graph:
    """Default editor graph, undirected."""
    return build_graph([
        (0, 2), (0, 4, 2), (0, 5), (1, 4, 1),
        (1, 5, 5), (2, 3), (2, 4, 3), (4, 5, 1),
    ])


@pytest.fixture
def empty_graph() -> Graph:
    return Graph()


@pytest.fixture
def triangle() -> Graph:
    """Odd cycle 0-1-2-0, undirected."""
    return build_graph([(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def path_graph() -> Graph:
    """Path 0-1-2-3, undirected."""
    return build_graph([(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def directed_cycle() -> Graph:
    """0 -> 1 -> 2 -> 0"""
    return build_graph([(0, 1), (1, 2), (2, 0)], directed=True)


@pytest.fixture
def dag() -> Graph:
    """0 -> 1 -> 2 plus shortcut 0 -> 2: acyclic when directed."""
    return build_graph([(0, 1), (1, 2), (0, 2)], directed=True)
