"""
Graph analysis - Structural properties of a graph snapshot.

Provides pure analysis functions used by the backend and the stats report.
None of them mutate the graph. Adjacency is rebuilt from the edge list on
every call, and all traversals use explicit stacks/queues so deep graphs
don't hit the recursion limit.

Conventions for the empty graph: 0 components, connected, bipartite,
acyclic, not a tree, diameter/radius None.
"""

import math
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .errors import NodeNotFoundError

if TYPE_CHECKING:
    from .models import Graph


@dataclass
class ConnectedComponent:
    """A connected component in the graph (edge direction ignored)."""
    node_ids: list[int] = field(default_factory=list)
    edge_count: int = 0

    @property
    def size(self) -> int:
        return len(self.node_ids)


@dataclass
class NodeDegree:
    """Degree information for a single node."""
    node_id: int
    incoming: int = 0   # Edges pointing to this node
    outgoing: int = 0   # Edges pointing from this node

    @property
    def total(self) -> int:
        # A self-loop adds one to each side, so it counts twice
        return self.incoming + self.outgoing


@dataclass
class ShortestPaths:
    """
    All-pairs hop distances.

    `distances[i][j]` is the number of edges on a shortest path from
    `node_ids[i]` to `node_ids[j]`, or None when unreachable.
    """
    node_ids: list[int]
    distances: list[list[Optional[int]]]

    def distance(self, source: int, target: int) -> Optional[int]:
        i = self.node_ids.index(source)
        j = self.node_ids.index(target)
        return self.distances[i][j]

    @property
    def all_reachable(self) -> bool:
        return all(d is not None for row in self.distances for d in row)


@dataclass
class GraphStats:
    """Complete structural report for a graph."""
    node_count: int
    edge_count: int
    is_directed: bool
    component_count: int
    is_connected: bool
    has_cycle: bool
    is_tree: bool
    is_bipartite: bool
    diameter: Optional[int]
    radius: Optional[int]
    density: float
    average_degree: float
    max_degree: int
    is_eulerian: bool
    is_hamiltonian_possible: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "is_directed": self.is_directed,
            "component_count": self.component_count,
            "is_connected": self.is_connected,
            "has_cycle": self.has_cycle,
            "is_tree": self.is_tree,
            "is_bipartite": self.is_bipartite,
            "diameter": self.diameter,
            "radius": self.radius,
            "density": round(self.density, 3),
            "average_degree": round(self.average_degree, 2),
            "max_degree": self.max_degree,
            "is_eulerian": self.is_eulerian,
            "is_hamiltonian_possible": self.is_hamiltonian_possible,
        }


# --- Adjacency ---

def _undirected_adjacency(graph: "Graph") -> dict[int, list[tuple[int, str]]]:
    """node_id -> [(neighbor_id, edge_id)], each edge listed from both ends."""
    adjacency: dict[int, list[tuple[int, str]]] = {nid: [] for nid in graph.node_ids()}
    for edge in graph.edges:
        if edge.source not in adjacency or edge.target not in adjacency:
            continue
        adjacency[edge.source].append((edge.target, edge.id))
        if edge.source != edge.target:
            adjacency[edge.target].append((edge.source, edge.id))
    return adjacency


def _directed_adjacency(graph: "Graph") -> dict[int, list[int]]:
    """node_id -> [successor ids]."""
    adjacency: dict[int, list[int]] = {nid: [] for nid in graph.node_ids()}
    for edge in graph.edges:
        if edge.source in adjacency and edge.target in adjacency:
            adjacency[edge.source].append(edge.target)
    return adjacency


def _require_node(graph: "Graph", node_id: int) -> None:
    if not graph.has_node(node_id):
        raise NodeNotFoundError(node_id)


# --- Degrees ---

def calculate_degrees(graph: "Graph") -> dict[int, NodeDegree]:
    """
    Calculate incoming/outgoing counts for all nodes.

    Returns:
        Dictionary mapping node_id to NodeDegree
    """
    degrees: dict[int, NodeDegree] = {nid: NodeDegree(node_id=nid) for nid in graph.node_ids()}
    for edge in graph.edges:
        if edge.source in degrees:
            degrees[edge.source].outgoing += 1
        if edge.target in degrees:
            degrees[edge.target].incoming += 1
    return degrees


def degree(graph: "Graph", node_id: int) -> int:
    """Number of edge endpoints touching a node. A self-loop counts twice."""
    _require_node(graph, node_id)
    return calculate_degrees(graph)[node_id].total


def in_degree(graph: "Graph", node_id: int) -> int:
    """Edges arriving at a node; equals `degree` for undirected graphs."""
    _require_node(graph, node_id)
    info = calculate_degrees(graph)[node_id]
    return info.incoming if graph.is_directed else info.total


def out_degree(graph: "Graph", node_id: int) -> int:
    """Edges leaving a node; equals `degree` for undirected graphs."""
    _require_node(graph, node_id)
    info = calculate_degrees(graph)[node_id]
    return info.outgoing if graph.is_directed else info.total


def density(graph: "Graph") -> float:
    """Edge count relative to the simple-graph maximum; 0 for n <= 1."""
    n = graph.node_count
    if n <= 1:
        return 0.0
    max_edges = n * (n - 1) if graph.is_directed else n * (n - 1) / 2
    return graph.edge_count / max_edges


def average_degree(graph: "Graph") -> float:
    if graph.node_count == 0:
        return 0.0
    return sum(d.total for d in calculate_degrees(graph).values()) / graph.node_count


def max_degree(graph: "Graph") -> int:
    return max((d.total for d in calculate_degrees(graph).values()), default=0)


# --- Connectivity ---

def find_connected_components(graph: "Graph") -> list[ConnectedComponent]:
    """
    Find all connected components in the graph using BFS.

    A connected component is a set of nodes where every node is reachable
    from every other node (treating edges as undirected).

    Args:
        graph: The graph to analyze

    Returns:
        List of ConnectedComponent objects, in order of first node
    """
    if not graph.nodes:
        return []

    adjacency = _undirected_adjacency(graph)
    visited: set[int] = set()
    components: list[ConnectedComponent] = []
    membership: dict[int, int] = {}

    for start_node in graph.node_ids():
        if start_node in visited:
            continue

        component = ConnectedComponent()
        queue = deque([start_node])
        visited.add(start_node)

        while queue:
            current = queue.popleft()
            component.node_ids.append(current)
            membership[current] = len(components)

            for neighbor, _ in adjacency[current]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        components.append(component)

    for edge in graph.edges:
        if edge.source in membership:
            components[membership[edge.source]].edge_count += 1

    return components


def component_count(graph: "Graph") -> int:
    return len(find_connected_components(graph))


def is_connected(graph: "Graph") -> bool:
    """True for graphs with at most one component (the empty graph included)."""
    return component_count(graph) <= 1


# --- Cycles & structure ---

_WHITE, _GRAY, _BLACK = 0, 1, 2


def _has_directed_cycle(graph: "Graph") -> bool:
    adjacency = _directed_adjacency(graph)
    color = {nid: _WHITE for nid in adjacency}

    for start in adjacency:
        if color[start] != _WHITE:
            continue

        color[start] = _GRAY
        stack = [(start, iter(adjacency[start]))]

        while stack:
            node, successors = stack[-1]
            for successor in successors:
                if color[successor] == _GRAY:
                    # Back edge to a node on the current path
                    return True
                if color[successor] == _WHITE:
                    color[successor] = _GRAY
                    stack.append((successor, iter(adjacency[successor])))
                    break
            else:
                color[node] = _BLACK
                stack.pop()

    return False


def _has_undirected_cycle(graph: "Graph") -> bool:
    adjacency = _undirected_adjacency(graph)
    visited: set[int] = set()

    for start in adjacency:
        if start in visited:
            continue

        visited.add(start)
        # (node, id of the edge we arrived through)
        stack: list[tuple[int, Optional[str]]] = [(start, None)]

        while stack:
            node, via = stack.pop()
            for neighbor, edge_id in adjacency[node]:
                # Exclude the parent edge, not the parent node, so that
                # parallel edges and self-loops count as cycles
                if edge_id == via:
                    continue
                if neighbor in visited:
                    return True
                visited.add(neighbor)
                stack.append((neighbor, edge_id))

    return False


def has_cycle(graph: "Graph") -> bool:
    """
    Check whether the graph contains a cycle.

    Directed graphs look for a back edge with white/gray/black DFS.
    Undirected graphs look for any non-tree edge.
    """
    if graph.is_directed:
        return _has_directed_cycle(graph)
    return _has_undirected_cycle(graph)


def is_tree(graph: "Graph") -> bool:
    return (
        is_connected(graph)
        and not has_cycle(graph)
        and graph.edge_count == graph.node_count - 1
    )


def is_bipartite(graph: "Graph") -> bool:
    """
    2-color every component with BFS, ignoring edge direction.

    A self-loop makes a graph non-bipartite. The empty graph is bipartite.
    """
    adjacency = _undirected_adjacency(graph)
    color: dict[int, int] = {}

    for start in adjacency:
        if start in color:
            continue

        color[start] = 0
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for neighbor, _ in adjacency[current]:
                if neighbor not in color:
                    color[neighbor] = 1 - color[current]
                    queue.append(neighbor)
                elif color[neighbor] == color[current]:
                    return False

    return True


# --- Distances ---

def all_pairs_shortest_paths(graph: "Graph") -> ShortestPaths:
    """
    Floyd-Warshall over unit-weight adjacency.

    Edge weights are ignored: distances count hops. Directed graphs follow
    edge direction. O(n^3), meant for interactive-size graphs.
    """
    node_ids = graph.node_ids()
    index = {nid: i for i, nid in enumerate(node_ids)}
    n = len(node_ids)

    dist: list[list[float]] = [[math.inf] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0

    for edge in graph.edges:
        if edge.source not in index or edge.target not in index:
            continue
        i, j = index[edge.source], index[edge.target]
        if i == j:
            continue
        dist[i][j] = 1
        if not graph.is_directed:
            dist[j][i] = 1

    for k in range(n):
        row_k = dist[k]
        for i in range(n):
            d_ik = dist[i][k]
            if d_ik == math.inf:
                continue
            row_i = dist[i]
            for j in range(n):
                candidate = d_ik + row_k[j]
                if candidate < row_i[j]:
                    row_i[j] = candidate

    distances = [
        [None if d == math.inf else int(d) for d in row]
        for row in dist
    ]
    return ShortestPaths(node_ids=node_ids, distances=distances)


def _eccentricity_from_row(row: list[Optional[int]]) -> int:
    return max((d for d in row if d is not None), default=0)


def eccentricity(graph: "Graph", node_id: int) -> int:
    """Largest distance from a node to any node it can reach (0 if none)."""
    _require_node(graph, node_id)
    paths = all_pairs_shortest_paths(graph)
    return _eccentricity_from_row(paths.distances[paths.node_ids.index(node_id)])


def diameter(graph: "Graph") -> Optional[int]:
    """Largest shortest-path distance; None if empty or some pair is unreachable."""
    if graph.node_count == 0:
        return None
    paths = all_pairs_shortest_paths(graph)
    if not paths.all_reachable:
        return None
    return max(_eccentricity_from_row(row) for row in paths.distances)


def radius(graph: "Graph") -> Optional[int]:
    """Smallest eccentricity; None if empty or some pair is unreachable."""
    if graph.node_count == 0:
        return None
    paths = all_pairs_shortest_paths(graph)
    if not paths.all_reachable:
        return None
    return min(_eccentricity_from_row(row) for row in paths.distances)


# --- Eulerian / Hamiltonian ---

def is_eulerian(graph: "Graph") -> bool:
    """
    Whether the graph admits a closed walk using every edge exactly once.

    Undirected: connected and every degree even.
    Directed: weakly connected and in-degree == out-degree at every node.
    """
    if not is_connected(graph):
        return False
    degrees = calculate_degrees(graph).values()
    if graph.is_directed:
        return all(d.incoming == d.outgoing for d in degrees)
    return all(d.total % 2 == 0 for d in degrees)


def is_hamiltonian_possible(graph: "Graph") -> bool:
    """
    Dirac's sufficient condition for a Hamiltonian cycle.

    True when n >= 3 and every node has at least n/2 distinct neighbours
    (direction ignored, self-loops and parallel edges not counted). A False
    result does NOT mean the graph has no Hamiltonian cycle.
    """
    n = graph.node_count
    if n < 3:
        return False

    neighbors: dict[int, set[int]] = {nid: set() for nid in graph.node_ids()}
    for edge in graph.edges:
        if edge.source == edge.target:
            continue
        if edge.source in neighbors and edge.target in neighbors:
            neighbors[edge.source].add(edge.target)
            neighbors[edge.target].add(edge.source)

    return all(len(adjacent) >= n / 2 for adjacent in neighbors.values())


# --- Report ---

def graph_stats(graph: "Graph") -> GraphStats:
    """
    Generate the full structural report for a graph.

    Args:
        graph: The graph to summarize

    Returns:
        GraphStats object with all analysis results
    """
    components = find_connected_components(graph)
    connected = len(components) <= 1
    cyclic = has_cycle(graph)
    paths = all_pairs_shortest_paths(graph)

    if graph.node_count and paths.all_reachable:
        eccentricities = [_eccentricity_from_row(row) for row in paths.distances]
        graph_diameter: Optional[int] = max(eccentricities)
        graph_radius: Optional[int] = min(eccentricities)
    else:
        graph_diameter = graph_radius = None

    return GraphStats(
        node_count=graph.node_count,
        edge_count=graph.edge_count,
        is_directed=graph.is_directed,
        component_count=len(components),
        is_connected=connected,
        has_cycle=cyclic,
        is_tree=connected and not cyclic and graph.edge_count == graph.node_count - 1,
        is_bipartite=is_bipartite(graph),
        diameter=graph_diameter,
        radius=graph_radius,
        density=density(graph),
        average_degree=average_degree(graph),
        max_degree=max_degree(graph),
        is_eulerian=is_eulerian(graph),
        is_hamiltonian_possible=is_hamiltonian_possible(graph),
    )
