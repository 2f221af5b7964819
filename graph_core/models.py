"""
Core data models for graphs.

These models define the canonical in-memory graph:
- Nodes identified by a non-negative integer id, with a canvas position
- Edges associating two node ids, optionally weighted
- A graph-level directedness flag that is authoritative for every edge

Field Naming Convention:
- Edges use `source` and `target` (industry standard from D3, Cytoscape, etc.)
- Edges store endpoint ids, not node objects; the graph resolves them
- Per-edge direction is derived from `Graph.is_directed` and only appears
  in serialized output
"""

import logging
import math
import uuid
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from .errors import (
    DuplicateIdError,
    EdgeNotFoundError,
    NodeNotFoundError,
    UnknownNodeError,
)

logger = logging.getLogger(__name__)

Weight = Union[int, float]


def generate_edge_id() -> str:
    """Generate a unique edge ID."""
    return f"e{uuid.uuid4().hex[:8]}"


class Node(BaseModel):
    """A node in the graph. Position is a rendering concern only."""
    id: int = Field(ge=0)
    x: float = 0.0
    y: float = 0.0


class Edge(BaseModel):
    """
    An edge between two nodes, referenced by id.

    `weight is None` means unweighted, which is distinct from weight 0.
    """
    id: str = Field(default_factory=generate_edge_id)
    source: int
    target: int
    weight: Optional[Weight] = None

    @field_validator("weight")
    @classmethod
    def check_finite(cls, value: Optional[Weight]) -> Optional[Weight]:
        if value is not None and not math.isfinite(value):
            raise ValueError("Edge weight must be a finite number")
        return value

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def other_end(self, node_id: int) -> int:
        """Get the opposite endpoint when walking the edge undirected."""
        return self.target if node_id == self.source else self.source

    def to_json_dict(self, directed: bool) -> dict:
        """Convert to JSON-serializable dict, stamping the derived direction."""
        result = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "directed": directed,
        }
        # Only include weight if it's set
        if self.weight is not None:
            result["weight"] = self.weight
        return result


NodeRef = Union[Node, int]
EdgeRef = Union[Edge, str]


def _node_key(node: NodeRef) -> int:
    return node.id if isinstance(node, Node) else int(node)


def _edge_key(edge: EdgeRef) -> str:
    return edge.id if isinstance(edge, Edge) else edge


class Graph(BaseModel):
    """
    The complete graph structure.

    The graph owns both collections. Node and edge lookups are O(n), which
    is fine at interactive editing scale.

    Parallel edges and self-loops are accepted by `add_edge`; validation
    reports them.
    """
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    is_directed: bool = False

    # --- Lookups ---

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> list[int]:
        """Node ids in insertion order."""
        return [n.id for n in self.nodes]

    def get_node(self, node_id: int) -> Optional[Node]:
        """Get a node by ID."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: int) -> bool:
        return self.get_node(node_id) is not None

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        """Get an edge by ID."""
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    def endpoints(self, edge: Edge) -> tuple[Node, Node]:
        """Resolve an edge's endpoint ids to the graph's node objects."""
        source = self.get_node(edge.source)
        target = self.get_node(edge.target)
        if source is None:
            raise UnknownNodeError(edge.source)
        if target is None:
            raise UnknownNodeError(edge.target)
        return source, target

    def incident_edges(self, node_id: int) -> list[Edge]:
        """All edges touching a node, regardless of direction."""
        return [e for e in self.edges if e.source == node_id or e.target == node_id]

    # --- Mutations ---

    def add_node(self, node_id: Optional[int] = None, x: float = 0.0, y: float = 0.0) -> Node:
        """
        Add a node to the graph.

        If `node_id` is omitted, the next id is `max(existing ids) + 1`,
        or 0 for an empty graph.
        """
        if node_id is None:
            node_id = max(self.node_ids(), default=-1) + 1
        elif self.has_node(node_id):
            raise DuplicateIdError(node_id)

        node = Node(id=node_id, x=x, y=y)
        self.nodes.append(node)
        logger.debug("Added node %d", node_id)
        return node

    def remove_node(self, node: NodeRef) -> None:
        """Remove a node and all edges touching it."""
        node_id = _node_key(node)
        if not self.has_node(node_id):
            raise NodeNotFoundError(node_id)

        self.nodes = [n for n in self.nodes if n.id != node_id]
        before = len(self.edges)
        self.edges = [e for e in self.edges if e.source != node_id and e.target != node_id]
        logger.debug("Removed node %d and %d incident edges", node_id, before - len(self.edges))

    def add_edge(self, source: NodeRef, target: NodeRef, weight: Optional[Weight] = None) -> Edge:
        """Add an edge between two existing nodes."""
        source_id = _node_key(source)
        target_id = _node_key(target)
        if not self.has_node(source_id):
            raise UnknownNodeError(source_id)
        if not self.has_node(target_id):
            raise UnknownNodeError(target_id)

        edge = Edge(source=source_id, target=target_id, weight=weight)
        self.edges.append(edge)
        return edge

    def remove_edge(self, edge: EdgeRef) -> None:
        """Remove a single edge (parallel edges are left alone)."""
        edge_id = _edge_key(edge)
        if self.get_edge(edge_id) is None:
            raise EdgeNotFoundError(edge_id)
        self.edges = [e for e in self.edges if e.id != edge_id]

    def clear(self) -> None:
        """Empty both collections. Directedness is kept."""
        self.nodes = []
        self.edges = []

    def set_directed(self, directed: bool) -> None:
        """Switch how every edge is interpreted."""
        self.is_directed = directed

    def snapshot(self) -> "Graph":
        """Deep snapshot of the graph."""
        return self.model_copy(deep=True)

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict with proper field names."""
        return {
            "nodes": [n.model_dump() for n in self.nodes],
            "edges": [e.to_json_dict(self.is_directed) for e in self.edges],
            "is_directed": self.is_directed,
        }

    def __repr__(self) -> str:
        kind = "directed" if self.is_directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count}, edges={self.edge_count})"
