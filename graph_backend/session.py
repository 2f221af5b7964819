"""
Graph Session - State of the graph being edited.

This module implements:
- Single graph state (one graph open at a time, owned by one app)
- Wholesale replacement on load/clear, in-place mutation for edits
- Re-serialization to both text formats for the editor's input box
- Change callbacks so the UI layer can refresh
- Layout operations delegated to graph_core.layout
"""

import logging
from typing import Callable, Optional

from graph_core.analysis import graph_stats
from graph_core.codec import (
    GraphFormat,
    detect_node_range,
    parse_graph,
    serialize_edge_list,
    serialize_matrix,
)
from graph_core.errors import EdgeNotFoundError, NodeNotFoundError
from graph_core.export import EXPORT_FORMATS, to_adjacency_list, to_dot, to_json
from graph_core.layout import LAYOUT_STRATEGIES, circle_layout, grid_layout, tree_layout
from graph_core.models import Edge, Graph, Node, Weight
from graph_core.validation import validate_graph, validation_summary

from .config import Settings

logger = logging.getLogger(__name__)


class GraphSession:
    """
    Manages the state of the graph being edited.

    Features:
    - Parse editor text into a fresh graph
    - Node/edge edits with cascade on node removal
    - State snapshots for API responses (graph, both encodings, stats)
    - Change callbacks for real-time refresh

    One session belongs to one app instance; nothing here is shared
    between sessions.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        self._graph = Graph()
        self._format = GraphFormat.EDGE_LIST
        self._on_change_callbacks: list[Callable[[], None]] = []

    # --- Properties ---

    @property
    def graph(self) -> Graph:
        """Get the current graph."""
        return self._graph

    @property
    def text_format(self) -> GraphFormat:
        """Format of the text the graph was last loaded from."""
        return self._format

    # --- Change Callbacks ---

    def on_change(self, callback: Callable[[], None]):
        """Register a callback for graph changes."""
        self._on_change_callbacks.append(callback)

    def _notify_change(self):
        """Notify all registered callbacks of a change."""
        for callback in self._on_change_callbacks:
            callback()

    # --- Whole-graph operations ---

    def load_text(
        self,
        text: str,
        fmt: GraphFormat = GraphFormat.EDGE_LIST,
        directed: bool = False
    ) -> Graph:
        """
        Replace the graph with one parsed from editor text.

        Raises:
            MalformedMatrixError: for unusable matrix text (the current
                graph is left untouched)
        """
        graph = parse_graph(
            text,
            fmt,
            directed,
            width=self._settings.canvas_width,
            height=self._settings.canvas_height,
        )
        self._graph = graph
        self._format = GraphFormat(fmt)
        logger.info("Loaded %s graph: %d nodes, %d edges",
                    self._format.value, graph.node_count, graph.edge_count)
        self._notify_change()
        return graph

    def clear(self) -> Graph:
        """Replace the graph with an empty one, keeping directedness."""
        self._graph = Graph(is_directed=self._graph.is_directed)
        self._notify_change()
        return self._graph

    def set_directed(self, directed: bool) -> Graph:
        """Switch the interpretation of every edge."""
        self._graph.set_directed(directed)
        self._notify_change()
        return self._graph

    # --- Node Operations ---

    def add_node(self, node_id: Optional[int] = None, x: float = 0.0, y: float = 0.0) -> Node:
        """Add a new node to the graph."""
        node = self._graph.add_node(node_id, x=x, y=y)
        self._notify_change()
        return node

    def delete_node(self, node_id: int) -> bool:
        """Delete a node and all connected edges."""
        try:
            self._graph.remove_node(node_id)
        except NodeNotFoundError:
            return False
        self._notify_change()
        return True

    def get_node(self, node_id: int) -> Optional[Node]:
        return self._graph.get_node(node_id)

    # --- Edge Operations ---

    def add_edge(self, source: int, target: int, weight: Optional[Weight] = None) -> Edge:
        """Add a new edge between two existing nodes."""
        edge = self._graph.add_edge(source, target, weight)
        self._notify_change()
        return edge

    def delete_edge(self, edge_id: str) -> bool:
        """Delete an edge."""
        try:
            self._graph.remove_edge(edge_id)
        except EdgeNotFoundError:
            return False
        self._notify_change()
        return True

    # --- Layout Operations (delegated to graph_core.layout) ---

    def auto_layout(self, strategy: str = "circle") -> bool:
        """
        Rearrange nodes.

        Strategies:
        - circle: Nodes on a circle
        - grid: Equal cells filling the padded canvas
        - tree: Levels by BFS distance from a root

        Raises:
            ValueError: if the strategy isn't one of LAYOUT_STRATEGIES
        """
        if strategy not in LAYOUT_STRATEGIES:
            raise ValueError(f"Unknown layout strategy: {strategy}")
        if not self._graph.nodes:
            return False

        width = self._settings.canvas_width
        height = self._settings.canvas_height
        if strategy == "circle":
            circle_layout(self._graph.nodes, width, height)
        elif strategy == "grid":
            grid_layout(self._graph.nodes, width, height)
        else:
            tree_layout(self._graph.nodes, self._graph.edges, directed=self._graph.is_directed)

        self._notify_change()
        return True

    # --- Reports ---

    def stats(self) -> dict:
        return graph_stats(self._graph).to_dict()

    def validate(self) -> dict:
        issues = validate_graph(self._graph)
        return {
            "issues": [issue.to_dict() for issue in issues],
            "summary": validation_summary(issues),
        }

    def export(self, fmt: str) -> str:
        """Render the graph in one of EXPORT_FORMATS."""
        if fmt == "edges":
            return serialize_edge_list(self._graph)
        if fmt == "matrix":
            return serialize_matrix(self._graph)
        if fmt == "dot":
            return to_dot(self._graph)
        if fmt == "list":
            return to_adjacency_list(self._graph)
        if fmt == "json":
            return to_json(self._graph)
        raise ValueError(f"Unknown export format: {fmt}. Expected one of {', '.join(EXPORT_FORMATS)}")

    def get_state(self) -> dict:
        """Get the full current state for API responses."""
        edge_text = serialize_edge_list(self._graph)
        return {
            "graph": self._graph.to_json_dict(),
            "format": self._format.value,
            "text": {
                "edges": edge_text,
                "matrix": serialize_matrix(self._graph),
            },
            "node_range": detect_node_range(edge_text),
            "stats": self.stats(),
        }
