"""
Graph Editor Core - Graph model, text codecs, analysis, validation and layout.

This module provides the core functionality used by the backend API,
ensuring a single source of truth for all graph logic.
"""

from .errors import (
    GraphError,
    DuplicateIdError,
    UnknownNodeError,
    NodeNotFoundError,
    EdgeNotFoundError,
    MalformedMatrixError,
)

from .models import Node, Edge, Graph

from .codec import (
    GraphFormat,
    ParsedEdge,
    ParsedIsolatedNode,
    Skip,
    tokenize_line,
    parse_edge_list,
    serialize_edge_list,
    parse_matrix,
    serialize_matrix,
    parse_graph,
    serialize_graph,
    detect_node_range,
)

from .analysis import (
    ConnectedComponent,
    GraphStats,
    ShortestPaths,
    degree,
    in_degree,
    out_degree,
    find_connected_components,
    component_count,
    is_connected,
    has_cycle,
    is_tree,
    is_bipartite,
    all_pairs_shortest_paths,
    diameter,
    eccentricity,
    radius,
    is_eulerian,
    is_hamiltonian_possible,
    density,
    average_degree,
    max_degree,
    graph_stats,
)

from .validation import validate_graph, validation_summary, ValidationIssue, IssueSeverity
from .layout import circle_layout, grid_layout, tree_layout
from .export import to_dot, to_adjacency_list, to_json

__all__ = [
    # Errors
    "GraphError",
    "DuplicateIdError",
    "UnknownNodeError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "MalformedMatrixError",
    # Models
    "Node",
    "Edge",
    "Graph",
    # Codecs
    "GraphFormat",
    "ParsedEdge",
    "ParsedIsolatedNode",
    "Skip",
    "tokenize_line",
    "parse_edge_list",
    "serialize_edge_list",
    "parse_matrix",
    "serialize_matrix",
    "parse_graph",
    "serialize_graph",
    "detect_node_range",
    # Analysis
    "ConnectedComponent",
    "GraphStats",
    "ShortestPaths",
    "degree",
    "in_degree",
    "out_degree",
    "find_connected_components",
    "component_count",
    "is_connected",
    "has_cycle",
    "is_tree",
    "is_bipartite",
    "all_pairs_shortest_paths",
    "diameter",
    "eccentricity",
    "radius",
    "is_eulerian",
    "is_hamiltonian_possible",
    "density",
    "average_degree",
    "max_degree",
    "graph_stats",
    # Validation
    "validate_graph",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
    # Layout
    "circle_layout",
    "grid_layout",
    "tree_layout",
    # Export
    "to_dot",
    "to_adjacency_list",
    "to_json",
]
