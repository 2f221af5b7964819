"""
Graph errors - Exceptions raised by graph operations and codecs.

Structural misuse (duplicate ids, unknown endpoints, missing nodes) is
rejected with one of these. Malformed edge-list text is NOT an error: bad
lines are skipped by the tokenizer instead.
"""


class GraphError(ValueError):
    """Base class for all graph errors."""
    pass


class DuplicateIdError(GraphError):
    """Raised when adding a node whose id is already present."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Node with id {node_id} already exists")


class UnknownNodeError(GraphError):
    """Raised when an edge references a node that is not in the graph."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Edge references unknown node: {node_id}")


class NodeNotFoundError(GraphError):
    """Raised when removing or querying a node that is not in the graph."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")


class EdgeNotFoundError(GraphError):
    """Raised when removing an edge that is not in the graph."""

    def __init__(self, edge_id: str):
        self.edge_id = edge_id
        super().__init__(f"Edge not found: {edge_id}")


class MalformedMatrixError(GraphError):
    """Raised for adjacency-matrix text with ragged rows or bad tokens."""

    def __init__(self, message: str, row: int | None = None, column: int | None = None):
        self.row = row
        self.column = column
        super().__init__(message)
