"""
Text codecs - Convert between graphs and their textual encodings.

Two independent formats are supported:

Edge list:
    One edge per line as ``source target [weight]`` with an integer weight.
    A line with a single id declares an isolated node. Lines that don't
    tokenize cleanly are skipped, since the text usually comes from live
    typing.

Adjacency matrix:
    N rows of N tokens. ``0`` means no edge, ``+`` an unweighted edge and
    any other number a weighted edge. Row i, column j is the edge i -> j.
    Structural problems (ragged rows, bad tokens) raise MalformedMatrixError.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import MalformedMatrixError
from .layout import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, circle_layout
from .models import Graph, Weight

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^[0-9]+$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")

UNWEIGHTED_TOKEN = "+"
NO_EDGE_TOKEN = "0"


class GraphFormat(str, Enum):
    """Textual graph encodings."""
    EDGE_LIST = "edges"
    MATRIX = "matrix"


# --- Tokenizer ---

@dataclass(frozen=True)
class ParsedEdge:
    """An edge-list line describing an edge."""
    source: int
    target: int
    weight: Optional[Weight] = None


@dataclass(frozen=True)
class ParsedIsolatedNode:
    """An edge-list line declaring a node with no edges."""
    node_id: int


@dataclass(frozen=True)
class Skip:
    """An edge-list line that produces no edge."""
    reason: str


LineToken = Union[ParsedEdge, ParsedIsolatedNode, Skip]


def _parse_id(token: str) -> Optional[int]:
    if _ID_RE.match(token):
        return int(token)
    return None


def _parse_number(token: str) -> Optional[Weight]:
    """Parse a finite number, keeping integer tokens as int."""
    if _INT_RE.match(token):
        return int(token)
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def format_weight(weight: Weight) -> str:
    """Render a weight so it parses back to an equal value."""
    if isinstance(weight, float) and weight.is_integer():
        return str(int(weight))
    return str(weight)


def tokenize_line(line: str) -> LineToken:
    """
    Classify one line of edge-list text.

    Edge-list weights are integers; a fractional weight skips the line.

    Returns:
        ParsedEdge for ``source target [weight]``, ParsedIsolatedNode for a
        lone id, and Skip (with a reason) for anything else.
    """
    tokens = line.split()
    if not tokens:
        return Skip("blank")
    if len(tokens) > 3:
        return Skip(f"expected at most 3 tokens, got {len(tokens)}")

    ids = [_parse_id(t) for t in tokens[:2]]
    for token, node_id in zip(tokens, ids):
        if node_id is None:
            return Skip(f"node id {token!r} is not a non-negative integer")

    if len(tokens) == 1:
        return ParsedIsolatedNode(ids[0])

    weight = None
    if len(tokens) == 3:
        if not _INT_RE.match(tokens[2]):
            return Skip(f"weight {tokens[2]!r} is not an integer")
        weight = int(tokens[2])

    return ParsedEdge(ids[0], ids[1], weight)


# --- Edge list ---

def _collect_node_ids(text: str) -> set[int]:
    """Node pass: every valid id in a source/target position, line by line."""
    node_ids: set[int] = set()
    for line in text.splitlines():
        for token in line.split()[:2]:
            node_id = _parse_id(token)
            if node_id is not None:
                node_ids.add(node_id)
    return node_ids


def detect_node_range(text: str) -> Optional[tuple[int, int]]:
    """Smallest and largest node id the edge-list text mentions."""
    node_ids = _collect_node_ids(text)
    if not node_ids:
        return None
    return min(node_ids), max(node_ids)


def parse_edge_list(
    text: str,
    directed: bool = False,
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT
) -> Graph:
    """
    Parse edge-list text into a new graph.

    The node pass and the edge pass are independent: a line like ``3 x``
    still registers node 3 even though it yields no edge.

    Args:
        text: Edge-list text
        directed: Graph-level directedness
        width: Canvas width used to place nodes on a circle
        height: Canvas height used to place nodes on a circle

    Returns:
        Graph with nodes in ascending id order and edges in line order
    """
    graph = Graph(is_directed=directed)

    for node_id in sorted(_collect_node_ids(text)):
        graph.add_node(node_id)
    circle_layout(graph.nodes, width, height)

    skipped = 0
    for line_number, line in enumerate(text.splitlines(), start=1):
        token = tokenize_line(line)
        if isinstance(token, ParsedEdge):
            graph.add_edge(token.source, token.target, token.weight)
        elif isinstance(token, Skip) and token.reason != "blank":
            skipped += 1
            logger.debug("Skipping edge-list line %d: %s", line_number, token.reason)

    logger.debug(
        "Parsed edge list: %d nodes, %d edges, %d lines skipped",
        graph.node_count, graph.edge_count, skipped
    )
    return graph


def serialize_edge_list(graph: Graph) -> str:
    """
    Render a graph as edge-list text.

    One line per edge, then one line per node that has no incident edge,
    so isolated nodes survive a round trip. Fractional weights (from matrix
    text or the API) are written as-is but don't parse back.
    """
    lines: list[str] = []
    touched: set[int] = set()

    for edge in graph.edges:
        touched.add(edge.source)
        touched.add(edge.target)
        if edge.weight is None:
            lines.append(f"{edge.source} {edge.target}")
        else:
            lines.append(f"{edge.source} {edge.target} {format_weight(edge.weight)}")

    for node in graph.nodes:
        if node.id not in touched:
            lines.append(str(node.id))

    return "\n".join(lines)


# --- Adjacency matrix ---

@dataclass(frozen=True)
class _Cell:
    present: bool
    weight: Optional[Weight] = None


_EMPTY_CELL = _Cell(False)


def _parse_cell(token: str, row: int, column: int) -> _Cell:
    if token == UNWEIGHTED_TOKEN:
        return _Cell(True)
    value = _parse_number(token)
    if value is None:
        raise MalformedMatrixError(
            f"Invalid matrix entry {token!r} at row {row}, column {column}",
            row=row, column=column
        )
    if value == 0:
        return _EMPTY_CELL
    return _Cell(True, value)


def parse_matrix(
    text: str,
    directed: bool = False,
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT
) -> Graph:
    """
    Parse adjacency-matrix text into a new graph with nodes 0..N-1.

    For undirected graphs, cells (i, j) and (j, i) describe the same edge.
    A pair with only one side set still yields the edge. When both sides
    are set with different values the upper-triangle value is used.

    Raises:
        MalformedMatrixError: if the matrix isn't square or a token is
            neither ``+`` nor a finite number
    """
    rows = [line.split() for line in text.splitlines() if line.strip()]
    size = len(rows)

    for i, row in enumerate(rows):
        if len(row) != size:
            raise MalformedMatrixError(
                f"Row {i} has {len(row)} entries, expected {size}", row=i
            )

    cells = [
        [_parse_cell(token, i, j) for j, token in enumerate(row)]
        for i, row in enumerate(rows)
    ]

    graph = Graph(is_directed=directed)
    for node_id in range(size):
        graph.add_node(node_id)
    circle_layout(graph.nodes, width, height)

    if directed:
        for i in range(size):
            for j in range(size):
                cell = cells[i][j]
                if cell.present:
                    graph.add_edge(i, j, cell.weight)
        return graph

    for i in range(size):
        for j in range(i, size):
            upper = cells[i][j]
            lower = cells[j][i]
            if upper.present and lower.present and upper.weight != lower.weight:
                logger.warning(
                    "Asymmetric undirected matrix at (%d, %d): using %s over %s",
                    i, j, upper.weight, lower.weight
                )
            cell = upper if upper.present else lower
            if cell.present:
                graph.add_edge(i, j, cell.weight)

    return graph


def serialize_matrix(graph: Graph) -> str:
    """
    Render a graph as adjacency-matrix text.

    Rows and columns follow ascending node id, so sparse ids are relabelled
    to 0..N-1. Zero-weight edges are written as ``+`` because ``0`` means
    "no edge". With parallel edges the last one wins.
    """
    ids = sorted(graph.node_ids())
    index = {node_id: i for i, node_id in enumerate(ids)}
    grid = [[NO_EDGE_TOKEN] * len(ids) for _ in ids]

    for edge in graph.edges:
        i = index[edge.source]
        j = index[edge.target]
        if edge.weight is None or edge.weight == 0:
            cell = UNWEIGHTED_TOKEN
        else:
            cell = format_weight(edge.weight)
        grid[i][j] = cell
        if not graph.is_directed:
            grid[j][i] = cell

    return "\n".join(" ".join(row) for row in grid)


# --- Dispatch ---

def parse_graph(text: str, fmt: GraphFormat = GraphFormat.EDGE_LIST, directed: bool = False, **layout) -> Graph:
    """Parse text in the given format."""
    if GraphFormat(fmt) is GraphFormat.MATRIX:
        return parse_matrix(text, directed, **layout)
    return parse_edge_list(text, directed, **layout)


def serialize_graph(graph: Graph, fmt: GraphFormat = GraphFormat.EDGE_LIST) -> str:
    """Serialize a graph in the given format."""
    if GraphFormat(fmt) is GraphFormat.MATRIX:
        return serialize_matrix(graph)
    return serialize_edge_list(graph)
