"""
Layout algorithms for graph nodes.

Provides placement strategies that give nodes finite canvas positions:
- Circle: Nodes evenly spaced on a circle (used for freshly parsed graphs)
- Grid: Equal cells filling the padded canvas
- Tree: Hierarchical layout based on edge directions

All layout functions modify nodes in-place and return the modified list.
Positions never influence analysis.
"""

import math
from collections import defaultdict, deque
from typing import TYPE_CHECKING, Literal, get_args

if TYPE_CHECKING:
    from .models import Node, Edge


# Default layout parameters
DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600
DEFAULT_GRID_PADDING = 100
DEFAULT_SPACING_X = 120
DEFAULT_SPACING_Y = 100
DEFAULT_START_X = 100
DEFAULT_START_Y = 100

LayoutStrategy = Literal["circle", "grid", "tree"]
LAYOUT_STRATEGIES: tuple[str, ...] = get_args(LayoutStrategy)


def circle_layout(
    nodes: list["Node"],
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT,
    radius_ratio: float = 0.25
) -> list["Node"]:
    """
    Arrange nodes evenly around a circle centred on the canvas.

    Args:
        nodes: List of nodes to arrange (in the order they appear on the circle)
        width: Canvas width
        height: Canvas height
        radius_ratio: Radius as a fraction of the smaller canvas side

    Returns:
        The same list of nodes (modified in-place)
    """
    if not nodes:
        return nodes

    center_x = width / 2
    center_y = height / 2
    radius = min(width, height) * radius_ratio

    for i, node in enumerate(nodes):
        angle = 2 * math.pi * i / len(nodes)
        node.x = center_x + radius * math.cos(angle)
        node.y = center_y + radius * math.sin(angle)

    return nodes


def grid_layout(
    nodes: list["Node"],
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT,
    padding: float = DEFAULT_GRID_PADDING,
    columns: int | None = None
) -> list["Node"]:
    """
    Arrange nodes in a grid that fills the padded canvas.

    The padded area is split into equal cells, one per node, and each node
    sits at the centre of its cell in row-major order.

    Args:
        nodes: List of nodes to arrange
        width: Canvas width
        height: Canvas height
        padding: Empty margin kept on every side of the canvas
        columns: Number of columns (ceil(sqrt(n)) if None)

    Returns:
        The same list of nodes (modified in-place)
    """
    if not nodes:
        return nodes

    if columns is None:
        columns = math.ceil(math.sqrt(len(nodes)))
    rows = math.ceil(len(nodes) / columns)

    cell_width = (width - 2 * padding) / columns
    cell_height = (height - 2 * padding) / rows

    for i, node in enumerate(nodes):
        row = i // columns
        col = i % columns
        node.x = padding + col * cell_width + cell_width / 2
        node.y = padding + row * cell_height + cell_height / 2

    return nodes


def tree_layout(
    nodes: list["Node"],
    edges: list["Edge"],
    directed: bool = True,
    spacing_x: float = DEFAULT_SPACING_X,
    spacing_y: float = DEFAULT_SPACING_Y,
    start_x: float = DEFAULT_START_X,
    start_y: float = DEFAULT_START_Y,
    orientation: str = "vertical"  # "vertical" or "horizontal"
) -> list["Node"]:
    """
    Arrange nodes in levels by breadth-first distance from a root.

    Directed graphs start from every node without incoming edges (or the
    node with the fewest incoming edges when every node has one) and walk
    along edge direction. Undirected graphs start from the node with the
    fewest incoming edges and walk both ways.

    Args:
        nodes: List of nodes to arrange
        edges: List of edges defining the hierarchy
        directed: Whether edges are followed source -> target only
        spacing_x: Horizontal spacing between nodes
        spacing_y: Vertical spacing between levels
        start_x: X coordinate of first node
        start_y: Y coordinate of first node
        orientation: "vertical" (top-to-bottom) or "horizontal" (left-to-right)

    Returns:
        The same list of nodes (modified in-place)
    """
    if not nodes:
        return nodes

    children: dict[int, list[int]] = {n.id: [] for n in nodes}
    in_degree: dict[int, int] = {n.id: 0 for n in nodes}

    for edge in edges:
        if edge.source in children and edge.target in children:
            children[edge.source].append(edge.target)
            in_degree[edge.target] += 1
            if not directed and edge.source != edge.target:
                children[edge.target].append(edge.source)

    fewest = min(nodes, key=lambda n: in_degree[n.id]).id
    if directed:
        roots = [n.id for n in nodes if in_degree[n.id] == 0] or [fewest]
    else:
        roots = [fewest]

    # BFS to assign levels
    levels: dict[int, int] = {}
    queue = deque((r, 0) for r in roots)

    while queue:
        node_id, level = queue.popleft()
        if node_id in levels:
            continue
        levels[node_id] = level
        for child in children[node_id]:
            if child not in levels:
                queue.append((child, level + 1))

    # Handle unreached nodes
    for node in nodes:
        if node.id not in levels:
            levels[node.id] = 0

    # Assign positions by level
    level_counts: dict[int, int] = defaultdict(int)

    for node in nodes:
        level = levels[node.id]
        idx = level_counts[level]
        level_counts[level] += 1

        if orientation == "vertical":
            node.x = start_x + idx * spacing_x
            node.y = start_y + level * spacing_y
        else:  # horizontal
            node.x = start_x + level * spacing_x
            node.y = start_y + idx * spacing_y

    return nodes
