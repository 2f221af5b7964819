"""
Graph export - Write-only text renderings for download.

These formats are produced for other tools (GraphViz, plain text viewers)
and are never parsed back; the edge-list and matrix codecs are the only
readable encodings.
"""

import json
from typing import TYPE_CHECKING

from .codec import format_weight

if TYPE_CHECKING:
    from .models import Graph


EXPORT_FORMATS = ("edges", "matrix", "dot", "list", "json")


def to_dot(graph: "Graph") -> str:
    """
    Render a graph as GraphViz DOT.

    Node positions are pinned with ``pos="x,y!"`` so neato reproduces
    the canvas layout.
    """
    lines = ["digraph G {" if graph.is_directed else "graph G {"]
    connector = "->" if graph.is_directed else "--"

    for node in graph.nodes:
        lines.append(f'    {node.id} [pos="{node.x:g},{node.y:g}!"];')

    for edge in graph.edges:
        line = f"    {edge.source} {connector} {edge.target}"
        if edge.weight is not None:
            line += f' [label="{format_weight(edge.weight)}"]'
        lines.append(line + ";")

    lines.append("}")
    return "\n".join(lines)


def to_adjacency_list(graph: "Graph") -> str:
    """
    Render one ``id: n1, n2(w)`` line per node.

    Undirected edges are listed under both endpoints; directed edges only
    under their source.
    """
    lines = []
    for node in graph.nodes:
        neighbors = []
        for edge in graph.edges:
            if edge.source == node.id:
                neighbor = edge.target
            elif not graph.is_directed and edge.target == node.id:
                neighbor = edge.source
            else:
                continue
            if edge.weight is not None:
                neighbors.append(f"{neighbor}({format_weight(edge.weight)})")
            else:
                neighbors.append(str(neighbor))
        lines.append(f"{node.id}: {', '.join(neighbors)}".rstrip())
    return "\n".join(lines)


def to_json(graph: "Graph") -> str:
    """
    Pretty-printed ``{nodes, edges, isDirected}`` document.

    Keys follow the editor's download format, so the graph-level flag is
    camelCase here while the API payload keeps ``is_directed``.
    """
    data = graph.to_json_dict()
    document = {
        "nodes": data["nodes"],
        "edges": data["edges"],
        "isDirected": data["is_directed"],
    }
    return json.dumps(document, indent=2)
