"""
Graph validation - Check graphs for structural issues.

Graphs built through the model operations always satisfy the id and
endpoint invariants. Graphs constructed directly from data (JSON, tests)
bypass those operations, so validation re-checks them and also flags
constructs that a text format can't represent.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Graph


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Invalid state, must be fixed
    WARNING = "warning"  # Potential problem, should review
    INFO = "info"        # Informational, may be intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in a graph."""
    severity: IssueSeverity
    message: str
    node_id: int | None = None
    edge_id: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.node_id is not None:
            result["node_id"] = self.node_id
        if self.edge_id:
            result["edge_id"] = self.edge_id
        return result


def validate_graph(graph: "Graph") -> list[ValidationIssue]:
    """
    Validate a graph and return a list of issues.

    Checks for:
    - Empty graph - INFO
    - Duplicate node ids - ERROR
    - Invalid edge references (source/target doesn't exist) - ERROR
    - Isolated nodes (no edges) - INFO
    - Self-loops - WARNING
    - Parallel edges (lost by the matrix format) - WARNING
    - Both orientations of a pair in an undirected graph - WARNING
    - Zero-weight edges (written as unweighted by the matrix format) - WARNING

    Args:
        graph: The graph to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    if not graph.nodes:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Graph has no nodes"
        ))
        return issues

    id_counts = Counter(graph.node_ids())
    for node_id, count in sorted(id_counts.items()):
        if count > 1:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Node id {node_id} is used by {count} nodes",
                node_id=node_id
            ))

    node_ids = set(id_counts)

    for edge in graph.edges:
        if edge.source not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Edge references non-existent source node: {edge.source}",
                edge_id=edge.id
            ))
        if edge.target not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Edge references non-existent target node: {edge.target}",
                edge_id=edge.id
            ))

    connected_nodes: set[int] = set()
    for edge in graph.edges:
        connected_nodes.add(edge.source)
        connected_nodes.add(edge.target)

    isolated = sorted(node_ids - connected_nodes)
    if isolated:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message=f"Isolated nodes (no edges): {', '.join(str(n) for n in isolated)}"
        ))

    for edge in graph.edges:
        if edge.is_self_loop:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Self-loop (node connects to itself)",
                edge_id=edge.id,
                node_id=edge.source
            ))

    seen_pairs: set[tuple[int, int]] = set()
    for edge in graph.edges:
        pair = (edge.source, edge.target)
        if pair in seen_pairs:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Parallel edge from {edge.source} to {edge.target}",
                edge_id=edge.id
            ))
        elif not graph.is_directed and (edge.target, edge.source) in seen_pairs:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Edge {edge.source} -- {edge.target} duplicates an edge in the other orientation",
                edge_id=edge.id
            ))
        seen_pairs.add(pair)

    for edge in graph.edges:
        if edge.weight == 0:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message="Zero-weight edge is written as unweighted in matrix format",
                edge_id=edge.id
            ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    errors = len([i for i in issues if i.severity == IssueSeverity.ERROR])
    return {
        "total": len(issues),
        "errors": errors,
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": errors == 0
    }
