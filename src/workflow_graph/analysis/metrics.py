"""Aggregate metrics over a finished graph."""

from __future__ import annotations

from typing import Sequence

from ..graph.algorithms import bfs_depths, build_adjacency
from ..graph.models import WorkflowEdge, WorkflowMetrics, WorkflowNode


def dependency_depth(nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]) -> int:
    """Largest BFS hop count reachable from any entry node (0 without entries)."""
    adjacency = build_adjacency(edges)
    depth = 0
    for node in nodes:
        if node.is_entry:
            depth = max(depth, max(bfs_depths(node.id, adjacency).values()))
    return depth


def compute_metrics(
    nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
) -> WorkflowMetrics:
    total = len(nodes)
    if total == 0:
        return WorkflowMetrics()

    return WorkflowMetrics(
        total_files=total,
        total_functions=sum(n.function_count for n in nodes),
        total_classes=sum(n.class_count for n in nodes),
        avg_complexity=sum(n.complexity for n in nodes) / total,
        dependency_depth=dependency_depth(nodes, edges),
        coupling_metric=len(edges) / total,
    )
