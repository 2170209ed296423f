"""Entry points and critical paths."""

from __future__ import annotations

from typing import Sequence

from ..config import DEFAULT_THRESHOLDS
from ..graph.algorithms import build_adjacency, shortest_path
from ..graph.models import CriticalPath, WorkflowEdge, WorkflowNode


def identify_entry_points(nodes: Sequence[WorkflowNode]) -> list[str]:
    return [n.id for n in nodes if n.is_entry or n.is_high]


def identify_critical_paths(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    cap: int = DEFAULT_THRESHOLDS.critical_path_cap,
    weight: float = DEFAULT_THRESHOLDS.critical_path_importance,
) -> list[CriticalPath]:
    """Shortest directed paths from entry nodes to high-importance nodes.

    Pairs are visited entry-major in node order; single-node paths are
    dropped and at most ``cap`` paths are returned.
    """
    adjacency = build_adjacency(edges)
    entries = [n for n in nodes if n.is_entry]
    targets = [n for n in nodes if n.is_high]

    paths: list[CriticalPath] = []
    for entry in entries:
        for target in targets:
            if len(paths) >= cap:
                return paths
            if entry.id == target.id:
                continue
            path = shortest_path(entry.id, target.id, adjacency)
            if len(path) > 1:
                paths.append(
                    CriticalPath(
                        path=path,
                        description=f"Critical path from {entry.name} to {target.name}",
                        importance=weight,
                    )
                )
    return paths
