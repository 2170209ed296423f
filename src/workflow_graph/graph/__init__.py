"""Dependency graph construction: models, import resolution, edge builders."""

from .algorithms import (
    bfs_depths,
    bridge_components,
    build_adjacency,
    connected_components,
    shortest_path,
)
from .detailed import build_detailed_edges
from .edges import EdgeSet, record_dependent, validate_edges
from .essential import build_essential_edges
from .fallback import build_simplified_edges
from .models import (
    Cluster,
    CriticalPath,
    EdgeType,
    ImportRecord,
    Position,
    RepositoryWorkflow,
    WorkflowEdge,
    WorkflowMetrics,
    WorkflowNode,
)
from .resolver import STRATEGIES, ImportResolver, ResolutionStrategy

__all__ = [
    "Cluster",
    "CriticalPath",
    "EdgeSet",
    "EdgeType",
    "ImportRecord",
    "ImportResolver",
    "Position",
    "RepositoryWorkflow",
    "ResolutionStrategy",
    "STRATEGIES",
    "WorkflowEdge",
    "WorkflowMetrics",
    "WorkflowNode",
    "bfs_depths",
    "bridge_components",
    "build_adjacency",
    "build_detailed_edges",
    "build_essential_edges",
    "build_simplified_edges",
    "connected_components",
    "record_dependent",
    "shortest_path",
    "validate_edges",
]
