"""Graph analytics: metrics, clusters, entry points and critical paths."""

from .clusters import identify_clusters, infer_purpose
from .metrics import compute_metrics, dependency_depth
from .paths import identify_critical_paths, identify_entry_points

__all__ = [
    "compute_metrics",
    "dependency_depth",
    "identify_clusters",
    "identify_critical_paths",
    "identify_entry_points",
    "infer_purpose",
]
