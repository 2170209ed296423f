"""Directory clusters and their inferred purpose."""

from __future__ import annotations

from typing import Sequence

from ..graph.models import Cluster, WorkflowNode
from ..semantics.models import NodeType

ROOT_CLUSTER = "root"

PURPOSES = {
    NodeType.COMPONENT: "UI components and presentation logic",
    NodeType.SERVICE: "Business logic and API integration",
    NodeType.UTILITY: "Helper functions and utilities",
    NodeType.CONFIG: "Configuration and setup files",
    NodeType.TEST: "Test files and test utilities",
    NodeType.TYPE: "Type definitions and interfaces",
}
DEFAULT_PURPOSE = "Mixed functionality"


def infer_purpose(nodes: Sequence[WorkflowNode]) -> str:
    """Purpose of the plurality type; ties go to the type seen first."""
    counts: dict[NodeType, int] = {}
    for node in nodes:
        counts[node.type] = counts.get(node.type, 0) + 1
    if not counts:
        return DEFAULT_PURPOSE
    # max() returns the first maximal key in insertion order
    dominant = max(counts, key=lambda t: counts[t])
    return PURPOSES.get(dominant, DEFAULT_PURPOSE)


def identify_clusters(nodes: Sequence[WorkflowNode]) -> list[Cluster]:
    """One cluster per directory holding more than one node."""
    groups: dict[str, list[WorkflowNode]] = {}
    for node in nodes:
        groups.setdefault(node.directory or ROOT_CLUSTER, []).append(node)

    return [
        Cluster(
            id=directory,
            name=directory.rsplit("/", 1)[-1],
            node_ids=[n.id for n in members],
            purpose=infer_purpose(members),
        )
        for directory, members in groups.items()
        if len(members) > 1
    ]
