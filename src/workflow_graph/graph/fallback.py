"""Simplified heuristic graph used when edge construction fails or times out.

Needs no import resolution, so it is cheap enough to run after a deadline
has already been spent.
"""

from __future__ import annotations

from typing import Sequence

from ..logging_config import get_logger
from ..semantics.models import NodeType
from .algorithms import bridge_components
from .edges import EdgeSet
from .models import EdgeType, WorkflowEdge, WorkflowNode

logger = get_logger(__name__)

FANOUT_CAP = 5
SERVICE_CAP = 2


def _entry_like(node: WorkflowNode) -> bool:
    return node.is_entry or "index" in node.name or "main" in node.name


def build_simplified_edges(nodes: Sequence[WorkflowNode]) -> list[WorkflowEdge]:
    logger.info(f"Building simplified dependency graph for {len(nodes)} nodes")
    edge_set = EdgeSet(node.id for node in nodes)
    services = [n for n in nodes if n.type is NodeType.SERVICE][:SERVICE_CAP]

    for node in nodes:
        if _entry_like(node):
            prefix = f"{node.directory}/" if node.directory else ""
            related = [n for n in nodes if n.id != node.id and n.path.startswith(prefix)]
            for target in related[:FANOUT_CAP]:
                edge_set.link(node.id, target.id, "imports", EdgeType.IMPORT)

        if node.type is NodeType.COMPONENT:
            for service in services:
                edge_set.link(node.id, service.id, "imports", EdgeType.IMPORT)

    bridge_components(nodes, edge_set)

    logger.info(f"Created {len(edge_set)} simplified dependency edges")
    return edge_set.edges
