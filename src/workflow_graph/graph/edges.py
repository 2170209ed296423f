"""Edge accumulation and validation.

EdgeSet is threaded explicitly through every builder step of a run. It is
the single place where duplicate ids, self-loops and unknown endpoints are
rejected, so nothing downstream needs to re-check them.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..exceptions import ErrorCode
from ..logging_config import get_logger
from .models import EdgeType, WorkflowEdge, WorkflowNode, edge_id

logger = get_logger(__name__)


class EdgeSet:
    """Insertion-ordered, duplicate-free edge accumulator for one run."""

    def __init__(self, node_ids: Iterable[str]) -> None:
        self.node_ids = set(node_ids)
        self._edges: dict[str, WorkflowEdge] = {}
        self._touched: dict[str, None] = {}
        self.rejected = 0

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, edge_id: str) -> bool:
        return edge_id in self._edges

    @property
    def edges(self) -> list[WorkflowEdge]:
        return list(self._edges.values())

    def has(self, source: str, relation: str, target: str) -> bool:
        return edge_id(source, relation, target) in self._edges

    def touched(self) -> set[str]:
        """Ids of nodes incident to at least one edge."""
        return set(self._touched)

    def add(self, edge: WorkflowEdge) -> bool:
        """Add an edge; returns False (and logs why) if it was rejected."""
        if edge.source == edge.target:
            logger.debug(f"[{ErrorCode.WG301.value}] Dropped self-loop {edge.id}")
            self.rejected += 1
            return False
        missing = [end for end in (edge.source, edge.target) if end not in self.node_ids]
        if missing:
            logger.warning(
                f"[{ErrorCode.WG300.value}] Dropped edge {edge.id}: unknown endpoint(s) {missing}"
            )
            self.rejected += 1
            return False
        if edge.id in self._edges:
            logger.debug(f"Duplicate edge {edge.id} ignored")
            return False

        self._edges[edge.id] = edge
        self._touched.setdefault(edge.source)
        self._touched.setdefault(edge.target)
        return True

    def link(
        self,
        source: str,
        target: str,
        relation: str,
        edge_type: EdgeType,
        weight: float = 1.0,
        description: Optional[str] = None,
    ) -> bool:
        """Shorthand for ``add(WorkflowEdge.create(...))``."""
        return self.add(
            WorkflowEdge.create(
                source, target, relation, edge_type, weight=weight, description=description
            )
        )


def validate_edges(edges: Iterable[WorkflowEdge], node_ids: Iterable[str]) -> list[WorkflowEdge]:
    """Drop edges with unknown endpoints, self-loops or repeated ids.

    Never raises; every dropped edge is logged with its reason.
    """
    edge_set = EdgeSet(node_ids)
    for edge in edges:
        edge_set.add(edge)
    return edge_set.edges


def record_dependent(nodes_by_id: dict[str, WorkflowNode], source: str, target: str) -> None:
    """Note on ``target`` that ``source`` depends on it (duplicate-free)."""
    node = nodes_by_id.get(target)
    if node is not None and source != target and source not in node.dependents:
        node.dependents.append(source)
