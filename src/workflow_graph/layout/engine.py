"""Layout pipeline: PENDING -> LEVELED -> PLACED -> SETTLED."""

from __future__ import annotations

from typing import Optional, Sequence

from ..graph.models import WorkflowEdge, WorkflowNode
from ..logging_config import get_logger
from .levels import assign_levels
from .models import Canvas, LayoutState
from .placement import place_rows, resolve_overlaps

logger = get_logger(__name__)


class LayoutEngine:
    """Assign deterministic, non-overlapping positions to nodes in place.

    Example:
        >>> engine = LayoutEngine(Canvas())
        >>> levels = engine.apply(nodes, edges)
        >>> engine.state
        <LayoutState.SETTLED: 'settled'>
    """

    def __init__(self, canvas: Optional[Canvas] = None) -> None:
        self.canvas = canvas or Canvas()
        self.state = LayoutState.PENDING
        self.passes = 0

    def apply(
        self, nodes: Sequence[WorkflowNode], edges: Sequence[WorkflowEdge]
    ) -> dict[int, list[str]]:
        """Run every layout phase; returns level -> node ids."""
        self.state = LayoutState.PENDING
        self.passes = 0

        levels = assign_levels(nodes, edges, self.canvas.max_levels)
        self.state = LayoutState.LEVELED

        place_rows(levels, self.canvas)
        self.state = LayoutState.PLACED

        self.passes = resolve_overlaps(nodes, self.canvas)
        self.state = LayoutState.SETTLED

        logger.debug(
            f"Laid out {len(nodes)} nodes on {len(levels)} levels ({self.passes} overlap passes)"
        )
        return {level: [n.id for n in members] for level, members in levels.items()}
