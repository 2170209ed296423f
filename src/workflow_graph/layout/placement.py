"""Row placement and overlap resolution.

Overlap passes are vectorised with numpy: each pass computes every
pairwise separation from the same snapshot of positions (Jacobi style),
so the outcome does not depend on the order pairs are visited.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..exceptions import ErrorCode
from ..graph.models import Position, WorkflowNode
from ..logging_config import get_logger
from .models import Canvas

logger = get_logger(__name__)

MIN_LEVEL_SLOTS = 4


def row_sort_key(node: WorkflowNode) -> tuple[int, int, str]:
    return (node.type.priority, node.importance.rank, node.name)


def place_rows(levels: dict[int, list[WorkflowNode]], canvas: Canvas) -> None:
    """Give every node an initial position: one centred row per level."""
    if not levels:
        return

    level_height = canvas.height / max(max(levels) + 1, MIN_LEVEL_SLOTS)

    for level, members in levels.items():
        row = sorted(members, key=row_sort_key)
        y = canvas.top_padding + level * level_height
        spacing = max(canvas.min_spacing, canvas.width / max(len(row), 1))
        start_x = (canvas.width - (len(row) - 1) * spacing) / 2

        for index, node in enumerate(row):
            x, clamped_y = canvas.clamp(start_x + index * spacing, y)
            node.position = Position(x, clamped_y)


def _separation(points: np.ndarray, min_distance: float) -> tuple[np.ndarray, bool]:
    """Displacement for every point from all overlapping pairs."""
    n = len(points)
    diff = points[:, None, :] - points[None, :, :]  # diff[i, j] = p_i - p_j
    dist = np.sqrt((diff**2).sum(axis=2))

    off_diagonal = ~np.eye(n, dtype=bool)
    overlapping = off_diagonal & (dist < min_distance)
    if not overlapping.any():
        return np.zeros_like(points), False

    safe = np.where(dist > 0, dist, 1.0)
    unit = diff / safe[:, :, None]

    # Coincident pairs split along x: lower index left, higher index right
    coincident = off_diagonal & (dist == 0)
    if coincident.any():
        lower = np.triu(np.ones((n, n), dtype=bool), k=1)
        unit[..., 0] = np.where(coincident, np.where(lower, -1.0, 1.0), unit[..., 0])
        unit[..., 1] = np.where(coincident, 0.0, unit[..., 1])

    push = np.where(overlapping, (min_distance - dist) * 0.5, 0.0)
    return (unit * push[:, :, None]).sum(axis=1), True


def resolve_overlaps(nodes: Sequence[WorkflowNode], canvas: Canvas) -> int:
    """Push apart nodes closer than ``canvas.min_distance``.

    Runs at most ``canvas.max_passes`` passes and stops after the first
    pass with nothing to adjust. Returns the number of passes that moved
    something.
    """
    if len(nodes) < 2:
        return 0

    points = np.array([[n.position.x, n.position.y] for n in nodes], dtype=float)
    x_low, x_high = canvas.x_bounds
    y_low, y_high = canvas.y_bounds

    passes = 0
    settled = False
    for _ in range(canvas.max_passes):
        delta, moved = _separation(points, canvas.min_distance)
        if not moved:
            settled = True
            break
        passes += 1
        points = points + delta
        points[:, 0] = np.clip(points[:, 0], x_low, x_high)
        points[:, 1] = np.clip(points[:, 1], y_low, y_high)

    if not settled:
        settled = not _separation(points, canvas.min_distance)[1]
    if not settled:
        logger.debug(
            f"[{ErrorCode.WG500.value}] Layout not fully separated after {canvas.max_passes} passes"
        )

    for node, (x, y) in zip(nodes, points.tolist()):
        node.position = Position(float(x), float(y))
    return passes
