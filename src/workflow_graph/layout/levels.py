"""Hierarchical level assignment.

Phase 1 is a plain BFS over graph edges from the seed nodes, so every
node reachable within the level cap sits at its exact shortest hop
distance. Phase 2 extends from the nodes placed so far to nodes that are
only linked by a matching declared dependency. Whatever is still left
goes to a single overflow level, grouped by type.
"""

from __future__ import annotations

import re
from collections import deque
from typing import Sequence

from ..graph.algorithms import build_adjacency
from ..graph.models import WorkflowEdge, WorkflowNode
from ..logging_config import get_logger

logger = get_logger(__name__)

SEED_FALLBACK_CAP = 3

_SCRIPT_EXTENSION = re.compile(r"\.(ts|tsx|js|jsx|mjs|cjs|py)$")


def select_seeds(nodes: Sequence[WorkflowNode]) -> list[WorkflowNode]:
    """Entry nodes, else up to three nodes with the fewest declared dependencies."""
    entries = [n for n in nodes if n.is_entry]
    if entries or not nodes:
        return entries
    fewest = min(len(n.dependencies) for n in nodes)
    return [n for n in nodes if len(n.dependencies) == fewest][:SEED_FALLBACK_CAP]


def _specifier_stem(specifier: str) -> str:
    last = specifier.rstrip("/").rsplit("/", 1)[-1]
    return _SCRIPT_EXTENSION.sub("", last)


def mentions(node: WorkflowNode, other: WorkflowNode) -> bool:
    """True if a declared dependency of ``node`` names ``other``."""
    return any(
        dep == other.id or _specifier_stem(dep) == other.stem for dep in node.dependencies
    )


def assign_levels(
    nodes: Sequence[WorkflowNode],
    edges: Sequence[WorkflowEdge],
    max_levels: int = 10,
) -> dict[int, list[WorkflowNode]]:
    """Map level -> nodes (in discovery order). Every node gets exactly one level."""
    if not nodes:
        return {}

    adjacency = build_adjacency(edges)
    by_id = {n.id: n for n in nodes}
    level_of: dict[str, int] = {}
    order: list[str] = []

    def place(node_id: str, level: int) -> None:
        level_of[node_id] = level
        order.append(node_id)

    # Phase 1: BFS over edges
    queue: deque[str] = deque()
    for seed in select_seeds(nodes):
        place(seed.id, 0)
        queue.append(seed.id)
    while queue:
        current = queue.popleft()
        next_level = level_of[current] + 1
        if next_level >= max_levels:
            continue
        for target in adjacency.get(current, []):
            if target in by_id and target not in level_of:
                place(target, next_level)
                queue.append(target)

    # Phase 2: declared-dependency matches, either direction
    queue.extend(order)
    while queue:
        current = by_id[queue.popleft()]
        next_level = level_of[current.id] + 1
        if next_level >= max_levels:
            continue
        for candidate in nodes:
            if candidate.id in level_of:
                continue
            linked = candidate.id in adjacency.get(current.id, [])
            if linked or mentions(current, candidate) or mentions(candidate, current):
                place(candidate.id, next_level)
                queue.append(candidate.id)

    levels: dict[int, list[WorkflowNode]] = {}
    for node_id in order:
        levels.setdefault(level_of[node_id], []).append(by_id[node_id])

    leftover = [n for n in nodes if n.id not in level_of]
    if leftover:
        overflow = max(levels) + 1
        levels[overflow] = sorted(leftover, key=lambda n: n.type.priority)
        logger.debug(f"{len(leftover)} unreached node(s) placed on overflow level {overflow}")

    return dict(sorted(levels.items()))
