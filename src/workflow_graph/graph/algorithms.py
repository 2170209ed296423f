"""Graph traversal primitives: components, BFS, shortest paths, repair.

All traversals are iterative and visit neighbours in edge insertion order,
so results depend only on the order of the inputs.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Optional, Sequence

from ..logging_config import get_logger
from .edges import EdgeSet
from .models import EdgeType, WorkflowEdge, WorkflowNode

logger = get_logger(__name__)


def build_adjacency(edges: Iterable[WorkflowEdge]) -> dict[str, list[str]]:
    """Directed adjacency lists in edge insertion order."""
    adjacency: dict[str, list[str]] = {}
    for edge in edges:
        targets = adjacency.setdefault(edge.source, [])
        if edge.target not in targets:
            targets.append(edge.target)
    return adjacency


def _undirected(edges: Iterable[WorkflowEdge]) -> dict[str, list[str]]:
    neighbours: dict[str, list[str]] = {}
    for edge in edges:
        neighbours.setdefault(edge.source, []).append(edge.target)
        neighbours.setdefault(edge.target, []).append(edge.source)
    return neighbours


def connected_components(
    node_ids: Sequence[str], edges: Iterable[WorkflowEdge]
) -> list[list[str]]:
    """Undirected connected components, discovered in node order."""
    neighbours = _undirected(edges)
    seen: set[str] = set()
    components: list[list[str]] = []

    for start in node_ids:
        if start in seen:
            continue
        seen.add(start)
        component = [start]
        stack = [start]
        while stack:
            current = stack.pop()
            for nxt in neighbours.get(current, []):
                if nxt not in seen:
                    seen.add(nxt)
                    component.append(nxt)
                    stack.append(nxt)
        components.append(component)

    return components


def bfs_depths(start: str, adjacency: dict[str, list[str]]) -> dict[str, int]:
    """Hop count from ``start`` to every reachable node (directed)."""
    depths = {start: 0}
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in adjacency.get(current, []):
            if nxt not in depths:
                depths[nxt] = depths[current] + 1
                queue.append(nxt)
    return depths


def shortest_path(start: str, end: str, adjacency: dict[str, list[str]]) -> list[str]:
    """Fewest-hop directed path from start to end; [] if unreachable."""
    if start == end:
        return [start]
    parent: dict[str, Optional[str]] = {start: None}
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in adjacency.get(current, []):
            if nxt in parent:
                continue
            parent[nxt] = current
            if nxt == end:
                path = [end]
                step = parent[end]
                while step is not None:
                    path.append(step)
                    step = parent[step]
                return list(reversed(path))
            queue.append(nxt)
    return []


def pick_hub(nodes: Sequence[WorkflowNode]) -> Optional[WorkflowNode]:
    """First entry node, else first high-importance node, else first node."""
    for node in nodes:
        if node.is_entry:
            return node
    for node in nodes:
        if node.is_high:
            return node
    return nodes[0] if nodes else None


def _most_important(nodes: Sequence[WorkflowNode]) -> WorkflowNode:
    # min() keeps the first of equal ranks
    return min(nodes, key=lambda n: n.importance.rank)


def bridge_components(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    relation: str = "connects",
) -> int:
    """Join every component to the dominant one with a single edge.

    The dominant component is the largest (ties: first discovered). Each
    other component is linked from the dominant component's hub to its own
    most important node. Returns the number of bridges added.
    """
    if len(nodes) < 2:
        return 0

    components = connected_components([n.id for n in nodes], edge_set.edges)
    if len(components) < 2:
        return 0

    dominant = components[0]
    for component in components[1:]:
        if len(component) > len(dominant):
            dominant = component

    dominant_set = set(dominant)
    hub = pick_hub([node for node in nodes if node.id in dominant_set])

    added = 0
    for component in components:
        if component is dominant:
            continue
        members = set(component)
        target = _most_important([node for node in nodes if node.id in members])
        if edge_set.link(
            hub.id,
            target.id,
            relation,
            EdgeType.COMPOSITION,
            description="Connects otherwise isolated part of the graph",
        ):
            added += 1

    if added:
        logger.debug(f"Bridged {added} disconnected component(s) into {hub.id}")
    return added
