"""Tests for graph/algorithms.py - traversal and connectivity repair."""

from workflow_graph.graph.algorithms import (
    bfs_depths,
    bridge_components,
    build_adjacency,
    connected_components,
    pick_hub,
    shortest_path,
)
from workflow_graph.graph.edges import EdgeSet
from workflow_graph.graph.models import EdgeType, WorkflowEdge, WorkflowNode
from workflow_graph.semantics import Importance, NodeType


def make_node(
    path: str,
    node_type: NodeType = NodeType.COMPONENT,
    importance: Importance = Importance.LOW,
) -> WorkflowNode:
    return WorkflowNode(
        id=path,
        name=path.rsplit("/", 1)[-1],
        path=path,
        extension=".ts",
        type=node_type,
        role="Mixed Module",
        importance=importance,
    )


def chain(*ids: str) -> list[WorkflowEdge]:
    return [
        WorkflowEdge.create(a, b, "imports", EdgeType.IMPORT) for a, b in zip(ids, ids[1:])
    ]


class TestAdjacency:
    def test_duplicate_targets_collapsed(self):
        edges = chain("a", "b") + [WorkflowEdge.create("a", "b", "uses", EdgeType.CALL)]
        assert build_adjacency(edges) == {"a": ["b"]}


class TestConnectedComponents:
    def test_components_in_node_order(self):
        edges = chain("a", "b") + chain("d", "c")
        assert connected_components(["a", "b", "c", "d", "e"], edges) == [
            ["a", "b"],
            ["c", "d"],
            ["e"],
        ]

    def test_direction_ignored(self):
        edges = chain("b", "a")
        assert len(connected_components(["a", "b"], edges)) == 1

    def test_long_chain_is_iterative(self):
        ids = [f"n{i}" for i in range(5000)]
        assert len(connected_components(ids, chain(*ids))) == 1


class TestBfsAndPaths:
    def test_depths(self):
        adjacency = build_adjacency(chain("a", "b", "c") + chain("a", "c"))
        assert bfs_depths("a", adjacency) == {"a": 0, "b": 1, "c": 1}

    def test_shortest_path(self):
        adjacency = build_adjacency(chain("a", "b", "c", "d") + chain("a", "c"))
        assert shortest_path("a", "d", adjacency) == ["a", "c", "d"]

    def test_unreachable(self):
        adjacency = build_adjacency(chain("a", "b"))
        assert shortest_path("b", "a", adjacency) == []

    def test_same_node(self):
        assert shortest_path("a", "a", {}) == ["a"]


class TestPickHub:
    def test_entry_first(self):
        nodes = [
            make_node("a.ts", importance=Importance.HIGH),
            make_node("index.ts", NodeType.ENTRY),
        ]
        assert pick_hub(nodes).id == "index.ts"

    def test_high_importance_next(self):
        nodes = [make_node("a.ts"), make_node("b.ts", importance=Importance.HIGH)]
        assert pick_hub(nodes).id == "b.ts"

    def test_first_node_last(self):
        assert pick_hub([make_node("a.ts"), make_node("b.ts")]).id == "a.ts"

    def test_empty(self):
        assert pick_hub([]) is None


class TestBridgeComponents:
    def test_joins_islands_to_largest(self):
        nodes = [
            make_node("x.ts"),
            make_node("a.ts"),
            make_node("b.ts", NodeType.ENTRY),
            make_node("c.ts"),
            make_node("y.ts", importance=Importance.MEDIUM),
        ]
        edge_set = EdgeSet(n.id for n in nodes)
        for edge in chain("a.ts", "b.ts", "c.ts"):
            edge_set.add(edge)

        added = bridge_components(nodes, edge_set)

        assert added == 2
        assert edge_set.has("b.ts", "connects", "x.ts")
        assert edge_set.has("b.ts", "connects", "y.ts")
        assert len(connected_components([n.id for n in nodes], edge_set.edges)) == 1

    def test_bridge_targets_most_important_member(self):
        nodes = [
            make_node("a.ts"),
            make_node("b.ts"),
            make_node("p.ts"),
            make_node("q.ts", importance=Importance.HIGH),
        ]
        edge_set = EdgeSet(n.id for n in nodes)
        edge_set.add(chain("a.ts", "b.ts")[0])
        edge_set.add(chain("p.ts", "q.ts")[0])

        bridge_components(nodes, edge_set)

        # equal sizes: first discovered component dominates
        assert edge_set.has("a.ts", "connects", "q.ts")
        bridge = edge_set.edges[-1]
        assert bridge.type is EdgeType.COMPOSITION
        assert bridge.description == "Connects otherwise isolated part of the graph"

    def test_connected_graph_untouched(self):
        nodes = [make_node("a.ts"), make_node("b.ts")]
        edge_set = EdgeSet(n.id for n in nodes)
        edge_set.add(chain("a.ts", "b.ts")[0])
        assert bridge_components(nodes, edge_set) == 0
        assert len(edge_set) == 1

    def test_single_node(self):
        nodes = [make_node("a.ts")]
        assert bridge_components(nodes, EdgeSet(["a.ts"])) == 0

