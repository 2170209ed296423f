"""Tests for graph/edges.py and edge models."""

from workflow_graph.graph.edges import EdgeSet, record_dependent, validate_edges
from workflow_graph.graph.models import EdgeType, WorkflowEdge, WorkflowNode, edge_id
from workflow_graph.semantics import Importance, NodeType


def make_edge(source: str, target: str, relation: str = "imports") -> WorkflowEdge:
    return WorkflowEdge.create(source, target, relation, EdgeType.IMPORT)


def make_node(path: str) -> WorkflowNode:
    return WorkflowNode(
        id=path,
        name=path,
        path=path,
        extension=".ts",
        type=NodeType.COMPONENT,
        role="Mixed Module",
        importance=Importance.LOW,
    )


class TestWorkflowEdge:
    def test_id_format(self):
        assert edge_id("a.ts", "imports", "b.ts") == "a.ts-imports-b.ts"
        assert make_edge("a.ts", "b.ts").id == "a.ts-imports-b.ts"

    def test_weight_floor(self):
        edge = WorkflowEdge.create("a", "b", "imports", EdgeType.IMPORT, weight=0)
        assert edge.weight == 1.0

    def test_label_defaults_to_relation(self):
        assert make_edge("a", "b", "uses").label == "uses"
        edge = WorkflowEdge.create("a", "b", "spine", EdgeType.DATA_FLOW, label="main flow")
        assert edge.label == "main flow"

    def test_to_dict(self):
        edge = WorkflowEdge.create(
            "a", "b", "configures", EdgeType.CONFIGURATION, description="Project configuration"
        )
        assert edge.to_dict() == {
            "id": "a-configures-b",
            "source": "a",
            "target": "b",
            "type": "configuration",
            "weight": 1.0,
            "label": "configures",
            "metadata": {"description": "Project configuration"},
        }

    def test_to_dict_without_description(self):
        assert "metadata" not in make_edge("a", "b").to_dict()


class TestEdgeSet:
    def test_add(self):
        edges = EdgeSet(["a", "b"])
        assert edges.add(make_edge("a", "b"))
        assert len(edges) == 1
        assert "a-imports-b" in edges
        assert edges.has("a", "imports", "b")

    def test_self_loop_rejected(self):
        edges = EdgeSet(["a"])
        assert not edges.add(make_edge("a", "a"))
        assert len(edges) == 0
        assert edges.rejected == 1

    def test_unknown_endpoint_rejected(self):
        edges = EdgeSet(["a"])
        assert not edges.add(make_edge("a", "ghost"))
        assert edges.rejected == 1

    def test_duplicate_ignored(self):
        edges = EdgeSet(["a", "b"])
        edges.add(make_edge("a", "b"))
        assert not edges.add(make_edge("a", "b"))
        assert len(edges) == 1
        assert edges.rejected == 0

    def test_same_pair_different_relation(self):
        edges = EdgeSet(["a", "b"])
        edges.add(make_edge("a", "b", "imports"))
        edges.add(make_edge("a", "b", "connects"))
        assert len(edges) == 2

    def test_insertion_order(self):
        edges = EdgeSet(["a", "b", "c"])
        edges.link("b", "c", "uses", EdgeType.CALL)
        edges.link("a", "b", "uses", EdgeType.CALL)
        assert [e.id for e in edges.edges] == ["b-uses-c", "a-uses-b"]

    def test_touched(self):
        edges = EdgeSet(["a", "b", "c"])
        edges.add(make_edge("a", "b"))
        assert edges.touched() == {"a", "b"}


class TestValidateEdges:
    def test_filters_bad_edges(self):
        raw = [
            make_edge("a", "b"),
            make_edge("a", "b"),
            make_edge("b", "b"),
            make_edge("a", "missing"),
            make_edge("b", "a"),
        ]
        assert [e.id for e in validate_edges(raw, ["a", "b"])] == ["a-imports-b", "b-imports-a"]


class TestRecordDependent:
    def test_duplicate_free(self):
        nodes = {"a": make_node("a"), "b": make_node("b")}
        record_dependent(nodes, "a", "b")
        record_dependent(nodes, "a", "b")
        assert nodes["b"].dependents == ["a"]

    def test_unknown_target_ignored(self):
        nodes = {"a": make_node("a")}
        record_dependent(nodes, "a", "missing")
        record_dependent(nodes, "a", "a")
        assert nodes["a"].dependents == []
