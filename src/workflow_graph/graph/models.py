"""Data models for the repository workflow graph.

Levels:
  Nodes: one WorkflowNode per analysed file (classified, positioned)
  Edges: typed, weighted relationships between nodes
  Derived: clusters, critical paths, metrics
  Result: RepositoryWorkflow, a plain value that serializes to the
          camelCase contract consumed by the rendering layer
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional

from ..semantics.models import Importance, NodeType


class EdgeType(Enum):
    IMPORT = "import"
    CALL = "call"
    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    DATA_FLOW = "data-flow"
    CONFIGURATION = "configuration"


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


# ── Nodes and edges ────────────────────────────────────────────────


@dataclass
class WorkflowNode:
    """One analysed file.

    ``dependents`` is a back-reference list filled in as import edges are
    discovered; ``position`` is owned by the layout engine.
    """

    id: str
    name: str
    path: str
    extension: str
    type: NodeType
    role: str
    importance: Importance
    complexity: int = 0
    dependencies: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)
    function_count: int = 0
    class_count: int = 0
    exports: list[str] = field(default_factory=list)
    position: Position = field(default_factory=Position)

    @property
    def stem(self) -> str:
        """File name without its final extension."""
        return PurePosixPath(self.name).stem

    @property
    def directory(self) -> str:
        if "/" not in self.path:
            return ""
        return self.path.rsplit("/", 1)[0]

    @property
    def is_entry(self) -> bool:
        return self.type is NodeType.ENTRY

    @property
    def is_high(self) -> bool:
        return self.importance is Importance.HIGH

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "type": self.type.value,
            "role": self.role,
            "dependencies": list(self.dependencies),
            "dependents": list(self.dependents),
            "complexity": self.complexity,
            "importance": self.importance.value,
            "position": {"x": self.position.x, "y": self.position.y},
            "functionCount": self.function_count,
            "classCount": self.class_count,
            "exports": list(self.exports),
        }


def edge_id(source: str, relation: str, target: str) -> str:
    """Deterministic edge id; equal ids mean the same relationship."""
    return f"{source}-{relation}-{target}"


@dataclass
class WorkflowEdge:
    id: str
    source: str
    target: str
    type: EdgeType
    weight: float = 1.0
    label: str = ""
    description: Optional[str] = None

    @classmethod
    def create(
        cls,
        source: str,
        target: str,
        relation: str,
        edge_type: EdgeType,
        weight: float = 1.0,
        label: Optional[str] = None,
        description: Optional[str] = None,
    ) -> WorkflowEdge:
        return cls(
            id=edge_id(source, relation, target),
            source=source,
            target=target,
            type=edge_type,
            weight=max(1.0, float(weight)),
            label=label if label is not None else relation,
            description=description,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type.value,
            "weight": self.weight,
            "label": self.label,
        }
        if self.description is not None:
            data["metadata"] = {"description": self.description}
        return data


@dataclass
class ImportRecord:
    """One import statement, as collected from an analysed file."""

    importer: str
    source: str
    specifiers: list[str] = field(default_factory=list)


# ── Derived structures ─────────────────────────────────────────────


@dataclass
class Cluster:
    """Directory-scoped group of nodes. Recomputed every run."""

    id: str
    name: str
    node_ids: list[str]
    purpose: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "nodeIds": list(self.node_ids),
            "purpose": self.purpose,
        }


@dataclass
class CriticalPath:
    """Shortest hop path from an entry point to a high-importance node."""

    path: list[str]
    description: str
    importance: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "description": self.description,
            "importance": self.importance,
        }


@dataclass
class WorkflowMetrics:
    total_files: int = 0
    total_functions: int = 0
    total_classes: int = 0
    avg_complexity: float = 0.0
    dependency_depth: int = 0
    coupling_metric: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalFunctions": self.total_functions,
            "totalClasses": self.total_classes,
            "avgComplexity": self.avg_complexity,
            "dependencyDepth": self.dependency_depth,
            "couplingMetric": self.coupling_metric,
        }


# ── Full result ────────────────────────────────────────────────────


@dataclass
class RepositoryWorkflow:
    """Complete engine output. Holds no behaviour beyond serialization."""

    nodes: list[WorkflowNode] = field(default_factory=list)
    edges: list[WorkflowEdge] = field(default_factory=list)
    entry_points: list[str] = field(default_factory=list)
    clusters: list[Cluster] = field(default_factory=list)
    critical_paths: list[CriticalPath] = field(default_factory=list)
    metrics: WorkflowMetrics = field(default_factory=WorkflowMetrics)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "entryPoints": list(self.entry_points),
            "clusters": [cluster.to_dict() for cluster in self.clusters],
            "criticalPaths": [path.to_dict() for path in self.critical_paths],
            "metrics": self.metrics.to_dict(),
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
