"""Detailed (exhaustive) edge builder for the advanced view.

A superset of relationship kinds: every resolvable import, directory
structure, configuration scope, workflow chains by type, and name or type
similarity. Ends with the same connectivity repair as the essential view.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..deadline import Deadline
from ..logging_config import get_logger
from ..semantics.models import NodeType
from .algorithms import bridge_components
from .edges import EdgeSet, record_dependent
from .models import EdgeType, ImportRecord, WorkflowEdge, WorkflowNode
from .resolver import ImportResolver

logger = get_logger(__name__)

ROOT_DIRECTORY = "root"

_SOURCE_EXTENSION = re.compile(r"\.(ts|tsx|js|jsx)$")


def _check(deadline: Optional[Deadline], stage: str) -> None:
    if deadline is not None:
        deadline.check(stage)


def build_detailed_edges(
    nodes: Sequence[WorkflowNode],
    import_records: Sequence[ImportRecord],
    resolver: ImportResolver,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    deadline: Optional[Deadline] = None,
) -> list[WorkflowEdge]:
    """Build the exhaustive edge set for ``nodes``."""
    edge_set = EdgeSet(node.id for node in nodes)

    add_import_edges(nodes, import_records, resolver, edge_set)
    _check(deadline, "import edges")

    add_hierarchy_edges(nodes, edge_set, thresholds)
    _check(deadline, "directory hierarchy")

    add_config_edges(nodes, edge_set, thresholds)
    _check(deadline, "config edges")

    add_workflow_chains(nodes, edge_set, thresholds)
    _check(deadline, "workflow chains")

    add_similarity_edges(nodes, edge_set, thresholds)
    _check(deadline, "similar files")

    bridge_components(nodes, edge_set)

    logger.info(f"Built detailed workflow with {len(edge_set)} edges")
    return edge_set.edges


def add_import_edges(
    nodes: Sequence[WorkflowNode],
    import_records: Sequence[ImportRecord],
    resolver: ImportResolver,
    edge_set: EdgeSet,
) -> None:
    by_id = {node.id: node for node in nodes}
    for record in import_records:
        if record.importer not in by_id:
            continue
        target = resolver.resolve(record.source, record.importer)
        if target is None or target == record.importer:
            continue
        added = edge_set.add(
            WorkflowEdge.create(
                record.importer,
                target,
                "imports",
                EdgeType.IMPORT,
                weight=len(record.specifiers),
                description=f"Imports: {', '.join(record.specifiers)}",
            )
        )
        if added:
            record_dependent(by_id, record.importer, target)


def group_by_directory(nodes: Sequence[WorkflowNode]) -> dict[str, list[WorkflowNode]]:
    """Nodes keyed by parent directory ("root" for top-level files)."""
    groups: dict[str, list[WorkflowNode]] = {}
    for node in nodes:
        groups.setdefault(node.directory or ROOT_DIRECTORY, []).append(node)
    return groups


def _parent_directory(directory: str) -> str:
    if "/" not in directory:
        return ROOT_DIRECTORY
    return directory.rsplit("/", 1)[0]


def add_hierarchy_edges(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    """Parent-directory files contain child files; index files organize siblings.

    Top-level files take part only as parents.
    """
    groups = group_by_directory(nodes)

    for directory, members in groups.items():
        if directory == ROOT_DIRECTORY:
            continue

        for parent in groups.get(_parent_directory(directory), []):
            for child in members[: thresholds.hierarchy_child_cap]:
                edge_set.link(
                    parent.id,
                    child.id,
                    "contains",
                    EdgeType.COMPOSITION,
                    description="Directory structure relationship",
                )

        if len(members) < 2:
            continue

        index_file = next(
            (n for n in members if "index" in n.name or "main" in n.name), None
        )
        if index_file is not None:
            for other in members:
                if other.id != index_file.id:
                    edge_set.link(
                        index_file.id,
                        other.id,
                        "organizes",
                        EdgeType.COMPOSITION,
                        description="Index file organizes module",
                    )
        else:
            first, rest = members[0], members[1:]
            for other in rest[: thresholds.sibling_link_cap]:
                edge_set.add(
                    WorkflowEdge.create(
                        first.id,
                        other.id,
                        "relates",
                        EdgeType.COMPOSITION,
                        label="related",
                        description="Related files in same directory",
                    )
                )


def _config_governs(config: WorkflowNode, node: WorkflowNode) -> bool:
    if config.name == "package.json":
        return True
    if "tsconfig" in config.name and node.path.endswith((".ts", ".tsx")):
        return True
    return node.is_entry or node.is_high


def add_config_edges(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    configs = [n for n in nodes if n.type is NodeType.CONFIG]
    others = [n for n in nodes if n.type is not NodeType.CONFIG]

    for config in configs:
        governed = [n for n in others if _config_governs(config, n)]
        for target in governed[: thresholds.config_link_cap]:
            edge_set.link(
                config.id,
                target.id,
                "configures",
                EdgeType.CONFIGURATION,
                description=f"Configuration for {target.name}",
            )


def add_workflow_chains(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    """entry -> components/services, component -> utilities/services."""
    entries = [n for n in nodes if n.type is NodeType.ENTRY]
    components = [n for n in nodes if n.type is NodeType.COMPONENT]
    utilities = [n for n in nodes if n.type is NodeType.UTILITY]
    services = [n for n in nodes if n.type is NodeType.SERVICE]

    cap = thresholds.chain_component_cap
    for entry in entries:
        for i, component in enumerate(components[:cap]):
            edge_set.link(
                entry.id,
                component.id,
                "uses",
                EdgeType.DATA_FLOW,
                weight=cap - i,
                description="Entry point uses component",
            )
        for service in services[: thresholds.chain_entry_service_cap]:
            edge_set.link(
                entry.id,
                service.id,
                "calls",
                EdgeType.CALL,
                weight=2,
                description="Entry point calls service",
            )

    for component in components:
        for utility in utilities[: thresholds.chain_utility_cap]:
            edge_set.link(
                component.id,
                utility.id,
                "uses",
                EdgeType.DATA_FLOW,
                description="Component uses utility",
            )
        for service in services[: thresholds.chain_component_service_cap]:
            edge_set.link(
                component.id,
                service.id,
                "calls",
                EdgeType.CALL,
                description="Component calls service",
            )


def base_name(name: str) -> str:
    return _SOURCE_EXTENSION.sub("", name).lower()


def similar_names(a: str, b: str) -> bool:
    """Substring either way, or a shared 4-character prefix."""
    a, b = base_name(a), base_name(b)
    if a in b or b in a:
        return True
    return len(a) > 3 and len(b) > 3 and (b[:4] in a or a[:4] in b)


def add_similarity_edges(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    for node in nodes:
        related = [
            other
            for other in nodes
            if other.id != node.id
            and (
                (other.type is node.type and node.type is not NodeType.CONFIG)
                or similar_names(node.name, other.name)
            )
        ]
        for other in related[: thresholds.similar_link_cap]:
            edge_set.link(
                node.id,
                other.id,
                "similar",
                EdgeType.COMPOSITION,
                description="Similar functionality",
            )
