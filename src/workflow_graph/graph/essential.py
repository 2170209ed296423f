"""Essential (pruned) edge builder: the default, low-clutter view.

Steps, in order:
    1. Main spine: entry -> key components -> primary service
    2. Critical imports from high-importance and entry files
    3. Manifest / build-config links to the primary entry point
    4. Minimal connectivity for untouched important nodes
    5. Fallback links when nothing else produced an edge
    6. Connectivity repair
"""

from __future__ import annotations

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

BUILD_CONFIG_MARKERS = ("tsconfig", "vite.config", "webpack")


def _check(deadline: Optional[Deadline], stage: str) -> None:
    if deadline is not None:
        deadline.check(stage)


def build_essential_edges(
    nodes: Sequence[WorkflowNode],
    import_records: Sequence[ImportRecord],
    resolver: ImportResolver,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    deadline: Optional[Deadline] = None,
) -> list[WorkflowEdge]:
    """Build the pruned edge set for ``nodes``."""
    edge_set = EdgeSet(node.id for node in nodes)

    add_main_spine(nodes, edge_set, thresholds)
    logger.debug(f"After main spine: {len(edge_set)} edges")
    _check(deadline, "main spine")

    add_critical_imports(nodes, import_records, resolver, edge_set, thresholds)
    logger.debug(f"After critical imports: {len(edge_set)} edges")
    _check(deadline, "critical imports")

    add_config_links(nodes, edge_set)
    _check(deadline, "config links")

    ensure_minimal_connectivity(nodes, edge_set, thresholds)
    _check(deadline, "minimal connectivity")

    if len(edge_set) == 0:
        logger.info("No essential edges found, creating fallback connections")
        add_fallback_links(nodes, edge_set, thresholds)

    bridge_components(nodes, edge_set)

    logger.info(f"Built essential workflow with {len(edge_set)} edges")
    return edge_set.edges


def add_main_spine(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    entries = [n for n in nodes if n.type is NodeType.ENTRY]
    components = [n for n in nodes if n.type is NodeType.COMPONENT and n.is_high][
        : thresholds.spine_component_cap
    ]
    services = [n for n in nodes if n.type is NodeType.SERVICE and n.is_high][
        : thresholds.spine_service_cap
    ]

    if components:
        for i, entry in enumerate(entries):
            target = components[i % len(components)]
            edge_set.add(
                WorkflowEdge.create(
                    entry.id,
                    target.id,
                    "spine",
                    EdgeType.DATA_FLOW,
                    weight=3,
                    label="main flow",
                    description="Core application flow",
                )
            )

    if services:
        primary = services[0]
        for component in components:
            edge_set.add(
                WorkflowEdge.create(
                    component.id,
                    primary.id,
                    "uses",
                    EdgeType.CALL,
                    weight=2,
                    description="Component uses service",
                )
            )

    if not entries or not components:
        important = [n for n in nodes if n.is_high][: thresholds.spine_fallback_chain]
        for source, target in zip(important, important[1:]):
            edge_set.add(
                WorkflowEdge.create(
                    source.id,
                    target.id,
                    "connects",
                    EdgeType.COMPOSITION,
                    weight=2,
                    description="Important file connection",
                )
            )


def _key_import_description(specifiers: Sequence[str]) -> str:
    shown = ", ".join(specifiers[:2])
    return f"Key import: {shown}{'...' if len(specifiers) > 2 else ''}"


def add_critical_imports(
    nodes: Sequence[WorkflowNode],
    import_records: Sequence[ImportRecord],
    resolver: ImportResolver,
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    by_id = {node.id: node for node in nodes}
    critical = [
        record
        for record in import_records
        if record.importer in by_id
        and (by_id[record.importer].is_high or by_id[record.importer].is_entry)
    ]

    for record in critical[: thresholds.critical_import_cap]:
        target = resolver.resolve(record.source, record.importer)
        if target is None:
            continue
        if target == record.importer:
            logger.debug(f"Skipping self-import in {record.importer}")
            continue
        added = edge_set.add(
            WorkflowEdge.create(
                record.importer,
                target,
                "imports",
                EdgeType.IMPORT,
                weight=min(len(record.specifiers), 3),
                description=_key_import_description(record.specifiers),
            )
        )
        if added:
            record_dependent(by_id, record.importer, target)


def add_config_links(nodes: Sequence[WorkflowNode], edge_set: EdgeSet) -> None:
    entries = [n for n in nodes if n.type is NodeType.ENTRY]
    if not entries:
        return
    primary = entries[0]

    manifest = next((n for n in nodes if n.name == "package.json"), None)
    if manifest is not None:
        edge_set.link(
            manifest.id,
            primary.id,
            "configures",
            EdgeType.CONFIGURATION,
            description="Project configuration",
        )

    build_config = next(
        (n for n in nodes if any(marker in n.name for marker in BUILD_CONFIG_MARKERS)), None
    )
    if build_config is not None:
        edge_set.link(
            build_config.id,
            primary.id,
            "builds",
            EdgeType.CONFIGURATION,
            description="Build configuration",
        )


def ensure_minimal_connectivity(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    """Join untouched entry / high-importance nodes to a connected hub."""
    touched = edge_set.touched()
    if not touched:
        return

    isolated = [n for n in nodes if n.id not in touched and (n.is_high or n.is_entry)]
    if not isolated:
        return

    connected = [n for n in nodes if n.id in touched]
    hub = next((n for n in connected if n.is_entry), connected[0])

    for node in isolated[: thresholds.isolated_link_cap]:
        edge_set.link(
            hub.id, node.id, "related", EdgeType.COMPOSITION, description="Project component"
        )


def add_fallback_links(
    nodes: Sequence[WorkflowNode],
    edge_set: EdgeSet,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> None:
    """Fan out from the first node and chain the first few nodes."""
    if len(nodes) < 2:
        return

    first, rest = nodes[0], nodes[1:]
    for target in rest[: thresholds.fallback_fanout]:
        edge_set.link(
            first.id,
            target.id,
            "related",
            EdgeType.COMPOSITION,
            description="Basic file relationship",
        )

    if len(nodes) >= 3:
        chain = list(nodes[: thresholds.fallback_chain_length])
        for source, target in zip(chain, chain[1:]):
            edge_set.add(
                WorkflowEdge.create(
                    source.id,
                    target.id,
                    "flows-to",
                    EdgeType.DATA_FLOW,
                    label="flows to",
                    description="Sequential workflow",
                )
            )
