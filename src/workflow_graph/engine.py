"""WorkflowEngine: pipeline orchestration.

Stages, in order:
    1. Resolve file metadata for every summary
    2. Large-repository filter
    3. Classification (optionally parallel)
    4. Edge construction under a deadline, simplified graph on failure
    5. Analytics
    6. Layout

No engine error escapes ``run``. A caller-supplied CancellationToken is
checked between stages; on cancellation the stages completed so far are
returned as a valid partial result.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Sequence

from .analysis import (
    compute_metrics,
    identify_clusters,
    identify_critical_paths,
    identify_entry_points,
)
from .config import EngineConfig
from .deadline import CancellationToken, Deadline
from .exceptions import AnalysisCancelled, ClassificationError, DeadlineExceeded, ErrorCode
from .graph import (
    ImportRecord,
    ImportResolver,
    RepositoryWorkflow,
    WorkflowEdge,
    WorkflowNode,
    build_detailed_edges,
    build_essential_edges,
    build_simplified_edges,
    validate_edges,
)
from .layout import Canvas, LayoutEngine
from .logging_config import get_logger
from .scanning import FileEntry, FileSummary, FileTree, select_important_files
from .semantics import build_node, checked_imports

logger = get_logger(__name__)


class WorkflowEngine:
    """Turns per-file symbol summaries into a RepositoryWorkflow.

    Example:
        >>> engine = WorkflowEngine(EngineConfig(mode="detailed"))
        >>> workflow = engine.run(summaries)
        >>> workflow.metrics.total_files
        3
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

    def run(
        self,
        summaries: Sequence[FileSummary],
        tree: Optional[FileTree] = None,
        token: Optional[CancellationToken] = None,
    ) -> RepositoryWorkflow:
        result = RepositoryWorkflow()

        try:
            self._checkpoint(token, "file resolution")
            pairs = self._resolve_files(summaries, tree)
            pairs = self._filter_large_repository(pairs)

            self._checkpoint(token, "classification")
            nodes, summaries_by_id = self._classify(pairs)
            result.nodes = nodes
            result.entry_points = identify_entry_points(nodes)
            result.metrics = compute_metrics(nodes, [])
            logger.info(f"Classified {len(nodes)} files")

            self._checkpoint(token, "edge construction")
            records = self._collect_imports(nodes, summaries_by_id)
            result.edges = self._build_edges(nodes, records)
            result.metrics = compute_metrics(nodes, result.edges)

            self._checkpoint(token, "analytics")
            result.clusters = identify_clusters(nodes)
            result.critical_paths = identify_critical_paths(
                nodes,
                result.edges,
                cap=self.config.thresholds.critical_path_cap,
                weight=self.config.thresholds.critical_path_importance,
            )

            self._checkpoint(token, "layout")
            LayoutEngine(Canvas.from_config(self.config)).apply(nodes, result.edges)
        except AnalysisCancelled as e:
            logger.warning(f"{e}; returning partial result")

        return result

    @staticmethod
    def _checkpoint(token: Optional[CancellationToken], stage: str) -> None:
        if token is not None:
            token.check(stage)

    # ── Stage 1-2: inputs ──────────────────────────────────────────

    def _resolve_files(
        self, summaries: Sequence[FileSummary], tree: Optional[FileTree]
    ) -> list[tuple[FileEntry, FileSummary]]:
        """Pair each summary with its file metadata; unmatched summaries are skipped."""
        if tree is None:
            return [(FileEntry.from_path(s.path), s) for s in summaries]

        logger.debug(f"File tree lists {tree.count_files()} files for {len(summaries)} summaries")
        pairs = []
        for summary in summaries:
            tree_node = tree.find(summary.path)
            if tree_node is None or tree_node.kind != "file":
                logger.warning(
                    f"[{ErrorCode.WG101.value}] No file metadata for {summary.path}; skipped"
                )
                continue
            pairs.append((tree_node.to_entry(), summary))
        return pairs

    def _filter_large_repository(
        self, pairs: list[tuple[FileEntry, FileSummary]]
    ) -> list[tuple[FileEntry, FileSummary]]:
        limit = self.config.max_files_for_analysis
        if len(pairs) <= limit:
            return pairs

        logger.info(f"Large repository ({len(pairs)} files), selecting {limit} most important")
        keep = {id(entry) for entry in select_important_files([e for e, _ in pairs], limit)}
        return [(entry, summary) for entry, summary in pairs if id(entry) in keep]

    # ── Stage 3: classification ────────────────────────────────────

    def _classify_one(self, entry: FileEntry, summary: FileSummary) -> Optional[WorkflowNode]:
        try:
            return build_node(entry, summary, self.config.thresholds)
        except ClassificationError as e:
            logger.warning(f"{e}; skipped")
            return None

    def _classify(
        self, pairs: list[tuple[FileEntry, FileSummary]]
    ) -> tuple[list[WorkflowNode], dict[str, FileSummary]]:
        unique: list[tuple[FileEntry, FileSummary]] = []
        seen: set[str] = set()
        for entry, summary in pairs:
            if entry.path in seen:
                logger.warning(
                    f"[{ErrorCode.WG102.value}] Duplicate file {entry.path}; keeping the first"
                )
                continue
            seen.add(entry.path)
            unique.append((entry, summary))

        workers = self.config.workers or 1
        results: list[Optional[WorkflowNode]] = [None] * len(unique)

        if workers <= 1 or len(unique) < 2:
            for index, (entry, summary) in enumerate(unique):
                results[index] = self._classify_one(entry, summary)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(self._classify_one, entry, summary): index
                    for index, (entry, summary) in enumerate(unique)
                }
                for future in as_completed(futures):
                    results[futures[future]] = future.result()

        nodes: list[WorkflowNode] = []
        summaries_by_id: dict[str, FileSummary] = {}
        for (_, summary), node in zip(unique, results):
            if node is not None:
                nodes.append(node)
                summaries_by_id[node.id] = summary
        return nodes, summaries_by_id

    # ── Stage 4: edges ─────────────────────────────────────────────

    @staticmethod
    def _collect_imports(
        nodes: Sequence[WorkflowNode], summaries_by_id: dict[str, FileSummary]
    ) -> list[ImportRecord]:
        # every summary here already passed classification
        return [
            ImportRecord(importer=node.id, source=source, specifiers=specifiers)
            for node in nodes
            for source, specifiers in checked_imports(summaries_by_id[node.id])
        ]

    def _build_edges(
        self, nodes: list[WorkflowNode], records: list[ImportRecord]
    ) -> list[WorkflowEdge]:
        builder = (
            build_detailed_edges if self.config.mode == "detailed" else build_essential_edges
        )
        resolver = ImportResolver(nodes, self.config.alias_prefixes)
        deadline = Deadline.start(self.config.edge_timeout_seconds)

        try:
            edges = builder(nodes, records, resolver, self.config.thresholds, deadline)
            logger.debug(f"Edges built with {deadline.remaining():.2f}s of budget left")
            return validate_edges(edges, (node.id for node in nodes))
        except DeadlineExceeded as e:
            logger.warning(f"{e}; using simplified graph")
        except Exception as e:
            logger.warning(
                f"[{ErrorCode.WG302.value}] Edge construction failed: {e}; using simplified graph"
            )

        for node in nodes:
            node.dependents.clear()
        return build_simplified_edges(nodes)
