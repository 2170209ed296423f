"""Import specifier resolution against the analysed node set.

Five strategies are tried in order and the first match wins:

    DIRECT            specifier is itself a node id
    RELATIVE          ./ or ../ joined onto the importer's directory, tried
                      as written, then with extension / index-file suffixes
    FILENAME_VARIANT  last segment with extension / index-file variants
    PARTIAL           node path contains the specifier, or the specifier
                      contains a node's stem
    SCOPED_ALIAS      alias prefix (e.g. "@/") rewritten to its source root

Every strategy is a pure function of (specifier, importer, index) and is
registered in STRATEGIES so it can be exercised on its own. Nodes are
always scanned in insertion order, so ties go to the first inserted node.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Mapping, Optional, Sequence

from ..exceptions import ErrorCode
from ..logging_config import get_logger
from .models import WorkflowNode

logger = get_logger(__name__)

FILENAME_SUFFIXES = ("", ".ts", ".tsx", ".js", ".jsx")
INDEX_SUFFIXES = ("/index.ts", "/index.tsx", "/index.js", "/index.jsx")

DEFAULT_ALIASES = {"@/": "src/"}


class ResolutionStrategy(Enum):
    DIRECT = "direct"
    RELATIVE = "relative"
    FILENAME_VARIANT = "filename_variant"
    PARTIAL = "partial"
    SCOPED_ALIAS = "scoped_alias"


class NodeIndex:
    """Insertion-ordered view of the node set used by the strategies."""

    def __init__(self, nodes: Sequence[WorkflowNode], aliases: Mapping[str, str]) -> None:
        self.nodes = list(nodes)
        self.by_id: dict[str, WorkflowNode] = {}
        for node in self.nodes:
            self.by_id.setdefault(node.id, node)
        self.aliases = dict(aliases)


def join_relative(specifier: str, importer_id: str) -> str:
    """Join a ./ or ../ specifier onto the importer's directory.

    ``..`` above the repository root is dropped rather than kept.
    """
    parts = [p for p in importer_id.split("/")[:-1] if p]
    for part in specifier.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts:
                parts.pop()
        else:
            parts.append(part)
    return "/".join(parts)


def filename_variants(specifier: str) -> list[str]:
    last = specifier.rstrip("/").split("/")[-1]
    if not last:
        return []
    return [last + suffix for suffix in FILENAME_SUFFIXES] + [
        last + suffix for suffix in INDEX_SUFFIXES
    ]


# ── Strategies ─────────────────────────────────────────────────────


def _direct(specifier: str, importer_id: str, index: NodeIndex) -> Optional[WorkflowNode]:
    return index.by_id.get(specifier)


def _relative(specifier: str, importer_id: str, index: NodeIndex) -> Optional[WorkflowNode]:
    if not specifier.startswith(("./", "../")):
        return None
    joined = join_relative(specifier, importer_id)
    for suffix in FILENAME_SUFFIXES + INDEX_SUFFIXES:
        node = index.by_id.get(joined + suffix)
        if node is not None:
            return node
    return None


def _filename_variant(specifier: str, importer_id: str, index: NodeIndex) -> Optional[WorkflowNode]:
    for variant in filename_variants(specifier):
        for node in index.nodes:
            if node.name == variant or node.path.endswith(f"/{variant}"):
                return node
    return None


def _partial(specifier: str, importer_id: str, index: NodeIndex) -> Optional[WorkflowNode]:
    if not specifier:
        return None
    for node in index.nodes:
        stem = node.stem
        if specifier in node.path or (stem and stem in specifier):
            return node
    return None


def _scoped_alias(specifier: str, importer_id: str, index: NodeIndex) -> Optional[WorkflowNode]:
    for prefix, root in index.aliases.items():
        if not specifier.startswith(prefix):
            continue
        rewritten = root + specifier[len(prefix):]
        for node in index.nodes:
            if rewritten in node.path:
                return node
    return None


StrategyFn = Callable[[str, str, NodeIndex], Optional[WorkflowNode]]

STRATEGIES: list[tuple[ResolutionStrategy, StrategyFn]] = [
    (ResolutionStrategy.DIRECT, _direct),
    (ResolutionStrategy.RELATIVE, _relative),
    (ResolutionStrategy.FILENAME_VARIANT, _filename_variant),
    (ResolutionStrategy.PARTIAL, _partial),
    (ResolutionStrategy.SCOPED_ALIAS, _scoped_alias),
]


class ImportResolver:
    """Map raw import specifiers to node ids.

    Example:
        >>> resolver = ImportResolver(nodes)
        >>> resolver.resolve("./App", "src/index.ts")
        'src/App.tsx'
    """

    def __init__(
        self,
        nodes: Sequence[WorkflowNode],
        alias_prefixes: Optional[Mapping[str, str]] = None,
    ) -> None:
        aliases = DEFAULT_ALIASES if alias_prefixes is None else alias_prefixes
        self.index = NodeIndex(nodes, aliases)

    def resolve_with_strategy(
        self, specifier: str, importer_id: str
    ) -> tuple[Optional[str], Optional[ResolutionStrategy]]:
        """Resolve and report which strategy matched."""
        specifier = specifier.strip()
        if specifier:
            for strategy, fn in STRATEGIES:
                node = fn(specifier, importer_id, self.index)
                if node is not None:
                    logger.debug(
                        f"Resolved '{specifier}' from {importer_id} -> {node.id} ({strategy.value})"
                    )
                    return node.id, strategy

        logger.debug(
            f"[{ErrorCode.WG200.value}] Unresolved import '{specifier}' from {importer_id}"
        )
        return None, None

    def resolve(self, specifier: str, importer_id: str) -> Optional[str]:
        target, _ = self.resolve_with_strategy(specifier, importer_id)
        return target


def run_strategy(
    strategy: ResolutionStrategy,
    specifier: str,
    importer_id: str,
    nodes: Sequence[WorkflowNode],
    alias_prefixes: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """Run a single strategy in isolation; returns the matched node id."""
    aliases = DEFAULT_ALIASES if alias_prefixes is None else alias_prefixes
    index = NodeIndex(nodes, aliases)
    for tag, fn in STRATEGIES:
        if tag is strategy:
            node = fn(specifier, importer_id, index)
            return None if node is None else node.id
    raise ValueError(f"Unknown strategy: {strategy}")
