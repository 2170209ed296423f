"""Node classification decision tree.

Turns one file's metadata and symbol summary into a WorkflowNode:
semantic type (first matching rule wins), role, cyclomatic complexity
and importance. All functions here are pure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..exceptions import ClassificationError, ErrorCode
from ..scanning.models import FileEntry, FileSummary
from .models import Importance, NodeType, Role

if TYPE_CHECKING:
    from ..graph.models import WorkflowNode

ENTRY_STEMS = frozenset({"index", "main", "app"})

MANIFEST_EXTENSIONS = frozenset({".json", ".yaml", ".yml", ".toml"})
TYPE_DECLARATION_SUFFIXES = (".d.ts", ".pyi")

CONFIG_MARKERS = ("config", "setup")
TEST_MARKERS = ("test", "spec")
TYPE_MARKERS = ("types", "interfaces")
UTILITY_MARKERS = ("util", "helper", "common")
SERVICE_MARKERS = ("service", "api", "client")


def is_entry_name(
    name: str, extensions: Sequence[str] = DEFAULT_THRESHOLDS.entry_extensions
) -> bool:
    """True for canonical entry-point file names (``index.ts``, ``main.js``...)."""
    stem, dot, ext = name.lower().rpartition(".")
    if not dot:
        return False
    return stem in ENTRY_STEMS and f".{ext}" in extensions


def _contains_any(name: str, markers: tuple[str, ...]) -> bool:
    return any(marker in name for marker in markers)


def classify_type(entry: FileEntry, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> NodeType:
    """Semantic type of a file, from its name and extension alone."""
    name = entry.name.lower()
    extension = entry.extension.lower()

    if is_entry_name(name, thresholds.entry_extensions):
        return NodeType.ENTRY
    if _contains_any(name, CONFIG_MARKERS) or extension in MANIFEST_EXTENSIONS:
        return NodeType.CONFIG
    if _contains_any(name, TEST_MARKERS):
        return NodeType.TEST
    if name.endswith(TYPE_DECLARATION_SUFFIXES) or _contains_any(name, TYPE_MARKERS):
        return NodeType.TYPE
    if _contains_any(name, UTILITY_MARKERS):
        return NodeType.UTILITY
    if _contains_any(name, SERVICE_MARKERS):
        return NodeType.SERVICE
    return NodeType.COMPONENT


def infer_role(summary: FileSummary, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    margin = thresholds.role_balance_margin
    imports = summary.import_count
    exports = summary.export_count

    if imports > exports + margin:
        return Role.CONSUMER
    if exports > imports + margin:
        return Role.PROVIDER
    if summary.class_count > summary.function_count:
        return Role.OBJECT_ORIENTED
    if summary.function_count > summary.class_count:
        return Role.FUNCTIONAL
    return Role.MIXED


def file_complexity(summary: FileSummary) -> int:
    """Sum of function complexity plus the complexity of every class method."""
    total = sum(fn.complexity for fn in summary.functions)
    total += sum(method.complexity for cls in summary.classes for method in cls.methods)
    return total


def checked_imports(summary: FileSummary) -> list[tuple[str, list[str]]]:
    """(source, specifiers) for every import declaration.

    Raises:
        TypeError: If a source is not a string or specifiers is not a list of strings
    """
    checked = []
    for decl in summary.imports:
        if not isinstance(decl.source, str):
            raise TypeError(f"import source must be a string, got {type(decl.source).__name__}")
        specifiers = decl.specifiers
        if not isinstance(specifiers, (list, tuple)) or not all(
            isinstance(name, str) for name in specifiers
        ):
            raise TypeError(f"specifiers of import '{decl.source}' must be a list of strings")
        checked.append((decl.source, list(specifiers)))
    return checked


def assess_importance(
    entry: FileEntry,
    summary: FileSummary,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> Importance:
    exports = summary.export_count
    functions = summary.function_count

    if (
        is_entry_name(entry.name, thresholds.entry_extensions)
        or exports > thresholds.high_export_threshold
        or functions > thresholds.high_function_threshold
    ):
        return Importance.HIGH
    if (
        exports > thresholds.medium_export_threshold
        or functions > thresholds.medium_function_threshold
    ):
        return Importance.MEDIUM
    return Importance.LOW


def build_node(
    entry: FileEntry,
    summary: FileSummary,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> WorkflowNode:
    """Classify one file into a node positioned at the origin.

    Raises:
        ClassificationError: If the entry or summary is malformed
    """
    from ..graph.models import Position, WorkflowNode

    if not entry.path or not entry.name:
        raise ClassificationError(
            message="File entry has no path or name",
            code=ErrorCode.WG100,
            context={"path": entry.path, "name": entry.name},
            recovery_hint="File skipped",
        )

    try:
        node_type = classify_type(entry, thresholds)
        role = infer_role(summary, thresholds)
        complexity = file_complexity(summary)
        importance = assess_importance(entry, summary, thresholds)
        dependencies = [source for source, _ in checked_imports(summary)]
        exports = [decl.name for decl in summary.exports]
    except (AttributeError, TypeError, ValueError) as e:
        raise ClassificationError(
            message=f"Malformed summary for {entry.path}: {e}",
            code=ErrorCode.WG100,
            context={"path": entry.path},
            recovery_hint="File skipped",
        ) from e

    return WorkflowNode(
        id=entry.path,
        name=entry.name,
        path=entry.path,
        extension=entry.extension,
        type=node_type,
        role=role,
        importance=importance,
        complexity=max(0, complexity),
        dependencies=dependencies,
        function_count=summary.function_count,
        class_count=summary.class_count,
        exports=exports,
        position=Position(0.0, 0.0),
    )
