"""Symbol summary models supplied by the external extractor.

FileSummary is the per-file input contract of the engine:
    - Per-function: params, line range, decision-point counts
    - Per-class: methods, properties, supertype and interfaces
    - Per-import: raw module specifier and imported symbols
    - Exports and top-level variables

FileEntry carries the file-tree metadata (path, name, extension) that the
classifier matches against. Both are read-only once produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath


class DecisionPoint(Enum):
    """Branching constructs counted by cyclomatic complexity."""

    IF = "if"
    WHILE = "while"
    FOR = "for"
    FOR_IN = "for_in"
    FOR_OF = "for_of"
    SWITCH = "switch"
    CATCH = "catch"
    TERNARY = "ternary"
    AND = "and"
    OR = "or"


DECISION_POINT_KINDS = frozenset(dp.value for dp in DecisionPoint)


def normalize_path(path: str) -> str:
    """Canonical node path: forward slashes, no leading "/" or "./"."""
    path = path.replace("\\", "/").strip()
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


@dataclass
class FunctionSummary:
    """A function or method.

    Attributes:
        name: Function name ("anonymous" when the extractor has none)
        params: Parameter names
        return_type: Declared return type, if any
        start_line: Starting line number (1-indexed)
        end_line: Ending line number (1-indexed)
        decision_points: Count per DecisionPoint value found in the body
        reported_complexity: Complexity precomputed by the extractor, if any
    """

    name: str
    params: list[str] = field(default_factory=list)
    return_type: str | None = None
    start_line: int = 0
    end_line: int = 0
    decision_points: dict[str, int] = field(default_factory=dict)
    reported_complexity: int | None = None

    @property
    def complexity(self) -> int:
        """Cyclomatic complexity: 1 + one per branch and short-circuit operator.

        Unrecognised construct names are ignored.
        """
        if self.reported_complexity is not None:
            return max(0, self.reported_complexity)
        return 1 + sum(
            max(0, count)
            for kind, count in self.decision_points.items()
            if kind in DECISION_POINT_KINDS
        )


@dataclass
class ClassSummary:
    """A class definition."""

    name: str
    methods: list[FunctionSummary] = field(default_factory=list)
    properties: list[str] = field(default_factory=list)
    extends: str | None = None
    implements: list[str] = field(default_factory=list)
    start_line: int = 0
    end_line: int = 0


@dataclass
class ImportDecl:
    """An import statement.

    Attributes:
        source: Raw module specifier (e.g. "./App", "@/lib/api", "react")
        specifiers: Imported symbol names
        is_default: True if a default import is present
    """

    source: str
    specifiers: list[str] = field(default_factory=list)
    is_default: bool = False


@dataclass
class ExportDecl:
    name: str
    kind: str = "variable"


@dataclass
class VariableDecl:
    name: str
    type: str | None = None
    is_const: bool = False


@dataclass
class FileSummary:
    """Complete symbol summary for one source file."""

    path: str
    functions: list[FunctionSummary] = field(default_factory=list)
    classes: list[ClassSummary] = field(default_factory=list)
    imports: list[ImportDecl] = field(default_factory=list)
    exports: list[ExportDecl] = field(default_factory=list)
    variables: list[VariableDecl] = field(default_factory=list)

    @property
    def function_count(self) -> int:
        return len(self.functions)

    @property
    def class_count(self) -> int:
        return len(self.classes)

    @property
    def import_count(self) -> int:
        return len(self.imports)

    @property
    def export_count(self) -> int:
        return len(self.exports)


@dataclass(frozen=True)
class FileEntry:
    """File-tree metadata for one file.

    Attributes:
        path: Normalized repository-relative path (the node id)
        name: Final path segment
        extension: Suffix of the final segment including the dot ("" if none)
        size: Size in bytes when known
    """

    path: str
    name: str
    extension: str
    size: int | None = None

    @classmethod
    def from_path(cls, path: str, size: int | None = None) -> FileEntry:
        path = normalize_path(path)
        name = PurePosixPath(path).name
        return cls(path=path, name=name, extension=PurePosixPath(name).suffix, size=size)

    @property
    def directory(self) -> str:
        """Parent directory path ("" for top-level files)."""
        if "/" not in self.path:
            return ""
        return self.path.rsplit("/", 1)[0]
