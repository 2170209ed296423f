"""File-tree flattening and large-repository file selection.

The tree is stored as an arena: every node lives in a flat list and refers to
its parent and children by index. Construction and traversal use an explicit
stack, so pathological trees with thousands of nested directories cannot
exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Iterable, Mapping, Optional

from ..logging_config import get_logger
from .models import FileEntry, normalize_path

logger = get_logger(__name__)

ANALYZABLE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")

_PRIORITY_MANIFESTS = frozenset(
    {"package.json", "tsconfig.json", "vite.config.ts", "webpack.config.js"}
)
_PRIORITY_ENTRY_NAMES = frozenset(
    {"index.ts", "index.tsx", "main.ts", "main.tsx", "app.ts", "app.tsx"}
)


@dataclass
class TreeNode:
    """One arena slot: a file or a directory."""

    path: str
    name: str
    kind: str  # "file" | "directory"
    parent: int = -1
    children: list[int] = field(default_factory=list)
    size: Optional[int] = None

    def to_entry(self) -> FileEntry:
        return FileEntry(
            path=self.path,
            name=self.name,
            extension=PurePosixPath(self.name).suffix,
            size=self.size,
        )


class FileTree:
    """Index-addressed file tree."""

    def __init__(self) -> None:
        self.nodes: list[TreeNode] = []
        self.roots: list[int] = []
        self._by_path: dict[str, int] = {}

    @classmethod
    def from_mapping(cls, roots: Iterable[Mapping[str, Any]]) -> FileTree:
        """Build from nested ``{"path", "name", "type", "children"}`` mappings."""
        tree = cls()
        # (mapping, parent index); reversed so pre-order matches input order
        stack: list[tuple[Mapping[str, Any], int]] = [(m, -1) for m in reversed(list(roots))]
        while stack:
            raw, parent = stack.pop()
            index = tree._append(raw, parent)
            children = raw.get("children") or []
            stack.extend((child, index) for child in reversed(children))
        return tree

    def _append(self, raw: Mapping[str, Any], parent: int) -> int:
        path = normalize_path(str(raw.get("path", "")))
        name = str(raw.get("name") or path.rsplit("/", 1)[-1])
        kind = "directory" if raw.get("type") == "directory" else "file"
        index = len(self.nodes)
        self.nodes.append(TreeNode(path=path, name=name, kind=kind, parent=parent, size=raw.get("size")))
        if parent < 0:
            self.roots.append(index)
        else:
            self.nodes[parent].children.append(index)
        self._by_path.setdefault(path, index)
        return index

    def walk(self) -> Iterable[int]:
        """Yield node indices in pre-order."""
        stack = list(reversed(self.roots))
        while stack:
            index = stack.pop()
            yield index
            stack.extend(reversed(self.nodes[index].children))

    def files(self) -> list[FileEntry]:
        """All files as FileEntry, in pre-order."""
        return [
            self.nodes[index].to_entry()
            for index in self.walk()
            if self.nodes[index].kind == "file"
        ]

    def count_files(self) -> int:
        return sum(1 for node in self.nodes if node.kind == "file")

    def find(self, path: str) -> Optional[TreeNode]:
        index = self._by_path.get(normalize_path(path))
        return None if index is None else self.nodes[index]


def is_analyzable(name: str) -> bool:
    return name.endswith(ANALYZABLE_EXTENSIONS)


def score_file(entry: FileEntry) -> int:
    """Importance score used to pick files in large repositories.

    Bonuses:
        +100 project manifest or primary build config
        +90  canonical entry file name (index/main/app .ts/.tsx)
        +80  readme
        +70  under /src/ and not in a test directory
        +65  /pages/ or /routes/
        +60  /components/, /api/ or /services/
        +55  /lib/ or /utils/
        +20  analysable source extension

    Penalties:
        -100 /node_modules/
        -50  /dist/ or /build/
        -40  minified bundle (.min.)
        -30  /test/ or /__tests__/
        -20  .spec. or .test. file

    The result is floored at 0.
    """
    path = "/" + entry.path.lower()
    name = entry.name.lower()
    score = 0

    if name in _PRIORITY_MANIFESTS:
        score += 100
    if name in _PRIORITY_ENTRY_NAMES:
        score += 90
    if "readme" in name:
        score += 80

    in_tests = "/test/" in path or "/__tests__/" in path
    if "/src/" in path and not in_tests:
        score += 70
    if "/components/" in path:
        score += 60
    if "/pages/" in path or "/routes/" in path:
        score += 65
    if "/lib/" in path or "/utils/" in path:
        score += 55
    if "/api/" in path or "/services/" in path:
        score += 60

    if "/node_modules/" in path:
        score -= 100
    if "/dist/" in path or "/build/" in path:
        score -= 50
    if in_tests:
        score -= 30
    if ".min." in name:
        score -= 40
    if ".spec." in name or ".test." in name:
        score -= 20

    if is_analyzable(name):
        score += 20

    return max(0, score)


def select_important_files(entries: list[FileEntry], max_files: int) -> list[FileEntry]:
    """Keep the ``max_files`` highest-scoring files, in their original order.

    Zero-score files are never kept. Ties are broken by input position, so
    the selection is deterministic.
    """
    scored = [(score_file(entry), position) for position, entry in enumerate(entries)]
    scored = [s for s in scored if s[0] > 0]
    ranked = sorted(scored, key=lambda s: (-s[0], s[1]))
    keep = sorted(position for _, position in ranked[:max_files])
    logger.info(f"Filtered {len(entries)} files down to {len(keep)} most important files")
    return [entries[position] for position in keep]
