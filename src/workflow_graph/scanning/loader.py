"""Load symbol summaries from the extractor's JSON document.

Expected shape::

    {
      "files": [
        {
          "path": "src/index.ts",
          "functions": [{"name": "main", "decision_points": {"if": 2}}],
          "classes": [{"name": "App", "methods": [...], "extends": "Base"}],
          "imports": [{"source": "./App", "specifiers": ["App"]}],
          "exports": [{"name": "main", "kind": "function"}],
          "variables": [{"name": "config", "is_const": true}]
        }
      ],
      "tree": [{"path": "src", "type": "directory", "children": [...]}]
    }

``tree`` is optional. camelCase keys produced by JavaScript extractors
(``returnType``, ``startLine``, ``isDefault`` ...) are accepted too.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from ..exceptions import ErrorCode, SummaryDocumentError
from ..logging_config import get_logger
from .models import (
    ClassSummary,
    ExportDecl,
    FileSummary,
    FunctionSummary,
    ImportDecl,
    VariableDecl,
)
from .tree import FileTree

logger = get_logger(__name__)


def _get(raw: Mapping[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in raw:
        return raw[snake]
    return raw.get(camel, default)


def parse_function(raw: Mapping[str, Any]) -> FunctionSummary:
    return FunctionSummary(
        name=raw.get("name") or "anonymous",
        params=list(_get(raw, "params", "parameters", [])),
        return_type=_get(raw, "return_type", "returnType"),
        start_line=int(_get(raw, "start_line", "startLine", 0)),
        end_line=int(_get(raw, "end_line", "endLine", 0)),
        decision_points=dict(_get(raw, "decision_points", "decisionPoints", {}) or {}),
        reported_complexity=raw.get("complexity"),
    )


def parse_class(raw: Mapping[str, Any]) -> ClassSummary:
    return ClassSummary(
        name=raw.get("name") or "anonymous",
        methods=[parse_function(m) for m in raw.get("methods", [])],
        properties=list(raw.get("properties", [])),
        extends=raw.get("extends"),
        implements=list(raw.get("implements", [])),
        start_line=int(_get(raw, "start_line", "startLine", 0)),
        end_line=int(_get(raw, "end_line", "endLine", 0)),
    )


def parse_summary(raw: Mapping[str, Any]) -> FileSummary:
    """Convert one JSON file record. Missing lists default to empty."""
    return FileSummary(
        path=raw["path"],
        functions=[parse_function(f) for f in raw.get("functions", [])],
        classes=[parse_class(c) for c in raw.get("classes", [])],
        imports=[
            ImportDecl(
                source=imp["source"],
                specifiers=list(imp.get("specifiers", [])),
                is_default=bool(_get(imp, "is_default", "isDefault", False)),
            )
            for imp in raw.get("imports", [])
        ],
        exports=[
            ExportDecl(name=exp["name"], kind=exp.get("kind") or exp.get("type") or "variable")
            for exp in raw.get("exports", [])
        ],
        variables=[
            VariableDecl(
                name=var["name"],
                type=var.get("type"),
                is_const=bool(_get(var, "is_const", "isConst", False)),
            )
            for var in raw.get("variables", [])
        ],
    )


def load_document(path: Path) -> tuple[list[FileSummary], Optional[FileTree]]:
    """Read a summaries document from disk.

    Raises:
        SummaryDocumentError: If the file is unreadable or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SummaryDocumentError(str(e), path=str(path)) from e
    return parse_document(data)


def parse_document(data: Mapping[str, Any]) -> tuple[list[FileSummary], Optional[FileTree]]:
    """Parse a decoded summaries document.

    A malformed file record is logged and skipped; the rest of the document
    is still used.

    Raises:
        SummaryDocumentError: If the document itself or its tree has the wrong shape
    """
    if not isinstance(data, Mapping):
        raise SummaryDocumentError("top-level value must be an object")
    records = data.get("files", [])
    if not isinstance(records, list):
        raise SummaryDocumentError("'files' must be a list")

    summaries = []
    for position, raw in enumerate(records):
        try:
            summaries.append(parse_summary(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            where = raw.get("path") if isinstance(raw, Mapping) else None
            logger.warning(
                f"[{ErrorCode.WG100.value}] Skipping file record {position}"
                f" ({where or 'no path'}): {type(e).__name__}: {e}"
            )

    try:
        tree_data = data.get("tree")
        tree = FileTree.from_mapping(tree_data) if tree_data else None
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SummaryDocumentError(f"{type(e).__name__}: {e}") from e
    return summaries, tree
