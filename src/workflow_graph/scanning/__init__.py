"""Input side of the engine: symbol summaries and file-tree metadata."""

from .models import (
    ClassSummary,
    DecisionPoint,
    ExportDecl,
    FileEntry,
    FileSummary,
    FunctionSummary,
    ImportDecl,
    VariableDecl,
    normalize_path,
)
from .tree import FileTree, score_file, select_important_files

__all__ = [
    "ClassSummary",
    "DecisionPoint",
    "ExportDecl",
    "FileEntry",
    "FileSummary",
    "FileTree",
    "FunctionSummary",
    "ImportDecl",
    "VariableDecl",
    "normalize_path",
    "score_file",
    "select_important_files",
]
