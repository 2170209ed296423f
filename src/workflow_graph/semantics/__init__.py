"""Semantic classification: type, role, complexity and importance of files."""

from .classifier import (
    assess_importance,
    build_node,
    checked_imports,
    classify_type,
    file_complexity,
    infer_role,
    is_entry_name,
)
from .models import Importance, NodeType, Role

__all__ = [
    "Importance",
    "NodeType",
    "Role",
    "assess_importance",
    "build_node",
    "checked_imports",
    "classify_type",
    "file_complexity",
    "infer_role",
    "is_entry_name",
]
