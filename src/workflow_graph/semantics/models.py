"""Semantic classification enums for workflow nodes."""

from __future__ import annotations

from enum import Enum


class NodeType(Enum):
    """Semantic file type.

    Priority order (first match wins, see classifier.classify_type):
    1. ENTRY - canonical entry-point file name (index/main/app)
    2. CONFIG - config/setup names or manifest formats
    3. TEST - test/spec names
    4. TYPE - type-declaration files
    5. UTILITY - util/helper/common names
    6. SERVICE - service/api/client names
    7. COMPONENT - everything else
    """

    ENTRY = "entry"
    COMPONENT = "component"
    SERVICE = "service"
    UTILITY = "utility"
    CONFIG = "config"
    TEST = "test"
    TYPE = "type"

    @property
    def priority(self) -> int:
        """Row ordering used by the layout engine (entry first)."""
        return _TYPE_PRIORITY[self]


_TYPE_PRIORITY = {
    NodeType.ENTRY: 0,
    NodeType.COMPONENT: 1,
    NodeType.SERVICE: 2,
    NodeType.UTILITY: 3,
    NodeType.CONFIG: 4,
    NodeType.TEST: 5,
    NodeType.TYPE: 6,
}


class Importance(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """0 for HIGH, 2 for LOW; sorts most important first."""
        return _IMPORTANCE_RANK[self]


_IMPORTANCE_RANK = {Importance.HIGH: 0, Importance.MEDIUM: 1, Importance.LOW: 2}


class Role:
    """Free-text role labels derived from a file's import/export balance."""

    CONSUMER = "Consumer"
    PROVIDER = "Provider"
    OBJECT_ORIENTED = "Object-Oriented Module"
    FUNCTIONAL = "Functional Module"
    MIXED = "Mixed Module"
