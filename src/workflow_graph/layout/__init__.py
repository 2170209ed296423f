"""Hierarchical 2-D layout of workflow nodes."""

from .engine import LayoutEngine
from .levels import assign_levels, select_seeds
from .models import Canvas, LayoutState
from .placement import place_rows, resolve_overlaps

__all__ = [
    "Canvas",
    "LayoutEngine",
    "LayoutState",
    "assign_levels",
    "place_rows",
    "resolve_overlaps",
    "select_seeds",
]
