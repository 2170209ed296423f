"""Layout canvas geometry and layout lifecycle states."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import EngineConfig


class LayoutState(Enum):
    PENDING = "pending"
    LEVELED = "leveled"
    PLACED = "placed"
    SETTLED = "settled"


@dataclass(frozen=True)
class Canvas:
    """Fixed drawing area.

    Node centres are kept inside ``[margin_x, width - margin_x]`` and
    ``[margin_y, height - margin_y]``; level 0 sits ``top_padding`` from the top.
    """

    width: float = 1400.0
    height: float = 1000.0
    margin_x: float = 100.0
    margin_y: float = 80.0
    top_padding: float = 100.0
    node_width: float = 200.0
    min_distance: float = 180.0
    max_passes: int = 50
    max_levels: int = 10

    @classmethod
    def from_config(cls, config: EngineConfig) -> Canvas:
        return cls(
            width=config.canvas_width,
            height=config.canvas_height,
            min_distance=config.min_node_distance,
            max_passes=config.max_layout_passes,
            max_levels=config.max_layout_levels,
        )

    @property
    def min_spacing(self) -> float:
        return self.node_width + 50.0

    @property
    def x_bounds(self) -> tuple[float, float]:
        low, high = self.margin_x, self.width - self.margin_x
        return (low, high) if low <= high else (self.width / 2, self.width / 2)

    @property
    def y_bounds(self) -> tuple[float, float]:
        low, high = self.margin_y, self.height - self.margin_y
        return (low, high) if low <= high else (self.height / 2, self.height / 2)

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        x_low, x_high = self.x_bounds
        y_low, y_high = self.y_bounds
        return min(max(x, x_low), x_high), min(max(y, y_low), y_high)
