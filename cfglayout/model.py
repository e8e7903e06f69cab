"""Basic graph data used by every layout algorithm."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace


class ArrowDirection(enum.Enum):
    """Direction in which the arrow at the end of an edge points."""

    DOWN = "down"
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    NONE = "none"


@dataclass
class GraphEdge:
    """Edge leaving a block, drawn as a polyline of (x, y) points."""

    target: int
    polyline: list[tuple[float, float]] = field(default_factory=list)
    arrow: ArrowDirection = ArrowDirection.DOWN


@dataclass
class GraphBlock:
    """Rectangular node of the graph with its outgoing edges."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    entry: int = 0
    edges: list[GraphEdge] = field(default_factory=list)


Graph = dict[int, GraphBlock]


@dataclass
class LayoutConfig:
    """Spacing between blocks and between edges, in pixels."""

    block_vertical_spacing: int = 40
    block_horizontal_spacing: int = 20
    edge_vertical_spacing: int = 10
    edge_horizontal_spacing: int = 10


class GraphLayout(ABC):
    """Base class of the algorithms that place blocks and route edges."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.layout_config = replace(config) if config is not None else LayoutConfig()

    @abstractmethod
    def calculate_layout(self, blocks: Graph, entry: int) -> tuple[int, int]:
        """Place the blocks in place and return the (width, height) of the drawing."""

    def set_layout_config(self, config: LayoutConfig) -> None:
        """Use a copy of ``config`` for subsequent layouts."""
        self.layout_config = replace(config)