"""Intermediate state of the grid layout algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field

from cfglayout.model import GraphBlock


@dataclass
class GridBlock:
    """Position of a block within the grid and data about its subtree."""

    id: int
    tree_edge: list[int] = field(default_factory=list)
    dag_edge: list[int] = field(default_factory=list)
    has_parent: bool = False
    input_count: int = 0
    output_count: int = 0
    row_count: int = 0
    col: int = 0
    row: int = 0
    merge_block: int = 0
    last_row_left: int = 0
    last_row_right: int = 0
    left_position: int = 0
    right_position: int = 0
    left_side_shape: list[int] = field(default_factory=list)
    right_side_shape: list[int] = field(default_factory=list)


@dataclass
class GridPoint:
    """Corner of a routed edge in grid coordinates."""

    row: int
    col: int
    offset: int = 0
    kind: int = 0
    spacing_override: int = 0


@dataclass
class GridEdge:
    """Edge routed through the grid."""

    dest: int
    main_column: int = -1
    points: list[GridPoint] = field(default_factory=list)
    secondary_priority: int = 0

    def add_point(self, row: int, col: int, kind: int = 0) -> None:
        """Append a corner at ``row``, ``col``."""
        self.points.append(GridPoint(row, col, 0, kind, 0))


@dataclass
class LayoutState:
    """Everything the grid layout computes for one graph."""

    blocks: dict[int, GraphBlock] = field(default_factory=dict)
    grid_blocks: dict[int, GridBlock] = field(default_factory=dict)
    edge: dict[int, list[GridEdge]] = field(default_factory=dict)
    rows: int = 0
    columns: int = 0
    column_width: list[int] = field(default_factory=list)
    row_height: list[int] = field(default_factory=list)
    edge_column_width: list[int] = field(default_factory=list)
    edge_row_height: list[int] = field(default_factory=list)
    column_offset: list[int] = field(default_factory=list)
    row_offset: list[int] = field(default_factory=list)
    edge_column_offset: list[int] = field(default_factory=list)
    edge_row_offset: list[int] = field(default_factory=list)