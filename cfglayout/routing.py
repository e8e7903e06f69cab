"""Main column selection and rough routing of edges through the grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from cfglayout.state import LayoutState
from cfglayout.structures import PointSetMinTree


class _EventType(enum.IntEnum):
    EDGE = 0
    BLOCK = 1


@dataclass
class _Event:
    block_id: int
    edge_id: int
    row: int
    type: _EventType


def calculate_edge_main_column(state: LayoutState) -> None:
    """Choose for every edge the column of its long vertical segment.

    A sweep line goes over the rows top to bottom and keeps, for every column,
    the lowest row blocked by a block, so that the nearest free column can be found.
    """
    events: list[_Event] = []
    for block_id, grid_block in state.grid_blocks.items():
        events.append(_Event(block_id, 0, grid_block.row, _EventType.BLOCK))
        start_row = grid_block.row + 1
        for index, edge in enumerate(state.blocks[block_id].edges):
            end_row = state.grid_blocks[edge.target].row
            events.append(_Event(block_id, index, max(start_row, end_row), _EventType.EDGE))
    events.sort(key=lambda event: (event.row, event.type))

    blocked = PointSetMinTree(state.columns + 1, -1)
    for event in events:
        block = state.grid_blocks[event.block_id]
        if event.type is _EventType.BLOCK:
            blocked.set(block.col + 1, event.row)
            continue

        column = block.col + 1
        edges = state.edge[event.block_id]
        edge = edges[event.edge_id]
        target = state.grid_blocks[edge.dest]
        top_row = min(block.row + 1, target.row)
        target_column = target.col + 1

        if blocked.value_at_point(column) < top_row:
            edge.main_column = column
            continue
        if blocked.value_at_point(target_column) < top_row:
            edge.main_column = target_column
            continue

        nearest_left = blocked.right_most_less_than(column, top_row)
        nearest_right = blocked.left_most_less_than(column, top_row)
        distance_left = column - nearest_left + abs(target_column - nearest_left)
        distance_right = nearest_right - column + abs(target_column - nearest_right)

        # Upward edges loop around the outside to avoid figure 8 crossings.
        if target.row < block.row:
            if (
                target_column < column
                and blocked.value_at_point(column + 1) < top_row
                and column - target_column <= distance_left + 2
            ):
                edge.main_column = column + 1
                continue
            if (
                target_column > column
                and blocked.value_at_point(column - 1) < top_row
                and target_column - column <= distance_right + 2
            ):
                edge.main_column = column - 1
                continue

        if distance_left != distance_right:
            edge.main_column = nearest_left if distance_left < distance_right else nearest_right
        else:
            # Ties put true branches on one side and false branches on the other.
            edge.main_column = (
                nearest_left if event.edge_id < len(edges) // 2 else nearest_right
            )


def _spacing_override(block_width: int, edge_count: int, edge_spacing: int) -> int:
    if edge_count == 0:
        return 0
    max_spacing = block_width // edge_count
    if max_spacing < edge_spacing:
        return max(max_spacing, 1)
    return 0


def rough_routing(state: LayoutState, edge_horizontal_spacing: int) -> None:
    """Route every edge through the grid with up to five axis-aligned segments."""
    for block_id, start in state.grid_blocks.items():
        for edge in state.edge.get(block_id, []):
            target = state.grid_blocks[edge.dest]
            start_column = start.col + 1
            target_column = target.col + 1
            main = edge.main_column

            edge.add_point(start.row + 1, start_column)
            if main != start_column:
                edge.add_point(start.row + 1, start_column, -1 if main < start_column else 1)
                edge.add_point(start.row + 1, main, -2 if target.row <= start.row else 0)

            if main < start_column and main < target_column:
                main_kind = 2
            elif main > start_column and main > target_column:
                main_kind = -2
            elif main == start_column and main != target_column:
                main_kind = 1 if main < target_column else -1
            elif main == target_column and main != start_column:
                main_kind = 1 if main < start_column else -1
            else:
                main_kind = 0
            edge.add_point(target.row, main, main_kind)

            if target_column != main:
                edge.add_point(target.row, target_column, 2 if target.row <= start.row else 0)
                edge.add_point(target.row, target_column, 1 if target_column < main else -1)

            # Crowded blocks get tighter spacing between their edges.
            start_override = _spacing_override(
                state.blocks[start.id].width, start.output_count, edge_horizontal_spacing
            )
            target_override = _spacing_override(
                state.blocks[target.id].width, target.input_count, edge_horizontal_spacing
            )
            edge.points[0].spacing_override = start_override
            edge.points[-1].spacing_override = target_override
            if len(edge.points) <= 2:
                if start_override and start_override < target_override:
                    edge.points[-1].spacing_override = start_override
            else:
                edge.points[1].spacing_override = start_override

            length = sum(
                abs(current.row - previous.row) + abs(current.col - previous.col)
                for previous, current in zip(edge.points, edge.points[1:])
            )
            edge.secondary_priority = 2 * length + (1 if target.row >= start.row else 0)