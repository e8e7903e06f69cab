"""Edge placement within edge columns and conversion of the grid to pixels."""

from __future__ import annotations

from itertools import count

from cfglayout.model import Graph, GraphBlock, LayoutConfig
from cfglayout.segments import (
    EdgeSegment,
    NodeSide,
    calculate_segment_offsets,
    center_edges,
    compress_coordinates,
)
from cfglayout.state import GridEdge, GridPoint, LayoutState


def _tdiv(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _segment(
    counter: count, point: GridPoint, edge: GridEdge, y0: int, y1: int, x: int
) -> EdgeSegment:
    return EdgeSegment(
        y0=y0,
        y1=y1,
        x=x,
        edge_index=next(counter),
        secondary_priority=edge.secondary_priority,
        kind=point.kind,
        spacing_override=point.spacing_override,
    )


def _copy_offsets(state: LayoutState, offsets: list[int], vertical: bool) -> None:
    """Store segment offsets in the edge points, in the order the segments were made."""
    index = 0
    for source_id, edges in state.edge.items():
        for edge in edges:
            for j in range(1 if vertical else 2, len(edge.points), 2):
                offset = offsets[index]
                index += 1
                if vertical:
                    block: GraphBlock | None = None
                    if j == 1:
                        block = state.blocks[source_id]
                    elif j + 1 == len(edge.points):
                        block = state.blocks[edge.dest]
                    if block is not None:
                        column_width = state.edge_column_width[edge.points[j].col]
                        # Keep the segment attached to the block it starts or ends in.
                        offset = max(_tdiv(-block.width, 2) + column_width // 2, offset)
                        offset = min(
                            column_width // 2 + min(block.width, column_width) // 2, offset
                        )
                edge.points[j].offset = offset


def elaborate_edge_placement(
    state: LayoutState, config: LayoutConfig, vertical_block_alignment_middle: bool
) -> None:
    """Compute segment offsets within edge columns and rows, and the widths of both."""
    counter = count()
    segments: list[EdgeSegment] = []
    for edges in state.edge.values():
        for edge in edges:
            for j in range(1, len(edge.points), 2):
                # edges live in even rows, blocks in odd ones
                segments.append(
                    _segment(
                        counter,
                        edge.points[j],
                        edge,
                        edge.points[j - 1].row * 2,
                        edge.points[j].row * 2,
                        edge.points[j].col,
                    )
                )

    left_sides: list[NodeSide] = []
    right_sides: list[NodeSide] = []
    for block_id, node in state.grid_blocks.items():
        width = state.blocks[block_id].width
        left_width = width // 2
        right_width = width - left_width
        row = node.row * 2 + 1
        left_sides.append(NodeSide(node.col, row, row, left_width))
        right_sides.append(NodeSide(node.col + 1, row, row, right_width))

    state.edge_column_width = [config.block_horizontal_spacing] * (state.columns + 1)
    state.edge_column_width[0] = config.edge_horizontal_spacing
    state.edge_column_width[-1] = config.edge_horizontal_spacing
    offsets = calculate_segment_offsets(
        segments,
        state.edge_column_width,
        right_sides,
        left_sides,
        state.column_width,
        2 * state.rows + 1,
        config.edge_horizontal_spacing,
    )
    center_edges(offsets, state.edge_column_width, segments)

    old_column_width = list(state.column_width)
    adjust_column_widths(state)
    for segment in segments:
        x = segment.x
        if segment.kind == -2:
            offsets[segment.edge_index] -= (
                state.edge_column_width[x - 1] // 2 + state.column_width[x - 1]
            ) - old_column_width[x - 1]
        elif segment.kind == 2:
            offsets[segment.edge_index] += (
                state.edge_column_width[x + 1] // 2 + state.column_width[x]
            ) - old_column_width[x]
    _, state.column_offset, state.edge_column_offset = calculate_column_offsets(
        state.column_width, state.edge_column_width
    )
    _copy_offsets(state, offsets, vertical=True)

    # Horizontal segments use the exact x positions of the vertical ones.
    counter = count()
    segments = []
    for edges in state.edge.values():
        for edge in edges:
            for j in range(2, len(edge.points), 2):
                before = edge.points[j - 1]
                after = edge.points[j + 1]
                y0 = state.edge_column_offset[before.col] + before.offset
                y1 = state.edge_column_offset[after.col] + after.offset
                segments.append(_segment(counter, edge.points[j], edge, y0, y1, edge.points[j].row))

    left_sides = []
    right_sides = []
    for block_id, node in state.grid_blocks.items():
        block_width = state.blocks[node.id].width
        left = (
            state.edge_column_offset[node.col + 1]
            + state.edge_column_width[node.col + 1] // 2
            - block_width // 2
        )
        right = left + block_width
        block_height = state.blocks[block_id].height
        free_space = state.row_height[node.row] - block_height
        top_profile = state.row_height[node.row]
        bottom_profile = block_height
        if vertical_block_alignment_middle:
            top_profile -= free_space // 2
            bottom_profile += free_space // 2
        left_sides.append(NodeSide(node.row, left, right, top_profile))
        right_sides.append(NodeSide(node.row, left, right, bottom_profile))

    state.edge_row_height = [config.block_vertical_spacing] * (state.rows + 1)
    state.edge_row_height[0] = config.edge_vertical_spacing
    state.edge_row_height[-1] = config.edge_vertical_spacing
    compressed = compress_coordinates(segments, left_sides, right_sides)
    offsets = calculate_segment_offsets(
        segments,
        state.edge_row_height,
        right_sides,
        left_sides,
        state.row_height,
        compressed,
        config.edge_vertical_spacing,
    )
    _copy_offsets(state, offsets, vertical=False)


def adjust_column_widths(state: LayoutState) -> None:
    """Recompute row heights and column widths, leaving out the space taken by edge columns."""
    state.row_height = [0] * state.rows
    state.column_width = [0] * state.columns
    for block_id, node in state.grid_blocks.items():
        block = state.blocks[block_id]
        state.row_height[node.row] = max(block.height, state.row_height[node.row])
        edge_width = state.edge_column_width[node.col + 1]
        width = _tdiv(block.width - edge_width, 2)
        state.column_width[node.col] = max(width, state.column_width[node.col])
        state.column_width[node.col + 1] = max(width, state.column_width[node.col + 1])


def calculate_column_offsets(
    column_width: list[int], edge_column_width: list[int]
) -> tuple[int, list[int], list[int]]:
    """Lay out interleaved edge columns and columns from left to right.

    Return the total width, the start of every column and the start of every
    edge column. There must be one more edge column than columns.
    """
    if len(edge_column_width) != len(column_width) + 1:
        raise ValueError("edge_column_width must have one entry more than column_width")
    position = 0
    column_offset: list[int] = []
    edge_column_offset: list[int] = []
    for edge_width, width in zip(edge_column_width, column_width):
        edge_column_offset.append(position)
        position += edge_width
        column_offset.append(position)
        position += width
    edge_column_offset.append(position)
    position += edge_column_width[-1]
    return position, column_offset, edge_column_offset


def convert_to_pixel_coordinates(
    state: LayoutState, vertical_block_alignment_middle: bool
) -> tuple[int, int]:
    """Turn grid positions into pixel positions of blocks and edges; return (width, height)."""
    width, state.column_offset, state.edge_column_offset = calculate_column_offsets(
        state.column_width, state.edge_column_width
    )
    height, state.row_offset, state.edge_row_offset = calculate_column_offsets(
        state.row_height, state.edge_row_height
    )

    for block_id, block in state.blocks.items():
        grid_block = state.grid_blocks[block_id]
        block.x = (
            state.edge_column_offset[grid_block.col + 1]
            + state.edge_column_width[grid_block.col + 1] // 2
            - block.width // 2
        )
        block.y = state.row_offset[grid_block.row]
        if vertical_block_alignment_middle:
            block.y += (state.row_height[grid_block.row] - block.height) // 2

    for block_id, block in state.blocks.items():
        for index, result_edge in enumerate(block.edges):
            polyline: list[tuple[float, float]] = [(0, block.y + block.height)]
            edge = state.edge[block_id][index]
            for j, point in enumerate(edge.points[1:], start=1):
                if j & 1:
                    x = state.edge_column_offset[point.col] + point.offset
                    polyline[-1] = (x, polyline[-1][1])
                    polyline.append((x, 0))
                else:
                    y = state.edge_row_offset[point.row] + point.offset
                    polyline[-1] = (polyline[-1][0], y)
                    polyline.append((0, y))
            result_edge.polyline = polyline
    connect_edge_ends(state.blocks)
    return width, height


def connect_edge_ends(graph: Graph) -> None:
    """Attach the first and last point of every edge to its source and target block."""
    for block in graph.values():
        for edge in block.edges:
            if not edge.polyline:
                continue
            target = graph[edge.target]
            first_x, _ = edge.polyline[0]
            edge.polyline[0] = (first_x, block.y + block.height)
            last_x, _ = edge.polyline[-1]
            edge.polyline[-1] = (last_x, target.y)


def crop_to_content(graph: Graph, config: LayoutConfig) -> tuple[int, int]:
    """Move the drawing to the top left corner with a margin; return the new (width, height)."""
    if not graph:
        return max(1, config.edge_horizontal_spacing), max(1, config.edge_vertical_spacing)

    any_block = next(iter(graph.values()))
    min_x = max_x = any_block.x
    min_y = max_y = any_block.y

    def update(x: int, y: int) -> None:
        nonlocal min_x, min_y, max_x, max_y
        min_x = min(min_x, x)
        min_y = min(min_y, y)
        max_x = max(max_x, x)
        max_y = max(max_y, y)

    for block in graph.values():
        update(block.x, block.y)
        update(block.x + block.width, block.y + block.height)
        for edge in block.edges:
            for x, y in edge.polyline:
                update(int(x), int(y))

    min_x -= config.edge_horizontal_spacing
    min_y -= config.edge_vertical_spacing
    max_x += config.edge_horizontal_spacing
    max_y += config.edge_vertical_spacing
    for block in graph.values():
        block.x -= min_x
        block.y -= min_y
        for edge in block.edges:
            edge.polyline = [(x - min_x, y - min_y) for x, y in edge.polyline]
    return max_x - min_x, max_y - min_y