"""Placement of parallel edge segments within edge columns and rows."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import groupby

from cfglayout.structures import RangeAssignMaxTree


@dataclass
class EdgeSegment:
    """One straight piece of an edge.

    The names fit vertical segments; for horizontal segments the axes are swapped.
    """

    y0: int
    y1: int
    x: int
    edge_index: int
    secondary_priority: int = 0
    kind: int = 0
    spacing_override: int = 0


@dataclass
class NodeSide:
    """One side of a block as seen from the neighbouring edge column."""

    x: int
    y0: int
    y1: int
    size: int


def _segment_order(segment: EdgeSegment) -> tuple[int, int, int, int]:
    size = segment.y1 - segment.y0
    if segment.kind != 1:
        return (segment.x, segment.kind, size, segment.secondary_priority)
    return (segment.x, segment.kind, -size, -segment.secondary_priority)


def calculate_segment_offsets(
    segments: list[EdgeSegment],
    edge_column_width: list[int],
    right_sides: list[NodeSide],
    left_sides: list[NodeSide],
    column_width: list[int],
    height: int,
    segment_spacing: int,
) -> list[int]:
    """Return the offset of every segment relative to its edge column.

    The result is indexed by ``EdgeSegment.edge_index``. ``edge_column_width``
    holds minimal widths on entry and is widened in place to fit the segments.
    Segment ends are swapped where needed so that ``y0 <= y1``; all coordinates
    must lie in ``[0, height)``.
    """
    for segment in segments:
        if segment.y0 > segment.y1:
            segment.y0, segment.y1 = segment.y1, segment.y0
    segments.sort(key=_segment_order)

    offsets = [0] * (max((s.edge_index for s in segments), default=-1) + 1)

    right_by_column: dict[int, list[NodeSide]] = defaultdict(list)
    for side in sorted(right_sides, key=lambda side: side.x):
        right_by_column[side.x + 1].append(side)
    left_by_column: dict[int, list[NodeSide]] = defaultdict(list)
    for side in sorted(left_sides, key=lambda side: side.x):
        left_by_column[side.x].append(side)

    tree = RangeAssignMaxTree(height, 0)

    def place(segment: EdgeSegment, clamp: bool) -> None:
        y = tree.range_maximum(segment.y0, segment.y1 + 1)
        if clamp:
            y = max(y, 0)
        y += segment.spacing_override or segment_spacing
        tree.set_range(segment.y0, segment.y1 + 1, y)
        offsets[segment.edge_index] = y

    for x, group in groupby(segments, key=lambda segment: segment.x):
        column_segments = list(group)
        middle = [s for s in column_segments if s.kind <= 1]
        right = [s for s in column_segments if s.kind > 1]

        left_column_width = column_width[x - 1] if x > 0 else 0
        tree.set_range(0, height, -left_column_width)
        for side in right_by_column.get(x, []):
            tree.set_range(side.y0, side.y1 + 1, side.size - left_column_width)
        for segment in middle:
            place(segment, segment.kind != -2)
        middle_width = max(tree.range_maximum(0, height), 0)

        right_column_width = column_width[x] if x < len(column_width) else 0
        tree.set_range(0, height, -right_column_width)
        for side in left_by_column.get(x, []):
            tree.set_range(side.y0, side.y1 + 1, side.size - right_column_width)
        for segment in right:
            place(segment, False)
        right_middle = max(tree.range_maximum(0, height), 0)
        right_middle = max(right_middle, edge_column_width[x] - middle_width - segment_spacing)

        # Segments on the right side were stacked from the right edge of the column.
        for segment in right:
            offsets[segment.edge_index] = (
                middle_width + (right_middle - offsets[segment.edge_index]) + segment_spacing
            )
        edge_column_width[x] = middle_width + segment_spacing + right_middle

    return offsets


def center_edges(
    offsets: list[int], edge_column_width: list[int], segments: list[EdgeSegment]
) -> None:
    """Move groups of touching segments to the middle of their edge column, in place.

    Segments lying outside their column are left where they are, since moving
    them could make them overlap a block.
    """
    events: list[tuple[int, int, bool, int]] = []
    for segment in segments:
        offset = offsets[segment.edge_index]
        if 0 <= offset <= edge_column_width[segment.x]:
            events.append((segment.x, segment.y0, True, segment.edge_index))
            events.append((segment.x, segment.y1, False, segment.edge_index))
    # Starts come before ends at the same position so a chunk only closes at its end.
    events.sort(key=lambda event: (event[0], event[1], not event[2]))

    chunk: list[tuple[int, int, bool, int]] = []
    active = 0
    left = right = 0
    for event in events:
        offset = offsets[event[3]]
        if not chunk:
            left = right = offset
        chunk.append(event)
        active += 1 if event[2] else -1
        left = min(left, offset)
        right = max(right, offset)
        if active == 0:
            shift = (edge_column_width[chunk[0][0]] - (right - left)) // 2 - left
            for x, _, start, index in chunk:
                if start:
                    offsets[index] += shift
            chunk = []


def compress_coordinates(
    segments: list[EdgeSegment], left_sides: list[NodeSide], right_sides: list[NodeSide]
) -> int:
    """Renumber the y coordinates to ``0..n-1`` keeping their order; return ``n``.

    ``right_sides`` must describe the same blocks as ``left_sides``, in the same order.
    """
    if len(left_sides) != len(right_sides):
        raise ValueError("left and right sides must have the same length")
    positions = sorted(
        {s.y0 for s in segments}
        | {s.y1 for s in segments}
        | {s.y0 for s in left_sides}
        | {s.y1 for s in left_sides}
    )
    index = {position: i for i, position in enumerate(positions)}
    for segment in segments:
        segment.y0 = index[segment.y0]
        segment.y1 = index[segment.y1]
    for left, right in zip(left_sides, right_sides):
        left.y0 = right.y0 = index[left.y0]
        left.y1 = right.y1 = index[left.y1]
    return len(positions)