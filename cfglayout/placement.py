"""Cycle removal, row assignment and column placement of blocks in the grid."""

from __future__ import annotations

import enum

from cfglayout.state import GridBlock, LayoutState


class _Visit(enum.Enum):
    NOT_VISITED = 0
    IN_STACK = 1
    VISITED = 2


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def topo_sort(state: LayoutState, entry: int) -> list[int]:
    """Select DAG edges with a DFS from ``entry`` and return a reverse topological order.

    The selected edges are stored in ``GridBlock.dag_edge``; loop edges are left out.
    """
    visited: dict[int, _Visit] = {}
    order: list[int] = []

    def dfs(first: int) -> None:
        visited[first] = _Visit.IN_STACK
        stack: list[list[int]] = [[first, 0]]
        while stack:
            frame = stack[-1]
            vertex, index = frame
            edges = state.blocks[vertex].edges
            if index < len(edges):
                frame[1] += 1
                target = edges[index].target
                status = visited.get(target, _Visit.NOT_VISITED)
                if status is _Visit.NOT_VISITED:
                    visited[target] = _Visit.IN_STACK
                    stack.append([target, 0])
                    state.grid_blocks[vertex].dag_edge.append(target)
                elif status is _Visit.VISITED:
                    state.grid_blocks[vertex].dag_edge.append(target)
                # a target still on the stack closes a loop and is skipped
            else:
                stack.pop()
                visited[vertex] = _Visit.VISITED
                order.append(vertex)

    # Starting from the entry keeps it at the top even when it is part of a loop.
    dfs(entry)
    for block_id in state.blocks:
        if visited.get(block_id, _Visit.NOT_VISITED) is _Visit.NOT_VISITED:
            dfs(block_id)
    return order


def assign_rows(state: LayoutState, block_order: list[int]) -> None:
    """Put every block one row below the lowest of its DAG predecessors."""
    for block_id in reversed(block_order):
        block = state.grid_blocks[block_id]
        next_level = block.row + 1
        for target in block.dag_edge:
            target_block = state.grid_blocks[target]
            target_block.row = max(target_block.row, next_level)


def select_tree(state: LayoutState) -> None:
    """Choose DAG edges that go exactly one row down and form a tree."""
    for block in state.grid_blocks.values():
        for target_id in block.dag_edge:
            target = state.grid_blocks[target_id]
            if not target.has_parent and target.row == block.row + 1:
                block.tree_edge.append(target_id)
                target.has_parent = True


def find_merge_points(state: LayoutState) -> None:
    """Find blocks where branches join again and offset a child so the join is centred."""
    for block in state.grid_blocks.values():
        merge: GridBlock | None = None
        grand_child_count = 0
        for edge in block.tree_edge:
            target = state.grid_blocks[edge]
            if target.tree_edge:
                merge = state.grid_blocks[target.tree_edge[0]]
            grand_child_count += len(target.tree_edge)
        if merge is None or grand_child_count != 1:
            continue
        blocks_going_to_merge = 0
        block_with_tree_edge = 0
        for edge in block.tree_edge:
            target = state.grid_blocks[edge]
            if merge.id not in target.dag_edge:
                break
            if len(target.tree_edge) == 1:
                block_with_tree_edge = blocks_going_to_merge
            blocks_going_to_merge += 1
        if blocks_going_to_merge:
            block.merge_block = merge.id
            child = state.grid_blocks[block.tree_edge[block_with_tree_edge]]
            child.col = block_with_tree_edge * 2 - (blocks_going_to_merge - 1)


def _place_leaf(block: GridBlock) -> None:
    block.row_count = 1
    block.col = 0
    block.last_row_right = 2
    block.last_row_left = 0
    block.left_position = 0
    block.right_position = 2
    block.left_side_shape = [0]
    block.right_side_shape = [2]


def _place_parent(
    state: LayoutState,
    block: GridBlock,
    tight_subtree_placement: bool,
    parent_between_direct_child: bool,
) -> None:
    grid = state.grid_blocks
    first = grid[block.tree_edge[0]]
    # Shapes hold the column of each row relative to the row above.
    left_side = list(first.left_side_shape)
    right_side = list(first.right_side_shape)
    block.row_count = first.row_count
    block.last_row_right = first.last_row_right
    block.last_row_left = first.last_row_left
    block.left_position = first.left_position
    block.right_position = first.right_position

    for child_id in block.tree_edge[1:]:
        child = grid[child_id]
        child_left = list(child.left_side_shape)
        child_right = list(child.right_side_shape)
        min_pos: int | None = None
        left_pos = 0
        right_pos = 0
        max_left_width = 0
        min_right_pos = child.col
        depth = 0
        for left_step, right_step in zip(right_side, child_left):
            left_pos += left_step
            right_pos += right_step
            gap = left_pos - right_pos
            min_pos = gap if min_pos is None else max(min_pos, gap)
            max_left_width = max(max_left_width, left_pos)
            min_right_pos = min(min_right_pos, right_pos)
            depth += 1
        left_longer = depth < len(right_side)
        right_longer = depth < len(child_left)

        if tight_subtree_placement:
            offset = min_pos if min_pos is not None else 0
        elif left_longer:
            offset = max_left_width - child.left_position
        else:
            offset = block.right_position - min_right_pos

        child.col += offset
        if left_longer:
            right_side[depth] -= offset + child.last_row_right - left_pos
            right_side = child_right + right_side[depth:]
        elif right_longer:
            child_left[depth] += right_pos + offset - block.last_row_left
            left_side = left_side + child_left[depth:]
            right_side = child_right
            block.last_row_right = child.last_row_right + offset
            block.last_row_left = child.last_row_left + offset
        else:
            right_side = child_right
        right_side[0] += offset
        block.row_count = max(block.row_count, child.row_count)
        block.left_position = min(block.left_position, child.left_position + offset)
        block.right_position = max(block.right_position, offset + child.right_position)

    if parent_between_direct_child:
        total = sum(grid[target].col for target in block.tree_edge)
        col = _trunc_div(total, len(block.tree_edge))
    else:
        col = _trunc_div(block.right_position + block.left_position, 2) - 1
        col = max(col, grid[block.tree_edge[0]].col - 1)
        col = min(col, grid[block.tree_edge[-1]].col + 1)

    block.col += col  # keeps an offset set by find_merge_points
    block.row_count += 1
    block.left_position = min(block.left_position, block.col)
    block.right_position = max(block.right_position, block.col + 2)

    left_side[0] -= block.col
    block.left_side_shape = [block.col, *left_side]
    right_side[0] -= block.col + 2
    block.right_side_shape = [block.col + 2, *right_side]

    # Children stay relative to the parent so that moving it moves the subtree.
    for target in block.tree_edge:
        grid[target].col -= block.col


def compute_block_placement(
    state: LayoutState,
    block_order: list[int],
    tight_subtree_placement: bool,
    parent_between_direct_child: bool,
) -> None:
    """Assign the row and column of every block.

    ``block_order`` is the reverse topological order returned by :func:`topo_sort`.
    """
    assign_rows(state, block_order)
    select_tree(state)
    find_merge_points(state)

    for block_id in block_order:
        block = state.grid_blocks[block_id]
        if not block.tree_edge:
            _place_leaf(block)
        else:
            _place_parent(state, block, tight_subtree_placement, parent_between_direct_child)

    next_empty_column = 0
    for block in state.grid_blocks.values():
        if block.row == 0:
            offset = -block.left_position
            block.col += next_empty_column + offset
            next_empty_column = block.right_position + offset + next_empty_column

    for block_id in reversed(block_order):
        block = state.grid_blocks[block_id]
        for child_id in block.tree_edge:
            state.grid_blocks[child_id].col += block.col