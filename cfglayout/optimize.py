"""Compaction of a grid layout by solving a linear program in each direction."""

from __future__ import annotations

from cfglayout.edges import connect_edge_ends
from cfglayout.linear import (
    Constraint,
    Segment,
    create_inequalities_from_segments,
    create_inequality,
    optimize_linear_program,
)
from cfglayout.model import LayoutConfig
from cfglayout.state import LayoutState


def _resize(values: list[int], size: int) -> None:
    if len(values) < size:
        values.extend([0] * (size - len(values)))
    else:
        del values[size:]


def _copy_solution(
    state: LayoutState, mapping: dict[int, int], solution: list[int], horizontal: bool
) -> None:
    """Write variable values back to block positions and edge points."""
    variable = len(mapping)
    for block_id, block in state.blocks.items():
        for edge in block.edges:
            polyline = edge.polyline
            for i in range(1 + int(horizontal), len(polyline), 2):
                value = solution[variable]
                variable += 1
                if horizontal:
                    polyline[i] = (polyline[i][0], value)
                    polyline[i - 1] = (polyline[i - 1][0], value)
                else:
                    polyline[i] = (value, polyline[i][1])
                    polyline[i - 1] = (value, polyline[i - 1][1])
        if horizontal:
            block.y = solution[mapping[block_id]]
        else:
            block.x = solution[mapping[block_id]]


def optimize_layout(state: LayoutState, config: LayoutConfig) -> None:
    """Push blocks and edge segments together, ignoring the grid, first vertically then horizontally."""
    blocks = state.blocks
    mapping = {block_id: index for index, block_id in enumerate(blocks)}
    block_count = len(mapping)
    variable_groups = list(range(block_count))

    objective: list[int] = []
    inequalities: list[Constraint] = []
    equalities: list[Constraint] = []
    solution: list[int] = []
    segments: list[Segment] = []

    def add_objective(a: int, pos_a: int, b: int, pos_b: int) -> None:
        if len(objective) < max(a, b) + 1:
            _resize(objective, max(a, b) + 1)
        if pos_a < pos_b:
            objective[b] += 1
            objective[a] -= 1
        else:
            objective[a] += 1
            objective[b] -= 1

    def set_feasible(variable: int, value: int) -> None:
        if len(solution) < variable + 1:
            _resize(solution, variable + 1)
        solution[variable] = value

    # Vertical direction: the variables are y of blocks and of horizontal segments.
    objective.extend([1] * block_count)
    variable = block_count
    edge_index = 0
    for block_id, block in blocks.items():
        block_variable = mapping[block_id]
        for edge in block.edges:
            target = blocks[edge.target]
            if block.y < target.y:
                spacing = block.height + config.block_vertical_spacing
                inequalities.append((block_variable, mapping[edge.target], -spacing))
            polyline = edge.polyline
            if len(polyline) < 3:
                continue
            for i in range(2, len(polyline), 2):
                y0, y1 = sorted((int(polyline[i - 1][0]), int(polyline[i][0])))
                x = int(polyline[i][1])
                segments.append(Segment(x, variable, y0, y1))
                variable_groups.append(block_count + edge_index)
                set_feasible(variable, x)
                if i > 2:
                    add_objective(variable, x, variable - 1, int(polyline[i - 2][1]))
                variable += 1
            edge_index += 1
        segments.append(Segment(block.y, block_variable, block.x, block.x + block.width))
        segments.append(
            Segment(block.y + block.height, block_variable, block.x, block.x + block.width)
        )
        set_feasible(block_variable, block.y)

    inequalities.extend(
        create_inequalities_from_segments(
            segments,
            solution,
            variable_groups,
            block_count,
            config.block_vertical_spacing,
            config.edge_vertical_spacing,
        )
    )
    _resize(objective, len(solution))
    optimize_linear_program(len(solution), objective, inequalities, equalities, solution)
    _copy_solution(state, mapping, solution, horizontal=True)
    connect_edge_ends(blocks)

    # Horizontal direction: the variables are x of blocks and of vertical segments.
    del variable_groups[block_count:]
    solution.clear()
    equalities.clear()
    inequalities.clear()
    objective.clear()
    segments = []
    variable = block_count
    edge_index = 0
    for block_id, block in blocks.items():
        for edge in block.edges:
            polyline = edge.polyline
            if len(polyline) < 2:
                continue
            first_variable = variable
            for i in range(1, len(polyline), 2):
                y0, y1 = sorted((int(polyline[i - 1][1]), int(polyline[i][1])))
                x = int(polyline[i][0])
                segments.append(Segment(x, variable, y0, y1))
                variable_groups.append(block_count + edge_index)
                set_feasible(variable, x)
                if i > 2:
                    add_objective(variable, x, variable - 1, int(polyline[i - 2][0]))
                variable += 1
            last_variable = variable - 1
            # Edge ends keep their position relative to the blocks they touch.
            equalities.append(
                (mapping[block_id], first_variable, block.x - int(polyline[1][0]))
            )
            equalities.append(
                (mapping[edge.target], last_variable, blocks[edge.target].x - segments[-1].x)
            )
            edge_index += 1
        block_variable = mapping[block_id]
        segments.append(Segment(block.x, block_variable, block.y, block.y + block.height))
        segments.append(
            Segment(block.x + block.width, block_variable, block.y, block.y + block.height)
        )
        set_feasible(block_variable, block.x)

    inequalities.extend(
        create_inequalities_from_segments(
            segments,
            solution,
            variable_groups,
            block_count,
            config.block_horizontal_spacing,
            config.edge_horizontal_spacing,
        )
    )
    _resize(objective, len(solution))

    # Keep two-way branches on their sides and merge points centred below them.
    half_spacing = config.block_horizontal_spacing // 2
    for block_id, block in blocks.items():
        if len(block.edges) != 2:
            continue
        left_id, right_id = block.edges[0].target, block.edges[1].target
        left, right = blocks[left_id], blocks[right_id]
        block_variable = mapping[block_id]
        middle = block.x + block.width // 2
        if left.x + left.width < middle and right.x > middle:
            inequalities.append(
                create_inequality(
                    mapping[left_id], left.x + left.width, block_variable, middle,
                    half_spacing, solution,
                )
            )
            inequalities.append(
                create_inequality(
                    block_variable, middle, mapping[right_id], right.x, half_spacing, solution
                )
            )
            merge_id = state.grid_blocks[block_id].merge_block
            if merge_id:
                merge = blocks[merge_id]
                if merge.x + merge.width // 2 == middle:
                    equalities.append((block_variable, mapping[merge_id], block.x - merge.x))

    optimize_linear_program(len(solution), objective, inequalities, equalities, solution)
    _copy_solution(state, mapping, solution, horizontal=False)