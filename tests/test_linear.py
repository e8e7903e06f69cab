import pytest

from cfglayout.linear import (
    Segment,
    create_inequalities_from_segments,
    create_inequality,
    optimize_linear_program,
)


def _satisfied(constraints, solution):
    return all(solution[a] - solution[b] <= c for a, b, c in constraints)


def test_create_inequality_uses_spacing():
    assert create_inequality(0, 10, 1, 30, 5, [10, 30]) == (0, 1, -5)


def test_create_inequality_limits_spacing_to_distance():
    assert create_inequality(0, 10, 1, 12, 5, [10, 12]) == (0, 1, -2)


def test_create_inequality_holds_for_current_positions():
    positions = [7, 40]
    a, b, c = create_inequality(0, 7, 1, 40, 20, positions)
    assert positions[a] - positions[b] <= c


def test_blocks_side_by_side_get_block_spacing():
    segments = [Segment(50, 1, 0, 10), Segment(0, 0, 0, 10)]
    result = create_inequalities_from_segments(segments, [0, 50], [0, 1], 2, 20, 5)
    assert result == [(0, 1, -20)]


def test_sides_of_same_block_are_not_constrained():
    segments = [Segment(0, 0, 0, 10), Segment(30, 0, 0, 10)]
    result = create_inequalities_from_segments(segments, [0], [0], 1, 20, 5)
    assert result == []


def test_disjoint_ranges_are_not_constrained():
    segments = [Segment(0, 0, 0, 10), Segment(50, 1, 20, 30)]
    result = create_inequalities_from_segments(segments, [0, 50], [0, 1], 2, 20, 5)
    assert result == []


def test_segments_of_one_edge_may_touch():
    segments = [Segment(0, 0, 0, 10), Segment(50, 1, 0, 10)]
    result = create_inequalities_from_segments(segments, [0, 50], [7, 7], 0, 20, 5)
    assert result == [(0, 1, 0)]


def test_inequalities_hold_for_initial_positions():
    positions = [0, 40, 100]
    segments = [Segment(0, 0, 0, 10), Segment(40, 1, 5, 20), Segment(100, 2, 0, 30)]
    result = create_inequalities_from_segments(segments, positions, [0, 1, 2], 0, 20, 5)
    assert result
    assert _satisfied(result, positions)


def test_minimise_pushes_against_constraint():
    solution = [0, 100]
    inequalities = [(0, 1, -20)]
    optimize_linear_program(2, [0, 1], inequalities, [], solution)
    assert solution[1] - solution[0] == 20
    assert _satisfied(inequalities, solution)


def test_duplicate_inequalities_keep_tightest():
    solution = [0, 100]
    inequalities = [(0, 1, -10), (0, 1, -30)]
    optimize_linear_program(2, [0, 1], inequalities, [], solution)
    assert solution[1] - solution[0] == 30


def test_chain_stays_feasible_and_non_negative():
    solution = [100, 200, 300]
    inequalities = [(0, 1, -10), (1, 2, -10)]
    optimize_linear_program(3, [1, 1, 1], inequalities, [], solution)
    assert _satisfied(inequalities, solution)
    assert min(solution) == 0
    assert solution[0] == 0
    assert sum(solution) < 600


def test_equality_moves_variables_together():
    solution = [50, 70]
    optimize_linear_program(2, [1, 0], [], [(0, 1, -20)], solution)
    assert solution[0] == 0
    assert solution[1] - solution[0] == 20


def test_unconstrained_variable_goes_to_zero():
    solution = [25]
    result = optimize_linear_program(1, [1], [], [], solution)
    assert result is solution
    assert solution == [0]


def test_zero_objective_leaves_solution():
    solution = [5, 9]
    optimize_linear_program(2, [0, 0], [(0, 1, -4)], [], solution)
    assert solution == [5, 9]


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        optimize_linear_program(2, [1], [], [], [0, 0])