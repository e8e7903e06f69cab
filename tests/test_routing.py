import pytest

from cfglayout.model import GraphBlock, GraphEdge
from cfglayout.placement import compute_block_placement, topo_sort
from cfglayout.routing import calculate_edge_main_column, rough_routing
from cfglayout.state import GridBlock, GridEdge, LayoutState


def build_state(adjacency, width=40):
    blocks = {
        block_id: GraphBlock(width=width, height=20, entry=block_id,
                             edges=[GraphEdge(t) for t in targets])
        for block_id, targets in adjacency.items()
    }
    state = LayoutState(blocks=blocks)
    for block_id in blocks:
        state.grid_blocks[block_id] = GridBlock(id=block_id)
    order = topo_sort(state, 1)
    compute_block_placement(state, order, False, True)
    for block_id, block in blocks.items():
        state.edge[block_id] = [GridEdge(e.target) for e in block.edges]
    for block_id, edges in state.edge.items():
        state.grid_blocks[block_id].output_count = len(edges)
        for edge in edges:
            state.grid_blocks[edge.dest].input_count += 1
    state.rows = max(b.row for b in state.grid_blocks.values()) + 1
    state.columns = max(b.col for b in state.grid_blocks.values()) + 2
    return state


def route(adjacency, width=40, spacing=10):
    state = build_state(adjacency, width)
    calculate_edge_main_column(state)
    rough_routing(state, spacing)
    return state


GRAPHS = [
    {1: [2, 3], 2: [4], 3: [4], 4: []},
    {1: [2], 2: [3], 3: [1, 4], 4: []},
    {1: [2, 3, 4], 2: [5], 3: [5], 4: [6], 5: [1], 6: []},
]


def all_edges(state):
    for block_id, edges in state.edge.items():
        for edge in edges:
            yield state.grid_blocks[block_id], state.grid_blocks[edge.dest], edge


def test_straight_edge_is_single_segment():
    state = route({1: [2], 2: []})
    edge = state.edge[1][0]
    assert edge.main_column == state.grid_blocks[1].col + 1
    assert len(edge.points) == 2


@pytest.mark.parametrize("adjacency", GRAPHS)
def test_main_column_within_grid(adjacency):
    state = build_state(adjacency)
    calculate_edge_main_column(state)
    for _, _, edge in all_edges(state):
        assert 0 <= edge.main_column <= state.columns


@pytest.mark.parametrize("adjacency", GRAPHS)
def test_routes_start_and_end_at_blocks(adjacency):
    state = route(adjacency)
    for start, target, edge in all_edges(state):
        first, last = edge.points[0], edge.points[-1]
        assert (first.row, first.col) == (start.row + 1, start.col + 1)
        assert (last.row, last.col) == (target.row, target.col + 1)
        assert len(edge.points) % 2 == 0


@pytest.mark.parametrize("adjacency", GRAPHS)
def test_segments_alternate_vertical_horizontal(adjacency):
    state = route(adjacency)
    for _, _, edge in all_edges(state):
        for index in range(1, len(edge.points)):
            previous, current = edge.points[index - 1], edge.points[index]
            if index % 2:
                assert current.col == previous.col
            else:
                assert current.row == previous.row


@pytest.mark.parametrize("adjacency", GRAPHS)
def test_secondary_priority_marks_downward_edges(adjacency):
    state = route(adjacency)
    for start, target, edge in all_edges(state):
        downward = target.row >= start.row
        assert (edge.secondary_priority % 2 == 1) == downward
        assert edge.secondary_priority >= 0


def test_back_edge_leaves_its_column():
    state = route({1: [2], 2: [3], 3: [1, 4], 4: []})
    back = state.edge[3][0]
    assert back.main_column != state.grid_blocks[3].col + 1
    assert back.secondary_priority % 2 == 0


def test_crowded_block_gets_spacing_override():
    targets = list(range(2, 22))
    adjacency = {1: targets, **{t: [] for t in targets}}
    state = route(adjacency, width=40, spacing=10)
    for edge in state.edge[1]:
        override = edge.points[0].spacing_override
        assert 0 < override < 10


def test_roomy_block_keeps_default_spacing():
    state = route({1: [2, 3], 2: [], 3: []}, width=1000, spacing=10)
    for edge in state.edge[1]:
        assert edge.points[0].spacing_override == 0