import copy

import pytest

from cfglayout.grid import GraphGridLayout, LayoutType
from cfglayout.model import ArrowDirection, GraphBlock, GraphEdge, LayoutConfig

ALL_TYPES = [LayoutType.NARROW, LayoutType.MEDIUM, LayoutType.WIDE]


def make_graph(spec, sizes=None):
    sizes = sizes or {}
    graph = {}
    for block_id, targets in spec.items():
        width, height = sizes.get(block_id, (80, 40))
        graph[block_id] = GraphBlock(
            width=width,
            height=height,
            entry=block_id,
            edges=[GraphEdge(target) for target in targets],
        )
    return graph


DIAMOND = {1: [2, 3], 2: [4], 3: [4], 4: []}
LOOP = {1: [2], 2: [3], 3: [1, 4], 4: []}
SWITCH = {1: [2, 3, 4, 5], 2: [6], 3: [6], 4: [6], 5: [6], 6: []}
WIDE_SIZES = {1: (300, 60), 4: (30, 90)}


def overlaps(a, b):
    return not (
        a.x + a.width <= b.x
        or b.x + b.width <= a.x
        or a.y + a.height <= b.y
        or b.y + b.height <= a.y
    )


def test_empty_graph():
    assert GraphGridLayout().calculate_layout({}, 0) == (0, 0)


def test_single_block_is_framed_by_edge_spacing():
    config = LayoutConfig()
    graph = make_graph({7: []})
    width, height = GraphGridLayout(config=config).calculate_layout(graph, 7)
    block = graph[7]
    assert block.x == config.edge_horizontal_spacing
    assert block.y == config.edge_vertical_spacing
    assert width == block.width + 2 * config.edge_horizontal_spacing
    assert height == block.height + 2 * config.edge_vertical_spacing


@pytest.mark.parametrize("layout_type", ALL_TYPES)
@pytest.mark.parametrize("spec", [DIAMOND, LOOP, SWITCH])
def test_blocks_do_not_overlap_and_fit(layout_type, spec):
    graph = make_graph(spec, WIDE_SIZES)
    width, height = GraphGridLayout(layout_type).calculate_layout(graph, 1)
    blocks = list(graph.values())
    for i, a in enumerate(blocks):
        assert a.x >= 0 and a.y >= 0
        assert a.x + a.width <= width
        assert a.y + a.height <= height
        for b in blocks[i + 1:]:
            assert not overlaps(a, b)


@pytest.mark.parametrize("layout_type", ALL_TYPES)
@pytest.mark.parametrize("spec", [DIAMOND, LOOP, SWITCH])
def test_edges_are_axis_aligned_and_attached(layout_type, spec):
    graph = make_graph(spec, WIDE_SIZES)
    GraphGridLayout(layout_type).calculate_layout(graph, 1)
    for block in graph.values():
        for edge in block.edges:
            line = edge.polyline
            assert len(line) >= 2
            assert line[0][1] == block.y + block.height
            assert line[-1][1] == graph[edge.target].y
            for (x0, y0), (x1, y1) in zip(line, line[1:]):
                assert x0 == x1 or y0 == y1
            assert edge.arrow is ArrowDirection.DOWN


@pytest.mark.parametrize("layout_type", ALL_TYPES)
def test_acyclic_edges_go_down(layout_type):
    graph = make_graph(SWITCH)
    GraphGridLayout(layout_type).calculate_layout(graph, 1)
    for block in graph.values():
        for edge in block.edges:
            assert graph[edge.target].y >= block.y + block.height


@pytest.mark.parametrize("entry", [1, 2, 3])
def test_entry_of_loop_is_on_top(entry):
    graph = make_graph({1: [2], 2: [3], 3: [1]})
    GraphGridLayout().calculate_layout(graph, entry)
    assert graph[entry].y == min(block.y for block in graph.values())


def test_unknown_entry_falls_back_to_first_block():
    first = make_graph(LOOP)
    unknown = make_graph(LOOP)
    size_first = GraphGridLayout().calculate_layout(first, 1)
    size_unknown = GraphGridLayout().calculate_layout(unknown, 999)
    assert size_first == size_unknown
    assert first == unknown


def test_layout_is_deterministic():
    a = make_graph(SWITCH, WIDE_SIZES)
    b = copy.deepcopy(a)
    assert GraphGridLayout().calculate_layout(a, 1) == GraphGridLayout().calculate_layout(b, 1)
    assert a == b


def test_edge_to_unknown_block_raises():
    graph = make_graph({1: [5]})
    with pytest.raises(ValueError):
        GraphGridLayout().calculate_layout(graph, 1)


def test_middle_alignment_centres_short_block_in_row():
    graph = make_graph({1: [2, 3], 2: [], 3: []}, {2: (80, 100), 3: (80, 40)})
    layout = GraphGridLayout(LayoutType.WIDE)
    layout.vertical_block_alignment_middle = True
    layout.calculate_layout(graph, 1)
    tall, short = graph[2], graph[3]
    assert short.y - tall.y == (tall.height - short.height) // 2