import pytest

from cfglayout.model import (
    ArrowDirection,
    GraphBlock,
    GraphEdge,
    GraphLayout,
    LayoutConfig,
)


class _SizeLayout(GraphLayout):
    def calculate_layout(self, blocks, entry):
        width = sum(block.width for block in blocks.values())
        height = max((block.height for block in blocks.values()), default=0)
        return width, height


def test_layout_config_defaults():
    config = LayoutConfig()
    assert config.block_vertical_spacing == 40
    assert config.block_horizontal_spacing == 20
    assert config.edge_vertical_spacing == 10
    assert config.edge_horizontal_spacing == 10


def test_edge_defaults():
    edge = GraphEdge(7)
    assert edge.target == 7
    assert edge.arrow is ArrowDirection.DOWN
    assert edge.polyline == []


def test_block_edges_not_shared():
    first = GraphBlock(entry=1)
    second = GraphBlock(entry=2)
    first.edges.append(GraphEdge(2))
    assert second.edges == []
    assert (first.x, first.y, first.width, first.height) == (0, 0, 0, 0)


def test_graph_layout_is_abstract():
    with pytest.raises(TypeError):
        GraphLayout()


def test_default_config_used_when_none_given():
    assert _SizeLayout().layout_config == LayoutConfig()


def test_constructor_copies_config():
    config = LayoutConfig(block_vertical_spacing=3)
    layout = _SizeLayout(config)
    config.block_vertical_spacing = 99
    assert layout.layout_config.block_vertical_spacing == 3


def test_set_layout_config_copies():
    layout = _SizeLayout()
    config = LayoutConfig(edge_horizontal_spacing=4)
    layout.set_layout_config(config)
    config.edge_horizontal_spacing = 50
    assert layout.layout_config.edge_horizontal_spacing == 4
    assert layout.layout_config is not config


def test_calculate_layout_returns_size():
    blocks = {1: GraphBlock(width=5, height=8, entry=1), 2: GraphBlock(width=6, height=3, entry=2)}
    assert _SizeLayout().calculate_layout(blocks, 1) == (11, 8)