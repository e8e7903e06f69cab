"""Layered graph layout that places blocks in a grid of rows and columns."""

from __future__ import annotations

import enum

from cfglayout.edges import convert_to_pixel_coordinates, crop_to_content, elaborate_edge_placement
from cfglayout.model import ArrowDirection, Graph, GraphLayout, LayoutConfig
from cfglayout.optimize import optimize_layout
from cfglayout.placement import compute_block_placement, topo_sort
from cfglayout.routing import calculate_edge_main_column, rough_routing
from cfglayout.state import GridBlock, GridEdge, LayoutState


class LayoutType(enum.Enum):
    """Presets trading compactness for readability."""

    MEDIUM = "medium"
    WIDE = "wide"
    NARROW = "narrow"


# (tight subtree placement, parent between direct children, layout optimization)
_PRESETS: dict[LayoutType, tuple[bool, bool, bool]] = {
    LayoutType.NARROW: (True, False, True),
    LayoutType.MEDIUM: (False, True, True),
    LayoutType.WIDE: (False, True, False),
}


class GraphGridLayout(GraphLayout):
    """Place blocks in a grid: rows from a topological order, columns from a spanning tree.

    Attributes that tune the result:

    - ``tight_subtree_placement``: put subtrees as close as their shapes allow
      instead of using the bounding box of the shorter one.
    - ``parent_between_direct_child``: centre a parent between its direct
      children rather than over the whole width of its subtree.
    - ``vertical_block_alignment_middle``: centre blocks vertically in their row.
    - ``use_layout_optimization``: compact the drawing after grid placement.
    """

    def __init__(
        self,
        layout_type: LayoutType = LayoutType.MEDIUM,
        config: LayoutConfig | None = None,
    ) -> None:
        super().__init__(config)
        tight, parent_between, optimization = _PRESETS[layout_type]
        self.tight_subtree_placement = tight
        self.parent_between_direct_child = parent_between
        self.vertical_block_alignment_middle = False
        self.use_layout_optimization = optimization

    def calculate_layout(self, blocks: Graph, entry: int) -> tuple[int, int]:
        """Place ``blocks`` in place and return the (width, height) of the drawing.

        If ``entry`` is not a block, the first block is used as the entry.
        Every edge must point to a block of the graph.
        """
        if not blocks:
            return 0, 0
        for block_id, block in blocks.items():
            for edge in block.edges:
                if edge.target not in blocks:
                    raise ValueError(
                        f"edge from block {block_id} points to unknown block {edge.target}"
                    )
        if entry not in blocks:
            entry = next(iter(blocks))

        config = self.layout_config
        state = LayoutState(blocks=blocks)
        state.grid_blocks = {block_id: GridBlock(id=block_id) for block_id in blocks}

        order = topo_sort(state, entry)
        compute_block_placement(
            state, order, self.tight_subtree_placement, self.parent_between_direct_child
        )

        for block_id, block in blocks.items():
            state.edge[block_id] = [GridEdge(dest=edge.target) for edge in block.edges]
            for edge in block.edges:
                edge.arrow = ArrowDirection.DOWN
        for block_id, grid_edges in state.edge.items():
            state.grid_blocks[block_id].output_count = len(grid_edges)
            for grid_edge in grid_edges:
                state.grid_blocks[grid_edge.dest].input_count += 1

        nodes = state.grid_blocks.values()
        state.rows = max(1, max(node.row + 1 for node in nodes))
        # every block is two columns wide
        state.columns = max(1, max(node.col + 2 for node in nodes))

        state.row_height = [0] * state.rows
        state.column_width = [0] * state.columns
        for block_id, node in state.grid_blocks.items():
            block = blocks[block_id]
            half = block.width // 2
            state.row_height[node.row] = max(block.height, state.row_height[node.row])
            state.column_width[node.col] = max(half, state.column_width[node.col])
            state.column_width[node.col + 1] = max(half, state.column_width[node.col + 1])

        calculate_edge_main_column(state)
        rough_routing(state, config.edge_horizontal_spacing)
        elaborate_edge_placement(state, config, self.vertical_block_alignment_middle)

        width, height = convert_to_pixel_coordinates(state, self.vertical_block_alignment_middle)
        if self.use_layout_optimization:
            optimize_layout(state, config)
            width, height = crop_to_content(blocks, config)
        return width, height