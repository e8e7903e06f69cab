"""Adapter turning a top-to-bottom layout into a left-to-right one."""

from __future__ import annotations

from cfglayout.model import ArrowDirection, Graph, GraphLayout, LayoutConfig

_ROTATED_ARROW = {
    ArrowDirection.DOWN: ArrowDirection.RIGHT,
    ArrowDirection.LEFT: ArrowDirection.UP,
    ArrowDirection.UP: ArrowDirection.LEFT,
    ArrowDirection.RIGHT: ArrowDirection.DOWN,
    ArrowDirection.NONE: ArrowDirection.NONE,
}


class GraphHorizontalAdapter(GraphLayout):
    """Run a vertical layout on the transposed graph and transpose the result back."""

    def __init__(self, layout: GraphLayout) -> None:
        super().__init__()
        self.layout = layout
        self._swap_config_direction()

    def calculate_layout(self, blocks: Graph, entry: int) -> tuple[int, int]:
        """Place ``blocks`` left to right and return the (width, height) of the drawing."""
        for block in blocks.values():
            block.width, block.height = block.height, block.width
        inner_width, inner_height = self.layout.calculate_layout(blocks, entry)
        for block in blocks.values():
            block.width, block.height = block.height, block.width
            block.x, block.y = block.y, block.x
            for edge in block.edges:
                edge.polyline = [(y, x) for x, y in edge.polyline]
                edge.arrow = _ROTATED_ARROW[edge.arrow]
        return inner_height, inner_width

    def set_layout_config(self, config: LayoutConfig) -> None:
        """Store ``config`` with its directions swapped and pass it on to the wrapped layout."""
        super().set_layout_config(config)
        self._swap_config_direction()
        self.layout.set_layout_config(config)

    def _swap_config_direction(self) -> None:
        cfg = self.layout_config
        cfg.edge_vertical_spacing, cfg.edge_horizontal_spacing = (
            cfg.edge_horizontal_spacing,
            cfg.edge_vertical_spacing,
        )
        cfg.block_vertical_spacing, cfg.block_horizontal_spacing = (
            cfg.block_horizontal_spacing,
            cfg.block_vertical_spacing,
        )