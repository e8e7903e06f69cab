# cfglayout

A layered grid layout engine for directed graphs, tuned for control flow
graphs of disassembled code. Blocks are placed on a grid so that the
entry block stays on top where possible, branches spread to either side
of their parent, and edges are routed as orthogonal polylines between the
blocks. An optional compaction pass squeezes the drawing afterwards.

The package is pure Python and has no runtime dependencies.

## Installation

```
pip install cfglayout
```

## Usage

Build a graph as a dict from block id to `GraphBlock`, give every block
its size, and let a layout assign positions:

```python
from cfglayout.model import GraphBlock, GraphEdge, LayoutConfig
from cfglayout.grid import GraphGridLayout, LayoutType

blocks = {
    0: GraphBlock(entry=0, width=80, height=30, edges=[GraphEdge(1), GraphEdge(2)]),
    1: GraphBlock(entry=1, width=60, height=30, edges=[GraphEdge(3)]),
    2: GraphBlock(entry=2, width=60, height=30, edges=[GraphEdge(3)]),
    3: GraphBlock(entry=3, width=80, height=30),
}

layout = GraphGridLayout(LayoutType.MEDIUM)
layout.set_layout_config(LayoutConfig(block_vertical_spacing=40))
width, height = layout.calculate_layout(blocks, 0)

for block in blocks.values():
    print(block.entry, block.x, block.y)
    for edge in block.edges:
        print("  ->", edge.target, edge.polyline, edge.arrow)
```

`calculate_layout` updates `x` and `y` of every block and the `polyline`
(a list of `(x, y)` points) and `arrow` of every edge in place, and returns
the `(width, height)` of the drawing. An empty graph gives `(0, 0)`. If the
entry id is not a block, the first block is used as the entry. An edge
whose target is not in the graph raises `ValueError`.

### Spacing

`LayoutConfig` holds the spacing in pixels:

- `block_vertical_spacing` (default 40)
- `block_horizontal_spacing` (default 20)
- `edge_vertical_spacing` (default 10)
- `edge_horizontal_spacing` (default 10)

Pass one to the `GraphGridLayout` constructor or to `set_layout_config`;
the layout keeps its own copy.

### Layout variants

`LayoutType` selects how dense the result is:

- `NARROW`: subtrees packed by their exact shape, compaction on.
- `MEDIUM`: parents centred between their direct children, compaction on.
- `WIDE`: like medium, but without compaction.

The same choices can be made one by one through the attributes of a
`GraphGridLayout`: `tight_subtree_placement`,
`parent_between_direct_child`, `vertical_block_alignment_middle` and
`use_layout_optimization`.

### Left-to-right drawings

`cfglayout.horizontal.GraphHorizontalAdapter` wraps any layout and turns
its top-to-bottom result into a left-to-right one, swapping block sizes,
positions, edge points, arrow directions and the spacing directions of
the configuration:

```python
from cfglayout.grid import GraphGridLayout, LayoutType
from cfglayout.horizontal import GraphHorizontalAdapter

layout = GraphHorizontalAdapter(GraphGridLayout(LayoutType.WIDE))
width, height = layout.calculate_layout(blocks, 0)
```

### Writing your own layout

Subclass `cfglayout.model.GraphLayout` and implement
`calculate_layout(blocks, entry)`, returning `(width, height)`.

### Building blocks

The steps of the grid layout are available as functions in their own
modules: `placement` (cycle removal, rows, columns), `routing` (main
column choice and rough routing), `segments` (segment offsets within edge
columns), `edges` (pixel coordinates and cropping), `linear` (constraint
building and a greedy solver for the compaction program) and `optimize`
(the compaction pass). `structures` holds the two segment trees they use,
`PointSetMinTree` and `RangeAssignMaxTree`.

## What this package does not do

It only computes positions. It does not draw or paint graphs, export
images or other file formats, or offer an interactive or scrollable view;
the block sizes must be supplied by the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```