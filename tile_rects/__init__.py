"""
Tile Rectangle Decomposition

Merges marked cells of tile grids into a small set of axis-aligned rectangles
that cover exactly those cells, one independent set per partition (level).

Public API:
    - decompose: Decompose several partitions independently
    - decompose_grid: Decompose a single boolean grid
    - decompose_cells: Decompose a single set of marked cells
    - Partition: Bounded set of marked cells
    - Rect: Inclusive cell rectangle
    - rect_to_world: Convert a rectangle to a world-space box
"""

from tile_rects.api import Partition, decompose, decompose_cells, decompose_grid, grid_from_cells
from tile_rects.geometry import (
    CoverageError,
    GridBoundsError,
    Rect,
    WorldBox,
    cell_to_world,
    check_cover,
    rect_to_world,
    rects_to_grid,
)
from tile_rects.plates import Plate

__version__ = "0.1.0"
__all__ = [
    "decompose", "decompose_grid", "decompose_cells", "grid_from_cells", "Partition",
    "Rect", "Plate", "WorldBox", "rect_to_world", "cell_to_world", "rects_to_grid", "check_cover",
    "GridBoundsError", "CoverageError", "__version__",
]
