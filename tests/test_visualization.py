"""
Tests for drawing rectangle decompositions.
"""

import numpy as np

from tile_rects.geometry import Rect
from tile_rects.visualization import visualize_rects


def test_visualize_rects_size_and_orientation(tmp_path):
    """Test image size, y-up orientation and saving to disk."""
    grid = np.zeros((2, 3), dtype=bool)
    grid[0, 0] = True    # bottom-left cell

    out = tmp_path / "vis.png"
    img = visualize_rects(grid, [Rect(0, 0, 0, 0)], cell_px=10, output_path=str(out))

    assert img.shape == (20, 30, 3), "Image should be height*cell_px x width*cell_px BGR"
    assert img.dtype == np.uint8
    assert out.exists(), "Visualization should be written when output_path is given"

    # Centre of the bottom-left cell is grey, centre of the top-left cell is white
    assert tuple(img[15, 5]) == (160, 160, 160)
    assert tuple(img[5, 5]) == (255, 255, 255)

    # Rectangle outline is coloured, not grey
    b, g, r = img[19, 5]
    assert not (b == g == r), "Rectangle outline should be drawn in colour"


def test_visualize_rects_empty_grid():
    """Test that empty grids give an empty image instead of failing."""
    img = visualize_rects(np.zeros((0, 0), dtype=bool), [])
    assert img.shape == (0, 0, 3)
