"""
Tests for rectangle helpers and world-space conversion.
"""

import numpy as np
import pytest

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


def test_rect_dimensions():
    """Test width, height, area and cell listing of inclusive rectangles."""
    rect = Rect(left=1, right=3, top=5, bottom=4)
    assert (rect.width, rect.height, rect.area) == (3, 2, 6)
    assert list(rect.cells()) == [(1, 4), (2, 4), (3, 4), (1, 5), (2, 5), (3, 5)]
    assert rect.as_dict() == {"left": 1, "right": 3, "top": 5, "bottom": 4}


def test_rect_to_world_scales_and_centres():
    """Test conversion of a cell rectangle to a world-space box with 16 unit tiles."""
    box = rect_to_world(Rect(left=0, right=1, top=0, bottom=0), 16)
    assert box == WorldBox(center_x=16.0, center_y=8.0, width=32.0, height=16.0)

    box = rect_to_world(Rect(left=2, right=2, top=4, bottom=1), 16)
    assert box == WorldBox(center_x=40.0, center_y=48.0, width=16.0, height=64.0)


def test_rect_to_world_non_square_cells():
    """Test a (width, height) grid size."""
    box = rect_to_world(Rect(0, 0, 0, 0), (8, 4))
    assert box == WorldBox(center_x=4.0, center_y=2.0, width=8.0, height=4.0)


def test_rect_to_world_rejects_bad_grid_size():
    """Test that non-positive cell sizes raise."""
    with pytest.raises(ValueError, match="positive"):
        rect_to_world(Rect(0, 0, 0, 0), 0)


def test_cell_to_world():
    """Test the centre of a single cell."""
    assert cell_to_world(0, 0, 16) == (8.0, 8.0)
    assert cell_to_world(3, 1, 16) == (56.0, 24.0)


def test_rects_to_grid():
    """Test rebuilding a grid from rectangles."""
    grid = rects_to_grid([Rect(0, 1, 0, 0), Rect(2, 2, 2, 1)], width=3, height=3)
    expected = np.array([
        [True, True, False],
        [False, False, True],
        [False, False, True],
    ])
    assert np.array_equal(grid, expected)

    with pytest.raises(GridBoundsError):
        rects_to_grid([Rect(0, 3, 0, 0)], width=3, height=3)


def test_check_cover_accepts_exact_cover():
    """Test that an exact cover passes silently."""
    grid = np.array([[1, 1], [0, 1]], dtype=bool)
    check_cover([Rect(0, 1, 0, 0), Rect(1, 1, 1, 1)], grid)


def test_check_cover_detects_problems():
    """Test overlap, missing and extra cells."""
    grid = np.array([[1, 1], [0, 1]], dtype=bool)

    with pytest.raises(CoverageError, match="covered 2 times"):
        check_cover([Rect(0, 1, 0, 0), Rect(1, 1, 1, 0)], grid)

    with pytest.raises(CoverageError, match=r"Marked cell \(1, 1\)"):
        check_cover([Rect(0, 1, 0, 0)], grid)

    with pytest.raises(CoverageError, match=r"Unmarked cell \(0, 1\)"):
        check_cover([Rect(0, 1, 1, 0)], grid)

    with pytest.raises(CoverageError, match="outside"):
        check_cover([Rect(0, 2, 0, 0)], grid)
