"""
Rectangle type and helpers for converting between cell rectangles, grids and
world-space boxes.

Cell coordinates are y-up: (0, 0) is the bottom-left cell, and grids are
indexed as grid[y, x].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np


class GridBoundsError(ValueError):
    """A cell or grid does not fit the declared grid bounds."""


class CoverageError(ValueError):
    """A set of rectangles is not an exact cover of a grid."""


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle of grid cells. All edges are inclusive.

    Attributes:
        left: Leftmost column
        right: Rightmost column
        top: Highest row
        bottom: Lowest row
    """
    left: int
    right: int
    top: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.top - self.bottom + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def cells(self) -> Iterator[tuple[int, int]]:
        """Iterate over the (x, y) cells covered by the rectangle."""
        for y in range(self.bottom, self.top + 1):
            for x in range(self.left, self.right + 1):
                yield x, y

    def as_dict(self) -> dict[str, int]:
        return {"left": self.left, "right": self.right, "top": self.top, "bottom": self.bottom}


@dataclass(frozen=True)
class WorldBox:
    """
    A rectangle in world units, described by its centre and size.

    Attributes:
        center_x: Horizontal centre
        center_y: Vertical centre
        width: Full width
        height: Full height
    """
    center_x: float
    center_y: float
    width: float
    height: float

    def as_dict(self) -> dict[str, float]:
        return {
            "center_x": self.center_x,
            "center_y": self.center_y,
            "width": self.width,
            "height": self.height,
        }


def _cell_size(grid_size: float | tuple[float, float]) -> tuple[float, float]:
    if isinstance(grid_size, tuple):
        size_w, size_h = grid_size
    else:
        size_w = size_h = grid_size
    if size_w <= 0 or size_h <= 0:
        raise ValueError(f"grid_size must be positive, got {grid_size}")
    return float(size_w), float(size_h)


def rect_to_world(rect: Rect, grid_size: float | tuple[float, float]) -> WorldBox:
    """
    Convert a cell rectangle into a world-space box.

    Cell (0, 0) spans [0, grid_size) on both axes, so the box of a rectangle
    starts at left * grid_size and ends at (right + 1) * grid_size.

    Args:
        rect: Rectangle in cell coordinates
        grid_size: Size of one cell in world units, either a single number or
                   a (width, height) pair

    Returns:
        Box with centre and size in world units
    """
    size_w, size_h = _cell_size(grid_size)
    return WorldBox(
        center_x=(rect.left + rect.right + 1) * size_w / 2.0,
        center_y=(rect.bottom + rect.top + 1) * size_h / 2.0,
        width=rect.width * size_w,
        height=rect.height * size_h,
    )


def cell_to_world(x: int, y: int, grid_size: float | tuple[float, float]) -> tuple[float, float]:
    """Return the world-space centre of a single cell."""
    box = rect_to_world(Rect(left=x, right=x, top=y, bottom=y), grid_size)
    return box.center_x, box.center_y


def rects_to_grid(rects: Iterable[Rect], width: int, height: int) -> np.ndarray:
    """
    Rebuild a boolean grid from rectangles.

    Args:
        rects: Rectangles in cell coordinates
        width: Grid width in cells
        height: Grid height in cells

    Returns:
        Boolean array of shape (height, width), True where any rectangle lies

    Raises:
        GridBoundsError: If a rectangle sticks out of the grid
    """
    grid = np.zeros((height, width), dtype=bool)
    for rect in rects:
        if rect.left < 0 or rect.bottom < 0 or rect.right >= width or rect.top >= height:
            raise GridBoundsError(f"{rect} does not fit a {width}x{height} grid")
        grid[rect.bottom:rect.top + 1, rect.left:rect.right + 1] = True
    return grid


def check_cover(rects: Iterable[Rect], grid: np.ndarray) -> None:
    """
    Verify that rectangles cover exactly the marked cells of a grid, once each.

    Args:
        rects: Rectangles to check
        grid: 2D array of marked flags, indexed as grid[y, x]

    Raises:
        CoverageError: If the rectangles overlap, miss a marked cell or cover
                       an unmarked one
    """
    marked = np.asarray(grid, dtype=bool)
    counts = np.zeros(marked.shape, dtype=np.int32)
    for rect in rects:
        if rect.left > rect.right or rect.bottom > rect.top:
            raise CoverageError(f"{rect} is inverted")
        if rect.left < 0 or rect.bottom < 0 or rect.right >= marked.shape[1] or rect.top >= marked.shape[0]:
            raise CoverageError(f"{rect} lies outside the grid")
        counts[rect.bottom:rect.top + 1, rect.left:rect.right + 1] += 1

    overlapping = np.argwhere(counts > 1)
    if len(overlapping):
        y, x = overlapping[0]
        raise CoverageError(f"Cell ({x}, {y}) is covered {counts[y, x]} times")

    missed = np.argwhere(marked & (counts == 0))
    if len(missed):
        y, x = missed[0]
        raise CoverageError(f"Marked cell ({x}, {y}) is not covered")

    extra = np.argwhere(~marked & (counts > 0))
    if len(extra):
        y, x = extra[0]
        raise CoverageError(f"Unmarked cell ({x}, {y}) is covered")
