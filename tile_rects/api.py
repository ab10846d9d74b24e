#!/usr/bin/env python3
"""
Public API for the tile rectangle decomposition library.

This module turns grids of marked cells into small sets of rectangles that
cover exactly the marked cells. Grids are grouped into partitions (e.g. the
levels of a game) and no rectangle ever crosses from one partition to another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Mapping, TypeVar

import numpy as np

from tile_rects.geometry import GridBoundsError, Rect
from tile_rects.merging import merge_plate_rows
from tile_rects.plates import iter_plate_rows

K = TypeVar("K", bound=Hashable)

_NO_KEY = object()


@dataclass
class Partition:
    """
    A bounded group of marked cells that is decomposed on its own.

    Attributes:
        width: Number of columns; valid x coordinates are 0..width-1
        height: Number of rows; valid y coordinates are 0..height-1
        cells: Marked (x, y) cells, with (0, 0) at the bottom left
    """
    width: int
    height: int
    cells: Iterable[tuple[int, int]] = ()

    def __post_init__(self) -> None:
        # Materialized so to_grid() can run more than once
        self.cells = frozenset(self.cells)

    @classmethod
    def from_predicate(cls, width: int, height: int,
                       is_marked: Callable[[int, int], bool]) -> Partition:
        """Build a partition by asking is_marked(x, y) for every cell in bounds."""
        _check_size(width, height)
        cells = [(x, y) for y in range(height) for x in range(width) if is_marked(x, y)]
        return cls(width, height, cells)

    def to_grid(self) -> np.ndarray:
        return grid_from_cells(self.cells, self.width, self.height)


def _check_size(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise GridBoundsError(f"Grid size must not be negative, got {width}x{height}")


def grid_from_cells(cells: Iterable[tuple[int, int]], width: int, height: int) -> np.ndarray:
    """
    Build a boolean grid from marked cells.

    Args:
        cells: Marked (x, y) cells
        width: Grid width in cells
        height: Grid height in cells

    Returns:
        Boolean array of shape (height, width), indexed as grid[y, x]

    Raises:
        GridBoundsError: If a cell lies outside [0, width) x [0, height)
    """
    _check_size(width, height)
    grid = np.zeros((height, width), dtype=bool)
    for x, y in cells:
        if not (0 <= x < width and 0 <= y < height):
            raise GridBoundsError(f"Cell ({x}, {y}) is outside the {width}x{height} grid")
        grid[y, x] = True
    return grid


def _as_grid(value: np.ndarray | Partition, key: Hashable = _NO_KEY) -> np.ndarray:
    if isinstance(value, Partition):
        try:
            return value.to_grid()
        except GridBoundsError as e:
            if key is _NO_KEY:
                raise
            raise GridBoundsError(f"Partition {key!r}: {e}") from e

    if not isinstance(value, np.ndarray):
        raise ValueError(f"grid must be a numpy array or Partition, got {type(value)}")
    if value.ndim != 2:
        prefix = "" if key is _NO_KEY else f"Partition {key!r}: "
        raise GridBoundsError(f"{prefix}grid must be a 2D array (height, width), got shape {value.shape}")
    return value.astype(bool, copy=False)


def decompose_grid(grid: np.ndarray | Partition) -> list[Rect]:
    """
    Decompose a single grid into rectangles.

    Rows are scanned from y=0 upwards. Each row is split into plates (maximal
    horizontal runs), and a plate continues the rectangle below it only when it
    has exactly the same left and right columns.

    Args:
        grid: 2D array indexed as grid[y, x] (y=0 is the bottom row), or a
              Partition

    Returns:
        Rectangles covering every marked cell exactly once

    Raises:
        GridBoundsError: If the grid is not 2D or a cell lies out of bounds

    Example:
        >>> import numpy as np
        >>> from tile_rects import decompose_grid
        >>>
        >>> grid = np.array([[1, 1, 0],
        >>>                  [0, 1, 0]], dtype=bool)
        >>> decompose_grid(grid)
        [Rect(left=0, right=1, top=0, bottom=0), Rect(left=1, right=1, top=1, bottom=1)]
    """
    return list(merge_plate_rows(iter_plate_rows(_as_grid(grid))))


def decompose_cells(cells: Iterable[tuple[int, int]], width: int, height: int) -> list[Rect]:
    """Decompose a single set of marked (x, y) cells bounded by width x height."""
    return decompose_grid(grid_from_cells(cells, width, height))


def decompose(partitions: Mapping[K, np.ndarray | Partition]) -> dict[K, list[Rect]]:
    """
    Decompose every partition independently.

    All partitions are validated before any of them is decomposed, so a bounds
    error never leaves a half-built result behind.

    Args:
        partitions: Mapping from partition key to its grid or Partition

    Returns:
        Mapping from the same keys to their rectangles. Partitions without
        marked cells map to an empty list.

    Raises:
        GridBoundsError: If any partition has a cell outside its bounds
    """
    grids = {key: _as_grid(value, key) for key, value in partitions.items()}
    return {key: decompose_grid(grid) for key, grid in grids.items()}
