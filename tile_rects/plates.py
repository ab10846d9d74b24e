"""
Functions for collapsing grid rows into horizontal runs ("plates").

A plate is one maximal run of marked cells in a single row, stored as an
inclusive column interval.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np


@dataclass(frozen=True, order=True)
class Plate:
    """
    A horizontal run of marked cells, one cell tall.

    Attributes:
        left: First marked column (inclusive)
        right: Last marked column (inclusive)
    """
    left: int
    right: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1


def row_plates(row: np.ndarray) -> list[Plate]:
    """
    Find the plates of a single grid row.

    Args:
        row: 1D array of marked flags (anything truthy counts as marked)

    Returns:
        Plates in ascending column order, one per maximal run
    """
    marked = np.asarray(row, dtype=bool)
    assert marked.ndim == 1, "Row must be a 1D array"

    # Pad with an unmarked column on both sides so runs touching an edge still
    # produce a rising and a falling edge
    padded = np.concatenate(([False], marked, [False])).astype(np.int8)
    edges = np.diff(padded)

    starts = np.where(edges > 0)[0]
    ends = np.where(edges < 0)[0] - 1

    return [Plate(int(s), int(e)) for s, e in zip(starts, ends)]


def iter_plate_rows(grid: np.ndarray) -> Iterator[list[Plate]]:
    """
    Lazily yield the plates of every row of a grid, from row 0 upwards.

    Args:
        grid: 2D array indexed as grid[y, x], y=0 being the bottom row
    """
    for y in range(grid.shape[0]):
        yield row_plates(grid[y])
