"""
Functions for visualizing rectangle decompositions on top of their grid.
"""

from __future__ import annotations

from typing import Iterable

import cv2
import numpy as np

from tile_rects.geometry import Rect


def _rect_color(index: int) -> tuple[int, int, int]:
    # Golden-ratio hue steps
    hue = int((index * 0.618033988749895 % 1.0) * 180)
    hsv = np.uint8([[[hue, 200, 255]]])
    b, g, r = cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)[0, 0]
    return int(b), int(g), int(r)


def visualize_rects(grid: np.ndarray, rects: Iterable[Rect], cell_px: int = 16,
                    output_path: str | None = None) -> np.ndarray:
    """
    Draw a grid and the rectangles covering it.

    Marked cells are filled grey, each rectangle is outlined in its own colour.
    The image is y-up: row 0 of the grid is the bottom row of the image.

    Args:
        grid: 2D array of marked flags, indexed as grid[y, x]
        rects: Rectangles to draw
        cell_px: Size of one cell in image pixels
        output_path: Path to save the visualization (optional)

    Returns:
        BGR image of size (height * cell_px, width * cell_px)
    """
    assert cell_px > 0, "Cell size must be positive"
    marked = np.asarray(grid, dtype=bool)
    height, width = marked.shape
    if height == 0 or width == 0:
        return np.zeros((height * cell_px, width * cell_px, 3), dtype=np.uint8)

    # Upscale the grid, flipping it so that y grows upwards in the image
    cells = np.where(np.flipud(marked), 160, 255).astype(np.uint8)
    cells = cv2.resize(cells, (width * cell_px, height * cell_px), interpolation=cv2.INTER_NEAREST)
    vis_img = cv2.cvtColor(cells, cv2.COLOR_GRAY2BGR)

    for i, rect in enumerate(rects):
        x1 = rect.left * cell_px
        x2 = (rect.right + 1) * cell_px - 1
        y1 = (height - 1 - rect.top) * cell_px
        y2 = (height - rect.bottom) * cell_px - 1
        cv2.rectangle(vis_img, (x1, y1), (x2, y2), _rect_color(i), 2)

    if output_path:
        cv2.imwrite(output_path, vis_img)

    return vis_img
