"""
Functions for reading occupancy grids from level data and mask images.

Level editors and images store rows top first, while grids in this library are
y-up, so every loader here flips the row order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import cv2
import numpy as np

from tile_rects.geometry import GridBoundsError


@dataclass
class LevelGrid:
    """
    Occupancy grid of one level.

    Attributes:
        grid: Boolean array indexed as grid[y, x], y=0 being the bottom row
        grid_size: Size of one cell in world units (pixels in LDtk)
    """
    grid: np.ndarray
    grid_size: int


def grid_from_int_csv(values: Sequence[int], width: int, height: int, marked_value: int) -> np.ndarray:
    """
    Build a boolean grid from a flat IntGrid value list.

    Args:
        values: Row-major values, top row first (LDtk "intGridCsv")
        width: Number of columns
        height: Number of rows
        marked_value: IntGrid value that counts as marked

    Returns:
        Boolean array of shape (height, width), y-up

    Raises:
        GridBoundsError: If the number of values does not match width * height
    """
    if width < 0 or height < 0:
        raise GridBoundsError(f"Grid size must not be negative, got {width}x{height}")
    if len(values) != width * height:
        raise GridBoundsError(f"Expected {width * height} values for a {width}x{height} grid, got {len(values)}")

    rows = np.asarray(values, dtype=np.int64).reshape((height, width))
    return np.flipud(rows == marked_value)


def load_ldtk_partitions(path: str | Path, layer: str = "IntGrid", marked_value: int = 3) -> dict[str, LevelGrid]:
    """
    Load one occupancy grid per level from an LDtk project file.

    Args:
        path: Path to the .ldtk project (JSON)
        layer: Identifier of the IntGrid layer to read
        marked_value: IntGrid value that counts as marked

    Returns:
        Mapping from level identifier to its grid and cell size. Levels that
        do not have the layer are left out.

    Raises:
        ValueError: If the project stores levels in separate files, repeats a level
                    identifier or is not a valid LDtk project
    """
    with open(path, "r", encoding="utf-8") as f:
        project = json.load(f)

    # Multi-world projects keep an empty top-level "levels" list
    levels = project.get("levels")
    if not levels and project.get("worlds"):
        levels = [level for world in project["worlds"] for level in world.get("levels", [])]
    if not isinstance(levels, list):
        raise ValueError(f"{path} does not look like an LDtk project (no levels)")

    result: dict[str, LevelGrid] = {}
    seen: set[str] = set()
    for level in levels:
        name = level["identifier"]
        if name in seen:
            raise ValueError(f"Level identifier {name!r} is used more than once")
        seen.add(name)
        layer_instances = level.get("layerInstances")
        if layer_instances is None:
            raise ValueError(f"Level {name!r} is saved in a separate file, which is not supported")

        for instance in layer_instances:
            if instance.get("__identifier") != layer:
                continue
            grid = grid_from_int_csv(instance.get("intGridCsv", []), instance["__cWid"], instance["__cHei"],
                                     marked_value)
            result[name] = LevelGrid(grid=grid, grid_size=int(instance["__gridSize"]))
            break

    return result


def load_mask_image(path: str | Path, threshold: int = 128) -> np.ndarray:
    """
    Load an image as an occupancy grid, one cell per pixel.

    A pixel is marked when its alpha value is above the threshold. Images
    without alpha use their grey value instead.

    Args:
        path: Image file readable by OpenCV
        threshold: Threshold value for binary thresholding (0-255)

    Returns:
        Boolean array indexed as grid[y, x], y=0 being the bottom image row

    Raises:
        ValueError: If the image cannot be loaded
    """
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError(f"Could not load image from {path}")

    if img.ndim == 2:
        channel = img
    elif img.shape[2] == 4:
        channel = img[:, :, 3]
    else:
        channel = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)

    # Scale by the range of the pixel type so the threshold keeps its 8-bit meaning
    if channel.dtype == np.uint16:
        channel = (channel >> 8).astype(np.uint8)
    elif channel.dtype != np.uint8:
        channel = (np.clip(channel, 0.0, 1.0) * 255).astype(np.uint8)

    _, binary = cv2.threshold(channel, threshold, 255, cv2.THRESH_BINARY)
    return np.flipud(binary > 0)
