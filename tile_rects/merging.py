"""
Functions for merging plates of consecutive rows into rectangles.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator

from tile_rects.geometry import Rect
from tile_rects.plates import Plate


def merge_plate_rows(plate_rows: Iterable[list[Plate]]) -> Iterator[Rect]:
    """
    Grow rectangles upwards through a sequence of plate rows.

    A rectangle keeps growing while the row above contains a plate with exactly
    the same left and right columns. Any change of the run (shift, split, merge)
    finishes the rectangle and starts a new one, so the result is an exact but
    not necessarily minimal cover.

    Args:
        plate_rows: Plates of each row, starting from row 0

    Yields:
        Finished rectangles, as soon as their top row is known
    """
    in_progress: dict[Plate, Rect] = {}
    prev_row: list[Plate] = []

    y = 0
    for y, current_row in enumerate(plate_rows):
        yield from _close_discontinued(in_progress, prev_row, current_row)

        for plate in current_row:
            rect = in_progress.get(plate)
            if rect is None:
                in_progress[plate] = Rect(left=plate.left, right=plate.right, top=y, bottom=y)
            else:
                in_progress[plate] = replace(rect, top=y)

        prev_row = current_row

    # An extra empty row finishes the rectangles touching the last row
    yield from _close_discontinued(in_progress, prev_row, [])

    assert not in_progress, f"Unfinished rectangles after row {y}: {in_progress}"


def _close_discontinued(
    in_progress: dict[Plate, Rect],
    prev_row: list[Plate],
    current_row: list[Plate],
) -> Iterator[Rect]:
    continued = set(current_row)
    for plate in prev_row:
        if plate not in continued:
            # Removing it lets the same plate further up start a fresh rectangle
            rect = in_progress.pop(plate, None)
            if rect is not None:
                yield rect
