#!/usr/bin/env python3
"""
Tile Rectangle Decomposition Tool - Command Line Interface

Reads marked tiles from an LDtk project or a mask image and merges them into a
small set of rectangles, e.g. for spawning collision or trigger volumes.

Each LDtk level is decomposed on its own, so rectangles are always split along
level boundaries. A mask image is treated as a single level.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from tile_rects.api import decompose
from tile_rects.geometry import rect_to_world
from tile_rects.int_grid import LevelGrid, load_ldtk_partitions, load_mask_image
from tile_rects.visualization import visualize_rects

LDTK_SUFFIXES = (".ldtk", ".json")


def _load_levels(input_path: str, layer: str, value: int, threshold: int) -> dict[str, LevelGrid]:
    path = Path(input_path)
    if path.suffix.lower() in LDTK_SUFFIXES:
        return load_ldtk_partitions(path, layer=layer, marked_value=value)
    return {path.stem: LevelGrid(grid=load_mask_image(path, threshold=threshold), grid_size=1)}


@click.command(context_settings=dict(show_default=True))
@click.argument('input_path', type=click.Path(exists=True))
@click.argument('output_path', type=click.Path(), required=False)
@click.option('--layer', '-l', default='IntGrid', help='LDtk IntGrid layer to read')
@click.option('--value', '-v', type=int, default=3, help='IntGrid value of the marked tiles')
@click.option('--threshold', '-t', type=click.IntRange(0, 255), default=128,
              help='Alpha (or grey) threshold for mask images')
@click.option('--grid-size', '-g', type=click.FloatRange(min=0, min_open=True),
              help='Cell size in world units (defaults to the LDtk grid size, or 1 for images)')
@click.option('--world', '-w', is_flag=True, help='Output world-space boxes along with cell rectangles')
@click.option('--debug', '-d', is_flag=True, help='Save visualizations of the rectangles for debugging')
def main(input_path: str, output_path: str | None, layer: str, value: int, threshold: int,
         grid_size: float | None, world: bool, debug: bool) -> None:
    """Merge marked tiles into rectangles.

    INPUT_PATH is an LDtk project (.ldtk/.json) or a mask image. In images, a
    pixel is marked when its alpha (or grey value) is above the threshold.

    OUTPUT_PATH is an optional JSON file for the result. Without it, the
    rectangles are printed.

    Rectangles use inclusive cell coordinates with (0, 0) at the bottom left.
    """
    try:
        levels = _load_levels(input_path, layer, value, threshold)
    except (ValueError, OSError, KeyError) as e:
        click.echo(f"Error: Could not load {input_path}: {e}", err=True)
        sys.exit(1)
    click.echo(f"Loaded {len(levels)} level(s) from {input_path}")

    try:
        results = decompose({name: level.grid for name, level in levels.items()})
    except ValueError as e:
        click.echo(f"Error decomposing grid: {e}", err=True)
        sys.exit(1)

    debug_dir = None
    if debug:
        debug_dir = Path("debug")
        debug_dir.mkdir(exist_ok=True)
        click.echo("Debug mode enabled, saving visualizations to 'debug' directory")

    output: dict[str, list[dict]] = {}
    for name, rects in results.items():
        level = levels[name]
        size = grid_size if grid_size is not None else level.grid_size
        click.echo(f"{name}: {int(level.grid.sum())} marked cell(s) -> {len(rects)} rectangle(s)")

        entries = []
        for rect in rects:
            entry: dict = rect.as_dict()
            if world:
                try:
                    entry["world"] = rect_to_world(rect, size).as_dict()
                except ValueError as e:
                    click.echo(f"Error converting {name} to world space: {e}", err=True)
                    sys.exit(1)
            entries.append(entry)
        output[name] = entries

        if debug_dir:
            visualize_rects(level.grid, rects, output_path=str(debug_dir / f"{name}_rects.png"))

    if output_path:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(output, indent=2), encoding="utf-8")
        click.echo(f"Rectangles saved to {out}")
    else:
        click.echo(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
