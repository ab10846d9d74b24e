"""
Tests for the command line interface.
"""

import json

import cv2
import numpy as np
from click.testing import CliRunner

from tile_rects.main import main


def _write_project(path):
    project = {
        "levels": [
            {
                "identifier": "Level_0",
                "layerInstances": [
                    {"__identifier": "IntGrid", "__cWid": 3, "__cHei": 2, "__gridSize": 16,
                     "intGridCsv": [3, 3, 0, 3, 3, 0]},
                ],
            },
            {
                "identifier": "Level_1",
                "layerInstances": [
                    {"__identifier": "IntGrid", "__cWid": 2, "__cHei": 2, "__gridSize": 16,
                     "intGridCsv": [0, 0, 0, 0]},
                ],
            },
        ]
    }
    path.write_text(json.dumps(project), encoding="utf-8")


def test_cli_ldtk_to_json(tmp_path):
    """Test decomposing an LDtk project into a JSON file with world boxes."""
    project = tmp_path / "game.ldtk"
    _write_project(project)
    output = tmp_path / "out" / "rects.json"

    result = CliRunner().invoke(main, [str(project), str(output), "--world"])

    assert result.exit_code == 0, result.output
    assert "Level_0: 4 marked cell(s) -> 1 rectangle(s)" in result.output

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["Level_1"] == [], "Empty level should map to an empty list"
    assert data["Level_0"] == [{
        "left": 0, "right": 1, "top": 1, "bottom": 0,
        "world": {"center_x": 16.0, "center_y": 16.0, "width": 32.0, "height": 32.0},
    }]


def test_cli_mask_image_with_debug(tmp_path, monkeypatch):
    """Test image input, printed output and debug visualizations."""
    monkeypatch.chdir(tmp_path)
    img = np.zeros((2, 2, 4), dtype=np.uint8)
    img[1, :, 3] = 255   # bottom image row
    cv2.imwrite("mask.png", img)

    result = CliRunner().invoke(main, ["mask.png", "--debug"])

    assert result.exit_code == 0, result.output
    assert '"left": 0' in result.output and '"right": 1' in result.output
    assert (tmp_path / "debug" / "mask_rects.png").exists(), "Debug visualization should be saved"


def test_cli_reports_bad_input(tmp_path):
    """Test that unreadable input exits with an error."""
    bad = tmp_path / "broken.ldtk"
    bad.write_text("{}", encoding="utf-8")

    result = CliRunner().invoke(main, [str(bad)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_cli_rejects_non_positive_grid_size(tmp_path):
    """Test that a zero or negative --grid-size is reported instead of crashing."""
    project = tmp_path / "game.ldtk"
    _write_project(project)

    for size in ("0", "-16"):
        result = CliRunner().invoke(main, [str(project), "--world", f"--grid-size={size}"])

        assert result.exit_code != 0, f"--grid-size {size} should fail"
        assert not isinstance(result.exception, ValueError), "Error should not escape as an exception"
        assert "--grid-size" in result.output
