"""Tests for the CLI module."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import patch

from PIL import Image

from maptile.cli import _parse_batch_file, cli, create_parser


if TYPE_CHECKING:
    from pathlib import Path


def write_geojson(path: Path) -> Path:
    """Write a small tile with a lake and a road."""
    data = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]],
                },
                "properties": {"water": "lake"},
            },
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [[0, 0], [10, 10]]},
                "properties": {"highway": "primary"},
            },
        ],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestCLI:
    """Tests for CLI functionality."""

    def test_cli_version(self) -> None:
        """--version prints and exits cleanly."""
        assert cli(["--version"]) == 0

    def test_cli_no_input_returns_error(self) -> None:
        """An input file or batch file is required."""
        assert cli([]) == 1

    def test_cli_missing_file(self, tmp_path: Path) -> None:
        """A nonexistent input is reported."""
        assert cli([str(tmp_path / "nope.geojson")]) == 1

    def test_cli_invalid_size(self, tmp_path: Path) -> None:
        """Non-positive sizes are rejected."""
        source = write_geojson(tmp_path / "tile.geojson")
        assert cli([str(source), "--width", "0"]) == 1

    def test_cli_renders_to_output(self, tmp_path: Path) -> None:
        """A tile is rendered to the requested path and size."""
        source = write_geojson(tmp_path / "tile.geojson")
        output = tmp_path / "out" / "tile.png"

        assert cli([str(source), "-o", str(output), "-W", "64", "-H", "48"]) == 0

        with Image.open(output) as image:
            assert image.size == (64, 48)

    def test_cli_default_output_dir(self, tmp_path: Path) -> None:
        """Without -o the tile goes into MAPTILE_OUTPUT_DIR."""
        source = write_geojson(tmp_path / "berlin.geojson")
        out_dir = tmp_path / "tiles"
        with patch.dict("os.environ", {"MAPTILE_OUTPUT_DIR": str(out_dir)}):
            assert cli([str(source)]) == 0
        written = list(out_dir.glob("berlin_*.png"))
        assert len(written) == 1

    def test_cli_invalid_geojson(self, tmp_path: Path) -> None:
        """Broken input files fail with exit code 1."""
        source = tmp_path / "broken.geojson"
        source.write_text("[]", encoding="utf-8")
        assert cli([str(source), "-o", str(tmp_path / "x.png")]) == 1


class TestBatch:
    """Tests for batch rendering."""

    def test_parse_batch_file(self, tmp_path: Path) -> None:
        """Comments and blank lines are skipped, relative paths resolved."""
        batch = tmp_path / "batch.txt"
        batch.write_text("# tiles\n\na.geojson\n/abs/b.geojson\n", encoding="utf-8")

        inputs = _parse_batch_file(str(batch))

        assert inputs[0] == tmp_path / "a.geojson"
        assert str(inputs[1]).endswith("b.geojson")
        assert len(inputs) == 2

    def test_batch_renders_all_tiles(self, tmp_path: Path) -> None:
        """Every listed tile is rendered."""
        write_geojson(tmp_path / "one.geojson")
        write_geojson(tmp_path / "two.geojson")
        batch = tmp_path / "batch.txt"
        batch.write_text("one.geojson\ntwo.geojson\n", encoding="utf-8")
        out_dir = tmp_path / "tiles"

        with patch.dict("os.environ", {"MAPTILE_OUTPUT_DIR": str(out_dir)}):
            result = cli(["--batch", str(batch), "--workers", "2", "-W", "32", "-H", "32"])

        assert result == 0
        assert len(list(out_dir.glob("*.png"))) == 2

    def test_batch_same_stem_tiles_are_kept_apart(self, tmp_path: Path) -> None:
        """Inputs sharing a file name each get their own output."""
        for folder in ("a", "b"):
            (tmp_path / folder).mkdir()
            write_geojson(tmp_path / folder / "tile.geojson")
        batch = tmp_path / "batch.txt"
        batch.write_text("a/tile.geojson\nb/tile.geojson\n", encoding="utf-8")
        out_dir = tmp_path / "tiles"

        with patch.dict("os.environ", {"MAPTILE_OUTPUT_DIR": str(out_dir)}):
            result = cli(["--batch", str(batch), "--workers", "2", "-W", "32", "-H", "32"])

        assert result == 0
        written = sorted(out_dir.glob("tile_*.png"))
        assert len(written) == 2
        for path in written:
            with Image.open(path) as image:
                assert image.size == (32, 32)

    def test_batch_reports_failures(self, tmp_path: Path) -> None:
        """A missing tile makes the batch fail."""
        batch = tmp_path / "batch.txt"
        batch.write_text("missing.geojson\n", encoding="utf-8")
        with patch.dict("os.environ", {"MAPTILE_OUTPUT_DIR": str(tmp_path / "tiles")}):
            assert cli(["--batch", str(batch)]) == 1

    def test_batch_file_not_found(self, tmp_path: Path) -> None:
        """A missing batch file is an error."""
        assert cli(["--batch", str(tmp_path / "none.txt")]) == 1

    def test_empty_batch_file(self, tmp_path: Path) -> None:
        """A batch file without entries is an error."""
        batch = tmp_path / "batch.txt"
        batch.write_text("# nothing\n", encoding="utf-8")
        assert cli(["--batch", str(batch)]) == 1


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Default size and worker count."""
        parsed = create_parser().parse_args(["tile.geojson"])
        assert parsed.input == "tile.geojson"
        assert parsed.width == 512
        assert parsed.height == 512
        assert parsed.workers == 4
        assert parsed.verbose is False
