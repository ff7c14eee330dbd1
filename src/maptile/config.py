"""Configuration and path management."""

from __future__ import annotations

import itertools
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .render_constants import DEFAULT_TILE_HEIGHT, DEFAULT_TILE_WIDTH


__all__ = [
    "SUPPORTED_FORMATS",
    "TileConfig",
    "generate_output_filename",
    "get_tiles_dir",
]

SUPPORTED_FORMATS = frozenset({"png"})


def get_tiles_dir() -> Path:
    """Get the tile output directory, creating it if necessary."""
    tiles_dir = Path(os.environ.get("MAPTILE_OUTPUT_DIR", "tiles"))
    tiles_dir.mkdir(parents=True, exist_ok=True)
    return tiles_dir


def _sanitize_filename(name: str) -> str:
    """Sanitize string for use in filenames across platforms.

    Replaces invalid characters and handles Windows reserved names.

    Args:
        name: The string to sanitize.

    Returns:
        A safe filename string.
    """
    # Windows: < > : " / \ | ? * plus spaces and commas
    sanitized = re.sub(r'[<>:"/\\|?*\s,\']', "_", name)

    # Leading/trailing dots and spaces break on Windows
    sanitized = sanitized.strip(". ")

    sanitized = re.sub(r"_+", "_", sanitized)

    reserved = {"CON", "PRN", "AUX", "NUL"}
    reserved.update(f"COM{i}" for i in range(1, 10))
    reserved.update(f"LPT{i}" for i in range(1, 10))

    if sanitized.upper() in reserved:
        sanitized = f"_{sanitized}"

    return sanitized or "unnamed"


def generate_output_filename(name: str, output_format: str = "png") -> Path:
    """Generate a unique output filename from a tile name and the current time.

    The file is created empty to reserve the name, so concurrent batch
    workers rendering tiles with the same name never share a path. A
    counter suffix is added when the name is already taken.

    Args:
        name: Tile name, usually the input file stem.
        output_format: The file format.

    Returns:
        The full path to the output file.
    """
    tiles_dir = get_tiles_dir()
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    stem = f"{_sanitize_filename(name.lower())}_{timestamp}"
    ext = output_format.lower()

    candidate = tiles_dir / f"{stem}.{ext}"
    counter = itertools.count(2)
    while True:
        try:
            candidate.touch(exist_ok=False)
            return candidate
        except FileExistsError:
            candidate = tiles_dir / f"{stem}_{next(counter)}.{ext}"


@dataclass
class TileConfig:
    """Configuration for rendering one tile."""

    width: int = DEFAULT_TILE_WIDTH
    height: int = DEFAULT_TILE_HEIGHT
    output_format: str = "png"

    def __post_init__(self) -> None:
        """Validate canvas size and output format."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Tile size must be positive, got {self.width}x{self.height}.")
        self.output_format = self.output_format.lower()
        if self.output_format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported output format '{self.output_format}'. "
                f"Supported: {', '.join(sorted(SUPPORTED_FORMATS))}"
            )

    def get_output_path(self, name: str) -> Path:
        """Generate the output file path for a tile name."""
        return generate_output_filename(name, self.output_format)
