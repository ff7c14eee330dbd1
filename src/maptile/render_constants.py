"""Shared render constants."""

from __future__ import annotations


__all__ = [
    "BACKGROUND_COLOR",
    "BORDER_COLOR",
    "BORDER_WIDTH",
    "CANVAS_MODE",
    "DEFAULT_TILE_HEIGHT",
    "DEFAULT_TILE_WIDTH",
    "ROAD_COLOR",
    "ROAD_WIDTH",
    "WATERWAY_WIDTH",
    "WATER_COLOR",
]

# Canvas constants
CANVAS_MODE = "RGBA"
BACKGROUND_COLOR = "#FFFFFF"
DEFAULT_TILE_WIDTH = 512
DEFAULT_TILE_HEIGHT = 512

# Per-shape colors
ROAD_COLOR = "#D2691E"
WATER_COLOR = "#4A90D9"
BORDER_COLOR = "#8B008B"

# Stroke widths in pixels
ROAD_WIDTH = 3
WATERWAY_WIDTH = 2
BORDER_WIDTH = 2
