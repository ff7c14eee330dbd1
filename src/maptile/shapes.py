"""Renderable shapes produced by tessellation."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np

from .render_constants import (
    BORDER_COLOR,
    BORDER_WIDTH,
    ROAD_COLOR,
    ROAD_WIDTH,
    WATER_COLOR,
    WATERWAY_WIDTH,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from PIL import ImageDraw

__all__ = [
    "Border",
    "Road",
    "Shape",
    "Waterway",
    "ZIndex",
]


class ZIndex:
    """Draw order per shape type; lower values are painted first."""

    WATERWAY = 1
    BORDER = 2
    ROAD = 3  # Roads always on top


class Shape:
    """Base for the closed set of renderable shapes.

    Each shape owns its screen coordinates as an ``(n, 2)`` float array,
    copied from the feature's geographic coordinates without projection.
    Extra dimensions such as Z are dropped; there is always one screen
    point per source coordinate.
    """

    z_index: ClassVar[int]

    def __init__(self, coordinates: Sequence[Sequence[float]]) -> None:
        coords = np.array(coordinates, dtype=np.float64)
        if len(coords) == 0:
            self.screen_coordinates = np.empty((0, 2), dtype=np.float64)
        else:
            self.screen_coordinates = coords.reshape(len(coords), -1)[:, :2].copy()

    def __len__(self) -> int:
        return len(self.screen_coordinates)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(points={len(self)})"

    def translate_and_scale(
        self,
        origin_x: float,
        origin_y: float,
        scale: float,
        canvas_height: float,
    ) -> None:
        """Move coordinates into canvas pixel space, in place.

        Y is flipped because canvas rows grow downwards.

        Args:
            origin_x: Geographic X mapped to the left canvas edge.
            origin_y: Geographic Y mapped to the bottom canvas edge.
            scale: Pixels per geographic unit, same for both axes.
            canvas_height: Canvas height in pixels.
        """
        coords = self.screen_coordinates
        coords[:, 0] = (coords[:, 0] - origin_x) * scale
        coords[:, 1] = canvas_height - (coords[:, 1] - origin_y) * scale

    def _points(self) -> list[tuple[float, float]]:
        return [(x, y) for x, y in self.screen_coordinates.tolist()]

    def render(self, draw: ImageDraw.ImageDraw) -> None:
        """Draw the shape onto a canvas."""
        raise NotImplementedError


class Road(Shape):
    """A highway drawn as a solid polyline."""

    z_index = ZIndex.ROAD

    def render(self, draw: ImageDraw.ImageDraw) -> None:
        draw.line(self._points(), fill=ROAD_COLOR, width=ROAD_WIDTH, joint="curve")


class Waterway(Shape):
    """A river line or, when closed, a water body."""

    z_index = ZIndex.WATERWAY

    def __init__(self, coordinates: Sequence[Sequence[float]], closed: bool = False) -> None:
        super().__init__(coordinates)
        self.closed = closed

    def __repr__(self) -> str:
        return f"Waterway(points={len(self)}, closed={self.closed})"

    def render(self, draw: ImageDraw.ImageDraw) -> None:
        if self.closed:
            draw.polygon(self._points(), fill=WATER_COLOR)
        else:
            draw.line(self._points(), fill=WATER_COLOR, width=WATERWAY_WIDTH, joint="curve")


class Border(Shape):
    """An administrative boundary."""

    z_index = ZIndex.BORDER

    def render(self, draw: ImageDraw.ImageDraw) -> None:
        draw.line(self._points(), fill=BORDER_COLOR, width=BORDER_WIDTH)
