"""Tile rasterization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from .render_constants import BACKGROUND_COLOR, CANVAS_MODE
from .tessellate import BoundingBox, ShapeQueue, tessellate


if TYPE_CHECKING:
    from collections.abc import Iterable

    from .features import RawFeature

__all__ = [
    "compute_scale",
    "render",
    "render_tile",
]

logger = logging.getLogger(__name__)


def compute_scale(bounding_box: BoundingBox, width: int, height: int) -> float | None:
    """Compute the uniform pixels-per-unit scale that fits the box on the canvas.

    The smaller of the per-axis scales is used so the aspect ratio is kept.
    An axis with zero extent does not constrain the scale.

    Args:
        bounding_box: Extent of all shapes on the tile.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        The scale, or None when the box has no extent on either axis.
    """
    candidates = []
    if bounding_box.width > 0:
        candidates.append(width / bounding_box.width)
    if bounding_box.height > 0:
        candidates.append(height / bounding_box.height)
    if not candidates:
        return None
    return min(candidates)


def render(
    shapes: ShapeQueue,
    bounding_box: BoundingBox,
    width: int,
    height: int,
) -> Image.Image:
    """Draw every queued shape back-to-front onto a fresh canvas.

    The queue is consumed. Shapes with fewer than two points are skipped
    since point features have no shape of their own yet.

    Args:
        shapes: Shapes keyed by z-index; drained by this call.
        bounding_box: Extent of all queued shapes.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        An opaque RGBA image of exactly ``width x height`` pixels.
    """
    canvas = Image.new(CANVAS_MODE, (width, height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(canvas)

    scale = compute_scale(bounding_box, width, height)
    if scale is None:
        logger.info("Tile has no extent, rendering background only.")

    drawn = 0
    for shape in shapes.drain():
        # FIXME: point features are not modeled, single-point shapes are dropped here
        if scale is None or len(shape) < 2:
            continue
        shape.translate_and_scale(bounding_box.min_x, bounding_box.min_y, scale, height)
        shape.render(draw)
        drawn += 1

    logger.debug("Drew %d shapes at scale %s", drawn, scale)
    return canvas


def render_tile(features: Iterable[RawFeature], width: int, height: int) -> Image.Image:
    """Tessellate a tile's features and rasterize the result.

    Each call owns its own bounding box and shape queue.

    Args:
        features: Raw features of the tile, in source order.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        The rendered tile.
    """
    bounding_box = BoundingBox()
    shapes = ShapeQueue()

    total = 0
    for feature in features:
        tessellate(feature, bounding_box, shapes)
        total += 1

    logger.info("Tessellated %d features into %d shapes", total, len(shapes))
    return render(shapes, bounding_box, width, height)
