"""Turn raw features into prioritized shapes and a running extent."""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .features import FeatureProperties, GeometryType, RawFeature, classify
from .shapes import Border, Road, Shape, Waterway


if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy as np

__all__ = [
    "SHAPE_RULES",
    "BoundingBox",
    "ShapeQueue",
    "tessellate",
]

logger = logging.getLogger(__name__)


@dataclass
class BoundingBox:
    """Running min/max fold over shape coordinates for one tile."""

    min_x: float = math.inf
    max_x: float = -math.inf
    min_y: float = math.inf
    max_y: float = -math.inf

    @property
    def is_empty(self) -> bool:
        """True until at least one point has been folded in."""
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.max_y - self.min_y

    def include(self, points: np.ndarray) -> None:
        """Fold an ``(n, 2)`` array of points into the box."""
        if len(points) == 0:
            return
        xs = points[:, 0]
        ys = points[:, 1]
        self.min_x = min(self.min_x, float(xs.min()))
        self.max_x = max(self.max_x, float(xs.max()))
        self.min_y = min(self.min_y, float(ys.min()))
        self.max_y = max(self.max_y, float(ys.max()))


class ShapeQueue:
    """Priority collection of shapes, drained lowest priority first.

    Shapes with equal priority come out in insertion order.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, Shape]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, shape: Shape, priority: int) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), shape))

    def pop(self) -> Shape:
        """Remove and return the shape with the lowest priority.

        Raises:
            IndexError: If the queue is empty.
        """
        return heapq.heappop(self._heap)[2]

    def drain(self) -> Iterator[Shape]:
        """Yield shapes in ascending priority, emptying the queue."""
        while self._heap:
            yield self.pop()


ShapeRule = tuple[
    Callable[[RawFeature, FeatureProperties], bool],
    Callable[[RawFeature], Shape],
]

# Ordered decision list: the first matching predicate picks the one shape a feature becomes
SHAPE_RULES: tuple[ShapeRule, ...] = (
    (
        lambda feature, props: bool(props & FeatureProperties.HAS_HIGHWAY),
        lambda feature: Road(feature.coordinates),
    ),
    (
        lambda feature, props: bool(props & FeatureProperties.IS_WATERWAY)
        and feature.geometry_type != GeometryType.POINT,
        lambda feature: Waterway(
            feature.coordinates,
            closed=feature.geometry_type == GeometryType.POLYGON,
        ),
    ),
    (
        lambda feature, props: bool(props & FeatureProperties.IS_BOUNDARY),
        lambda feature: Border(feature.coordinates),
    ),
)


def tessellate(
    feature: RawFeature,
    bounding_box: BoundingBox,
    shapes: ShapeQueue,
) -> Shape | None:
    """Convert one feature into a shape and merge it into the tile state.

    Features that match no rule are dropped without touching the bounding
    box or the queue.

    Args:
        feature: The raw feature to convert.
        bounding_box: Tile extent accumulator, updated in place.
        shapes: Tile shape queue, receives the new shape.

    Returns:
        The shape that was produced, or None if the feature was dropped.
    """
    props = classify(feature)

    shape: Shape | None = None
    for predicate, build in SHAPE_RULES:
        if predicate(feature, props):
            shape = build(feature)
            break

    if shape is None:
        logger.debug("Dropping unmatched %s feature", feature.geometry_type.value)
        return None

    shapes.push(shape, shape.z_index)
    bounding_box.include(shape.screen_coordinates)
    return shape
