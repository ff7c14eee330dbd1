"""maptile - Render classified map features onto a single raster tile.

Features are classified, tessellated into prioritized shapes and painted
back-to-front onto a fixed-size canvas::

    from maptile import GeometryType, RawFeature, render_tile

    road = RawFeature(GeometryType.POLYLINE, ((0, 0), (1, 1)), {"highway": "primary"})
    image = render_tile([road], 256, 256)
"""

from importlib.metadata import PackageNotFoundError, version

from .features import FeatureProperties, GeometryType, RawFeature, classify
from .render import compute_scale, render, render_tile
from .shapes import Border, Road, Shape, Waterway, ZIndex
from .tessellate import BoundingBox, ShapeQueue, tessellate


try:
    __version__ = version("maptile")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "Border",
    "BoundingBox",
    "FeatureProperties",
    "GeometryType",
    "RawFeature",
    "Road",
    "Shape",
    "ShapeQueue",
    "Waterway",
    "ZIndex",
    "__version__",
    "classify",
    "compute_scale",
    "render",
    "render_tile",
    "tessellate",
]
