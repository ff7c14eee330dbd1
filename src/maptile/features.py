"""Raw map features and their classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Mapping


__all__ = [
    "HIGHWAY_TYPES",
    "FeatureProperties",
    "GeometryType",
    "RawFeature",
    "classify",
    "is_border",
]


# Highway values recognized as roads; matched as prefixes so "_link" variants count
HIGHWAY_TYPES: tuple[str, ...] = (
    "motorway",
    "trunk",
    "primary",
    "secondary",
    "tertiary",
    "unclassified",
    "residential",
    "road",
)


class GeometryType(Enum):
    """Geometry kinds a raw feature can carry."""

    POINT = "point"
    POLYLINE = "polyline"
    POLYGON = "polygon"


class FeatureProperties(IntFlag):
    """Semantic properties recognized on a feature."""

    NONE = 0
    HAS_HIGHWAY = 1
    IS_WATERWAY = 2
    IS_BOUNDARY = 4
    IS_RAILWAY = 8  # Reserved, no shape consumes it yet


@dataclass(frozen=True)
class RawFeature:
    """A single decoded map feature as handed over by the data source."""

    geometry_type: GeometryType
    coordinates: tuple[tuple[float, float], ...] = ()
    properties: Mapping[str, str] = field(default_factory=dict)


def is_border(feature: RawFeature) -> bool:
    """Return True for administrative boundaries at country level.

    See https://wiki.openstreetmap.org/wiki/Key:admin_level
    """
    found_boundary = False
    found_level = False
    for key, value in feature.properties.items():
        if key.startswith("boundary") and value.startswith("administrative"):
            found_boundary = True
        if key.startswith("admin_level") and value == "2":
            found_level = True
        if found_boundary and found_level:
            return True
    return False


def classify(feature: RawFeature) -> FeatureProperties:
    """Map a feature's property bag to the set of properties it carries.

    Rules are independent of each other; a feature may carry several flags.
    Choosing which shape to build from them is the tessellator's job.

    Args:
        feature: The feature to classify.

    Returns:
        The combined FeatureProperties flags.
    """
    props = FeatureProperties.NONE

    highway = feature.properties.get("highway")
    if highway is not None and highway.startswith(HIGHWAY_TYPES):
        props |= FeatureProperties.HAS_HIGHWAY

    if feature.geometry_type != GeometryType.POINT and any(
        key.startswith("water") for key in feature.properties
    ):
        props |= FeatureProperties.IS_WATERWAY

    if is_border(feature):
        props |= FeatureProperties.IS_BOUNDARY

    return props
