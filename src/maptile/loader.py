"""GeoJSON decoding into raw features."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from shapely.errors import ShapelyError
from shapely.geometry import LineString, Point, Polygon, shape

from .features import GeometryType, RawFeature


if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from shapely.geometry.base import BaseGeometry


__all__ = [
    "FeatureLoadError",
    "features_from_geojson",
    "load_features",
]

logger = logging.getLogger(__name__)


class FeatureLoadError(ValueError):
    """Raised when a feature file cannot be read or is not GeoJSON."""


def _coords(geometry: BaseGeometry) -> tuple[tuple[float, float], ...]:
    # Drop Z values, only the planar position is rendered
    return tuple((float(c[0]), float(c[1])) for c in geometry.coords)


def _split_geometry(geometry: BaseGeometry) -> Iterator[tuple[GeometryType, BaseGeometry]]:
    """Yield (type, part) pairs, one per simple part of the geometry."""
    if isinstance(geometry, Point):
        yield GeometryType.POINT, geometry
    elif isinstance(geometry, LineString):
        yield GeometryType.POLYLINE, geometry
    elif isinstance(geometry, Polygon):
        # Holes are not rendered
        yield GeometryType.POLYGON, geometry.exterior
    elif geometry.geom_type in {"MultiPoint", "MultiLineString", "MultiPolygon"}:
        for part in geometry.geoms:
            yield from _split_geometry(part)
    else:
        logger.warning("Skipping unsupported geometry type %s", geometry.geom_type)


def _properties(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): str(value) for key, value in raw.items() if value is not None}


def features_from_geojson(data: Any) -> list[RawFeature]:
    """Convert a GeoJSON Feature or FeatureCollection into raw features.

    Multi-part geometries become one feature per part, sharing properties.
    Features with a missing or invalid geometry are skipped with a warning.

    Args:
        data: Parsed GeoJSON object.

    Returns:
        The raw features in document order.

    Raises:
        FeatureLoadError: If the object is neither a Feature nor a FeatureCollection.
    """
    if not isinstance(data, dict):
        raise FeatureLoadError("GeoJSON root must be an object.")

    kind = data.get("type")
    if kind == "FeatureCollection":
        entries = data.get("features")
        if not isinstance(entries, list):
            raise FeatureLoadError("FeatureCollection has no 'features' list.")
    elif kind == "Feature":
        entries = [data]
    else:
        raise FeatureLoadError(f"Unsupported GeoJSON type: {kind!r}")

    features: list[RawFeature] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or not entry.get("geometry"):
            logger.warning("Skipping feature %d without geometry", index)
            continue
        try:
            geometry = shape(entry["geometry"])
        except (ShapelyError, ValueError, KeyError, TypeError) as e:
            logger.warning("Skipping feature %d with invalid geometry: %s", index, e)
            continue

        properties = _properties(entry.get("properties"))
        for geometry_type, part in _split_geometry(geometry):
            features.append(
                RawFeature(
                    geometry_type=geometry_type,
                    coordinates=_coords(part),
                    properties=properties,
                )
            )

    logger.debug("Decoded %d raw features from %d GeoJSON features", len(features), len(entries))
    return features


def load_features(path: Path) -> list[RawFeature]:
    """Load raw features from a GeoJSON file.

    Args:
        path: Path to a ``.geojson``/``.json`` file.

    Returns:
        The decoded raw features.

    Raises:
        FeatureLoadError: If the file cannot be read or is not valid GeoJSON.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise FeatureLoadError(f"Cannot read feature file '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise FeatureLoadError(f"Feature file '{path}' is not UTF-8 encoded: {e}") from e
    except json.JSONDecodeError as e:
        raise FeatureLoadError(f"Feature file '{path}' is not valid JSON: {e}") from e

    return features_from_geojson(data)
