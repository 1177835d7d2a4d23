"""KML to GeoJSON conversion activity.

Walks every Placemark of a parsed document in document order (Folders
and Documents at any depth) and converts it to a ``Feature``.  The
rules follow the ``togeojson`` library used by browser KML viewers:

- Point, LineString, LinearRing (as LineString), Polygon, gx:Track
  (as LineString) and gx:MultiTrack are recognised.
- MultiGeometry is flattened recursively.  One member becomes that
  geometry; several members of one kind become MultiPoint,
  MultiLineString or MultiPolygon; mixed kinds become a
  GeometryCollection.  A Placemark with no geometry keeps ``None``.
- Properties carry ``name``, ``description`` and ``styleUrl`` when
  present, plus ExtendedData key/value pairs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_viewer.activities.parse_kml import (
    child_text,
    extract_extended_data,
    find_child,
    iter_children,
    local_name,
    parse_coordinates_text,
    parse_gx_coord,
)
from kml_viewer.models.feature import (
    Feature,
    FeatureCollection,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

    from kml_viewer.models.feature import Geometry, Position

logger = logging.getLogger("kml_viewer.activities.convert_kml")

# Placemark children copied verbatim into feature properties.
_TEXT_PROPERTIES = ("name", "description", "styleUrl")


def kml_to_feature_collection(document: _Element | _ElementTree) -> FeatureCollection:
    """Convert a parsed KML document to a FeatureCollection.

    Args:
        document: Parsed KML document (root element or element tree).

    Returns:
        One feature per Placemark, in document order.
    """
    features = [
        placemark_to_feature(elem)
        for elem in document.iter()
        if local_name(elem) == "Placemark"
    ]
    logger.info(
        "KML converted | features=%d | with_geometry=%d",
        len(features),
        sum(1 for f in features if f.geometry is not None),
    )
    return FeatureCollection(features=tuple(features))


def placemark_to_feature(placemark: _Element) -> Feature:
    """Convert a single ``<Placemark>`` element to a Feature."""
    properties: dict[str, str] = {}
    for key in _TEXT_PROPERTIES:
        value = child_text(placemark, key)
        if value is not None:
            properties[key] = value
    for key, value in extract_extended_data(placemark).items():
        properties.setdefault(key, value)

    return Feature(
        geometry=_combine(_collect_geometries(placemark)),
        properties=properties,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _collect_geometries(elem: _Element) -> list[Geometry]:
    """Collect the geometries directly under ``elem``, flattening MultiGeometry."""
    geometries: list[Geometry] = []
    for child in elem:
        name = local_name(child)
        if name == "MultiGeometry":
            geometries.extend(_collect_geometries(child))
        elif name == "Point":
            coords = _coordinates(child)
            if coords:
                geometries.append(Point(coordinates=coords[0]))
        elif name in ("LineString", "LinearRing"):
            geometries.append(LineString(coordinates=tuple(_coordinates(child))))
        elif name == "Polygon":
            polygon = _polygon(child)
            if polygon is not None:
                geometries.append(polygon)
        elif name == "Track":
            geometries.append(_track(child))
        elif name == "MultiTrack":
            geometries.extend(_track(track) for track in iter_children(child, "Track"))
    return geometries


def _combine(geometries: list[Geometry]) -> Geometry | None:
    if not geometries:
        return None
    if len(geometries) == 1:
        return geometries[0]

    kinds = {g.type for g in geometries}
    if kinds == {"Point"}:
        return MultiPoint(coordinates=tuple(g.coordinates for g in geometries))  # type: ignore[union-attr]
    if kinds == {"LineString"}:
        return MultiLineString(coordinates=tuple(g.coordinates for g in geometries))  # type: ignore[union-attr]
    if kinds == {"Polygon"}:
        return MultiPolygon(coordinates=tuple(g.coordinates for g in geometries))  # type: ignore[union-attr]
    return GeometryCollection(geometries=tuple(geometries))


def _coordinates(elem: _Element) -> list[Position]:
    text = child_text(elem, "coordinates")
    return parse_coordinates_text(text) if text else []


def _polygon(elem: _Element) -> Polygon | None:
    rings: list[tuple[Position, ...]] = []
    for boundary_name in ("outerBoundaryIs", "innerBoundaryIs"):
        for boundary in iter_children(elem, boundary_name):
            ring = find_child(boundary, "LinearRing")
            if ring is None:
                continue
            coords = _coordinates(ring)
            if coords:
                rings.append(tuple(coords))
    if not rings:
        return None
    return Polygon(coordinates=tuple(rings))


def _track(elem: _Element) -> LineString:
    coords: list[Position] = []
    for coord in iter_children(elem, "coord"):
        position = parse_gx_coord(coord.text or "")
        if position is not None:
            coords.append(position)
    return LineString(coordinates=tuple(coords))
