"""Data models and schemas.

Defines the data structures passed between stages:
- Feature / FeatureCollection: GeoJSON-style features converted from KML
- Geometry classes: tagged union over GeoJSON geometry types
- ElementCountTable, ElementDetailRecord, ViewModel: presentation data
"""

from kml_viewer.models.feature import (
    Feature,
    FeatureCollection,
    FeatureContractError,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from kml_viewer.models.view_model import (
    ElementCountTable,
    ElementDetailRecord,
    ViewModel,
)

__all__ = [
    "ElementCountTable",
    "ElementDetailRecord",
    "Feature",
    "FeatureCollection",
    "FeatureContractError",
    "Geometry",
    "GeometryCollection",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "ViewModel",
]
