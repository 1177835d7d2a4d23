"""Tests for the convert_kml activity.

Covers:
- One feature per Placemark, in document order, through nested Folders
- Geometry mapping: Point, LineString, Polygon rings, gx:Track
- MultiGeometry -> Multi* / GeometryCollection
- Properties: name, description, styleUrl, ExtendedData
- Placemarks without geometry and empty documents
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from kml_viewer.activities.convert_kml import kml_to_feature_collection, placemark_to_feature
from kml_viewer.activities.parse_kml import parse_kml_document
from kml_viewer.models.feature import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPolygon,
    Point,
    Polygon,
)

if TYPE_CHECKING:
    from pathlib import Path

    from kml_viewer.models.feature import FeatureCollection


def _convert(path: Path) -> FeatureCollection:
    return kml_to_feature_collection(parse_kml_document(path.read_bytes()))


class TestMixedFeatures:
    """Conversion of the mixed-features sample."""

    def test_one_feature_per_placemark_in_order(self, mixed_features_kml: Path) -> None:
        collection = _convert(mixed_features_kml)
        assert [f.geometry_type for f in collection] == [
            "Point",
            "LineString",
            "MultiLineString",
            "Polygon",
            "MultiPolygon",
            "Point",
            "",
            "GeometryCollection",
        ]

    def test_point_keeps_altitude(self, mixed_features_kml: Path) -> None:
        point = _convert(mixed_features_kml).features[0].geometry
        assert isinstance(point, Point)
        assert point.coordinates == (-120.5, 46.6, 0.0)

    def test_linestring_coordinates(self, mixed_features_kml: Path) -> None:
        line = _convert(mixed_features_kml).features[1].geometry
        assert isinstance(line, LineString)
        assert line.coordinates == ((-120.5, 46.6), (-120.4, 46.6), (-120.4, 46.7))

    def test_multigeometry_of_lines(self, mixed_features_kml: Path) -> None:
        multi = _convert(mixed_features_kml).features[2].geometry
        assert isinstance(multi, MultiLineString)
        assert [len(path) for path in multi.coordinates] == [2, 3]

    def test_polygon_outer_then_inner_ring(self, mixed_features_kml: Path) -> None:
        polygon = _convert(mixed_features_kml).features[3].geometry
        assert isinstance(polygon, Polygon)
        assert len(polygon.coordinates) == 2
        assert polygon.coordinates[0][0] == (-120.52, 46.60)
        assert polygon.coordinates[1][0] == (-120.515, 46.603)

    def test_multigeometry_of_polygons(self, mixed_features_kml: Path) -> None:
        multi = _convert(mixed_features_kml).features[4].geometry
        assert isinstance(multi, MultiPolygon)
        assert len(multi.coordinates) == 2

    def test_mixed_multigeometry_is_collection(self, mixed_features_kml: Path) -> None:
        collection = _convert(mixed_features_kml).features[7].geometry
        assert isinstance(collection, GeometryCollection)
        assert [g.type for g in collection.geometries] == ["Point", "LineString"]

    def test_placemark_without_geometry(self, mixed_features_kml: Path) -> None:
        feature = _convert(mixed_features_kml).features[6]
        assert feature.geometry is None
        assert feature.properties == {"name": "No geometry"}

    def test_text_properties(self, mixed_features_kml: Path) -> None:
        feature = _convert(mixed_features_kml).features[0]
        assert feature.properties == {
            "name": "Trailhead",
            "description": "Start here",
            "styleUrl": "#trailhead",
        }

    def test_absent_name_not_in_properties(self, mixed_features_kml: Path) -> None:
        assert "name" not in _convert(mixed_features_kml).features[1].properties

    def test_empty_name_kept_as_empty_string(self, mixed_features_kml: Path) -> None:
        assert _convert(mixed_features_kml).features[5].properties["name"] == ""

    def test_extended_data(self, mixed_features_kml: Path) -> None:
        props = _convert(mixed_features_kml).features[3].properties
        assert props["crop"] == "apple"
        assert props["planted"] == "2019"


class TestOtherSources:
    """gx:Track, prefixed tags and empty documents."""

    def test_gx_track_becomes_linestring(self, gx_track_kml: Path) -> None:
        feature = _convert(gx_track_kml).features[0]
        assert isinstance(feature.geometry, LineString)
        assert feature.geometry.coordinates == ((0.0, 0.0, 10.0), (0.0, 1.0, 12.0), (0.0, 2.0, 15.0))

    def test_prefixed_tags_still_convert(self, prefixed_tags_kml: Path) -> None:
        feature = _convert(prefixed_tags_kml).features[0]
        assert feature.properties["name"] == "Prefixed"
        assert isinstance(feature.geometry, Point)
        assert feature.geometry.coordinates == (1.5, 2.5)

    def test_empty_document(self, empty_kml: Path) -> None:
        assert len(_convert(empty_kml)) == 0

    def test_linear_ring_as_linestring(self) -> None:
        placemark = etree.fromstring(
            b"<Placemark><LinearRing><coordinates>0,0 0,1 1,1 0,0</coordinates>"
            b"</LinearRing></Placemark>"
        )
        feature = placemark_to_feature(placemark)
        assert isinstance(feature.geometry, LineString)
        assert len(feature.geometry.coordinates) == 4

    def test_malformed_coordinate_tokens_skipped(self) -> None:
        placemark = etree.fromstring(
            b"<Placemark><LineString><coordinates>0,0 oops 1,x 2,2</coordinates>"
            b"</LineString></Placemark>"
        )
        feature = placemark_to_feature(placemark)
        assert isinstance(feature.geometry, LineString)
        assert feature.geometry.coordinates == ((0.0, 0.0), (2.0, 2.0))

    def test_point_without_coordinates_has_no_geometry(self) -> None:
        placemark = etree.fromstring(b"<Placemark><Point/></Placemark>")
        assert placemark_to_feature(placemark).geometry is None
