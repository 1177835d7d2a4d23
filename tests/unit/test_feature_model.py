"""Tests for the Feature / FeatureCollection model.

Covers:
- GeoJSON serialisation of each geometry kind
- Deserialisation from GeoJSON dicts (the shape a JS converter emits)
- Contract errors for malformed dicts
- Immutability
"""

from __future__ import annotations

import dataclasses

import pytest

from kml_viewer.models.feature import (
    Feature,
    FeatureCollection,
    FeatureContractError,
    GeometryCollection,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
    geometry_from_dict,
    geometry_to_dict,
)


class TestGeometrySerialisation:
    """Tagged-union geometry <-> GeoJSON dicts."""

    def test_point_to_dict(self) -> None:
        assert geometry_to_dict(Point(coordinates=(1.0, 2.0))) == {
            "type": "Point",
            "coordinates": [1.0, 2.0],
        }

    def test_polygon_to_dict(self) -> None:
        ring = ((0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (0.0, 0.0))
        assert geometry_to_dict(Polygon(coordinates=(ring,))) == {
            "type": "Polygon",
            "coordinates": [[[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [0.0, 0.0]]],
        }

    def test_collection_to_dict(self) -> None:
        collection = GeometryCollection(
            geometries=(Point(coordinates=(0.0, 0.0)), LineString(coordinates=((0.0, 0.0), (1.0, 1.0))))
        )
        data = geometry_to_dict(collection)
        assert data["type"] == "GeometryCollection"
        assert [g["type"] for g in data["geometries"]] == ["Point", "LineString"]

    def test_multipolygon_from_dict(self) -> None:
        geometry = geometry_from_dict(
            {"type": "MultiPolygon", "coordinates": [[[[0, 0], [0, 1], [1, 1], [0, 0]]]]}
        )
        assert isinstance(geometry, MultiPolygon)
        assert geometry.coordinates[0][0][1] == (0.0, 1.0)

    def test_integer_coordinates_become_floats(self) -> None:
        geometry = geometry_from_dict({"type": "Point", "coordinates": [10, 20]})
        assert isinstance(geometry, Point)
        assert geometry.coordinates == (10.0, 20.0)


class TestGeometryContract:
    """Malformed geometry dicts."""

    def test_unknown_type(self) -> None:
        with pytest.raises(FeatureContractError, match="Unsupported geometry type"):
            geometry_from_dict({"type": "Circle", "coordinates": [0, 0]})

    def test_wrong_nesting(self) -> None:
        with pytest.raises(FeatureContractError, match="nested lists"):
            geometry_from_dict({"type": "LineString", "coordinates": [1.0, 2.0]})

    def test_short_position(self) -> None:
        with pytest.raises(FeatureContractError, match="at least lon, lat"):
            geometry_from_dict({"type": "Point", "coordinates": [1.0]})

    def test_non_numeric_position(self) -> None:
        with pytest.raises(FeatureContractError, match="not numeric"):
            geometry_from_dict({"type": "Point", "coordinates": ["a", "b"]})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(FeatureContractError):
            geometry_from_dict([1, 2])  # type: ignore[arg-type]


class TestFeature:
    """Feature and FeatureCollection dict forms."""

    def test_feature_from_dict(self) -> None:
        feature = Feature.from_dict(
            {
                "type": "Feature",
                "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
                "properties": {"name": "Path", "visibility": 1, "note": None},
            }
        )
        assert feature.geometry_type == "LineString"
        assert feature.properties == {"name": "Path", "visibility": "1"}

    def test_feature_without_geometry(self) -> None:
        feature = Feature.from_dict({"type": "Feature", "geometry": None, "properties": None})
        assert feature.geometry is None
        assert feature.geometry_type == ""
        assert feature.properties == {}
        assert feature.to_dict() == {"type": "Feature", "geometry": None, "properties": {}}

    def test_bad_properties(self) -> None:
        with pytest.raises(FeatureContractError, match="properties"):
            Feature.from_dict({"geometry": None, "properties": ["name"]})

    def test_collection_from_dict(self) -> None:
        collection = FeatureCollection.from_dict(
            {
                "type": "FeatureCollection",
                "features": [
                    {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}},
                    {"type": "Feature", "geometry": None, "properties": {"name": "x"}},
                ],
            }
        )
        assert len(collection) == 2
        assert [f.geometry_type for f in collection] == ["Point", ""]

    def test_collection_bad_features(self) -> None:
        with pytest.raises(FeatureContractError, match="features must be a list"):
            FeatureCollection.from_dict({"features": {"a": 1}})

    def test_collection_to_dict(self) -> None:
        collection = FeatureCollection(features=(Feature(geometry=Point(coordinates=(1.0, 2.0))),))
        assert collection.to_dict() == {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [1.0, 2.0]},
                    "properties": {},
                }
            ],
        }

    def test_frozen(self) -> None:
        feature = Feature()
        with pytest.raises(dataclasses.FrozenInstanceError):
            feature.geometry = Point(coordinates=(0.0, 0.0))  # type: ignore[misc]
