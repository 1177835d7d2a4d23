"""Data model for features converted from a KML document.

A Feature pairs one geometry with the string properties of its source
Placemark.  Geometry is a tagged union: every geometry class exposes a
``type`` tag equal to its GeoJSON type name, and coordinates keep the
GeoJSON ``(lon, lat[, alt])`` order.

The FeatureCollection is the output of the ``convert_kml`` activity and
the input to the ``compute_metrics`` activity.  Both serialise to and
from plain GeoJSON dicts for the map layer.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from kml_viewer.core.exceptions import ContractError

Position = tuple[float, ...]
"""A single ``(lon, lat)`` or ``(lon, lat, alt)`` coordinate."""


class FeatureContractError(ContractError):
    """Raised when a GeoJSON dict does not match the feature model."""

    default_stage = "convert_kml"
    default_code = "FEATURE_CONTRACT_VIOLATION"


# ---------------------------------------------------------------------------
# Geometry tagged union
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Point:
    coordinates: Position
    type: ClassVar[str] = "Point"


@dataclass(frozen=True, slots=True)
class MultiPoint:
    coordinates: tuple[Position, ...] = ()
    type: ClassVar[str] = "MultiPoint"


@dataclass(frozen=True, slots=True)
class LineString:
    coordinates: tuple[Position, ...] = ()
    type: ClassVar[str] = "LineString"


@dataclass(frozen=True, slots=True)
class MultiLineString:
    coordinates: tuple[tuple[Position, ...], ...] = ()
    type: ClassVar[str] = "MultiLineString"


@dataclass(frozen=True, slots=True)
class Polygon:
    """Polygon rings: exterior first, then holes."""

    coordinates: tuple[tuple[Position, ...], ...] = ()
    type: ClassVar[str] = "Polygon"


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    coordinates: tuple[tuple[tuple[Position, ...], ...], ...] = ()
    type: ClassVar[str] = "MultiPolygon"


@dataclass(frozen=True, slots=True)
class GeometryCollection:
    geometries: tuple[Geometry, ...] = ()
    type: ClassVar[str] = "GeometryCollection"


Geometry = (
    Point
    | MultiPoint
    | LineString
    | MultiLineString
    | Polygon
    | MultiPolygon
    | GeometryCollection
)

# Nesting depth of the coordinate array for each coordinate-bearing type.
_COORDINATE_DEPTH: dict[str, int] = {
    "Point": 0,
    "MultiPoint": 1,
    "LineString": 1,
    "MultiLineString": 2,
    "Polygon": 2,
    "MultiPolygon": 3,
}

_GEOMETRY_CLASSES: dict[str, type] = {
    cls.type: cls
    for cls in (Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon)
}


def geometry_to_dict(geometry: Geometry) -> dict[str, Any]:
    """Serialise a geometry to a GeoJSON geometry dict."""
    if isinstance(geometry, GeometryCollection):
        return {
            "type": geometry.type,
            "geometries": [geometry_to_dict(g) for g in geometry.geometries],
        }
    return {
        "type": geometry.type,
        "coordinates": _to_lists(geometry.coordinates, _COORDINATE_DEPTH[geometry.type]),
    }


def geometry_from_dict(data: Mapping[str, Any]) -> Geometry:
    """Deserialise a GeoJSON geometry dict.

    Raises:
        FeatureContractError: If the type is unknown or the coordinate
            array is not nested as the type requires.
    """
    if not isinstance(data, Mapping):
        msg = f"geometry must be a mapping, got {type(data).__name__}"
        raise FeatureContractError(msg)

    geom_type = data.get("type", "")
    if geom_type == "GeometryCollection":
        members = data.get("geometries", [])
        if not isinstance(members, list | tuple):
            msg = f"geometries must be a list, got {type(members).__name__}"
            raise FeatureContractError(msg)
        return GeometryCollection(geometries=tuple(geometry_from_dict(m) for m in members))

    cls = _GEOMETRY_CLASSES.get(geom_type)
    if cls is None:
        msg = f"Unsupported geometry type {geom_type!r}"
        raise FeatureContractError(msg)

    coords = _to_tuples(data.get("coordinates", []), _COORDINATE_DEPTH[geom_type], geom_type)
    return cls(coordinates=coords)


def _to_lists(value: Any, depth: int) -> list[Any]:
    if depth == 0:
        return list(value)
    return [_to_lists(v, depth - 1) for v in value]


def _to_tuples(value: Any, depth: int, geom_type: str) -> tuple[Any, ...]:
    if not isinstance(value, list | tuple):
        msg = f"{geom_type} coordinates must be nested lists, got {type(value).__name__}"
        raise FeatureContractError(msg)
    if depth == 0:
        if len(value) < 2:
            msg = f"{geom_type} position {value!r} needs at least lon, lat"
            raise FeatureContractError(msg)
        try:
            return tuple(float(v) for v in value)
        except (TypeError, ValueError) as exc:
            msg = f"{geom_type} position {value!r} is not numeric"
            raise FeatureContractError(msg) from exc
    return tuple(_to_tuples(v, depth - 1, geom_type) for v in value)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Feature:
    """A single Placemark converted to a GeoJSON-style feature.

    Attributes:
        geometry: The Placemark geometry, or ``None`` when it has none.
        properties: String properties (``name``, ``description``,
            ``styleUrl`` and ExtendedData keys).
    """

    geometry: Geometry | None = None
    properties: dict[str, str] = field(default_factory=dict)

    @property
    def geometry_type(self) -> str:
        """GeoJSON type tag of the geometry, ``""`` when absent."""
        return self.geometry.type if self.geometry is not None else ""

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON Feature dict."""
        return {
            "type": "Feature",
            "geometry": geometry_to_dict(self.geometry) if self.geometry is not None else None,
            "properties": dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Feature:
        """Deserialise from a GeoJSON Feature dict.

        Missing properties become an empty mapping; ``None`` property
        values are dropped and others are coerced to ``str``.

        Raises:
            FeatureContractError: If the geometry or properties are malformed.
        """
        if not isinstance(data, Mapping):
            msg = f"feature must be a mapping, got {type(data).__name__}"
            raise FeatureContractError(msg)

        geometry_raw = data.get("geometry")
        geometry = geometry_from_dict(geometry_raw) if geometry_raw is not None else None

        props_raw = data.get("properties") or {}
        if not isinstance(props_raw, Mapping):
            msg = f"properties must be a mapping, got {type(props_raw).__name__}"
            raise FeatureContractError(msg)

        return cls(
            geometry=geometry,
            properties={str(k): str(v) for k, v in props_raw.items() if v is not None},
        )


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """Ordered, immutable sequence of features."""

    features: tuple[Feature, ...] = ()

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON FeatureCollection dict."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_dict() for f in self.features],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FeatureCollection:
        """Deserialise from a GeoJSON FeatureCollection dict.

        Raises:
            FeatureContractError: If ``features`` is not a list or any
                feature is malformed.
        """
        features_raw = data.get("features", [])
        if not isinstance(features_raw, list | tuple):
            msg = f"features must be a list, got {type(features_raw).__name__}"
            raise FeatureContractError(msg)
        return cls(features=tuple(Feature.from_dict(f) for f in features_raw))
