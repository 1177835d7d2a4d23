"""Geometry metrics activity.

Derives one detail record per feature for the details panel:

- **LineString / MultiLineString**: great-circle path length in metres,
  summed pairwise with the Haversine formula (no planar shortcut;
  tracks may span continents).
- **Point**: the raw ``lon, lat`` pair, unchanged.
- **Polygon**: area placeholder, always zero.  Real area computation is
  not provided; the value is shown as ``0.00 sq meters``.
- Any other kind (MultiPoint, MultiPolygon, GeometryCollection) and
  features without geometry produce no record.

Coordinates are not range-checked: out-of-range degrees give
numerically defined (if meaningless) lengths rather than errors, and
non-finite values (overflowed text such as ``1e400``) give ``nan``.
Paths with fewer than two positions have length zero.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import TYPE_CHECKING

from kml_viewer.core.constants import (
    AREA_UNIT,
    EARTH_RADIUS_M,
    LENGTH_UNIT,
    METRIC_DECIMALS,
    UNNAMED_ELEMENT_TEMPLATE,
)
from kml_viewer.models.feature import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from kml_viewer.models.view_model import ElementDetailRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from kml_viewer.models.feature import Feature, Geometry, Position

logger = logging.getLogger("kml_viewer.activities.compute_metrics")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_element_details(features: Iterable[Feature]) -> tuple[ElementDetailRecord, ...]:
    """Build detail records for every feature with a supported geometry.

    Args:
        features: Features in collection order (a ``FeatureCollection``
            or any iterable of ``Feature``).

    Returns:
        Records in collection order.  Each record's ``id`` is the
        feature's position before unsupported features were skipped.
    """
    details: list[ElementDetailRecord] = []
    skipped = 0
    for index, feature in enumerate(features):
        record = build_detail_record(feature, index)
        if record is None:
            skipped += 1
            continue
        details.append(record)

    logger.info("Element details computed | records=%d | skipped=%d", len(details), skipped)
    return tuple(details)


def build_detail_record(feature: Feature, index: int) -> ElementDetailRecord | None:
    """Detail record for one feature, or ``None`` for unsupported geometry."""
    geometry = feature.geometry
    if geometry is None:
        return None

    name = display_name(feature, index)

    if isinstance(geometry, LineString | MultiLineString):
        return ElementDetailRecord(
            id=index,
            type=geometry.type,
            name=name,
            length=f"{calculate_length_m(geometry):.{METRIC_DECIMALS}f} {LENGTH_UNIT}",
        )
    if isinstance(geometry, Point):
        lon, lat = geometry.coordinates[0], geometry.coordinates[1]
        return ElementDetailRecord(
            id=index,
            type=geometry.type,
            name=name,
            coordinates=f"{format_number(lon)}, {format_number(lat)}",
        )
    if isinstance(geometry, Polygon):
        return ElementDetailRecord(
            id=index,
            type=geometry.type,
            name=name,
            area=f"{calculate_area_sq_m(geometry):.{METRIC_DECIMALS}f} {AREA_UNIT}",
        )
    if isinstance(geometry, MultiPoint | MultiPolygon | GeometryCollection):
        logger.debug("No detail metric for %s feature %d", geometry.type, index)
        return None

    msg = f"Unhandled geometry type {type(geometry).__name__}"
    raise TypeError(msg)


def display_name(feature: Feature, index: int) -> str:
    """Feature ``name`` property, or ``"Element {index}"`` when absent or empty."""
    return feature.properties.get("name") or UNNAMED_ELEMENT_TEMPLATE.format(index=index)


# ---------------------------------------------------------------------------
# Length (Haversine)
# ---------------------------------------------------------------------------


def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two points given in degrees.

    Returns ``nan`` when any argument is not finite, e.g. a coordinate
    written as ``1e400`` that overflowed during parsing.
    """
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just outside [0, 1] for near-antipodal pairs.
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def path_length_m(coords: Sequence[Position]) -> float:
    """Sum of Haversine distances between consecutive ``(lon, lat)`` positions."""
    return sum(
        haversine_distance_m(start[1], start[0], end[1], end[0])
        for start, end in zip(coords, coords[1:])
    )


def calculate_length_m(geometry: Geometry) -> float:
    """Length of a LineString, or the summed lengths of a MultiLineString's paths.

    Other geometry kinds have length zero.
    """
    if isinstance(geometry, LineString):
        return path_length_m(geometry.coordinates)
    if isinstance(geometry, MultiLineString):
        return sum(path_length_m(line) for line in geometry.coordinates)
    return 0.0


# ---------------------------------------------------------------------------
# Area (placeholder)
# ---------------------------------------------------------------------------


def calculate_area_sq_m(geometry: Geometry) -> float:
    """Polygon area placeholder.

    Always returns ``0.0``; polygon area is not computed.
    """
    return 0.0


# ---------------------------------------------------------------------------
# Display formatting
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Render a coordinate the way a JavaScript number prints.

    Integral values drop the trailing ``.0`` (``-120.0`` -> ``"-120"``).
    Other values use the shortest round-tripping digits: positional from
    ``1e-6`` up to ``1e21`` (``"0.00005"``), exponent form outside that
    range (``"1e-7"``, ``"1e+21"``).
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    magnitude = abs(value)
    if value.is_integer() and magnitude < 1e21:
        return str(int(value))
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{int(exponent):+d}"
