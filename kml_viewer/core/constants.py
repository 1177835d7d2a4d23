"""Shared viewer constants — single source of truth.

Centralises the KML tag vocabulary, the geodesy constant used for
line lengths, and the unit strings shown in the details panel.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Element counting
# ---------------------------------------------------------------------------

ELEMENT_TAGS: tuple[str, ...] = (
    "Placemark",
    "Point",
    "LineString",
    "Polygon",
    "MultiGeometry",
)
"""KML tags tallied in the summary table, in display order."""

# ---------------------------------------------------------------------------
# Geodesy
# ---------------------------------------------------------------------------

EARTH_RADIUS_M: float = 6_371_000.0
"""Mean Earth radius in metres used by the Haversine formula."""

# ---------------------------------------------------------------------------
# Display units
# ---------------------------------------------------------------------------

LENGTH_UNIT: str = "meters"
AREA_UNIT: str = "sq meters"
METRIC_DECIMALS: int = 2

UNNAMED_ELEMENT_TEMPLATE: str = "Element {index}"
"""Fallback display name for features without a ``name`` property."""
