"""Shared constants for KML parsing."""

from __future__ import annotations

# KML 2.2 namespace
KML_NAMESPACE = "http://www.opengis.net/kml/2.2"

# Google extension namespace (gx:Track, gx:coord)
GX_NAMESPACE = "http://www.google.com/kml/ext/2.2"

# Root element local name
KML_ROOT_TAG = "kml"
