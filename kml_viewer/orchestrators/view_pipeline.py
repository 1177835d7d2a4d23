"""View pipeline: parsed KML document to ViewModel.

``compute_view_model`` is a pure transform.  The element counter reads
the original document, the metrics calculator reads the converted
feature collection; their results are independent and meet only in
the ViewModel.

Steps:

1. Convert KML → FeatureCollection (``convert_kml``)
2. Count element tags (``count_elements``)
3. Compute detail records (``compute_metrics``)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_viewer.activities.compute_metrics import compute_element_details
from kml_viewer.activities.convert_kml import kml_to_feature_collection
from kml_viewer.activities.count_elements import count_elements
from kml_viewer.activities.parse_kml import parse_kml_document
from kml_viewer.models.view_model import ViewModel

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

    from kml_viewer.models.feature import Feature

logger = logging.getLogger("kml_viewer.orchestrators.view_pipeline")


def compute_view_model(
    document: _Element | _ElementTree,
    *,
    source_filename: str = "",
) -> ViewModel:
    """Derive counts, details and map features from a parsed KML document.

    Args:
        document: Parsed KML document; read, never mutated.
        source_filename: Original filename carried into the ViewModel.

    Returns:
        A fresh ``ViewModel``.
    """
    collection = kml_to_feature_collection(document)
    counts = count_elements(document)
    details = compute_element_details(collection)

    return ViewModel(
        source_file=source_filename,
        counts=counts,
        details=details,
        geojson=collection.to_dict(),
    )


def process_upload(content: bytes | str, *, source_filename: str = "") -> ViewModel:
    """Parse uploaded KML content and compute its ViewModel.

    Raises:
        KmlParseError: If the content is not a parseable KML document.
    """
    document = parse_kml_document(content, source_filename=source_filename)
    view_model = compute_view_model(document, source_filename=source_filename)

    logger.info(
        "Upload processed | source=%s | placemarks=%d | features=%d | details=%d",
        source_filename,
        view_model.counts.placemark,
        len(view_model.geojson.get("features", [])),
        len(view_model.details),
    )
    return view_model


def feature_popup_label(feature: Feature) -> str:
    """Map popup text: ``name``, else ``description``, else ``"{type} Element"``."""
    return (
        feature.properties.get("name")
        or feature.properties.get("description")
        or f"{feature.geometry_type} Element"
    )
