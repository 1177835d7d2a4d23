"""Element counting activity.

Tallies the recognised KML element tags in a parsed document for the
summary panel.  Matching is literal tag-name matching: an element
counts when its qualified name equals the tag exactly, at any depth.
Default-namespace elements (``<Placemark>``) match; prefixed ones
(``<kml:Placemark>``) do not.  ``MultiGeometry`` counts only the
wrapper tag; its members are counted under their own tags.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_viewer.activities.parse_kml import local_name
from kml_viewer.core.constants import ELEMENT_TAGS
from kml_viewer.models.view_model import ElementCountTable

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

logger = logging.getLogger("kml_viewer.activities.count_elements")


def count_elements(document: _Element | _ElementTree) -> ElementCountTable:
    """Count Placemark, Point, LineString, Polygon and MultiGeometry tags.

    Args:
        document: Parsed KML document (root element or element tree).

    Returns:
        An ``ElementCountTable`` with one entry per tag; absent tags are zero.
    """
    counts = dict.fromkeys(ELEMENT_TAGS, 0)
    for elem in document.iter():
        name = local_name(elem)
        if name in counts and elem.prefix is None:
            counts[name] += 1

    logger.debug(
        "Elements counted | %s",
        " | ".join(f"{tag}={count}" for tag, count in counts.items()),
    )
    return ElementCountTable.from_mapping(counts)
