"""KML parsing activity.

Turns uploaded KML content into a Parsed Document: an lxml element
tree root that the element counter and the GeoJSON converter read but
never mutate.

The parsing pipeline is split into focused stages:
- **_validation**: hardened XML parse, KML root check
- **_normalization**: namespace-agnostic element access, coordinate
  text parsing, ExtendedData extraction

Malformed content fails loudly with ``KmlParseError``; everything
downstream of a successful parse is total.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_viewer.activities.parse_kml._constants import (
    GX_NAMESPACE,
    KML_NAMESPACE,
)
from kml_viewer.activities.parse_kml._normalization import (
    child_text,
    extract_extended_data,
    find_child,
    iter_children,
    local_name,
    parse_coordinates_text,
    parse_gx_coord,
)
from kml_viewer.activities.parse_kml._validation import (
    KmlParseError,
    parse_xml,
    validate_kml_root,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_viewer.activities.parse_kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "GX_NAMESPACE",
    "KML_NAMESPACE",
    "KmlParseError",
    "child_text",
    "extract_extended_data",
    "find_child",
    "iter_children",
    "local_name",
    "parse_coordinates_text",
    "parse_gx_coord",
    "parse_kml_document",
    "parse_xml",
    "validate_kml_root",
]


def parse_kml_document(content: bytes | str, *, source_filename: str = "") -> _Element:
    """Parse KML content into a read-only document root.

    Args:
        content: Raw KML as bytes, or text (encoded as UTF-8 before
            parsing so an XML encoding declaration is honoured).
        source_filename: Original filename, used in logs and errors.

    Returns:
        The ``<kml>`` root element.

    Raises:
        KmlParseError: If the content is empty, not well-formed XML, or
            its root element is not ``<kml>``.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    logger.info("Parsing KML document | source=%s | bytes=%d", source_filename, len(content))

    root = parse_xml(content, source_filename)
    validate_kml_root(root, source_filename)
    return root
