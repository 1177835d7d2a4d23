"""Validation helpers for KML parsing.

Responsibilities:
- Well-formed XML check (hardened lxml parser)
- KML root element check
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_viewer.activities.parse_kml._constants import KML_NAMESPACE, KML_ROOT_TAG
from kml_viewer.core.exceptions import ValidationError

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_viewer.activities.parse_kml")


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class KmlParseError(ValidationError):
    """Raised when uploaded content is not a parseable KML document."""

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"


# ---------------------------------------------------------------------------
# XML / KML validation
# ---------------------------------------------------------------------------


def parse_xml(content: bytes, source_filename: str = "") -> _Element:
    """Parse bytes into an element tree root.

    Raises:
        KmlParseError: If the content is empty or not well-formed XML.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if not content.strip():
        msg = "KML file is empty"
        raise KmlParseError(msg, source_file=source_filename)

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        return etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise KmlParseError(msg, source_file=source_filename) from exc


def validate_kml_root(root: _Element, source_filename: str = "") -> None:
    """Check that the document root is a ``<kml>`` element.

    The KML 2.2 namespace is expected but not required; un-namespaced
    ``<kml>`` roots from older exporters are accepted with a warning.

    Raises:
        KmlParseError: If the root element is not ``<kml>``.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if not isinstance(root.tag, str):
        msg = "Not a KML file — document has no element root"
        raise KmlParseError(msg, source_file=source_filename)

    qname = etree.QName(root)
    if qname.localname.lower() != KML_ROOT_TAG:
        msg = f"Not a KML file — root element is <{qname.localname}>"
        raise KmlParseError(msg, source_file=source_filename)

    if qname.namespace != KML_NAMESPACE:
        logger.warning(
            "KML root has namespace %r, expected %s | source=%s",
            qname.namespace,
            KML_NAMESPACE,
            source_filename,
        )
