"""Element access and text normalization helpers for KML parsing.

Responsibilities:
- Namespace-agnostic child lookup by local name
- KML coordinate text to position tuples
- Metadata extraction from ExtendedData (typed + untyped)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element

# ---------------------------------------------------------------------------
# Element access
# ---------------------------------------------------------------------------


def local_name(elem: _Element) -> str:
    """Tag name without namespace; ``""`` for comments and processing instructions."""
    tag = elem.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def iter_children(elem: _Element, name: str) -> Iterator[_Element]:
    """Yield direct children whose local name is ``name``."""
    for child in elem:
        if local_name(child) == name:
            yield child


def find_child(elem: _Element, name: str) -> _Element | None:
    """Return the first direct child whose local name is ``name``."""
    return next(iter_children(elem, name), None)


def child_text(elem: _Element, name: str) -> str | None:
    """Stripped text of the first ``name`` child, ``None`` if the child is absent."""
    child = find_child(elem, name)
    if child is None:
        return None
    return "".join(child.itertext()).strip()


# ---------------------------------------------------------------------------
# KML coordinate text parsing
# ---------------------------------------------------------------------------


def parse_coordinates_text(text: str) -> list[tuple[float, ...]]:
    """Parse KML coordinate text (``lon,lat[,alt] ...``) to position tuples.

    Fields are positional: the first is longitude, the second latitude,
    the third (optional) altitude.  Tokens whose longitude or latitude is
    missing or non-numeric are skipped; an empty altitude is dropped.
    """
    coords: list[tuple[float, ...]] = []
    for token in text.split():
        parts = token.split(",")[:3]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            continue
        if len(parts) == 3 and not parts[2]:
            parts = parts[:2]
        try:
            coords.append(tuple(float(p) for p in parts))
        except ValueError:
            continue
    return coords


def parse_gx_coord(text: str) -> tuple[float, ...] | None:
    """Parse a ``gx:coord`` value (``lon lat [alt]``, space separated)."""
    parts = text.split()
    if len(parts) < 2:
        return None
    try:
        return tuple(float(p) for p in parts[:3])
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# ExtendedData metadata extraction
# ---------------------------------------------------------------------------


def extract_extended_data(placemark_elem: _Element) -> dict[str, str]:
    """Extract ExtendedData metadata from a Placemark element.

    Handles both KML metadata patterns:
    - ``ExtendedData/Data/value`` — untyped key-value pairs.
    - ``ExtendedData/SchemaData/SimpleData`` — typed fields defined by a
      ``<Schema>`` element.
    """
    metadata: dict[str, str] = {}
    for extended in iter_children(placemark_elem, "ExtendedData"):
        # Pattern 1: ExtendedData/Data/value (untyped)
        for data_elem in iter_children(extended, "Data"):
            key = data_elem.get("name", "")
            value = child_text(data_elem, "value")
            if key and value:
                metadata[key] = value

        # Pattern 2: ExtendedData/SchemaData/SimpleData (typed via Schema)
        for schema_data in iter_children(extended, "SchemaData"):
            for simple_data in iter_children(schema_data, "SimpleData"):
                key = simple_data.get("name", "")
                if key and simple_data.text and simple_data.text.strip():
                    metadata[key] = simple_data.text.strip()

    return metadata
