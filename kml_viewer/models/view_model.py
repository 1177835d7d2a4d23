"""Pydantic view models consumed by the presentation layer.

The ViewModel is the single immutable value produced per upload:

- **counts**: element tag tallies for the summary panel
- **details**: one record per supported feature for the details panel
- **geojson**: the converted FeatureCollection for the map widget

Everything is recomputed from scratch on each upload; nothing here
carries behaviour beyond formatting rows for display.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, model_validator

# Labels used in the "Metrics" column of the details table.
METRIC_LABELS: dict[str, str] = {
    "length": "Length",
    "area": "Area",
    "coordinates": "Coordinates",
}


class ElementCountTable(BaseModel):
    """Counts of the recognised KML element tags.

    Field aliases are the KML tag names, so ``model_dump(by_alias=True)``
    yields ``{"Placemark": n, "Point": n, ...}`` in display order.
    """

    placemark: int = Field(default=0, ge=0, alias="Placemark")
    point: int = Field(default=0, ge=0, alias="Point")
    line_string: int = Field(default=0, ge=0, alias="LineString")
    polygon: int = Field(default=0, ge=0, alias="Polygon")
    multi_geometry: int = Field(default=0, ge=0, alias="MultiGeometry")

    model_config = {"populate_by_name": True, "frozen": True}

    @classmethod
    def from_mapping(cls, counts: Mapping[str, int]) -> ElementCountTable:
        """Build from a ``{tag: count}`` mapping keyed by KML tag name."""
        return cls.model_validate(dict(counts))

    def as_mapping(self) -> dict[str, int]:
        """Return ``{tag: count}`` for every tag, zeros included."""
        return self.model_dump(by_alias=True)

    def summary_rows(self) -> list[tuple[str, int]]:
        """Rows of the summary table: tags with a non-zero count, in tag order."""
        return [(tag, count) for tag, count in self.as_mapping().items() if count > 0]


class ElementDetailRecord(BaseModel):
    """Derived detail for one feature with a supported geometry kind.

    Exactly one of ``length``, ``coordinates`` and ``area`` is set.

    Attributes:
        id: Zero-based position of the feature in the unfiltered collection.
        type: GeoJSON geometry type of the feature.
        name: Feature ``name`` property, or ``"Element {id}"``.
        length: Path length, e.g. ``"1234.57 meters"``.
        coordinates: Point position, e.g. ``"-120.5, 46.6"``.
        area: Polygon area, e.g. ``"0.00 sq meters"``.
    """

    id: int = Field(ge=0)
    type: str
    name: str
    length: str | None = None
    coordinates: str | None = None
    area: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _exactly_one_metric(self) -> ElementDetailRecord:
        present = [k for k in METRIC_LABELS if getattr(self, k) is not None]
        if len(present) != 1:
            msg = f"Detail record {self.id} must carry exactly one metric, got {present or 'none'}"
            raise ValueError(msg)
        return self

    @property
    def metric_kind(self) -> str:
        """Which metric this record carries (``length``, ``area`` or ``coordinates``)."""
        for kind in METRIC_LABELS:
            if getattr(self, kind) is not None:
                return kind
        return ""

    @property
    def metric_label(self) -> str:
        """Text for the "Metrics" column (e.g. ``"Length: 12.00 meters"``)."""
        kind = self.metric_kind
        return f"{METRIC_LABELS[kind]}: {getattr(self, kind)}"

    def to_dict(self) -> dict[str, object]:
        """Serialise without the unset metric fields."""
        return self.model_dump(exclude_none=True)


class ViewModel(BaseModel):
    """Everything the viewer renders for one uploaded KML file."""

    source_file: str = ""
    counts: ElementCountTable = Field(default_factory=ElementCountTable)
    details: tuple[ElementDetailRecord, ...] = ()
    geojson: dict[str, Any] = Field(
        default_factory=lambda: {"type": "FeatureCollection", "features": []}
    )

    model_config = {"frozen": True}

    def summary_rows(self) -> list[tuple[str, int]]:
        """Rows of the summary table (``Element Type``, ``Count``)."""
        return self.counts.summary_rows()

    def detail_rows(self) -> list[tuple[str, str, str]]:
        """Rows of the details table (``Name``, ``Type``, ``Metrics``)."""
        return [(d.name, d.type, d.metric_label) for d in self.details]

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict with KML tag names as count keys."""
        return {
            "source_file": self.source_file,
            "counts": self.counts.as_mapping(),
            "details": [d.to_dict() for d in self.details],
            "geojson": self.geojson,
        }

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise to a JSON string (same shape as ``to_dict``)."""
        return json.dumps(self.to_dict(), indent=indent)
