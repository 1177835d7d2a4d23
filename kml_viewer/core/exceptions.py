"""Unified viewer exception taxonomy.

Provides a shared base exception hierarchy for every stage of the
upload -> parse -> convert -> compute flow. Every domain exception
inherits from ``ViewerError`` and carries structured context fields
that let a presentation layer show a consistent error message.

Taxonomy categories
-------------------
- ``ValidationError``   — input/contract violations (bad upload, bad XML, bad config).
- ``ContractError``     — payload/schema drift between stages (malformed GeoJSON dicts).

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and display.
"""

from __future__ import annotations


class ViewerError(Exception):
    """Base exception for all viewer-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"parse_kml"``, ``"upload"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
        source_file: Name of the uploaded file, when known.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        source_file: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.source_file = source_file
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "source_file": self.source_file,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ViewerError):
    """Input validation failure (upload, document, configuration)."""


class ContractError(ViewerError):
    """Payload or schema drift between stages."""
