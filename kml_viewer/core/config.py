"""Viewer configuration loaded from environment variables.

All configuration values have sensible defaults, so an embedding
application can use ``ViewerConfig()`` directly and only reach for
``from_env()`` when it wants operators to tune limits.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range.  This catches bad configuration at startup
    rather than on the first upload.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from kml_viewer.core.exceptions import ValidationError

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_ALLOWED_EXTENSIONS: tuple[str, ...] = (".kml",)
DEFAULT_LOG_LEVEL = "INFO"


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        reason: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid configuration {key}={value!r}: {reason}")


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    """Immutable viewer configuration.

    Attributes:
        max_upload_bytes: Largest KML upload accepted, in bytes.
        allowed_extensions: Lower-case file extensions accepted for upload.
        log_level: Level name applied to the ``kml_viewer`` logger.
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_extensions: tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> ViewerConfig:
        """Load and validate configuration from environment variables.

        ``KML_VIEWER_ALLOWED_EXTENSIONS`` is a comma-separated list
        (e.g. ``".kml,.xml"``).

        Raises:
            ConfigValidationError: If a value is out of range or empty.
            ValueError: If ``KML_VIEWER_MAX_UPLOAD_BYTES`` is not an integer.
        """
        extensions_raw = os.getenv(
            "KML_VIEWER_ALLOWED_EXTENSIONS", ",".join(DEFAULT_ALLOWED_EXTENSIONS)
        )
        config = cls(
            max_upload_bytes=int(
                os.getenv("KML_VIEWER_MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))
            ),
            allowed_extensions=tuple(
                ext.strip().lower() for ext in extensions_raw.split(",") if ext.strip()
            ),
            log_level=os.getenv("KML_VIEWER_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper(),
        )
        _validate(config)
        return config


def _validate(config: ViewerConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_upload_bytes <= 0:
        raise ConfigValidationError(
            "KML_VIEWER_MAX_UPLOAD_BYTES",
            config.max_upload_bytes,
            "must be > 0 (bytes)",
        )

    if not config.allowed_extensions:
        raise ConfigValidationError(
            "KML_VIEWER_ALLOWED_EXTENSIONS",
            config.allowed_extensions,
            "must list at least one extension",
        )

    for ext in config.allowed_extensions:
        if not ext.startswith("."):
            raise ConfigValidationError(
                "KML_VIEWER_ALLOWED_EXTENSIONS",
                ext,
                "each extension must start with '.'",
            )

    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigValidationError(
            "KML_VIEWER_LOG_LEVEL",
            config.log_level,
            "must be a logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        )
