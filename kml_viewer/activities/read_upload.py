"""Upload reading activity.

Reads an uploaded KML file from disk once, checking the extension and
size limits from ``ViewerConfig`` before any parsing happens.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kml_viewer.core.config import ViewerConfig
from kml_viewer.core.exceptions import ValidationError

logger = logging.getLogger("kml_viewer.activities.read_upload")


class UploadError(ValidationError):
    """Raised when an uploaded file is missing, too large, or of the wrong type."""

    default_stage = "upload"
    default_code = "UPLOAD_REJECTED"


def read_kml_upload(path: Path | str, config: ViewerConfig | None = None) -> bytes:
    """Read an uploaded KML file.

    Args:
        path: Filesystem path to the uploaded file.
        config: Viewer configuration; defaults to ``ViewerConfig()``.

    Returns:
        The raw file content.

    Raises:
        UploadError: If the file does not exist, has a disallowed
            extension, or exceeds ``config.max_upload_bytes``.
    """
    config = config or ViewerConfig()
    path = Path(path)

    if path.suffix.lower() not in config.allowed_extensions:
        msg = (
            f"File type {path.suffix or '<none>'!r} not accepted; "
            f"expected one of {', '.join(config.allowed_extensions)}"
        )
        raise UploadError(msg, source_file=path.name)

    try:
        size = path.stat().st_size
    except OSError as exc:
        msg = f"Cannot read uploaded file: {exc}"
        raise UploadError(msg, source_file=path.name) from exc

    if size > config.max_upload_bytes:
        msg = f"File is {size} bytes, larger than the {config.max_upload_bytes} byte limit"
        raise UploadError(msg, source_file=path.name)

    try:
        content = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read uploaded file: {exc}"
        raise UploadError(msg, source_file=path.name) from exc

    logger.info("Upload read | source=%s | bytes=%d", path.name, len(content))
    return content
