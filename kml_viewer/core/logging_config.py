"""Logger configuration for the ``kml_viewer`` namespace.

Modules create their own loggers with ``logging.getLogger("kml_viewer.<module>")``;
this module only decides the level and handler for the package root.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kml_viewer.core.config import ViewerConfig

ROOT_LOGGER_NAME = "kml_viewer"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(config: ViewerConfig) -> logging.Logger:
    """Apply ``config.log_level`` to the package logger.

    A stream handler is attached once; repeated calls only change the level.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(config.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
