# -*- coding: utf-8 -*-
"""Package logger.

The core modules only emit records. Output is attached by the host
(``configure_logging``), so importing the engine leaves the root logging
setup alone.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "vector_rig"
LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def configure_logging(debug: bool = False) -> logging.Handler:
    """Send package records to stderr; DEBUG shows every evaluation."""
    handler = next(
        (h for h in logger.handlers if getattr(h, "_vector_rig_console", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._vector_rig_console = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return handler
