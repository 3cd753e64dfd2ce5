"""Logging setup for applications embedding dexfacts."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "dexfacts"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the ``dexfacts`` logger.

    Calling this more than once only updates the level.
    """
    root = logging.getLogger("dexfacts")
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    return root
