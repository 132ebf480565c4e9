"""Logging setup for applications embedding Sprig."""

import logging
import os
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "sprig"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(level: Union[str, int, None] = None) -> int:
    """Resolve an explicit level, then ``SPRIG_LOG_LEVEL``, then WARNING."""
    if level is None:
        level = os.environ.get("SPRIG_LOG_LEVEL", "WARNING")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: Union[str, int, None] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the ``sprig`` logger.

    Only the package logger is touched; calling this twice replaces the
    handler installed by the first call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_sprig_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._sprig_handler = True
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level(level))
    return logger
