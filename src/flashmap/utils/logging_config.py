"""Logging setup shared by the flashmap command line tools."""

from __future__ import annotations

import logging
import sys

from flashmap.config import FLASHMAP_LOG_FORMAT, FLASHMAP_LOG_LEVEL

_HANDLER_NAME = "flashmap-stderr"


def configure_logging(level: int | str = FLASHMAP_LOG_LEVEL) -> None:
    """Send flashmap log records to stderr at ``level``.

    Calling this again replaces the previous handler instead of stacking a
    second one.
    """
    package_logger = logging.getLogger("flashmap")
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(FLASHMAP_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
