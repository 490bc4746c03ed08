"""Logging configuration shared by the CLI and the inspection server."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-30s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(level: str = "INFO", stream=None) -> None:
    """Configure the root logger for generation output.

    Unknown level names fall back to INFO. Calling this again replaces the
    previous handler instead of stacking a second one.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)
