# Path: config/logging_setup.py
# Purpose: Configure the standard logging module for scripts and the HTTP API.
# Layer: config.
# Details: Library modules only create module-level loggers; entrypoints call configure_logging once.

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stderr handler at the requested level."""

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
