"""
Editor logging.
All modules import `log` and use log.info(), log.warning(), log.debug().
"""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "raster_editor"


def setup_logger() -> logging.Logger:
    """Create and return the app-wide logger."""
    logger = logging.getLogger(LOGGER_NAME)

    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter("[%(levelname)-7s] %(funcName)s: %(message)s"))
    logger.addHandler(ch)

    return logger


def configure(level: str) -> None:
    lvl = logging.getLevelName(str(level).upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    log.setLevel(lvl)


# Module-level logger instance - import this everywhere
log = setup_logger()
