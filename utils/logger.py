"""
Shared logger utility for the retail assistant.

Entry points call ``get_logger`` once for their own name and once for the
``assistant`` package so library modules, which only use
``logging.getLogger(__name__)``, inherit the same handler and format. The level
comes from the argument, else ``ASSISTANT_LOG_LEVEL``, else INFO.
"""

import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level name or number into a logging level; unknown names fall back to INFO."""
    if level is None:
        level = os.getenv("ASSISTANT_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str | None = None, level: int | str | None = None) -> logging.Logger:
    """
    Returns a logger with the specified name and a single stream handler.
    If no name is provided, returns the root logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    return logger
