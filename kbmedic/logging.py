"""
Logging — one loguru sink for the whole process.

    logger = get_logger(__name__)
    logger.info("Created order {}", order_id)
"""

from __future__ import annotations

import sys

from loguru import logger

from kbmedic.config import get_config

FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

_sink_level: str | None = None


def _install_sink(level: str) -> None:
    global _sink_level
    if _sink_level == level:
        return
    logger.remove()
    logger.add(sys.stderr, level=level, format=FORMAT)
    logger.configure(extra={"name": "kbmedic"})
    _sink_level = level


def get_logger(name: str | None = None):
    """A loguru logger bound to ``name``, at the configured level."""
    _install_sink(get_config().log_level.upper())
    return logger.bind(name=name) if name else logger


__all__ = ("get_logger",)
