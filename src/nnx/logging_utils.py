"""Logging setup for scripts driving the engine.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached by applications through :func:`configure_logging`.
"""
from __future__ import annotations

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Send ``nnx`` log records to stderr at ``level``."""

    logger = logging.getLogger("nnx")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not any(getattr(handler, "_nnx_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._nnx_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["LOG_FORMAT", "configure_logging"]
