"""Logging utilities with a compact console-friendly formatter."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname).1s %(asctime)s %(name)s:%(lineno)d | %(message)s"

_LEVELLED_LOGGERS = ("", "uvicorn", "uvicorn.error", "uvicorn.access", "trustlens")


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Attach one compact stdout handler to the root logger and set levels.

    Safe to call from every entry point: the handler is only added once,
    later calls just move the level of root, uvicorn and trustlens loggers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if not getattr(configure_logging, "_configured", False):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logging.getLogger().addHandler(handler)
        configure_logging._configured = True  # type: ignore[attr-defined]

    for name in _LEVELLED_LOGGERS:
        logging.getLogger(name).setLevel(level)
