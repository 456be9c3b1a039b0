"""Logger setup for the ``genomecmp`` namespace."""

from __future__ import annotations

import logging
from typing import Final

PACKAGE_LOGGER: Final = "genomecmp"
LOG_FORMAT: Final = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def get_logger(component: str | None = None, level: int | str | None = None) -> logging.Logger:
    """Return the package logger (or a ``genomecmp.<component>`` child).

    A stderr handler is attached to the package logger the first time it is
    requested, so records from every module (``logging.getLogger(__name__)``)
    reach it. ``level`` overrides the default INFO threshold.
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{component}") if component else root
