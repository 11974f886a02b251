"""Logging setup for the payroll system.

Modules log through ``logging.getLogger(__name__)``; this installs a single
stream handler on the package logger so records from every feature module
share one format.
"""

from __future__ import annotations

import logging

# Root of this package, whichever import path it was loaded under.
PACKAGE_LOGGER = __name__.rpartition(".common.")[0]
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_payroll_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._payroll_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Remove the handler installed by configure_logging (used by tests)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_payroll_handler", False):
            logger.removeHandler(handler)
    logger.propagate = True
