"""Logging helpers.

Library modules only ever call :func:`get_logger`; handlers are
installed exclusively by the CLI through :func:`configure_logging`, so
importing the package never changes the host application's logging.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER: str = "bandou_utils"

_PLAIN_FORMAT: str = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for module *name*."""
    return logging.getLogger(name)


def _build_handler() -> logging.Handler:
    """Prefer Rich's handler, fall back to a plain stderr stream."""
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        return handler
    return RichHandler(show_path=False, rich_tracebacks=False)


def configure_logging(level: str | int) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Calling this more than once replaces the previously installed
    console handler instead of stacking duplicates.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if getattr(existing, "_bandou_console", False):
            logger.removeHandler(existing)

    handler = _build_handler()
    handler._bandou_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
