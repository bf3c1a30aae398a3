"""Centralized logging configuration for the application.

- ``configure_logging(...)`` attaches a single ``StreamHandler`` to the
  package root logger (``"gestor"``). Called once by ``main.py``.
- ``get_logger(name)`` returns a child logger, installing a ``NullHandler``
  on the root when nothing has been configured (tests, library use).

Modules never attach their own handlers.
"""
import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "gestor"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("GESTOR_LOG_LEVEL")
    if env_val and env_val != level:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the package root logger exactly once.

    ``level`` may be an int or a level name; when None the
    ``GESTOR_LOG_LEVEL`` environment variable is used, else INFO.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``gestor.<name>``, silent until ``configure_logging`` runs."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    if name == _PKG_LOGGER_NAME or name.startswith(_PKG_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_PKG_LOGGER_NAME}.{name}")
