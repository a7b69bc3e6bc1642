# nextstarter/log_manager.py
"""
Diagnostic logging for nextstarter.

Progress lines meant for the operator are printed by
:mod:`nextstarter.console`; this module only configures the ``nextstarter``
logger used for debugging a run:

- stderr handler, colored through `colorlog` on a TTY
- optional UTF-8 log file (``--log-file``)
- repeated :func:`get_logger` calls never stack handlers

Environment variables
---------------------
NEXTSTARTER_FORCE_COLOR=true|false
    Override TTY detection for the stderr handler.
NEXTSTARTER_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    Level picked by :func:`resolve_level` when ``--verbose`` is not given.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

import colorlog

__all__ = ["get_logger", "resolve_level", "LOGGER_NAME"]

LOGGER_NAME = "nextstarter"

_MARKER = "_nextstarter_stderr_handler"
_DATEFMT = "%H:%M:%S"
_FMT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_COLOR_FMT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s %(levelname)-8s %(name)s [%(module)s:%(lineno)d] %(message)s"

_COLORS = {
    "DEBUG": "blue",
    "INFO": "cyan",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

_TRUTHY = {"1", "true", "yes", "on"}


def _color_enabled(stream) -> bool:
    forced = os.getenv("NEXTSTARTER_FORCE_COLOR")
    if forced is not None:
        return forced.strip().lower() in _TRUTHY
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def _stderr_handler() -> logging.Handler:
    stream = sys.stderr
    handler = logging.StreamHandler(stream)
    if _color_enabled(stream):
        handler.setFormatter(colorlog.ColoredFormatter(_COLOR_FMT, datefmt=_DATEFMT, log_colors=_COLORS))
    else:
        handler.setFormatter(logging.Formatter(_FMT, datefmt=_DATEFMT))
    setattr(handler, _MARKER, True)
    return handler


def _has_file_handler(logger: logging.Logger, path: str) -> bool:
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == path
        for h in logger.handlers
    )


def resolve_level(verbose: bool = False) -> int:
    """Return DEBUG for ``--verbose``, else the ``NEXTSTARTER_LOG_LEVEL`` level.

    Unknown names fall back to WARNING.
    """
    if verbose:
        return logging.DEBUG
    wanted = os.getenv("NEXTSTARTER_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(wanted)
    return level if isinstance(level, int) else logging.WARNING


def get_logger(
    name: str = LOGGER_NAME,
    level: int = logging.WARNING,
    log_to_file: Optional[str] = None,
) -> logging.Logger:
    """Configure and return the logger called ``name``.

    Parameters
    ----------
    name : str, default "nextstarter"
        Logger name.
    level : int, default logging.WARNING
        Level set on the logger (applies to every handler).
    log_to_file : Optional[str], default None
        Extra UTF-8 log file. Each distinct path is attached once; a path
        that cannot be opened is reported on the logger and skipped.

    Returns
    -------
    logging.Logger
        The configured logger, with ``propagate`` disabled.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if not any(getattr(h, _MARKER, False) for h in logger.handlers):
        logger.addHandler(_stderr_handler())

    if log_to_file:
        path = os.path.abspath(log_to_file)
        if not _has_file_handler(logger, path):
            try:
                file_handler = logging.FileHandler(path, encoding="utf-8")
            except OSError as exc:
                logger.error("Cannot write log file %s: %s", path, exc)
            else:
                file_handler.setFormatter(logging.Formatter(_FILE_FMT))
                logger.addHandler(file_handler)

    return logger
