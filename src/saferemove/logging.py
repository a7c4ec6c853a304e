"""Logging setup for the saferemove logger hierarchy."""

from __future__ import annotations

import logging as py_logging
import os
import sys
from pathlib import Path
from typing import TextIO

from saferemove.config import LOG_LEVEL_ENV

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def resolve_level(level: str | None = None) -> int:
    raw = level if level is not None else os.environ.get(LOG_LEVEL_ENV, "INFO")
    return LOG_LEVELS.get(raw.strip().upper(), py_logging.INFO)


def configure_logging(
    level: str | None = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Attach fresh handlers to the ``saferemove`` logger.

    ``level=None`` reads the level from ``SAFEREMOVE_LOG_LEVEL``. The file
    handler, when requested, always records DEBUG so retry traces land there.
    """
    resolved = resolve_level(level)

    logger = py_logging.getLogger("saferemove")
    logger.setLevel(py_logging.DEBUG if log_file else resolved)
    logger.handlers.clear()
    formatter = py_logging.Formatter(_FORMAT)

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            logger.warning("log file unavailable path=%s", log_path)
        else:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger
