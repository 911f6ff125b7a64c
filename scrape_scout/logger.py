"""Logging setup for **ScrapeScout**.

One named logger, ``ScrapeScout``, shared by every module::

    from scrape_scout.logger import logger
    logger.info("Crawling: %s", url)

Console records go to *stderr*; stdout carries the JSON/CSV/text report and
must stay machine-readable. ``--log-file`` adds a rotating file next to it.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, TextIO, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "ScrapeScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def resolve_level(level: _LevelT = "INFO", verbose: bool = False, quiet: bool = False) -> _LevelT:
    """``--verbose`` → DEBUG, ``--quiet`` → ERROR, otherwise *level* as given."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "ERROR"
    return level


def _formatter(fmt: str) -> logging.Formatter:
    return logging.Formatter(fmt)


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """(Re)build the handlers of the ScrapeScout logger.

    Parameters
    ----------
    level
        Numeric or textual level (``"DEBUG"``, ``logging.INFO`` …).
    log_file
        Extra rotating log file; *None* → console only.
    log_format
        Format string shared by all handlers.
    stream
        Console stream; defaults to the *current* ``sys.stderr``.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setFormatter(_formatter(log_format))
    lg.addHandler(console)

    if log_file is not None:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(_formatter(log_format))
        lg.addHandler(file_handler)

    # records must not reach the root logger's stdout handlers
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    verbose: bool = False,
    quiet: bool = False,
) -> logging.Logger:
    """Entry point for the CLI: applies ``--verbose``/``--quiet`` on top of *level*."""
    return configure(
        level=resolve_level(level, verbose, quiet),
        log_file=log_file,
        log_format=log_format,
    )


logger: logging.Logger = init_logging()

__all__ = [
    "logger",
    "configure",
    "init_logging",
    "resolve_level",
    "LOGGER_NAME",
    "DEFAULT_FORMAT",
]
