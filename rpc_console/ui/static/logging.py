#!/usr/bin/env python3
# rpc_console/ui/static/logging.py
from __future__ import annotations

"""
Logging setup for the console.

Log records go to stderr so they never interleave with results on stdout;
writes share PRINT_MUTEX with the run loop's output. An optional rotating
file keeps DEBUG detail, including the thread ('rpc-console', 'getline')
that emitted each record.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rpc_console.ui.utils import ANSI, PRINT_MUTEX, strip_ansi, supports_ansi

STDERR_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(threadName)s [%(levelname)s] %(name)s: %(message)s"

# Rotation policy for LOG_FILE_PATH
MAX_LOG_BYTES = 2_000_000
LOG_BACKUPS = 3


class ColorizingStreamHandler(logging.StreamHandler):
    """Colour by level on a terminal, plain text everywhere else."""

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = supports_ansi(self.stream)

    def _decorate(self, text: str, levelno: int) -> str:
        if not self._use_ansi:
            return strip_ansi(text)
        color = self._LEVEL_COLORS.get(levelno)
        return f"{color}{text}{ANSI['reset']}" if color else text

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self._decorate(self.format(record), record.levelno)
            with PRINT_MUTEX:
                self.stream.write(text + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formats without ANSI sequences; the record itself is left untouched."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _stderr_handler(level: int) -> logging.Handler:
    handler = ColorizingStreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(STDERR_FORMAT))
    return handler


def _file_handler(logfile: str) -> logging.Handler:
    Path(logfile).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        logfile, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(PlainFormatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def init_logger(
    name: str = "rpc_console",
    level: int = logging.WARNING,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the `name` logger tree once; repeated calls add no handlers.

    stderr shows `level` and above. When `logfile` is given the logger itself
    passes DEBUG so the file receives everything.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if logfile else level)
    logger.propagate = False

    kinds = {type(h) for h in logger.handlers}
    if ColorizingStreamHandler not in kinds:
        logger.addHandler(_stderr_handler(level))
    if logfile and RotatingFileHandler not in kinds:
        logger.addHandler(_file_handler(logfile))
    return logger
