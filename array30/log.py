"""Logging setup for Array30.

Levels (ascending):
    TRACE =  5  every key fed to the engine, every candidate lookup
    DEBUG = 10  mode changes, commits, dictionary stats
    INFO  = 20  startup/shutdown, tables loaded (default)

Usage:
    import array30.log  # registers TRACE before any logger is used
    logger = logging.getLogger(__name__)
    logger.trace("very noisy message")
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_LOG_FILE = '~/.array30.log'
LOG_FORMAT = '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


# Patch Logger class once at import time
logging.Logger.trace = _trace  # type: ignore[attr-defined]


def setup_logging(debug: bool = False, log_file: str | None = None,
                  console: bool = True) -> logging.Logger:
    """Configure the ``array30`` logger hierarchy.

    Args:
        debug: DEBUG level everywhere instead of INFO (file) / WARNING (stderr)
        log_file: path of the rotating log file (default: ~/.array30.log)
        console: also log to stderr; the curses front-end turns this off
            because stderr writes would corrupt the screen

    Calling it twice is harmless: handlers are only installed once.
    """
    logger = logging.getLogger('array30')
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if logger.handlers:
        return logger

    if log_file is None:
        log_file = os.path.expanduser(DEFAULT_LOG_FILE)

    fmt = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    # File handler (rotate log file when it gets too large)
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8',
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
        console_handler.setFormatter(fmt)
        logger.addHandler(console_handler)

    return logger
