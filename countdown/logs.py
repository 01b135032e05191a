"""
Logging setup.

The clock owns the whole screen while it runs, so log records never go to
the terminal. Set ``COUNTDOWN_LOG_FILE`` to write them to a file.
"""

import logging
import os

from .config import DEFAULT_LOG_LEVEL, ENV_LOG_FILE, ENV_LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(log_file: str | None = None, level: str | None = None) -> logging.Logger:
    """Attach a file handler to the package logger, or a NullHandler when no file is set."""
    pkg_logger = logging.getLogger("countdown")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    path = log_file or os.environ.get(ENV_LOG_FILE, "").strip()
    if not path:
        pkg_logger.addHandler(logging.NullHandler())
        pkg_logger.propagate = False
        return pkg_logger

    level_name = (level or os.environ.get(ENV_LOG_LEVEL, "") or DEFAULT_LOG_LEVEL).upper()
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, level_name, logging.INFO))
    pkg_logger.propagate = False
    return pkg_logger
