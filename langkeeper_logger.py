# -*- coding: utf-8 -*-
"""
LangKeeper Central Logging Module

Provides the standard logging configuration for the whole application.
Log files are stored under ~/.langkeeper/logs/.

Handlers are only configured on the root 'langkeeper' logger.
Child loggers propagate to root and do not add handlers themselves.
"""

import logging
from pathlib import Path
from datetime import datetime

LOG_DIR = Path.home() / ".langkeeper" / "logs"

LOG_FILE = LOG_DIR / f"langkeeper_{datetime.now().strftime('%Y%m%d')}.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Flag to track if root logger is configured
_root_configured = False


def _configure_root_logger():
    """Configure the root 'langkeeper' logger with handlers (once only)."""
    global _root_configured
    if _root_configured:
        return

    root_logger = logging.getLogger("langkeeper")
    root_logger.setLevel(logging.DEBUG)

    # Prevent propagation to Python's root logger to avoid duplicates
    root_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    except OSError as e:
        root_logger.warning(f"File logging disabled ({LOG_FILE}): {e}")
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)

    _root_configured = True


def set_console_level(level: int):
    """Change the level of the console handler (e.g. for --verbose)."""
    _configure_root_logger()
    for handler in logging.getLogger("langkeeper").handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level)


_configure_root_logger()
logger = logging.getLogger("langkeeper")


def get_logger(name: str) -> logging.Logger:
    """
    Return a child logger for a module.

    Child loggers do NOT add handlers - they propagate to the root 'langkeeper' logger.

    Args:
        name: Module name

    Returns:
        Logger named langkeeper.{name}
    """
    _configure_root_logger()
    return logging.getLogger(f"langkeeper.{name}")
