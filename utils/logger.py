# -*- coding: utf-8 -*-
"""
Logging for the discovery engine.

One ``adspace`` logger carries two handlers: a rotating file under
Config.LOGS_DIR that keeps DEBUG (stale async results, cache hits) and a
console handler for INFO and above. Modules log through child loggers
obtained with get_logger(__name__).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.config import Config

APP_LOGGER_NAME = "adspace"

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s | %(message)s"

_logger: Optional[logging.Logger] = None


def _file_handler(config) -> logging.Handler:
    config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        config.LOG_PATH,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def setup_logger() -> logging.Logger:
    """
    Configure the application logger.

    Safe to call again (main.py does, after module imports already have):
    handlers are replaced, not stacked.
    """
    global _logger

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(_file_handler(Config))
    logger.addHandler(_console_handler())

    _logger = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the application logger, configuring it on first use."""
    if _logger is None:
        return setup_logger().getChild(name)
    return _logger.getChild(name)
