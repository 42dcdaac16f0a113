"""Logging setup shared by the CLI and library modules"""

import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "vibecoder"


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_LOGGER)


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single stderr handler to the package logger at the given level."""
    logger = get_logger(ROOT_LOGGER)
    logger.setLevel(level.upper())
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    for noisy in ["markdown_it", "sqlalchemy.engine"]:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.debug("Logging configured at %s", level.upper())
    return logger
