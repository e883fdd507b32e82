"""Diagnostic logging for the Dash and Streamlit front ends."""
import logging
import sys
from typing import Optional

from . import config


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route ``cobb_douglas_explorer.*`` records to stdout and, optionally, a file.

    Safe to call repeatedly: handlers from an earlier call are closed and
    replaced, so each record is emitted once.
    """
    logger = logging.getLogger(config.LOGGER_NAME)
    logger.setLevel(level)

    # Streamlit reruns app.py top to bottom after every widget change
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Explorer diagnostics at %s", logging.getLevelName(level))
    return logger
