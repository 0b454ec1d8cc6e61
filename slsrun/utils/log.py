import logging
import sys
from typing import Optional, TextIO, Union

from slsrun import config

LOG_FORMAT = '%(asctime)s | %(levelname)-4s | %(name)-20s | %(message)s'


def get_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Get a logger with a single stderr handler attached"""
    logger = logging.getLogger(name)

    # Child process output owns stdout, so log lines go to stderr
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger; --verbose forces DEBUG."""
    level = logging.DEBUG if verbose else config.get_log_level()
    return get_logger("slsrun", level)
