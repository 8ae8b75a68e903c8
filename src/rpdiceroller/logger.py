"""
Logging setup.

All records go to stderr so stdout carries only roll output (and stays clean
for the stdio tool server).
"""

from __future__ import annotations

import sys
import logging

ROOT_LOGGER_NAME = "rpdiceroller"

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class ConditionalFormatter(logging.Formatter):
    """Adds the source location to WARNING and above."""

    def format(self, record):
        if record.levelno >= logging.WARNING:
            self._style._fmt = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(module)s:%(lineno)d] - %(message)s"
        else:
            self._style._fmt = "[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s"
        return super().format(record)


def setup_logger(log_level=logging.WARNING):
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)

    # Avoid stacking handlers when called more than once
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConditionalFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def configure_logging(debug: bool = False, log_level: str = "WARNING"):
    if debug:
        log_level = "DEBUG"
    return setup_logger(LEVEL_MAP.get(log_level.upper(), logging.WARNING))


def get_logger(module_name: str):
    """Child logger of the package logger, e.g. ``rpdiceroller.session``."""
    if not module_name.startswith(ROOT_LOGGER_NAME):
        module_name = f"{ROOT_LOGGER_NAME}.{module_name}"
    return logging.getLogger(module_name)
