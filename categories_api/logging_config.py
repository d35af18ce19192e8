"""Logging setup for the categories service."""

from __future__ import annotations

import logging

from categories_api.config import Settings

LOGGER_NAME = "categories_api"


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the package logger with a console handler.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(settings.log_level.upper())
    handler.setFormatter(logging.Formatter(settings.log_format))
    logger.addHandler(handler)

    return logger
