"""Logging setup for the ``imgproxy_transform`` logger hierarchy.

Importing the package configures nothing. Host applications that do not
route logs themselves call :func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging

from imgproxy_transform.config.settings import get_settings

LOGGER_NAME = "imgproxy_transform"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_HANDLER_NAME = "imgproxy_transform.stream"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    ``level`` defaults to ``LOG_LEVEL`` from the settings; unknown names fall
    back to ``INFO``. The root logger is left alone and repeated calls reuse
    the existing handler.
    """

    level_name = (level or get_settings().log_level).upper()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
