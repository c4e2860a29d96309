"""Logging setup for the webterm package.

All modules log through children of the ``webterm`` logger. The handlers
attached here are named so a repeated call swaps them out instead of
stacking duplicates.
"""

from __future__ import annotations

import logging
import sys

from webterm.config.settings import LoggingConfig

LOGGER_NAME = "webterm"
CONSOLE_HANDLER = "webterm.console"
FILE_HANDLER = "webterm.file"


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if h.get_name() in (CONSOLE_HANDLER, FILE_HANDLER)]


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the ``webterm`` logger.

    Handlers installed by a previous call are removed and closed first.
    Handlers added by anything else are left alone.

    Args:
        config: Logging configuration. Defaults to INFO on stderr.

    Returns:
        The configured ``webterm`` logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)

    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    level = logging.getLevelName(config.level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].set_name(CONSOLE_HANDLER)
    if config.file:
        file_handler = logging.FileHandler(config.file, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging configured: level=%s file=%s", config.level, config.file)
    return logger
