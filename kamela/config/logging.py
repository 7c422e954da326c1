"""
Logging setup for the "kamela" logger hierarchy.

Console lines are colored by level; LOG_FILE adds a plain file handler with
the calling function and line number. discord.py's own logging is left alone
(the bot is started with log_handler=None).
"""

import logging
import sys
from pathlib import Path

from kamela.config.settings import Settings

ROOT_LOGGER_NAME = "kamela"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


class ColoredFormatter(logging.Formatter):
    """Wraps the level name in an ANSI color for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Other handlers see the same record
        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def _add_handler(
    logger: logging.Logger,
    handler: logging.Handler,
    formatter: logging.Formatter,
    level: int,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(settings: Settings) -> None:
    """Replace the handlers on the "kamela" logger according to settings."""
    level = logging.getLevelName(settings.log_level)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    _add_handler(
        logger,
        logging.StreamHandler(sys.stdout),
        ColoredFormatter(fmt=_CONSOLE_FORMAT, datefmt=_DATE_FORMAT),
        level,
    )

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _add_handler(
            logger,
            logging.FileHandler(log_path),
            logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT),
            level,
        )
        logger.info(f"Logging to file: {log_path}")

    logger.debug(f"Logging initialized at {settings.log_level}")


def get_logger(name: str) -> logging.Logger:
    """Return a logger under "kamela"; module names already there are used as-is."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
