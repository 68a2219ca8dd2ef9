import logging
import os
import sys
from typing import Optional

# Global logger instance
_logger = None

LOGGER_NAME = "jsonhttp"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ANSI color codes for pretty printing
COLORS = {
    "reset": "\033[0m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "light_black": "\033[90m",
    "bold": "\033[1m",
}


class ColoredFormatter(logging.Formatter):
    """Custom formatter that colorizes the level name of each record."""

    LEVEL_COLORS = {
        logging.DEBUG: COLORS["light_black"],
        logging.INFO: COLORS["green"],
        logging.WARNING: COLORS["yellow"],
        logging.ERROR: COLORS["red"],
        logging.CRITICAL: COLORS["bold"] + COLORS["red"],
    }

    def format(self, record):
        levelname = record.levelname
        message = super().format(record)

        color = self.LEVEL_COLORS.get(record.levelno, COLORS["reset"])
        formatted_level = f"{color}{levelname}{COLORS['reset']}"

        # Only the first occurrence is the level field; the message may repeat the word
        return message.replace(levelname, formatted_level, 1)


def setup_logger(
    log_level: str = "INFO", log_file: Optional[str] = None, enable_colors: bool = True
) -> logging.Logger:
    """Set up and configure the project logger."""
    global _logger

    level = getattr(logging, str(log_level).upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Clear any existing handlers
    if logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if enable_colors:
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        # Use non-colored formatter for file logging
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the global logger instance, initializing it if necessary."""
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger
