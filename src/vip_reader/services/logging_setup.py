"""Logging setup - rich console output plus a diagnostic log file."""

import logging
from pathlib import Path

from rich.logging import RichHandler

LOGGER_NAME = "vip_reader"


def setup_logging(log_file_path: Path, level: str = "INFO") -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once; previous handlers are replaced.

    Args:
        log_file_path: Path to the diagnostic log file.
        level: Console logging level (DEBUG, INFO, WARNING, ERROR).

    Returns:
        The configured "vip_reader" logger.
    """
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(rich_tracebacks=True, show_path=False)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.addHandler(console_handler)

    # File gets everything
    file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    return logger
