"""Logging configuration for the reconciliation engine."""

from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union
import logging

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import ConfigurationError

PACKAGE_LOGGER = "amount_recon"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Proposals run on pool threads, so the file log records which one spoke
FILE_FORMAT = (
    "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(message)s"
)


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name from configuration ("debug", "INFO") into a number.

    Raises:
        ConfigurationError: If the name is not a logging level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the ``amount_recon`` logger.

    Args:
        level: Level number or name for the console output
        log_file: Optional rotating log file, always written at DEBUG
        log_format: Format for plain console output
        console: When given, console output goes through rich on this
            console instead of a plain stream handler

    Returns:
        The package logger

    Raises:
        ConfigurationError: If ``level`` is not a known level name
    """
    console_level = resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    # A file handler needs DEBUG records even when the console is quieter
    logger.setLevel(logging.DEBUG if log_file else console_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console is not None:
        console_handler: logging.Handler = RichHandler(
            console=console, show_path=False, rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
