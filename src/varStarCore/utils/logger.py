"""
Logging utilities for varStarCore.

Every module obtains its logger through get_logger(); applications call
setup_logging() once to route records to stdout and, optionally, a file.
"""

import logging
import sys
from typing import Optional, Union
from pathlib import Path


LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Loggers live under the ``varStarCore`` namespace so that a single
    setup_logging() call controls the whole package.

    Args:
        name: Logger name
        level: Logging level

    Returns:
        Logger instance
    """
    if not name.startswith("varStarCore"):
        name = f"varStarCore.{name}"
    logger = logging.getLogger(name)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

        logger.addHandler(console_handler)
        logger.setLevel(level)

        # Let records reach the root logger when setup_logging() added a file handler
        logger.propagate = True

    return logger


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_format: Optional[str] = None
) -> None:
    """
    Setup logging configuration for the entire application.

    Args:
        level: Logging level
        log_file: Optional log file path
        log_format: Optional custom log format
    """
    if log_format is None:
        log_format = LOG_FORMAT

    root = logging.getLogger()
    root.setLevel(level)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
        root.addHandler(file_handler)

    # Loggers created earlier by get_logger() carry their own level and handler
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("varStarCore") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)
