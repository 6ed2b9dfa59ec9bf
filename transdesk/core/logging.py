"""Logging configuration for TransDesk.

The package logs under the ``transdesk`` logger. Library code only ever
asks for child loggers; the CLI (or the embedding application) decides
where records go by calling :func:`setup_logging`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


logger = logging.getLogger("transdesk")

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """Configure the ``transdesk`` logger.

    Console output goes to stderr so command output on stdout (reports,
    JSON payloads) can be piped. The file handler, when given, always
    records timestamps.

    Args:
        log_level: Logging level name. Unknown names fall back to INFO.
        log_file: Optional path to a UTF-8 log file.
        log_format: Console format, ``CONSOLE_FORMAT`` when omitted.

    Returns:
        The configured package logger.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    # Calling setup again replaces the handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(log_format or CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a ``transdesk.<name>`` child logger."""
    return logging.getLogger(f"transdesk.{name}")


store_logger = get_logger("store")
translation_logger = get_logger("translation")
persistence_logger = get_logger("persistence")
transport_logger = get_logger("transport")
