"""
Logging setup for the COBOL data import.

All modules log under the ``cobol_dataimport`` hierarchy; the command line
configures it once through setup_logging(). Library users who never call it
get the standard library defaults.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

ROOT_LOGGER = "cobol_dataimport"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"


def level_for(verbose: bool = False, quiet: bool = False, default: str = "INFO") -> str:
    """Pick a level name from the command-line verbosity switches."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "ERROR"
    return default.upper()


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    verbose: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the importer's logger hierarchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file, always written in detailed format
        verbose: If True, use the detailed console format
        stream: Console stream (default: stderr, stdout may carry exported JSON)

    Returns:
        The configured ``cobol_dataimport`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(log_level)
    console.setFormatter(logging.Formatter(DETAILED_FORMAT if verbose else SIMPLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``cobol_dataimport.<name>``, or the root importer logger."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")
    return logging.getLogger(ROOT_LOGGER)
