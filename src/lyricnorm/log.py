"""Logging configuration for lyricnorm."""

import logging
import sys
from pathlib import Path


def setup_logging(level: str = "WARNING", log_file: Path | None = None, verbose: bool = False) -> logging.Logger:
    """Set up logging for the ``lyricnorm`` logger hierarchy.

    Console output goes to stderr; stdout is reserved for normalized lyrics.
    """
    logger = logging.getLogger("lyricnorm")
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    logger.handlers.clear()

    if verbose:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "lyricnorm") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
