"""Configuration settings for lyricnorm."""

import os

from .exceptions import ConfigError

# Line separators accepted by --newline and LYRICNORM_NEWLINE
NEWLINES = {
    "lf": "\n",
    "crlf": "\r\n",
}

# Settings (can be overridden via environment variables)
NEWLINE = os.getenv("LYRICNORM_NEWLINE", "lf").lower()
LOG_LEVEL = os.getenv("LYRICNORM_LOG_LEVEL", "WARNING").upper()
OUTPUT_SUFFIX = os.getenv("LYRICNORM_OUTPUT_SUFFIX", ".txt")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config() -> None:
    """Validate configuration values."""
    if NEWLINE not in NEWLINES:
        raise ConfigError(f"LYRICNORM_NEWLINE must be one of {', '.join(NEWLINES)}, got {NEWLINE!r}")

    if LOG_LEVEL not in _LOG_LEVELS:
        raise ConfigError(f"LYRICNORM_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {LOG_LEVEL!r}")

    if not OUTPUT_SUFFIX.startswith("."):
        raise ConfigError(f"LYRICNORM_OUTPUT_SUFFIX must start with '.', got {OUTPUT_SUFFIX!r}")


def get_newline(name: str | None = None) -> str:
    """Return the line separator for *name* (``lf``/``crlf``), or the configured one."""
    key = (name or NEWLINE).lower()
    try:
        return NEWLINES[key]
    except KeyError:
        raise ConfigError(f"Unknown newline style {key!r}") from None
