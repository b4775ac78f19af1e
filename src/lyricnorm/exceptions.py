class LyricNormError(Exception):
    """Base exception for lyricnorm."""


class ReadError(LyricNormError):
    """Raised when a lyric source cannot be read or decoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not read {source}: {reason}")


class ConfigError(LyricNormError):
    """Raised when a configuration value is invalid."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason}")
