"""Package-specific exception types."""

from __future__ import annotations


class HighlighterError(ValueError):
    """Base class for highlighter errors.

    Classification itself never raises; these errors surface while the host
    sets the highlighter up or addresses lines that do not exist.
    """


class ConfigError(HighlighterError):
    """Raised when configuration values are invalid.

    Examples:
        raise ConfigError("`tick_interval` must be positive")
    """


class RuleCompileError(ConfigError):
    """Raised when a configured highlighting rule cannot be compiled.

    Args:
        pattern: Source of the offending regular expression.
        reason: Human readable explanation of the failure.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid highlighting rule {pattern!r}: {reason}")


class UnknownBlockError(HighlighterError):
    """Raised when a block handle is not part of the document.

    Args:
        handle: The handle that could not be resolved.
    """

    def __init__(self, handle: int):
        self.handle = handle
        super().__init__(f"Unknown block handle: {handle}")
