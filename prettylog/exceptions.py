"""
Unified exception hierarchy for prettylog.

All library errors inherit from PrettyLogError so callers can catch every
library failure with a single except clause, while the subclasses let them
tell apart "nothing to do" (EmptyBufferError), "blocked" (FileLockedError)
and "misconfigured" (OutputDisabledError, LogFileIOError).
"""

from typing import Any


class PrettyLogError(Exception):
    """
    Base exception for all prettylog errors.

    Example:
        try:
            logger.flush()
        except PrettyLogError as e:
            print(f"flush failed: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ValidationError(PrettyLogError):
    """
    Raised when a setter rejects its input.

    The previously configured value is always left in place.

    Examples:
        - Non-string template, header or datetime format
        - Negative buffer size
        - Unknown color, severity or verbosity name
    """

    pass


class MissingMessagePlaceholderError(ValidationError):
    """Raised when a log template does not contain the %m placeholder."""

    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__("Expected a message placeholder (%m)", template=template)


class ConfigError(PrettyLogError):
    """
    Raised when a template file cannot be loaded or saved.

    Examples:
        - Template file not found
        - Invalid JSON/YAML syntax
        - Schema validation failed
    """

    pass


class OutputError(PrettyLogError):
    """Base class for sink state errors."""

    pass


class OutputDisabledError(OutputError):
    """Raised when writing to or flushing a disabled output."""

    pass


class EmptyBufferError(OutputError):
    """Raised when flushing an output whose buffer holds nothing."""

    pass


class FileLockedError(OutputError):
    """Raised when a flush is refused because the log file lock is enabled."""

    pass


class LogFileIOError(PrettyLogError):
    """
    Raised when the log file cannot be opened or appended to.

    The underlying OSError is chained as __cause__.
    """

    pass
