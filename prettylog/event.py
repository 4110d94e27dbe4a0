"""
Log event value type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .levels import Severity


def _now() -> datetime:
    """Current local wall-clock time (timezone aware)."""
    return datetime.now().astimezone()


@dataclass(frozen=True)
class LogEvent:
    """
    A single log event.

    Immutable once created; every sink that keeps events stores the same
    frozen instance, so no sink can change what another one sees.

    Example:
        >>> event = LogEvent.error("disk full")
        >>> event.severity
        <Severity.ERROR: 'error'>
    """

    message: str
    severity: Severity = Severity.INFO
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def debug(cls, message: str) -> LogEvent:
        return cls(message, Severity.DEBUG)

    @classmethod
    def info(cls, message: str) -> LogEvent:
        return cls(message, Severity.INFO)

    @classmethod
    def warning(cls, message: str) -> LogEvent:
        return cls(message, Severity.WARNING)

    @classmethod
    def error(cls, message: str) -> LogEvent:
        return cls(message, Severity.ERROR)

    @classmethod
    def fatal_error(cls, message: str) -> LogEvent:
        return cls(message, Severity.FATAL_ERROR)

    def __str__(self) -> str:
        return (
            f"Log: {self.message}\n"
            f"Type: {self.severity}\n"
            f"DateTime: {self.timestamp.isoformat()}"
        )
