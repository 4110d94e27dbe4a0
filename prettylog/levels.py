"""
Severity and verbosity model.

Severity classifies a single event, Verbosity is the configured filtering
threshold. The two enums are independent; they are compared only through
their explicit rank tables, never through their values.
"""

from __future__ import annotations

import functools
from enum import Enum

from .exceptions import ValidationError


@functools.total_ordering
class Severity(Enum):
    """Urgency of a single log event, ordered DEBUG < ... < FATAL_ERROR."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL_ERROR = "fatal_error"

    @property
    def rank(self) -> int:
        """Position of this severity on the filtering scale."""
        return _SEVERITY_RANKS[self]

    @property
    def filterable(self) -> bool:
        """Whether verbosity filtering may ever suppress this severity."""
        return self not in UNFILTERABLE

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Severity | str | int) -> Severity:
        """
        Resolve a severity from an instance, a name or a rank.

        Raises:
            ValidationError: If the value does not name a severity
        """
        return _parse(cls, value, _SEVERITY_RANKS)


@functools.total_ordering
class Verbosity(Enum):
    """Filtering threshold, ordered ALL < STANDARD < QUIET < ERRORS_ONLY."""

    ALL = "all"
    STANDARD = "standard"
    QUIET = "quiet"
    ERRORS_ONLY = "errors_only"

    @property
    def rank(self) -> int:
        """Position of this threshold on the filtering scale."""
        return _VERBOSITY_RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Verbosity):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Verbosity | str | int) -> Verbosity:
        """
        Resolve a verbosity from an instance, a name or a rank.

        Raises:
            ValidationError: If the value does not name a verbosity
        """
        return _parse(cls, value, _VERBOSITY_RANKS)


_SEVERITY_RANKS: dict[Severity, int] = {
    Severity.DEBUG: 0,
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.ERROR: 3,
    Severity.FATAL_ERROR: 4,
}

_VERBOSITY_RANKS: dict[Verbosity, int] = {
    Verbosity.ALL: 0,
    Verbosity.STANDARD: 1,
    Verbosity.QUIET: 2,
    Verbosity.ERRORS_ONLY: 3,
}

# Emitted through call paths that never consult the filter
UNFILTERABLE: frozenset[Severity] = frozenset({Severity.ERROR, Severity.FATAL_ERROR})


def _parse(cls: type, value: object, ranks: dict) -> object:
    """Shared name/rank resolution for Severity and Verbosity."""
    if isinstance(value, cls):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        for member, rank in ranks.items():
            if rank == value:
                return member
        raise ValidationError(f"Invalid {cls.__name__.lower()} rank", value=value)
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            pass
    raise ValidationError(f"Unknown {cls.__name__.lower()}", value=repr(value))


def should_suppress(
    severity: Severity, verbosity: Verbosity, filtering_enabled: bool = True
) -> bool:
    """
    Decide whether an event is filtered out.

    An event is suppressed iff filtering is enabled and its severity ranks
    strictly below the verbosity threshold. Equal ranks pass.

    Args:
        severity: Severity of the event
        verbosity: Configured threshold
        filtering_enabled: Global filtering switch

    Returns:
        True if the event must not be dispatched
    """
    return filtering_enabled and severity.rank < verbosity.rank
