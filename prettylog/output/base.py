"""
Common interface for log output streams.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Toggleable(Protocol):
    """Protocol for outputs that can be switched on and off."""

    def enable(self) -> None:
        """Enable the output."""
        ...

    def disable(self) -> None:
        """Disable the output."""
        ...

    @property
    def is_enabled(self) -> bool:
        """Whether the output currently accepts logs."""
        ...
