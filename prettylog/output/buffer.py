"""
In-memory event buffer.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..event import LogEvent


class BufferStream:
    """
    Keeps raw LogEvent instances in memory for later inspection.

    Disabled by default. The buffer grows without bound while enabled, so
    callers that leave it on are expected to clear() it themselves.
    """

    def __init__(self, enabled: bool = False) -> None:
        self._enabled = enabled
        self._events: list[LogEvent] = []
        self._lock = threading.Lock()

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def out(self, event: LogEvent) -> None:
        """Store an event if the stream is enabled."""
        if not self._enabled:
            return
        with self._lock:
            self._events.append(event)

    @property
    def log_buffer(self) -> list[LogEvent]:
        """Snapshot of the stored events, oldest first."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        """Drop every stored event."""
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
