"""
Console output stream.
"""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ..event import LogEvent
    from ..formatter import LogFormatter


class StderrStream:
    """
    Writes rendered logs straight to the error stream.

    Enabled by default. The target stream is resolved at write time, so
    replacing sys.stderr (as test harnesses do) is honored.
    """

    def __init__(self, stream: TextIO | None = None, enabled: bool = True) -> None:
        """
        Initialize the stream.

        Args:
            stream: Target stream (defaults to sys.stderr at write time)
            enabled: Initial enabled state
        """
        self._stream = stream
        self._enabled = enabled
        self._lock = threading.Lock()

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def write(self, text: str) -> None:
        """Write already rendered text if the stream is enabled."""
        if not self._enabled:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.write(text)
            stream.flush()

    def out(self, event: LogEvent, formatter: LogFormatter) -> None:
        """Render an event with the formatter and write it."""
        if self._enabled:
            self.write(formatter.render(event))
