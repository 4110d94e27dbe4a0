"""
Fan-out of one event to every output stream.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any

from ..exceptions import PrettyLogError
from .buffer import BufferStream
from .console import StderrStream
from .file import FileStream

if TYPE_CHECKING:
    from ..event import LogEvent
    from ..formatter import LogFormatter


class LogOutput:
    """
    Single dispatch point in front of the console, buffer and file streams.

    Delivery order is console, buffer, file. A failing file stream never
    prevents delivery to the others: its errors are dropped here, and the
    caller reaches the stream directly when it needs them surfaced.

    Example:
        >>> output = LogOutput()
        >>> output.out(LogEvent.info("Hello, World!"), LogFormatter())
    """

    def __init__(
        self,
        console: StderrStream | None = None,
        buffer: BufferStream | None = None,
        file: FileStream | None = None,
        enabled: bool = True,
    ) -> None:
        self.console = console if console is not None else StderrStream()
        self.buffer = buffer if buffer is not None else BufferStream()
        self.file = file if file is not None else FileStream()
        self._enabled = enabled

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def dispatch(self, event: LogEvent, rendered: str) -> None:
        """
        Deliver one event to every enabled stream.

        Args:
            event: The raw event (kept by the buffer stream)
            rendered: The event already rendered by the formatter
        """
        if not self._enabled:
            return

        self.console.write(rendered)
        self.buffer.out(event)
        # Best effort: a disabled or broken file sink must not block the others
        with contextlib.suppress(PrettyLogError):
            self.file.write(rendered)

    def out(self, event: LogEvent, formatter: LogFormatter) -> None:
        """Render an event once and dispatch it."""
        if self._enabled:
            self.dispatch(event, formatter.render(event))

    def close(self) -> None:
        """Close the file stream (runs its close-time flush)."""
        self.file.close()

    def __enter__(self) -> LogOutput:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
