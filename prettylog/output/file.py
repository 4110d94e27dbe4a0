"""
Buffered file output stream.

Rendered lines are queued in memory and appended to the log file in one
write when the queue reaches its size limit, when flush() is called, or when
the stream is closed. An advisory lock defers every flush while keeping all
queued lines; what happens to them at close time is decided by the
OnDropPolicy.

States (derived from the enabled and locked flags):

- disabled: write() and flush() raise OutputDisabledError, nothing is queued
- enabled, unlocked: write() queues, and flushes once the limit is reached
- enabled, locked: write() queues, every flush raises FileLockedError and
  the queue grows past its limit

Close-time flush:

| locked | policy         | outcome                          |
|--------|----------------|----------------------------------|
| no     | any            | flush normally                   |
| yes    | IGNORE_LOCK    | flush anyway                     |
| yes    | DISCARD_BUFFER | nothing written, queue discarded |
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..constants import LogConstants
from ..exceptions import (
    EmptyBufferError,
    FileLockedError,
    LogFileIOError,
    OutputDisabledError,
    PrettyLogError,
    ValidationError,
)
from ..paths import expand_path

if TYPE_CHECKING:
    from ..event import LogEvent
    from ..formatter import LogFormatter

_log = logging.getLogger(__name__)


class OnDropPolicy(Enum):
    """What a locked stream does with its queue when it is closed."""

    IGNORE_LOCK = "ignore_lock"
    DISCARD_BUFFER = "discard_buffer"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: OnDropPolicy | str) -> OnDropPolicy:
        """
        Resolve a policy from an instance or its name.

        Raises:
            ValidationError: If the value does not name a policy
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            try:
                return cls(key)
            except ValueError:
                pass
        raise ValidationError("Unknown on-drop policy", value=repr(value))


def _check_writable(path: str, truncate: bool) -> None:
    """Open the file for writing (creating it) to prove it is writable."""
    mode = "w" if truncate else "a"
    try:
        with open(path, mode, encoding=LogConstants.FILE_ENCODING):
            pass
    except OSError as e:
        raise LogFileIOError("Log file is not writable", path=path) from e


class FileStream:
    """
    Size-bounded, lock-aware file output.

    Thread-safe: every operation runs under the stream's own re-entrant lock.

    Example:
        >>> stream = FileStream()
        >>> stream.set_log_file_path("/tmp/app.log")
        >>> stream.enable()
        >>> stream.out(LogEvent.info("hello"), formatter)
        >>> stream.flush()
        >>> stream.close()
    """

    def __init__(
        self,
        max_buffer_size: int | None = LogConstants.DEFAULT_MAX_BUFFER_SIZE,
        on_drop_policy: OnDropPolicy | str = OnDropPolicy.DISCARD_BUFFER,
    ) -> None:
        """
        Initialize a disabled stream with no log file.

        Args:
            max_buffer_size: Queue length that triggers an automatic flush
                             (None or 0 for manual flushing only)
            on_drop_policy: Close-time behavior while locked
        """
        self._lock = threading.RLock()
        self._enabled = False
        self._locked = False
        self._closed = False
        self._path = ""
        self._buffer: list[str] = []
        self._max_buffer_size: int | None = None
        self._on_drop_policy = OnDropPolicy.DISCARD_BUFFER

        self.set_max_buffer_size(max_buffer_size)
        self.set_on_drop_policy(on_drop_policy)

    # Read accessors

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def log_file_path(self) -> str:
        return self._path

    @property
    def max_buffer_size(self) -> int | None:
        return self._max_buffer_size

    @property
    def on_drop_policy(self) -> OnDropPolicy:
        return self._on_drop_policy

    @property
    def buffer(self) -> list[str]:
        """Snapshot of the queued lines, oldest first."""
        with self._lock:
            return list(self._buffer)

    # Configuration

    def set_log_file_path(self, path: str) -> None:
        """
        Point the stream at a log file, truncating it.

        `~` and `$VARIABLES` in the path are expanded first.

        Raises:
            LogFileIOError: If the file cannot be opened for writing
                            (previous path is kept)
        """
        expanded = expand_path(path)
        with self._lock:
            _check_writable(expanded, truncate=True)
            self._path = expanded

    def enable(self) -> None:
        """
        Enable the stream after checking the log file is writable.

        A no-op if already enabled. The file is opened in append mode, so
        enabling never discards what was written before.

        Raises:
            OutputDisabledError: If the stream has been closed
            LogFileIOError: If no path is set or the file is not writable
        """
        with self._lock:
            if self._closed:
                raise OutputDisabledError("File output is closed")
            if self._enabled:
                return
            if not self._path:
                raise LogFileIOError("Log file path is not set")
            _check_writable(self._path, truncate=False)
            self._enabled = True

    def disable(self) -> None:
        """Disable the stream. Queued lines stay queued."""
        with self._lock:
            self._enabled = False

    def set_max_buffer_size(self, size: int | None) -> None:
        """
        Set the queue length that triggers an automatic flush.

        None or 0 disables automatic flushing entirely.

        Raises:
            ValidationError: If size is negative or not an integer
        """
        if size is not None and (
            isinstance(size, bool) or not isinstance(size, int) or size < 0
        ):
            raise ValidationError("Invalid max buffer size", size=size)
        with self._lock:
            self._max_buffer_size = size

    def set_on_drop_policy(self, policy: OnDropPolicy | str) -> None:
        resolved = OnDropPolicy.parse(policy)
        with self._lock:
            self._on_drop_policy = resolved

    def lock_file(self) -> None:
        """Defer all flushing until unlock_file(). Advisory only, no OS lock."""
        with self._lock:
            self._locked = True

    def unlock_file(self) -> None:
        with self._lock:
            self._locked = False

    # Output

    def write(self, text: str) -> None:
        """
        Queue an already rendered line.

        Reaching the size limit triggers a flush whose failure is logged and
        swallowed: the line itself is safely queued either way.

        Raises:
            OutputDisabledError: If the stream is disabled
        """
        with self._lock:
            if not self._enabled:
                raise OutputDisabledError("File output is not enabled")

            self._buffer.append(text)
            if self._should_flush():
                try:
                    self._flush(is_drop_flush=False)
                except FileLockedError:
                    _log.debug(
                        "automatic flush deferred by file lock (%d queued)",
                        len(self._buffer),
                    )
                except PrettyLogError as e:
                    _log.warning("automatic flush failed: %s", e)

    def out(self, event: LogEvent, formatter: LogFormatter) -> None:
        """
        Render an event with the formatter and queue it.

        Raises:
            OutputDisabledError: If the stream is disabled
        """
        with self._lock:
            if not self._enabled:
                raise OutputDisabledError("File output is not enabled")
            self.write(formatter.render(event))

    def flush(self) -> None:
        """
        Append every queued line to the log file and clear the queue.

        Raises:
            OutputDisabledError: If the stream is disabled
            EmptyBufferError: If nothing is queued
            FileLockedError: If the file lock is enabled
            LogFileIOError: If the append fails; the stream disables itself
                            and the queued lines are lost
        """
        with self._lock:
            self._flush(is_drop_flush=False)

    def drop_flush(self) -> None:
        """
        Run the close-time flush, honoring the on-drop policy.

        Raises:
            FileLockedError: If locked under DISCARD_BUFFER (queue is discarded)
            Same errors as flush() otherwise
        """
        with self._lock:
            try:
                self._flush(is_drop_flush=True)
            except FileLockedError:
                self._buffer.clear()
                raise

    def close(self) -> None:
        """
        Tear the stream down, running the close-time flush exactly once.

        Flush failures are logged, never raised: close() is safe to call from
        cleanup paths. A closed stream stays disabled and cannot be enabled
        again.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if not self._enabled or not self._buffer:
                self._enabled = False
                return
            try:
                self.drop_flush()
            except FileLockedError:
                _log.debug(
                    "log buffer discarded on close (policy=%s)", self._on_drop_policy
                )
            except PrettyLogError as e:
                _log.warning("flush on close failed: %s", e)
            finally:
                self._enabled = False

    def __enter__(self) -> FileStream:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Internals

    def _should_flush(self) -> bool:
        """Whether the queue reached the automatic flush threshold."""
        limit = self._max_buffer_size
        return bool(limit) and len(self._buffer) >= limit

    def _flush(self, is_drop_flush: bool) -> None:
        """Flush decision table shared by flush(), write() and drop_flush()."""
        if not self._enabled:
            raise OutputDisabledError("File output is not enabled")

        if not self._buffer:
            raise EmptyBufferError("Log buffer is empty")

        if self._locked:
            if not is_drop_flush:
                raise FileLockedError("Log file lock is enabled")
            if self._on_drop_policy is OnDropPolicy.DISCARD_BUFFER:
                raise FileLockedError(
                    "Log file lock is enabled", on_drop_policy=self._on_drop_policy
                )

        self._append_buffer()

    def _append_buffer(self) -> None:
        """Write the whole queue in one append, disabling the stream on failure."""
        data = "".join(self._buffer)
        self._buffer.clear()
        try:
            with open(self._path, "a", encoding=LogConstants.FILE_ENCODING) as f:
                f.write(data)
        except OSError as e:
            self._enabled = False
            raise LogFileIOError(
                "Failed to write log buffer to file", path=self._path
            ) from e

    def __repr__(self) -> str:
        return (
            f"FileStream(path={self._path!r}, enabled={self._enabled}, "
            f"locked={self._locked}, queued={len(self._buffer)}, "
            f"max_buffer_size={self._max_buffer_size})"
        )
