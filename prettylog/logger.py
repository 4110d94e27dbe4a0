"""
Logger facade.

The Logger filters events by verbosity, renders them once with its
LogFormatter and hands the result to its LogOutput. All state is guarded by
a per-instance re-entrant lock, so one Logger can be shared across threads.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .colors import ColorLike
from .event import LogEvent
from .exceptions import LogFileIOError
from .formatter import LogFormatter
from .levels import Severity, Verbosity, should_suppress
from .output import LogOutput, OnDropPolicy

if TYPE_CHECKING:
    from .schemas import LoggerSettings


class Logger:
    """
    Filters, formats and distributes log events.

    By default only console output is enabled, debug events are filtered
    (verbosity STANDARD) and headers are colored.

    Example:
        >>> lg = Logger()
        >>> lg.info("service started")
        >>> lg.error("disk full")  # errors are never filtered

        >>> with Logger() as lg:
        ...     lg.set_log_file_path("~/app.log")
        ...     lg.enable_file_logging()
        ...     lg.warning("written to stderr and queued for the file")
    """

    def __init__(
        self,
        formatter: LogFormatter | None = None,
        output: LogOutput | None = None,
        verbosity: Verbosity | str | int = Verbosity.STANDARD,
        filtering_enabled: bool = True,
    ) -> None:
        """
        Initialize the logger.

        Args:
            formatter: Formatter to render with (default configuration if None)
            output: Output fan-out (console only if None)
            verbosity: Filtering threshold
            filtering_enabled: Global filtering switch
        """
        self._lock = threading.RLock()
        self._formatter = formatter if formatter is not None else LogFormatter()
        self._output = output if output is not None else LogOutput()
        self._verbosity = Verbosity.parse(verbosity)
        self._filtering_enabled = bool(filtering_enabled)
        self._count = 0

    # Read accessors

    @property
    def formatter(self) -> LogFormatter:
        return self._formatter

    @property
    def output(self) -> LogOutput:
        return self._output

    @property
    def verbosity(self) -> Verbosity:
        return self._verbosity

    @property
    def filtering_enabled(self) -> bool:
        return self._filtering_enabled

    @property
    def log_count(self) -> int:
        """Number of events dispatched so far."""
        return self._count

    @property
    def log_buffer(self) -> list[LogEvent]:
        """Events captured by the in-memory buffer stream."""
        return self._output.buffer.log_buffer

    # Filtering

    def set_verbosity(self, verbosity: Verbosity | str | int) -> None:
        resolved = Verbosity.parse(verbosity)
        with self._lock:
            self._verbosity = resolved

    def toggle_filtering(self, enabled: bool) -> None:
        with self._lock:
            self._filtering_enabled = bool(enabled)

    def is_suppressed(self, severity: Severity) -> bool:
        """Whether an event of this severity would be filtered out."""
        if not severity.filterable:
            return False
        return should_suppress(severity, self._verbosity, self._filtering_enabled)

    # Formatting

    def set_log_format(self, log_format: str) -> None:
        with self._lock:
            self._formatter.set_log_format(log_format)

    def set_datetime_format(self, datetime_format: str) -> None:
        with self._lock:
            self._formatter.set_datetime_format(datetime_format)

    def set_header(self, severity: Severity | str, header: str) -> None:
        with self._lock:
            self._formatter.set_header(severity, header)

    def set_color(self, severity: Severity | str, color: ColorLike | str | int) -> None:
        with self._lock:
            self._formatter.set_color(severity, color)

    def toggle_header_color(self, enabled: bool) -> None:
        with self._lock:
            self._formatter.toggle_header_color(enabled)

    def format_log(self, event: LogEvent) -> str:
        """Render an event as the next dispatched event would be, without sending it."""
        with self._lock:
            return self._formatter.render(event, count=self._count + 1)

    # Outputs

    def toggle_console(self, enabled: bool) -> None:
        with self._lock:
            if enabled:
                self._output.console.enable()
            else:
                self._output.console.disable()

    def toggle_log_buffer(self, enabled: bool) -> None:
        with self._lock:
            if enabled:
                self._output.buffer.enable()
            else:
                self._output.buffer.disable()

    def clear_log_buffer(self) -> None:
        self._output.buffer.clear()

    def set_log_file_path(self, path: str | Path) -> None:
        """
        Point file output at a log file, truncating it.

        On failure an error event is emitted through the logger's own outputs
        before the error is raised.

        Raises:
            LogFileIOError: If the file cannot be opened for writing
        """
        with self._lock:
            try:
                self._output.file.set_log_file_path(str(path))
            except LogFileIOError:
                self.error(f"Failed to open file '{path}' for writing!")
                raise

    def enable_file_logging(self) -> None:
        """
        Enable file output (the log file path must be set first).

        Raises:
            LogFileIOError: If the log file is not writable
        """
        with self._lock:
            try:
                self._output.file.enable()
            except LogFileIOError:
                self.error(
                    f"Failed to open file '{self._output.file.log_file_path}' for writing!"
                )
                raise

    def disable_file_logging(self) -> None:
        with self._lock:
            self._output.file.disable()

    def toggle_file_logging(self, enabled: bool) -> None:
        if enabled:
            self.enable_file_logging()
        else:
            self.disable_file_logging()

    def set_max_buffer_size(self, size: int | None) -> None:
        with self._lock:
            self._output.file.set_max_buffer_size(size)

    def set_on_drop_policy(self, policy: OnDropPolicy | str) -> None:
        with self._lock:
            self._output.file.set_on_drop_policy(policy)

    def lock_file(self) -> None:
        with self._lock:
            self._output.file.lock_file()

    def unlock_file(self) -> None:
        with self._lock:
            self._output.file.unlock_file()

    def toggle_file_lock(self, enabled: bool) -> None:
        if enabled:
            self.lock_file()
        else:
            self.unlock_file()

    def flush(self) -> None:
        """
        Flush the file output.

        Raises:
            OutputDisabledError, EmptyBufferError, FileLockedError, LogFileIOError
        """
        with self._lock:
            self._output.file.flush()

    # Emission

    def log_event(self, event: LogEvent) -> None:
        """Dispatch a prebuilt event to every output, without filtering."""
        with self._lock:
            self._count += 1
            rendered = self._formatter.render(event, count=self._count)
            self._output.dispatch(event, rendered)

    def emit(self, severity: Severity | str, message: str) -> bool:
        """
        Create an event and dispatch it unless it is filtered out.

        Returns:
            True if the event was dispatched
        """
        resolved = Severity.parse(severity)
        with self._lock:
            if self.is_suppressed(resolved):
                return False
            self.log_event(LogEvent(message, resolved))
            return True

    def debug(self, message: str) -> None:
        self.emit(Severity.DEBUG, message)

    def debug_no_filtering(self, message: str) -> None:
        self.log_event(LogEvent.debug(message))

    def info(self, message: str) -> None:
        self.emit(Severity.INFO, message)

    def info_no_filtering(self, message: str) -> None:
        self.log_event(LogEvent.info(message))

    def warning(self, message: str) -> None:
        self.emit(Severity.WARNING, message)

    def warning_no_filtering(self, message: str) -> None:
        self.log_event(LogEvent.warning(message))

    def error(self, message: str) -> None:
        """Log an error. Errors are never filtered."""
        self.log_event(LogEvent.error(message))

    def fatal(self, message: str) -> None:
        """Log a fatal error. Fatal errors are never filtered."""
        self.log_event(LogEvent.fatal_error(message))

    # Lifecycle

    def close(self) -> None:
        """
        Shut the logger down, running the file output's close-time flush.

        Call this deterministically (or use the logger as a context manager)
        rather than relying on garbage collection to persist queued lines.
        """
        with self._lock:
            self._output.close()

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Templates

    def settings(self) -> LoggerSettings:
        """Snapshot of the persistable configuration."""
        from .template import capture_settings

        with self._lock:
            return capture_settings(self)

    def apply_settings(self, settings: LoggerSettings) -> None:
        """
        Apply a persisted configuration to this logger.

        Raises:
            ValidationError: If a value is rejected
            LogFileIOError: If the configured log file is not writable
        """
        from .template import apply_settings

        with self._lock:
            apply_settings(self, settings)

    def save_template(self, path: str | Path) -> None:
        """
        Write this logger's configuration to a JSON or YAML template file.

        Raises:
            ConfigError: If the file cannot be written
        """
        from .template import save_template

        save_template(self.settings(), path)

    @classmethod
    def from_template(cls, path: str | Path) -> Logger:
        """
        Create a logger from a template file.

        Raises:
            ConfigError: If the file is missing or invalid
            LogFileIOError: If the configured log file is not writable
        """
        from .template import load_template

        logger = cls()
        logger.apply_settings(load_template(path))
        return logger

    def __repr__(self) -> str:
        return (
            f"Logger(verbosity={self._verbosity}, "
            f"filtering_enabled={self._filtering_enabled}, count={self._count})"
        )
