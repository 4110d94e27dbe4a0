"""
Log formatter for the logging system.

This module turns LogEvent instances into final text using a placeholder
template:

- %h: severity header (colored when header coloring is enabled)
- %d: event timestamp rendered with the datetime format
- %m: event message (mandatory in every template)
- %c: event counter, when the caller tracks one

A % followed by any other character emits that character; a trailing lone
% emits nothing. Every rendered line ends with a newline.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .colors import Color, ColorCodec, ColorLike
from .constants import LogConstants
from .event import LogEvent
from .exceptions import MissingMessagePlaceholderError, ValidationError
from .levels import Severity

_MESSAGE_TOKEN = LogConstants.PLACEHOLDER_PREFIX + LogConstants.MESSAGE_PLACEHOLDER
_DATETIME_TOKEN = LogConstants.PLACEHOLDER_PREFIX + LogConstants.DATETIME_PLACEHOLDER

# Fixed instant used to probe datetime formats before accepting them
_PROBE_TIME = datetime(2000, 1, 1, 12, 0, 0)


def _default_headers() -> dict[Severity, str]:
    return {Severity(k): v for k, v in LogConstants.DEFAULT_HEADERS.items()}


def _default_colors() -> dict[Severity, ColorLike]:
    return {
        Severity(k): ColorCodec.parse(v) for k, v in LogConstants.DEFAULT_COLORS.items()
    }


def _require_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string", type=type(value).__name__)
    return value


class LogFormatter:
    """
    Template based log formatter with per-severity headers and colors.

    Not thread-safe on its own; a Logger serializes access to the formatter
    it owns.

    Example:
        >>> formatter = LogFormatter()
        >>> formatter.toggle_header_color(False)
        >>> formatter.render(LogEvent.error("disk full"))
        '[ERR] disk full\\n'
    """

    def __init__(
        self,
        log_format: str = LogConstants.DEFAULT_LOG_FORMAT,
        datetime_format: str = LogConstants.DEFAULT_DATETIME_FORMAT,
        headers: Mapping[Severity | str, str] | None = None,
        colors: Mapping[Severity | str, ColorLike | str | int] | None = None,
        header_color_enabled: bool = True,
    ) -> None:
        """
        Initialize the formatter.

        Args:
            log_format: Template string, must contain %m
            datetime_format: strftime format used for %d
            headers: Header text overrides keyed by severity
            colors: Header color overrides keyed by severity
            header_color_enabled: Whether headers are wrapped in their color

        Raises:
            ValidationError: If any of the arguments is rejected by its setter
        """
        self._headers = _default_headers()
        self._colors = _default_colors()
        self._log_format = LogConstants.DEFAULT_LOG_FORMAT
        self._datetime_format = LogConstants.DEFAULT_DATETIME_FORMAT
        self._header_color_enabled = True
        self._show_datetime = False

        self.set_log_format(log_format)
        self.set_datetime_format(datetime_format)
        for severity, text in (headers or {}).items():
            self.set_header(severity, text)
        for severity, color in (colors or {}).items():
            self.set_color(severity, color)
        self.toggle_header_color(header_color_enabled)

    # Read accessors

    @property
    def log_format(self) -> str:
        return self._log_format

    @property
    def datetime_format(self) -> str:
        return self._datetime_format

    @property
    def header_color_enabled(self) -> bool:
        return self._header_color_enabled

    @property
    def headers(self) -> dict[Severity, str]:
        """Copy of the header text table."""
        return dict(self._headers)

    @property
    def colors(self) -> dict[Severity, ColorLike]:
        """Copy of the header color table."""
        return dict(self._colors)

    # Mutators

    def set_log_format(self, log_format: str) -> None:
        """
        Replace the active template.

        Args:
            log_format: New template; must contain the %m placeholder

        Raises:
            MissingMessagePlaceholderError: If %m is missing (template unchanged)
            ValidationError: If the template is not a string
        """
        _require_str("log format", log_format)
        if _MESSAGE_TOKEN not in log_format:
            raise MissingMessagePlaceholderError(log_format)
        self._log_format = log_format
        self._show_datetime = _DATETIME_TOKEN in log_format

    def set_datetime_format(self, datetime_format: str) -> None:
        """
        Set the strftime format used for the %d placeholder.

        Raises:
            ValidationError: If the format is not a string or strftime rejects it
        """
        _require_str("datetime format", datetime_format)
        try:
            _PROBE_TIME.strftime(datetime_format)
        except ValueError as e:
            raise ValidationError(
                "Invalid datetime format", datetime_format=datetime_format
            ) from e
        self._datetime_format = datetime_format

    def set_header(self, severity: Severity | str, header: str) -> None:
        """Set the header text for a severity."""
        key = Severity.parse(severity)
        self._headers[key] = _require_str("header", header)

    def set_color(self, severity: Severity | str, color: ColorLike | str | int) -> None:
        """Set the header color for a severity (name, code, escape or Color)."""
        key = Severity.parse(severity)
        self._colors[key] = ColorCodec.parse(color)

    def toggle_header_color(self, enabled: bool) -> None:
        """Enable or disable header coloring."""
        self._header_color_enabled = bool(enabled)

    # Rendering

    def header_color(self, severity: Severity) -> ColorLike:
        return self._colors.get(severity, Color.NONE)

    def header(self, severity: Severity) -> str:
        """Header text for a severity, colored if header coloring is enabled."""
        text = self._headers[severity]
        if self._header_color_enabled:
            return ColorCodec.wrap(text, self.header_color(severity))
        return text

    def format_datetime(self, timestamp: datetime) -> str:
        """Timestamp text, empty when the template has no %d placeholder."""
        if not self._show_datetime:
            return ""
        return timestamp.strftime(self._datetime_format)

    def render(self, event: LogEvent, count: int | None = None) -> str:
        """
        Render an event into its final text.

        Args:
            event: Event to render
            count: Event counter substituted for %c; without it %c renders as "c"

        Returns:
            Rendered line, newline terminated
        """
        header = self.header(event.severity)
        timestamp = self.format_datetime(event.timestamp)

        parts: list[str] = []
        chars = iter(self._log_format)
        for c in chars:
            if c != LogConstants.PLACEHOLDER_PREFIX:
                parts.append(c)
                continue

            nc = next(chars, None)
            if nc is None:
                break
            if nc == LogConstants.HEADER_PLACEHOLDER:
                parts.append(header)
            elif nc == LogConstants.DATETIME_PLACEHOLDER:
                parts.append(timestamp)
            elif nc == LogConstants.MESSAGE_PLACEHOLDER:
                parts.append(event.message)
            elif nc == LogConstants.COUNT_PLACEHOLDER and count is not None:
                parts.append(str(count))
            else:
                parts.append(nc)

        parts.append("\n")
        return "".join(parts)

    # Comparison and copying

    def _state(self) -> tuple:
        return (
            self._log_format,
            self._datetime_format,
            self._header_color_enabled,
            tuple(sorted((s.value, h) for s, h in self._headers.items())),
            tuple(sorted((s.value, repr(c)) for s, c in self._colors.items())),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogFormatter):
            return NotImplemented
        return self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> LogFormatter:
        """Independent copy of this formatter."""
        return LogFormatter(
            log_format=self._log_format,
            datetime_format=self._datetime_format,
            headers=self._headers,
            colors=self._colors,
            header_color_enabled=self._header_color_enabled,
        )

    def __repr__(self) -> str:
        return (
            f"LogFormatter(log_format={self._log_format!r}, "
            f"datetime_format={self._datetime_format!r}, "
            f"header_color_enabled={self._header_color_enabled})"
        )
