"""
Template schemas using Pydantic for validation.

A template is the persistable part of a Logger's configuration. Runtime
state (queued file lines, the file lock, the event counter and the
in-memory event buffer) has no field here and is never written.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .colors import ColorCodec
from .constants import LogConstants
from .exceptions import ValidationError
from .levels import Severity, Verbosity
from .output import OnDropPolicy


def _default_headers() -> dict[str, str]:
    return dict(LogConstants.DEFAULT_HEADERS)


def _default_colors() -> dict[str, str]:
    return dict(LogConstants.DEFAULT_COLORS)


def _severity_key(key: Any) -> str:
    try:
        return Severity.parse(key).value
    except ValidationError as e:
        raise ValueError(str(e)) from e


class FormatterSettings(BaseModel):
    """Persisted LogFormatter configuration."""

    log_format: str = Field(
        default=LogConstants.DEFAULT_LOG_FORMAT,
        description="Template with %h, %d, %m and %c placeholders",
    )
    datetime_format: str = Field(
        default=LogConstants.DEFAULT_DATETIME_FORMAT,
        description="strftime format used for %d",
    )
    header_color_enabled: bool = Field(
        default=True, description="Wrap headers in their severity color"
    )
    headers: dict[str, str] = Field(
        default_factory=_default_headers, description="Header text by severity"
    )
    colors: dict[str, str] = Field(
        default_factory=_default_colors,
        description="Header color by severity (name or raw escape sequence)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Require the message placeholder."""
        token = LogConstants.PLACEHOLDER_PREFIX + LogConstants.MESSAGE_PLACEHOLDER
        if token not in v:
            raise ValueError(f"Log format {v!r} lacks the message placeholder {token}")
        return v

    @field_validator("headers")
    @classmethod
    def validate_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Normalize severity keys, filling in defaults for missing ones."""
        headers = _default_headers()
        headers.update({_severity_key(k): text for k, text in v.items()})
        return headers

    @field_validator("colors", mode="before")
    @classmethod
    def validate_colors(cls, v: Any) -> Any:
        """Normalize severity keys and color values (names, codes or escapes)."""
        if not isinstance(v, dict):
            return v
        colors = _default_colors()
        for key, value in v.items():
            try:
                color = ColorCodec.parse(value)
            except ValidationError as e:
                raise ValueError(str(e)) from e
            colors[_severity_key(key)] = ColorCodec.to_name(color)
        return colors


class FileOutputSettings(BaseModel):
    """Persisted FileStream configuration."""

    enabled: bool = Field(default=False, description="Enable file output on load")
    log_file_path: str = Field(default="", description="Log file path (~ and $VARS expanded)")
    max_buffer_size: int | None = Field(
        default=LogConstants.DEFAULT_MAX_BUFFER_SIZE,
        ge=0,
        description="Queue length that triggers an automatic flush (null or 0: manual only)",
    )
    on_drop_policy: str = Field(
        default=OnDropPolicy.DISCARD_BUFFER.value,
        description="Close-time behavior while locked (ignore_lock, discard_buffer)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("on_drop_policy")
    @classmethod
    def validate_on_drop_policy(cls, v: str) -> str:
        try:
            return OnDropPolicy.parse(v).value
        except ValidationError as e:
            raise ValueError(str(e)) from e

    @model_validator(mode="after")
    def validate_path_when_enabled(self) -> "FileOutputSettings":
        """An enabled file output needs somewhere to write."""
        if self.enabled and not self.log_file_path:
            raise ValueError("File output is enabled but 'log_file_path' is empty")
        return self


class OutputSettings(BaseModel):
    """Persisted LogOutput configuration."""

    enabled: bool = Field(default=True, description="Master switch for all outputs")
    console_enabled: bool = Field(default=True, description="Write to stderr")
    buffer_enabled: bool = Field(default=False, description="Keep events in memory")
    file: FileOutputSettings = Field(default_factory=FileOutputSettings)

    model_config = ConfigDict(extra="forbid")


class LoggerSettings(BaseModel):
    """Persisted Logger configuration (the template file root)."""

    verbosity: str = Field(
        default=Verbosity.STANDARD.value,
        description="Filtering threshold (all, standard, quiet, errors_only)",
    )
    filtering_enabled: bool = Field(default=True, description="Global filtering switch")
    formatter: FormatterSettings = Field(default_factory=FormatterSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    model_config = ConfigDict(extra="forbid")

    @field_validator("verbosity", mode="before")
    @classmethod
    def validate_verbosity(cls, v: Any) -> Any:
        """Accept a verbosity name or rank, persisted as its name."""
        try:
            return Verbosity.parse(v).value
        except ValidationError as e:
            raise ValueError(str(e)) from e
