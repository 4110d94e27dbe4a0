"""
Template files: persisted Logger configuration.

Templates are JSON by default; a `.yaml` or `.yml` suffix selects YAML.
Loading validates the document against LoggerSettings before anything is
applied, so a bad template never leaves a logger half-configured by the
parser (setter errors during apply can still occur, for instance an
unwritable log file).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pydantic
import yaml  # type: ignore[import-untyped]

from .colors import ColorCodec
from .constants import LogConstants
from .exceptions import ConfigError
from .formatter import LogFormatter
from .paths import expand_path
from .schemas import FileOutputSettings, FormatterSettings, LoggerSettings, OutputSettings

if TYPE_CHECKING:
    from .logger import Logger

_log = logging.getLogger(__name__)


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in LogConstants.YAML_SUFFIXES


# Conversion between a live Logger and its settings


def capture_settings(logger: Logger) -> LoggerSettings:
    """Snapshot the persistable configuration of a logger."""
    formatter = logger.formatter
    output = logger.output
    file = output.file
    return LoggerSettings(
        verbosity=logger.verbosity.value,
        filtering_enabled=logger.filtering_enabled,
        formatter=FormatterSettings(
            log_format=formatter.log_format,
            datetime_format=formatter.datetime_format,
            header_color_enabled=formatter.header_color_enabled,
            headers={s.value: text for s, text in formatter.headers.items()},
            colors={s.value: ColorCodec.to_name(c) for s, c in formatter.colors.items()},
        ),
        output=OutputSettings(
            enabled=output.is_enabled,
            console_enabled=output.console.is_enabled,
            buffer_enabled=output.buffer.is_enabled,
            file=FileOutputSettings(
                enabled=file.is_enabled,
                log_file_path=file.log_file_path,
                max_buffer_size=file.max_buffer_size,
                on_drop_policy=file.on_drop_policy.value,
            ),
        ),
    )


def build_formatter(settings: FormatterSettings) -> LogFormatter:
    """
    Create a standalone formatter from formatter settings.

    Raises:
        ValidationError: If the datetime format is rejected
    """
    return LogFormatter(
        log_format=settings.log_format,
        datetime_format=settings.datetime_format,
        headers=settings.headers,
        colors=settings.colors,
        header_color_enabled=settings.header_color_enabled,
    )


def apply_settings(logger: Logger, settings: LoggerSettings) -> None:
    """
    Configure a logger from settings through its public setters.

    An enabled file output gets its path set (truncating the file) and is
    then enabled.

    Raises:
        ValidationError: If a setter rejects a value
        LogFileIOError: If the configured log file is not writable
    """
    fmt = settings.formatter
    logger.set_log_format(fmt.log_format)
    logger.set_datetime_format(fmt.datetime_format)
    logger.toggle_header_color(fmt.header_color_enabled)
    for severity, text in fmt.headers.items():
        logger.set_header(severity, text)
    for severity, color in fmt.colors.items():
        logger.set_color(severity, color)

    logger.set_verbosity(settings.verbosity)
    logger.toggle_filtering(settings.filtering_enabled)

    out = settings.output
    if out.enabled:
        logger.output.enable()
    else:
        logger.output.disable()
    logger.toggle_console(out.console_enabled)
    logger.toggle_log_buffer(out.buffer_enabled)

    file = out.file
    logger.set_max_buffer_size(file.max_buffer_size)
    logger.set_on_drop_policy(file.on_drop_policy)
    if file.enabled:
        logger.set_log_file_path(file.log_file_path)
        logger.enable_file_logging()
    else:
        logger.disable_file_logging()


# Reading and writing template files


def dump_settings(settings: LoggerSettings, fmt: str = "json") -> str:
    """
    Serialize settings to template text.

    Args:
        settings: Settings to serialize
        fmt: "json" or "yaml"
    """
    data = settings.model_dump(mode="json")
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(data, indent=LogConstants.JSON_INDENT) + "\n"
    raise ValueError(f"Unsupported template format: {fmt}")


def parse_settings(data: Any, source: str = "<template>") -> LoggerSettings:
    """
    Validate an already parsed template document.

    Raises:
        ConfigError: If the document does not match the template schema
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            "Template root must be a mapping", path=source, type=type(data).__name__
        )
    try:
        return LoggerSettings.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigError(f"Invalid template: {e}", path=source) from e


def save_template(settings: LoggerSettings, path: str | Path) -> Path:
    """
    Write settings to a template file (YAML for .yaml/.yml, JSON otherwise).

    Returns:
        The expanded path written to

    Raises:
        ConfigError: If the file cannot be written
    """
    target = Path(expand_path(path))
    text = dump_settings(settings, "yaml" if _is_yaml(target) else "json")
    try:
        target.write_text(text, encoding=LogConstants.FILE_ENCODING)
    except OSError as e:
        raise ConfigError("Failed to write template", path=str(target)) from e
    _log.debug("template saved to %s", target)
    return target


def load_template(path: str | Path) -> LoggerSettings:
    """
    Read and validate a template file.

    Raises:
        ConfigError: If the file is missing, unreadable, unparsable or invalid
    """
    source = Path(expand_path(path))
    try:
        text = source.read_text(encoding=LogConstants.FILE_ENCODING)
    except FileNotFoundError as e:
        raise ConfigError("Template file not found", path=str(source)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError("Failed to read template", path=str(source)) from e

    try:
        data = yaml.safe_load(text) if _is_yaml(source) else json.loads(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", path=str(source)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}", path=str(source)) from e

    settings = parse_settings(data, str(source))
    _log.debug("template loaded from %s", source)
    return settings
