from importlib.metadata import PackageNotFoundError, version

from .colors import Color, ColorCodec, CustomColor, color_text
from .event import LogEvent
from .exceptions import (
    ConfigError,
    EmptyBufferError,
    FileLockedError,
    LogFileIOError,
    MissingMessagePlaceholderError,
    OutputDisabledError,
    OutputError,
    PrettyLogError,
    ValidationError,
)
from .formatter import LogFormatter
from .levels import Severity, Verbosity, should_suppress
from .logger import Logger
from .output import (
    BufferStream,
    FileStream,
    LogOutput,
    OnDropPolicy,
    StderrStream,
    Toggleable,
)
from .rwlock import ReadWriteLock
from .schemas import FileOutputSettings, FormatterSettings, LoggerSettings, OutputSettings
from .shared import (
    debug,
    error,
    fatal,
    get_logger,
    info,
    read_logger,
    reset_logger,
    set_logger,
    warning,
    write_logger,
)
from .template import load_template, save_template

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("prettylog")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Core classes
    "Logger",
    "LogEvent",
    "LogFormatter",
    "Severity",
    "Verbosity",
    "should_suppress",
    # Colors
    "Color",
    "CustomColor",
    "ColorCodec",
    "color_text",
    # Outputs
    "LogOutput",
    "Toggleable",
    "StderrStream",
    "BufferStream",
    "FileStream",
    "OnDropPolicy",
    # Shared logger
    "ReadWriteLock",
    "get_logger",
    "set_logger",
    "reset_logger",
    "read_logger",
    "write_logger",
    "debug",
    "info",
    "warning",
    "error",
    "fatal",
    # Templates
    "LoggerSettings",
    "FormatterSettings",
    "OutputSettings",
    "FileOutputSettings",
    "load_template",
    "save_template",
    # Exceptions
    "PrettyLogError",
    "ValidationError",
    "MissingMessagePlaceholderError",
    "ConfigError",
    "OutputError",
    "OutputDisabledError",
    "EmptyBufferError",
    "FileLockedError",
    "LogFileIOError",
]
