"""
Constants and default values for prettylog.

This module holds every default the formatter, the outputs and the logger
start from, so that a freshly constructed Logger and a template written by
`prettylog template init` agree on what "default" means.
"""


class LogConstants:
    """Constants for the logging system."""

    # Template placeholders
    PLACEHOLDER_PREFIX: str = "%"
    HEADER_PLACEHOLDER: str = "h"
    DATETIME_PLACEHOLDER: str = "d"
    MESSAGE_PLACEHOLDER: str = "m"
    COUNT_PLACEHOLDER: str = "c"

    # Default format strings
    DEFAULT_LOG_FORMAT: str = "[%h] %m"
    DEFAULT_DATETIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # Default per-severity header text, keyed by severity name
    DEFAULT_HEADERS: dict[str, str] = {
        "debug": "DBG",
        "info": "INF",
        "warning": "WAR",
        "error": "ERR",
        "fatal_error": "FATAL",
    }

    # Default per-severity header colors, keyed by severity name
    DEFAULT_COLORS: dict[str, str] = {
        "debug": "blue",
        "info": "green",
        "warning": "yellow",
        "error": "red",
        "fatal_error": "magenta",
    }

    # File output
    DEFAULT_MAX_BUFFER_SIZE: int = 128
    FILE_ENCODING: str = "utf-8"

    # ANSI escape sequences
    ESCAPE_PREFIX: str = "\x1b["
    RESET: str = "\x1b[0m"

    # Template files
    YAML_SUFFIXES: tuple[str, ...] = (".yaml", ".yml")
    JSON_INDENT: int = 2
