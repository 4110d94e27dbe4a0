"""
Process-wide shared logger.

The shared Logger is created lazily on first use and guarded by a
reader/writer lock: logging calls take the shared side, reconfiguration
takes the exclusive side. It is closed at interpreter exit so queued file
output gets its close-time flush.

Example:
    >>> import prettylog
    >>> prettylog.info("service started")
    >>> with prettylog.write_logger() as lg:
    ...     lg.set_verbosity("all")
    >>> prettylog.debug("now visible")
"""

from __future__ import annotations

import atexit
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from .logger import Logger
from .rwlock import ReadWriteLock

_log = logging.getLogger(__name__)

_lock = ReadWriteLock()

# Global logger instance
_global_logger: Logger | None = None


def _ensure_logger() -> Logger:
    global _global_logger

    with _lock.read():
        if _global_logger is not None:
            return _global_logger

    with _lock.write():
        if _global_logger is None:
            _global_logger = Logger()
        return _global_logger


def get_logger() -> Logger:
    """
    Get or create the shared logger instance.

    Returns:
        Logger instance
    """
    return _ensure_logger()


def set_logger(logger: Logger) -> Logger | None:
    """
    Replace the shared logger.

    The previous instance is returned unclosed; the caller owns it.
    """
    global _global_logger

    with _lock.write():
        previous = _global_logger
        _global_logger = logger
    return previous


def reset_logger() -> None:
    """Close and forget the shared logger (a fresh one is created on next use)."""
    global _global_logger

    with _lock.write():
        previous = _global_logger
        _global_logger = None
    if previous is not None:
        previous.close()


@contextmanager
def read_logger() -> Iterator[Logger]:
    """Hold shared access to the shared logger for the duration of the block."""
    while True:
        _ensure_logger()
        with _lock.read():
            # reset_logger() may have run between the two lock acquisitions
            if _global_logger is not None:
                yield _global_logger
                return


@contextmanager
def write_logger() -> Iterator[Logger]:
    """Hold exclusive access to the shared logger, for reconfiguration."""
    global _global_logger

    with _lock.write():
        if _global_logger is None:
            _global_logger = Logger()
        yield _global_logger


def debug(message: str) -> None:
    with read_logger() as lg:
        lg.debug(message)


def info(message: str) -> None:
    with read_logger() as lg:
        lg.info(message)


def warning(message: str) -> None:
    with read_logger() as lg:
        lg.warning(message)


def error(message: str) -> None:
    with read_logger() as lg:
        lg.error(message)


def fatal(message: str) -> None:
    with read_logger() as lg:
        lg.fatal(message)


def _close_at_exit() -> None:
    if _global_logger is not None:
        _log.debug("closing shared logger at exit")
        _global_logger.close()


atexit.register(_close_at_exit)
