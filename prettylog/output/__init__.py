"""
Output streams for rendered logs.

- StderrStream: direct write to the error stream
- BufferStream: in-memory capture of raw events
- FileStream: buffered, lock-aware file output
- LogOutput: fan-out of one event to all of the above
"""

from .aggregator import LogOutput
from .base import Toggleable
from .buffer import BufferStream
from .console import StderrStream
from .file import FileStream, OnDropPolicy

__all__ = [
    "LogOutput",
    "Toggleable",
    "BufferStream",
    "StderrStream",
    "FileStream",
    "OnDropPolicy",
]
