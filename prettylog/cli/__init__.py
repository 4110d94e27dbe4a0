"""
Command line tool for prettylog.
"""

from .cli import main
from .output import BufferedOutput, ConsoleOutput, OutputWriter

__all__ = ["main", "OutputWriter", "ConsoleOutput", "BufferedOutput"]
