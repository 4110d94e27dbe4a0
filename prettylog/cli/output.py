"""
Output abstraction for the prettylog command line tool.

Tools write through an OutputWriter instead of printing, so tests can
capture results and error messages separately without touching the real
stdout and stderr.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write a result line (trailing newline added)."""
        ...

    def write_raw(self, text: str) -> None:
        """Write result text verbatim."""
        ...

    def error(self, text: str) -> None:
        """Write a diagnostic line."""
        ...


class ConsoleOutput:
    """
    Production writer: results to stdout, diagnostics to stderr.

    Example:
        import io
        out = ConsoleOutput(io.StringIO(), io.StringIO())
        out.write("rendered")
        out.error("template not found")
    """

    def __init__(self, stream: TextIO | None = None, err_stream: TextIO | None = None) -> None:
        """
        Initialize with optional streams.

        Args:
            stream: Result stream (defaults to sys.stdout)
            err_stream: Diagnostic stream (defaults to sys.stderr)
        """
        self._stream = stream if stream is not None else sys.stdout
        self._err_stream = err_stream if err_stream is not None else sys.stderr

    def write(self, text: str = "") -> None:
        print(text, file=self._stream)

    def write_raw(self, text: str) -> None:
        print(text, end="", file=self._stream)
        self._stream.flush()

    def error(self, text: str) -> None:
        print(text, file=self._err_stream)


class BufferedOutput:
    """
    Writer that captures output in memory.

    Example:
        out = BufferedOutput()
        out.write("Line 1")
        out.error("oops")
        assert out.text == "Line 1\\n"
        assert out.errors == ["oops"]
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._errors: list[str] = []

    def write(self, text: str = "") -> None:
        self._parts.append(text + "\n")

    def write_raw(self, text: str) -> None:
        self._parts.append(text)

    def error(self, text: str) -> None:
        self._errors.append(text)

    @property
    def text(self) -> str:
        """Everything written as results, concatenated."""
        return "".join(self._parts)

    @property
    def lines(self) -> list[str]:
        """Result text split into lines."""
        return self.text.splitlines()

    @property
    def errors(self) -> list[str]:
        """Diagnostic lines."""
        return self._errors.copy()

    def clear(self) -> None:
        self._parts.clear()
        self._errors.clear()
