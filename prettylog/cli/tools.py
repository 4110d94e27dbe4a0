"""
Subcommands of the prettylog command line tool.

Each tool registers its own arguments on a subparser and returns a process
exit code from run(): 0 on success, 1 on a handled error (reported through
the OutputWriter's error channel).
"""

import argparse
import io
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..event import LogEvent
from ..exceptions import PrettyLogError
from ..formatter import LogFormatter
from ..levels import Severity
from ..paths import expand_path
from ..schemas import LoggerSettings
from ..template import build_formatter, dump_settings, load_template, save_template
from .output import OutputWriter

# Width used when rendering rich tables to text
_TABLE_WIDTH = 100


class Tool:
    """Base class for CLI subcommands."""

    name: str = ""
    help_text: str = ""

    def __init__(self, out: OutputWriter) -> None:
        self.out = out

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """Add command-line arguments."""

    def run(self, args: argparse.Namespace) -> int:
        raise NotImplementedError


class RenderTool(Tool):
    """Render one message the way a logger with the given template would."""

    name = "render"
    help_text = "Render a log message with a template"

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("message", help="Message text")
        parser.add_argument(
            "--template",
            "-t",
            default=None,
            help="Template file (default: built-in defaults)",
        )
        parser.add_argument(
            "--severity",
            "-s",
            choices=[s.value for s in Severity],
            default=Severity.INFO.value,
            help="Event severity (default: info)",
        )
        parser.add_argument(
            "--no-color",
            action="store_true",
            help="Disable header coloring",
        )

    def run(self, args: argparse.Namespace) -> int:
        try:
            formatter = self._formatter(args.template)
        except PrettyLogError as e:
            self.out.error(f"error: {e}")
            return 1

        if args.no_color:
            formatter.toggle_header_color(False)

        event = LogEvent(args.message, Severity.parse(args.severity))
        self.out.write_raw(formatter.render(event, count=1))
        return 0

    def _formatter(self, template: str | None) -> LogFormatter:
        if template is None:
            return LogFormatter()
        return build_formatter(load_template(template).formatter)


class TemplateTool(Tool):
    """
    Manage template files.

    Actions:
    - init: write the default template
    - show: display a template as a table, JSON or YAML
    - check: validate a template without applying it
    """

    name = "template"
    help_text = "Create, display and validate template files"

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        actions = parser.add_subparsers(dest="action", metavar="ACTION", required=True)

        init = actions.add_parser("init", help="Write the default template")
        init.add_argument("path", help="Template file (.json, .yaml or .yml)")
        init.add_argument(
            "--force", action="store_true", help="Overwrite an existing file"
        )

        show = actions.add_parser("show", help="Display a template")
        show.add_argument("path", help="Template file")
        show.add_argument(
            "--format",
            "-f",
            choices=["table", "json", "yaml"],
            default="table",
            help="Output format (default: table)",
        )

        check = actions.add_parser("check", help="Validate a template")
        check.add_argument("path", help="Template file")

    def run(self, args: argparse.Namespace) -> int:
        handler = {
            "init": self._init,
            "show": self._show,
            "check": self._check,
        }[args.action]
        try:
            return handler(args)
        except PrettyLogError as e:
            self.out.error(f"error: {e}")
            return 1

    def _init(self, args: argparse.Namespace) -> int:
        target = Path(expand_path(args.path))
        if target.exists() and not args.force:
            self.out.error(f"error: {target} already exists (use --force to overwrite)")
            return 1
        written = save_template(LoggerSettings(), target)
        self.out.write(f"Template written to {written}")
        return 0

    def _show(self, args: argparse.Namespace) -> int:
        settings = load_template(args.path)
        if args.format == "table":
            self.out.write_raw(self._format_table(settings))
        else:
            self.out.write_raw(dump_settings(settings, args.format))
        return 0

    def _check(self, args: argparse.Namespace) -> int:
        settings = load_template(args.path)
        # Schema validation does not cover strftime; the formatter does
        build_formatter(settings.formatter)
        self.out.write(f"OK: {args.path}")
        return 0

    def _format_table(self, settings: LoggerSettings) -> str:
        """Render settings as a two-column rich table in plain text."""
        table = Table(title="Template", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, value in _flatten(settings.model_dump(mode="json")):
            table.add_row(key, Text(value))

        buffer = io.StringIO()
        console = Console(file=buffer, width=_TABLE_WIDTH, no_color=True, highlight=False)
        console.print(table)
        return buffer.getvalue()


def _flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """Flatten nested settings to dotted key/value pairs."""
    result: list[tuple[str, str]] = []
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            result.extend(_flatten(value, full_key))
        elif value is None:
            result.append((full_key, ""))
        elif isinstance(value, bool):
            result.append((full_key, str(value).lower()))
        elif isinstance(value, str) and value.startswith("\x1b"):
            # Raw escapes would recolor the table itself
            result.append((full_key, repr(value)))
        else:
            result.append((full_key, str(value)))
    return result


TOOLS: list[type[Tool]] = [RenderTool, TemplateTool]
