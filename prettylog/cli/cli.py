#!/usr/bin/env python3
"""
prettylog CLI - render messages and manage template files.

Usage:
    prettylog render "disk full" --severity error
    prettylog template init etc/logger.json
    prettylog template show etc/logger.json --format yaml
    prettylog template check etc/logger.json
    prettylog --help

Exit codes: 0 success, 1 handled error, 2 usage error.
"""

import argparse
import sys
from collections.abc import Sequence

import prettylog

from .output import ConsoleOutput, OutputWriter
from .tools import TOOLS, Tool


def build_parser(out: OutputWriter) -> tuple[argparse.ArgumentParser, dict[str, Tool]]:
    """Build the argument parser with every tool registered as a subcommand."""
    parser = argparse.ArgumentParser(
        prog="prettylog",
        description="Render log messages and manage prettylog template files",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"prettylog {prettylog.__version__}",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    tools: dict[str, Tool] = {}
    for tool_cls in TOOLS:
        tool = tool_cls(out)
        sub = commands.add_parser(tool.name, help=tool.help_text)
        tool.add_args(sub)
        tools[tool.name] = tool
    return parser, tools


def main(argv: Sequence[str] | None = None, out: OutputWriter | None = None) -> int:
    """Main entry point for the prettylog CLI."""
    parser, tools = build_parser(out if out is not None else ConsoleOutput())
    args = parser.parse_args(argv)
    return tools[args.command].run(args)


if __name__ == "__main__":
    sys.exit(main())
