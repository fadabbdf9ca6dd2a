# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point and orchestration for buildreport commands."""

from __future__ import annotations

import argparse
import logging
import pathlib
from collections.abc import Callable, Sequence
from contextlib import suppress
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from buildreport import __version__
from buildreport._internal.utils import consume
from buildreport.cli.commands import render as render_command
from buildreport.cli.helpers import echo as _echo
from buildreport.cli.helpers import register_argument as _register_argument
from buildreport.cli.helpers import status as _status
from buildreport.config.constants import CONFIG_FILENAMES
from buildreport.core.model_types import LogFormat
from buildreport.logging import LOG_FORMATS, LOG_LEVELS, configure_logging

if TYPE_CHECKING:
    from buildreport.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("buildreport.cli")

BUILDREPORT_VERSION: Final[str] = __version__

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # buildreport configuration template
    # Save this file as buildreport.toml next to your solution, or move the
    # keys under [tool.buildreport] in an existing TOML file.
    config_version = 0

    # Report file; relative paths resolve against this file's directory.
    # output = "msbuild-output.xml"

    # quiet, minimal, normal, detailed or diagnostic (q/m/n/d/diag also work).
    # quiet lists only projects with errors or warnings; quiet and minimal record no messages.
    verbosity = "normal"

    # Report document format: xml or json.
    # output_format = "xml"

    # Prefix stripped from every reported path (default: current directory).
    # working_dir = "."

    # Name of the bucket for events raised outside any project.
    # root_project_name = "MSBuild"

    # File suffixes recognised as solutions and projects.
    # solution_suffixes = [".sln"]
    # project_suffixes = [".csproj"]
    """,
)


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the buildreport configuration template to a file.

    Args:
        path: Target path where the configuration file will be written.
        force: Overwrite the file if it already exists.

    Returns:
        int: Exit code (0 for success, 1 for failure).
    """
    if path.exists() and not force:
        _status(f"Refusing to overwrite existing file: {path}", err=True)
        _echo("Use --force if you want to replace it.", err=True)
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(CONFIG_TEMPLATE, encoding="utf-8"))
    _status(f"Wrote starter config to {path}")
    return 0


CommandHandler = Callable[[argparse.Namespace], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the buildreport command-line interface.

    Parses command-line arguments, configures logging, and dispatches to the
    matching command handler.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code from the executed command handler.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        _echo(f"buildreport {BUILDREPORT_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    return handler(args)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    _register_argument(
        common,
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Select logging output format (human-readable text or structured JSON).",
    )
    _register_argument(
        common,
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Set verbosity of logged events.",
    )
    parser = argparse.ArgumentParser(
        prog="buildreport",
        parents=[common],
        description="Aggregate build events into a per-project XML or JSON build report.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the buildreport version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")

    parents = [common]
    render_command.register_render_command(subparsers, parents=parents)
    _register_init_command(subparsers, parents=parents)
    return parser


def _register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None,
) -> None:
    """Register the 'init' subcommand, which writes a starter buildreport.toml.

    Args:
        subparsers: Subparser registry where the init command will be added.
        parents: Shared parent parsers carrying global flags.
    """
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=list(parents or []),
    )
    _register_argument(
        init,
        "path",
        nargs="?",
        type=pathlib.Path,
        default=pathlib.Path(CONFIG_FILENAMES[0]),
        help="Destination for the generated configuration file.",
    )
    _register_argument(
        init,
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists.",
    )


def _initialize_logging(log_format: str, log_level: str) -> None:
    """Configure logging for the CLI; failures are suppressed."""
    with suppress(Exception):  # best-effort logger init
        _ = configure_logging(LogFormat.from_str(log_format), log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "init": _execute_init,
        "render": render_command.execute_render,
    }


def _execute_init(args: argparse.Namespace) -> int:
    return write_config_template(args.path, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "main", "write_config_template"]
