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

"""``buildreport render``: replay a JSON-lines event stream into a build report."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from buildreport._internal.error_codes import error_code_for
from buildreport.cli.helpers import failure, register_argument, status
from buildreport.config import load_config, resolve_settings
from buildreport.core.model_types import ReportFormat, Verbosity
from buildreport.events import read_events
from buildreport.exceptions import BuildReportError
from buildreport.services import BuildLogger

if TYPE_CHECKING:
    from buildreport.cli.types import SubparserCollection
    from buildreport.report import BuildReport

logger: logging.Logger = logging.getLogger("buildreport.cli")

STDIN_MARKER = "-"


def register_render_command(
    subparsers: SubparserCollection,
    *,
    parents: list[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach the ``buildreport render`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global flags.
    """
    render = subparsers.add_parser(
        "render",
        help="Write a build report from a JSON-lines event stream",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        render,
        "events",
        nargs="?",
        default=STDIN_MARKER,
        help="Event stream file, one JSON object per line ('-' reads stdin).",
    )
    register_argument(
        render,
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Report file (default: msbuild-output.xml).",
    )
    register_argument(
        render,
        "-p",
        "--parameters",
        default=None,
        help="Logger parameter string; the first ';'-separated item names the report file.",
    )
    register_argument(
        render,
        "-v",
        "--verbosity",
        default=None,
        metavar="LEVEL",
        help=f"Report verbosity ({', '.join(level.value for level in Verbosity)}; q/m/n/d/diag accepted).",
    )
    register_argument(
        render,
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in ReportFormat],
        default=None,
        help="Report document format (default: xml).",
    )
    register_argument(
        render,
        "--working-dir",
        type=Path,
        default=None,
        help="Directory stripped from reported paths (default: current directory).",
    )
    register_argument(
        render,
        "--config",
        type=Path,
        default=None,
        help="Explicit buildreport.toml (default: search the current directory).",
    )


def _open_events(source: str) -> TextIO:
    if source == STDIN_MARKER:
        return sys.stdin
    return Path(source).open(encoding="utf-8")  # noqa: SIM115


def _render(args: argparse.Namespace) -> BuildReport:
    config = load_config(args.config)
    settings = resolve_settings(
        config,
        output=args.output,
        parameters=args.parameters,
        verbosity=args.verbosity,
        output_format=args.output_format,
        working_dir=args.working_dir,
    )
    build_logger = BuildLogger(settings)
    stream = _open_events(args.events)
    try:
        handled = build_logger.feed(read_events(stream))
    finally:
        if stream is not sys.stdin:
            stream.close()
    logger.debug("Replayed %s events from %s", handled, args.events)
    report = build_logger.shutdown()
    status(
        f"Wrote {settings.output_format.value} report to {settings.output_path} "
        f"({report.project_count} projects, {report.error_count} errors, {report.warning_count} warnings)",
    )
    return report


def execute_render(args: argparse.Namespace) -> int:
    """Execute the render subcommand.

    Args:
        args: Parsed CLI namespace.

    Returns:
        ``0`` when the report was written, ``1`` when configuration, the event
        stream or the output file could not be handled.
    """
    try:
        _ = _render(args)
    except BuildReportError as exc:
        failure(str(exc), code=error_code_for(exc))
        return 1
    except OSError as exc:
        failure(f"I/O error: {exc}")
        return 1
    return 0


__all__ = ["execute_render", "register_render_command"]
