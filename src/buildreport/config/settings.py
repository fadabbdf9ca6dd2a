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

"""Resolve the effective report settings from CLI, environment and config file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from buildreport._internal.precedence import resolve_with_precedence
from buildreport.aggregator import DEFAULT_PROJECT_SUFFIXES, DEFAULT_SOLUTION_SUFFIXES, ROOT_PROJECT_NAME
from buildreport.core.model_types import ReportFormat, Verbosity
from buildreport.paths import PathNormalizer

from .constants import (
    DEFAULT_FORMAT,
    DEFAULT_OUTPUT_FILENAME,
    DEFAULT_VERBOSITY,
    OUTPUT_ENV,
    PARAMETER_SEPARATOR,
    VERBOSITY_ENV,
)
from .models import ConfigFieldChoiceError, ReportConfig

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class ReportSettings:
    """Fully resolved inputs for one build report.

    Attributes:
        output_path: File the report is written to.
        verbosity: Report verbosity.
        output_format: Report document format.
        working_dir: Directory stripped from reported paths.
        root_project_name: Name of the bucket for events outside any project.
        solution_suffixes: Suffixes that identify solution files.
        project_suffixes: Suffixes that identify project files.
    """

    output_path: Path
    verbosity: Verbosity = DEFAULT_VERBOSITY
    output_format: ReportFormat = DEFAULT_FORMAT
    working_dir: str = ""
    root_project_name: str = ROOT_PROJECT_NAME
    solution_suffixes: tuple[str, ...] = DEFAULT_SOLUTION_SUFFIXES
    project_suffixes: tuple[str, ...] = DEFAULT_PROJECT_SUFFIXES

    def normalizer(self) -> PathNormalizer:
        return PathNormalizer(working_dir=self.working_dir)


def output_path_from_parameters(parameters: str | None) -> Path | None:
    """Return the output file named by a logger parameter string.

    Only the first ``;``-separated item is meaningful; the rest is ignored.

    Examples:
        >>> output_path_from_parameters("build.xml;extra").name
        'build.xml'
        >>> output_path_from_parameters("") is None
        True
    """
    if not parameters:
        return None
    first = parameters.split(PARAMETER_SEPARATOR, 1)[0].strip()
    return Path(first) if first else None


def _verbosity_value(raw: Verbosity | str | None, *, source: str) -> Verbosity | None:
    if raw is None or isinstance(raw, Verbosity):
        return raw
    try:
        return Verbosity.from_str(raw)
    except ValueError as exc:
        raise ConfigFieldChoiceError(source, tuple(level.value for level in Verbosity)) from exc


def _format_value(raw: ReportFormat | str | None) -> ReportFormat | None:
    if raw is None or isinstance(raw, ReportFormat):
        return raw
    try:
        return ReportFormat.from_str(raw)
    except ValueError as exc:
        raise ConfigFieldChoiceError("output_format", tuple(fmt.value for fmt in ReportFormat)) from exc


def _absolute_dir(value: Path | str | None) -> str | None:
    if value is None:
        return None
    return os.fspath(Path(value).resolve())


def resolve_settings(
    config: ReportConfig | None = None,
    *,
    output: Path | None = None,
    parameters: str | None = None,
    verbosity: Verbosity | str | None = None,
    output_format: ReportFormat | str | None = None,
    working_dir: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ReportSettings:
    """Combine CLI values, environment overrides and configuration into ``ReportSettings``.

    Args:
        config: Loaded configuration file values.
        output: Output path given on the command line.
        parameters: Logger parameter string; its first item names the output file
            when ``output`` is not given.
        verbosity: Verbosity given on the command line.
        output_format: Report format given on the command line.
        working_dir: Working directory given on the command line, made absolute
            against the process working directory; defaults to that directory.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        The resolved settings.

    Raises:
        ConfigFieldChoiceError: If a verbosity or format value is not recognised.
    """
    cfg = config or ReportConfig()
    env = os.environ if environ is None else environ
    env_output = env.get(OUTPUT_ENV)
    cli_output = output if output is not None else output_path_from_parameters(parameters)
    output_path = resolve_with_precedence(
        cli_value=cli_output,
        env_value=Path(env_output) if env_output else None,
        config_value=cfg.output,
        default=Path(DEFAULT_OUTPUT_FILENAME),
    )
    resolved_verbosity = resolve_with_precedence(
        cli_value=_verbosity_value(verbosity, source="verbosity"),
        env_value=_verbosity_value(env.get(VERBOSITY_ENV) or None, source=VERBOSITY_ENV),
        config_value=cfg.verbosity,
        default=DEFAULT_VERBOSITY,
    )
    resolved_format = resolve_with_precedence(
        cli_value=_format_value(output_format),
        config_value=cfg.output_format,
        default=DEFAULT_FORMAT,
    )
    resolved_working_dir = resolve_with_precedence(
        cli_value=_absolute_dir(working_dir),
        config_value=_absolute_dir(cfg.working_dir),
        default=os.getcwd(),
    )
    return ReportSettings(
        output_path=output_path,
        verbosity=resolved_verbosity,
        output_format=resolved_format,
        working_dir=resolved_working_dir,
        root_project_name=cfg.root_project_name or ROOT_PROJECT_NAME,
        solution_suffixes=tuple(cfg.solution_suffixes),
        project_suffixes=tuple(cfg.project_suffixes),
    )


__all__ = ["ReportSettings", "output_path_from_parameters", "resolve_settings"]
