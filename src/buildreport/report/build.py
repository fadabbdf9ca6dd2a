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

"""Turn aggregated project buckets into a format-independent build report.

Report policy:

- When any project has an error, warnings are dropped from the whole report
  and projects keep the order in which they were first seen.
- Otherwise projects are listed by descending warning count (ties keep their
  first-seen order).
- At quiet verbosity only projects with errors or warnings are listed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from buildreport.core.model_types import Verbosity
from buildreport.paths import PathNormalizer, split_location

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from buildreport.core.types import BuildMessage, CodedDiagnostic, Project


@dataclass(slots=True, frozen=True)
class DiagnosticEntry:
    """Rendered error or warning; location fields are None when the diagnostic has no file."""

    code: str
    message: str
    directory: str | None = None
    name: str | None = None
    position: str | None = None


@dataclass(slots=True, frozen=True)
class MessageEntry:
    importance: str
    text: str


@dataclass(slots=True, frozen=True)
class ProjectEntry:
    directory: str
    name: str
    errors: tuple[DiagnosticEntry, ...] = ()
    warnings: tuple[DiagnosticEntry, ...] = ()
    messages: tuple[MessageEntry, ...] = ()


@dataclass(slots=True, frozen=True)
class BuildReport:
    """Everything a renderer needs to write the report document.

    Attributes:
        project_count: Number of project buckets, including the root bucket,
            whether or not they are listed.
        warning_count: Total warnings across all projects.
        error_count: Total errors across all projects.
        projects: Listed projects in report order.
        verbosity: Verbosity the report was built for.
        solution_name: Base name of the detected solution, if any.
        solution_dir: Directory of the detected solution, if any.
    """

    project_count: int
    warning_count: int
    error_count: int
    projects: tuple[ProjectEntry, ...]
    verbosity: Verbosity
    solution_name: str | None = None
    solution_dir: str | None = None

    @property
    def build_has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def pretty(self) -> bool:
        """Whether the rendered document should be indented."""
        return self.verbosity.exceeds(Verbosity.QUIET)


def format_position(line: int, column: int) -> str:
    return f"({line}, {column})"


def order_projects(projects: Sequence[Project], *, build_has_errors: bool) -> list[Project]:
    """Return a new list of ``projects`` in report order; the input is left untouched."""
    if build_has_errors:
        return list(projects)
    return sorted(projects, key=lambda project: -project.warning_count)


def should_list(project: Project, verbosity: Verbosity) -> bool:
    return verbosity.exceeds(Verbosity.QUIET) or project.error_count > 0 or project.warning_count > 0


def _diagnostic_entry(diagnostic: CodedDiagnostic, normalizer: PathNormalizer) -> DiagnosticEntry:
    if diagnostic.file is None:
        return DiagnosticEntry(code=diagnostic.code or "", message=diagnostic.text)
    directory, name = split_location(normalizer.normalize(diagnostic.file))
    return DiagnosticEntry(
        code=diagnostic.code or "",
        message=diagnostic.text,
        directory=directory,
        name=name,
        position=format_position(diagnostic.line, diagnostic.column),
    )


def _message_entries(messages: Iterable[BuildMessage]) -> tuple[MessageEntry, ...]:
    return tuple(MessageEntry(importance=message.importance.label, text=message.text) for message in messages)


def _project_entry(
    project: Project,
    *,
    include_warnings: bool,
    normalizer: PathNormalizer,
) -> ProjectEntry:
    directory, name = split_location(normalizer.normalize(project.file))
    warnings: tuple[DiagnosticEntry, ...] = ()
    if include_warnings:
        warnings = tuple(_diagnostic_entry(warning, normalizer) for warning in project.warnings)
    return ProjectEntry(
        directory=directory,
        name=name,
        errors=tuple(_diagnostic_entry(error, normalizer) for error in project.errors),
        warnings=warnings,
        messages=_message_entries(project.messages),
    )


def build_report(
    projects: Sequence[Project],
    *,
    verbosity: Verbosity,
    solution_path: str | None = None,
    normalizer: PathNormalizer | None = None,
) -> BuildReport:
    """Compute totals, apply the listing policy and return the report model.

    Args:
        projects: Project buckets in creation order.
        verbosity: Verbosity the build was logged with.
        solution_path: Detected solution path (already normalized), if any.
        normalizer: Strips the working directory from project and diagnostic paths.

    Returns:
        The report model ready for rendering.
    """
    normalizer = normalizer or PathNormalizer(working_dir="")
    error_count = sum(project.error_count for project in projects)
    warning_count = sum(project.warning_count for project in projects)
    build_has_errors = error_count > 0
    entries = tuple(
        _project_entry(project, include_warnings=not build_has_errors, normalizer=normalizer)
        for project in order_projects(projects, build_has_errors=build_has_errors)
        if should_list(project, verbosity)
    )
    solution_name: str | None = None
    solution_dir: str | None = None
    if solution_path is not None:
        solution_dir, solution_name = split_location(solution_path)
    return BuildReport(
        project_count=len(projects),
        warning_count=warning_count,
        error_count=error_count,
        projects=entries,
        verbosity=verbosity,
        solution_name=solution_name,
        solution_dir=solution_dir,
    )


__all__ = [
    "BuildReport",
    "DiagnosticEntry",
    "MessageEntry",
    "ProjectEntry",
    "build_report",
    "format_position",
    "order_projects",
    "should_list",
]
