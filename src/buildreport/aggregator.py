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

"""Correlate build events into per-project diagnostic buckets.

Build engines report nested project-started/project-finished pairs for
multi-project and multi-target builds. The aggregator keeps a stack of the
projects that are currently open and attributes every diagnostic to the
innermost one; diagnostics raised while no project is open land in a
synthetic root project.

The aggregator is single-writer: callers that receive events on several
threads must serialise calls (see ``buildreport.services.logger``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Final

from buildreport._internal.utils import consume
from buildreport.core.model_types import LogComponent, MessageImportance, Verbosity
from buildreport.core.type_aliases import ProjectFile
from buildreport.core.types import BuildError, BuildMessage, BuildWarning, Project
from buildreport.events import (
    ErrorRaised,
    MessageRaised,
    ProjectFinished,
    ProjectStarted,
    WarningRaised,
)
from buildreport.exceptions import UnbalancedProjectEventError
from buildreport.logging import structured_extra
from buildreport.paths import PathNormalizer

if TYPE_CHECKING:
    from buildreport.events import BuildEvent

logger: logging.Logger = logging.getLogger("buildreport.aggregator")

ROOT_PROJECT_NAME: Final[str] = "MSBuild"
DEFAULT_SOLUTION_SUFFIXES: Final[tuple[str, ...]] = (".sln",)
DEFAULT_PROJECT_SUFFIXES: Final[tuple[str, ...]] = (".csproj",)


class SolutionTracker:
    """Best-effort detection of the solution a build was started for.

    The first solution file seen wins. A project file is remembered only
    while nothing better is known, and is replaced by the first solution file
    that follows it.
    """

    __slots__ = ("_normalizer", "_path", "_project_suffixes", "_solution_suffixes")

    def __init__(
        self,
        normalizer: PathNormalizer,
        *,
        solution_suffixes: Sequence[str] = DEFAULT_SOLUTION_SUFFIXES,
        project_suffixes: Sequence[str] = DEFAULT_PROJECT_SUFFIXES,
    ) -> None:
        super().__init__()
        self._normalizer = normalizer
        self._solution_suffixes = tuple(solution_suffixes)
        self._project_suffixes = tuple(project_suffixes)
        self._path: str | None = None

    @property
    def path(self) -> str | None:
        return self._path

    def _is_solution(self, path: str) -> bool:
        return path.endswith(self._solution_suffixes)

    def _is_project(self, path: str) -> bool:
        return path.endswith(self._project_suffixes)

    def observe(self, project_file: str) -> None:
        if (self._path is None or self._is_project(self._path)) and self._is_solution(project_file):
            self._path = self._normalizer.normalize(project_file)
        elif self._path is None and self._is_project(project_file):
            self._path = self._normalizer.normalize(project_file)


class Aggregator:
    """Route build events to the project bucket that is current when they arrive.

    Args:
        verbosity: Report verbosity; decides which message importances are kept.
        normalizer: Strips the working directory from the detected solution path.
        root_project_name: Name of the bucket collecting events outside any project.
        solution_suffixes: File suffixes identifying solution files.
        project_suffixes: File suffixes identifying project files.
    """

    __slots__ = (
        "_projects",
        "_projects_by_file",
        "_root",
        "_scope",
        "_solution",
        "message_threshold",
        "verbosity",
    )

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.NORMAL,
        *,
        normalizer: PathNormalizer | None = None,
        root_project_name: str = ROOT_PROJECT_NAME,
        solution_suffixes: Sequence[str] = DEFAULT_SOLUTION_SUFFIXES,
        project_suffixes: Sequence[str] = DEFAULT_PROJECT_SUFFIXES,
    ) -> None:
        super().__init__()
        self.verbosity = verbosity
        self.message_threshold: MessageImportance | None = verbosity.message_threshold()
        self._solution = SolutionTracker(
            normalizer or PathNormalizer.from_cwd(),
            solution_suffixes=solution_suffixes,
            project_suffixes=project_suffixes,
        )
        self._root = Project(file=ProjectFile(root_project_name))
        self._projects: list[Project] = [self._root]
        self._projects_by_file: dict[str, Project] = {}
        self._scope: list[Project] = []

    @property
    def projects(self) -> tuple[Project, ...]:
        """All buckets in creation order, root first."""
        return tuple(self._projects)

    @property
    def root(self) -> Project:
        return self._root

    @property
    def solution_path(self) -> str | None:
        return self._solution.path

    @property
    def depth(self) -> int:
        """Number of projects currently open."""
        return len(self._scope)

    @property
    def current_project(self) -> Project:
        """Bucket that receives the next diagnostic."""
        return self._scope[-1] if self._scope else self._root

    def project_for(self, project_file: str) -> Project | None:
        return self._projects_by_file.get(project_file)

    def _ensure_project(self, project_file: str) -> Project:
        project = self._projects_by_file.get(project_file)
        if project is None:
            project = Project(file=ProjectFile(project_file))
            self._projects_by_file[project_file] = project
            self._projects.append(project)
        return project

    def on_project_started(self, project_file: str) -> None:
        self._solution.observe(project_file)
        project = self._ensure_project(project_file)
        self._scope.append(project)
        logger.debug(
            "Entered project %s",
            project_file,
            extra=structured_extra(
                component=LogComponent.AGGREGATOR,
                project=project_file,
                depth=self.depth,
            ),
        )

    def on_project_finished(self) -> None:
        """Close the innermost open project.

        Raises:
            UnbalancedProjectEventError: If no project is open.
        """
        if not self._scope:
            raise UnbalancedProjectEventError
        project = self._scope.pop()
        logger.debug(
            "Left project %s",
            project.file,
            extra=structured_extra(
                component=LogComponent.AGGREGATOR,
                project=project.file,
                depth=self.depth,
            ),
        )

    def on_error(
        self,
        code: str | None,
        text: str | None,
        file: str | None = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        self.current_project.add_error(BuildError.from_raw(code, text, file, line, column))

    def on_warning(
        self,
        code: str | None,
        text: str | None,
        file: str | None = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        self.current_project.add_warning(BuildWarning.from_raw(code, text, file, line, column))

    def on_message(self, text: str | None, importance: MessageImportance) -> bool:
        """Record a message when it is important enough for the configured verbosity.

        Returns:
            True when the message was recorded.
        """
        threshold = self.message_threshold
        if threshold is None or not importance.is_at_least(threshold):
            return False
        self.current_project.add_message(BuildMessage(text=text or "", importance=importance))
        return True

    def handle(self, event: BuildEvent) -> None:
        """Dispatch one event variant to the matching handler."""
        match event:
            case ProjectStarted(project_file=project_file):
                self.on_project_started(project_file)
            case ProjectFinished():
                self.on_project_finished()
            case ErrorRaised(code=code, message=message, file=file, line=line, column=column):
                self.on_error(code, message, file, line, column)
            case WarningRaised(code=code, message=message, file=file, line=line, column=column):
                self.on_warning(code, message, file, line, column)
            case MessageRaised(message=message, importance=importance):
                consume(self.on_message(message, importance))

    def feed(self, events: Iterable[BuildEvent]) -> int:
        """Handle every event in order and return how many were processed."""
        count = 0
        for event in events:
            self.handle(event)
            count += 1
        return count


__all__ = [
    "DEFAULT_PROJECT_SUFFIXES",
    "DEFAULT_SOLUTION_SUFFIXES",
    "ROOT_PROJECT_NAME",
    "Aggregator",
    "SolutionTracker",
]
