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

"""Build logger service: the boundary between a build engine and the aggregator.

A ``BuildLogger`` lives for one build. Event handlers may be called from any
thread; a single lock serialises them so the aggregator only ever sees one
writer. ``shutdown`` writes the report exactly once.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from buildreport.aggregator import Aggregator
from buildreport.core.model_types import LogComponent, MessageImportance
from buildreport.exceptions import LoggerClosedError
from buildreport.logging import structured_extra
from buildreport.report import build_report, write_report

if TYPE_CHECKING:
    from collections.abc import Iterable

    from buildreport.config.settings import ReportSettings
    from buildreport.events import BuildEvent
    from buildreport.report import BuildReport

logger: logging.Logger = logging.getLogger("buildreport.services")


class BuildLogger:
    """Collect build events and write the report when the build ends.

    Args:
        settings: Resolved output path, verbosity, format and working directory.
    """

    __slots__ = ("_aggregator", "_closed", "_lock", "settings")

    def __init__(self, settings: ReportSettings) -> None:
        super().__init__()
        self.settings = settings
        self._aggregator = Aggregator(
            settings.verbosity,
            normalizer=settings.normalizer(),
            root_project_name=settings.root_project_name,
            solution_suffixes=settings.solution_suffixes,
            project_suffixes=settings.project_suffixes,
        )
        self._lock = threading.Lock()
        self._closed = False
        logger.debug(
            "Build logger initialised",
            extra=structured_extra(
                component=LogComponent.SERVICES,
                path=settings.output_path,
                verbosity=settings.verbosity,
            ),
        )

    @property
    def aggregator(self) -> Aggregator:
        return self._aggregator

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise LoggerClosedError

    def on_project_started(self, project_file: str) -> None:
        with self._lock:
            self._ensure_open()
            self._aggregator.on_project_started(project_file)

    def on_project_finished(self) -> None:
        with self._lock:
            self._ensure_open()
            self._aggregator.on_project_finished()

    def on_error(
        self,
        code: str | None,
        text: str | None,
        file: str | None = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        with self._lock:
            self._ensure_open()
            self._aggregator.on_error(code, text, file, line, column)

    def on_warning(
        self,
        code: str | None,
        text: str | None,
        file: str | None = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        with self._lock:
            self._ensure_open()
            self._aggregator.on_warning(code, text, file, line, column)

    def on_message(self, text: str | None, importance: MessageImportance) -> bool:
        with self._lock:
            self._ensure_open()
            return self._aggregator.on_message(text, importance)

    def handle(self, event: BuildEvent) -> None:
        with self._lock:
            self._ensure_open()
            self._aggregator.handle(event)

    def feed(self, events: Iterable[BuildEvent]) -> int:
        """Handle events in order; returns the number handled."""
        count = 0
        for event in events:
            self.handle(event)
            count += 1
        return count

    def _build_unlocked(self) -> BuildReport:
        return build_report(
            self._aggregator.projects,
            verbosity=self.settings.verbosity,
            solution_path=self._aggregator.solution_path,
            normalizer=self.settings.normalizer(),
        )

    def build(self) -> BuildReport:
        """Return the report for the events seen so far without writing it."""
        with self._lock:
            return self._build_unlocked()

    def shutdown(self) -> BuildReport:
        """Write the report and stop accepting events.

        Returns:
            The report that was written.

        Raises:
            LoggerClosedError: If the logger was already shut down.
            OSError: If the report cannot be written.
        """
        with self._lock:
            self._ensure_open()
            self._closed = True
            report = self._build_unlocked()
        write_report(report, self.settings.output_path, fmt=self.settings.output_format)
        return report


__all__ = ["BuildLogger"]
