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

"""buildreport - per-project build reports from build engine events.

Collects project lifecycle, error, warning and message events from a build,
attributes each diagnostic to the project that raised it, and writes a single
XML (or JSON) report summarising the build.
"""

from __future__ import annotations

from buildreport.exceptions import (
    BuildReportError,
    BuildReportTypeError,
    BuildReportValidationError,
    EventProtocolError,
    EventStreamError,
    LoggerClosedError,
    UnbalancedProjectEventError,
)

from .aggregator import Aggregator
from .config import ReportConfig, ReportSettings, load_config, resolve_settings
from .core.model_types import MessageImportance, ReportFormat, Verbosity
from .core.types import BuildError, BuildMessage, BuildWarning, Project
from .events import (
    ErrorRaised,
    MessageRaised,
    ProjectFinished,
    ProjectStarted,
    WarningRaised,
    parse_event,
    read_events,
)
from .paths import PathNormalizer
from .report import BuildReport, build_report, render_report, write_report
from .services import BuildLogger

__all__ = [
    "Aggregator",
    "BuildError",
    "BuildLogger",
    "BuildMessage",
    "BuildReport",
    "BuildReportError",
    "BuildReportTypeError",
    "BuildReportValidationError",
    "BuildWarning",
    "ErrorRaised",
    "EventProtocolError",
    "EventStreamError",
    "LoggerClosedError",
    "MessageImportance",
    "MessageRaised",
    "PathNormalizer",
    "Project",
    "ProjectFinished",
    "ProjectStarted",
    "ReportConfig",
    "ReportFormat",
    "ReportSettings",
    "UnbalancedProjectEventError",
    "Verbosity",
    "WarningRaised",
    "__version__",
    "build_report",
    "load_config",
    "parse_event",
    "read_events",
    "render_report",
    "resolve_settings",
    "write_report",
]

__version__ = "0.1.0"
