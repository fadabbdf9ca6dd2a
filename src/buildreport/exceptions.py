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

"""Common exception hierarchy for buildreport."""

from __future__ import annotations

__all__ = [
    "BuildReportError",
    "BuildReportTypeError",
    "BuildReportValidationError",
    "EventProtocolError",
    "EventStreamError",
    "LoggerClosedError",
    "UnbalancedProjectEventError",
]


class BuildReportError(Exception):
    """Base error for all buildreport exceptions."""


class BuildReportValidationError(BuildReportError, ValueError):
    """Raised when input data fails validation checks."""


class BuildReportTypeError(BuildReportError, TypeError):
    """Raised when input data has an unexpected type."""


class EventProtocolError(BuildReportError, RuntimeError):
    """Raised when the event source violates the build event protocol."""


class UnbalancedProjectEventError(EventProtocolError):
    """Raised when a project-finished event arrives with no project in scope."""

    def __init__(self) -> None:
        super().__init__("project finished without a matching project started event")


class LoggerClosedError(EventProtocolError):
    """Raised when events arrive after the report has been written."""

    def __init__(self) -> None:
        super().__init__("build logger has already been shut down")


class EventStreamError(BuildReportValidationError):
    """Raised when a serialized event stream contains an invalid record."""

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Invalid build event on line {line_number}: {reason}")
