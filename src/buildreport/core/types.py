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

"""Core data classes for build diagnostics and project buckets.

A ``Project`` is the bucket that accumulates the errors, warnings and messages
raised while it was the innermost active project of a build. Diagnostics are
immutable; projects are only ever appended to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .type_aliases import DiagnosticCode

if TYPE_CHECKING:
    from buildreport.compat import Self

    from .model_types import MessageImportance
    from .type_aliases import ProjectFile


@dataclass(slots=True, frozen=True)
class CodedDiagnostic:
    """Shared shape of build errors and warnings.

    Attributes:
        code: Diagnostic code reported by the tool (e.g. ``CS0168``), if any.
        text: Human-readable diagnostic message.
        file: File the diagnostic points at; ``None`` when no location was reported.
        line: Line number reported by the tool.
        column: Column number reported by the tool.
    """

    code: DiagnosticCode | None
    text: str
    file: str | None
    line: int = 0
    column: int = 0

    @classmethod
    def from_raw(
        cls,
        code: str | None,
        text: str | None,
        file: str | None,
        line: int = 0,
        column: int = 0,
    ) -> Self:
        """Build a diagnostic from raw event fields, treating an empty file as no location."""
        return cls(
            code=DiagnosticCode(code) if code is not None else None,
            text=text or "",
            file=file or None,
            line=line,
            column=column,
        )

    @property
    def has_location(self) -> bool:
        return self.file is not None


@dataclass(slots=True, frozen=True)
class BuildError(CodedDiagnostic):
    """An error raised by the build engine."""


@dataclass(slots=True, frozen=True)
class BuildWarning(CodedDiagnostic):
    """A warning raised by the build engine."""


@dataclass(slots=True, frozen=True)
class BuildMessage:
    text: str
    importance: MessageImportance


def _default_errors() -> list[BuildError]:
    return []


def _default_warnings() -> list[BuildWarning]:
    return []


def _default_messages() -> list[BuildMessage]:
    return []


@dataclass(slots=True, eq=False)
class Project:
    """Bucket of diagnostics recorded for one project file.

    Projects compare by identity: one file path maps to exactly one bucket for
    the lifetime of an aggregation.

    Attributes:
        file: Project file path as reported by the build engine.
        errors: Errors in arrival order.
        warnings: Warnings in arrival order.
        messages: Messages (already importance-filtered) in arrival order.
    """

    file: ProjectFile
    errors: list[BuildError] = field(default_factory=_default_errors)
    warnings: list[BuildWarning] = field(default_factory=_default_warnings)
    messages: list[BuildMessage] = field(default_factory=_default_messages)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def message_count(self) -> int:
        return len(self.messages)

    def add_error(self, error: BuildError) -> None:
        self.errors.append(error)

    def add_warning(self, warning: BuildWarning) -> None:
        self.warnings.append(warning)

    def add_message(self, message: BuildMessage) -> None:
        self.messages.append(message)


__all__ = [
    "BuildError",
    "BuildMessage",
    "BuildWarning",
    "CodedDiagnostic",
    "Project",
]
