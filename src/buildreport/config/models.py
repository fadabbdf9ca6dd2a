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

"""Configuration models for buildreport.

Raw TOML data is validated by ``ReportConfigModel`` (pydantic) and converted to
the ``ReportConfig`` dataclass used at runtime.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from buildreport._internal.utils import dedupe_preserve
from buildreport.aggregator import DEFAULT_PROJECT_SUFFIXES, DEFAULT_SOLUTION_SUFFIXES
from buildreport.core.model_types import ReportFormat, Verbosity
from buildreport.exceptions import BuildReportValidationError

from .constants import CONFIG_VERSION


class ConfigValidationError(BuildReportValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigFieldTypeError(ConfigValidationError):
    """Raised when a configuration field has an invalid type."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} must be a string")


class ConfigFieldChoiceError(ConfigValidationError):
    """Raised when a configuration field is provided with an unsupported value."""

    def __init__(self, field: str, allowed: tuple[str, ...]) -> None:
        self.field = field
        self.allowed = allowed
        allowed_text = ", ".join(sorted(allowed))
        super().__init__(f"{field} must be one of: {allowed_text}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, path: Path, error: Exception) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Invalid buildreport configuration in {path}: {error}")


def ensure_list(value: object | None) -> list[str] | None:
    """Convert a string or iterable of strings to a list of stripped, non-empty strings.

    Returns:
        None when ``value`` is None, otherwise the cleaned list (possibly empty).
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return [stripped] if stripped else []
    if not isinstance(value, Iterable):
        return []
    result: list[str] = []
    for item in cast("Iterable[object]", value):
        if isinstance(item, str):
            stripped = item.strip()
            if stripped:
                result.append(stripped)
    return result


def _normalise_suffixes(values: Iterable[str]) -> list[str]:
    return dedupe_preserve(value if value.startswith(".") else f".{value}" for value in values)


def _default_solution_suffixes() -> list[str]:
    return list(DEFAULT_SOLUTION_SUFFIXES)


def _default_project_suffixes() -> list[str]:
    return list(DEFAULT_PROJECT_SUFFIXES)


@dataclass(slots=True)
class ReportConfig:
    """Report settings read from a configuration file; ``None`` means "not set".

    Attributes:
        output: Report file path.
        verbosity: Report verbosity.
        output_format: Report document format.
        working_dir: Directory stripped from reported paths.
        root_project_name: Name of the bucket for events outside any project.
        solution_suffixes: Suffixes that identify solution files.
        project_suffixes: Suffixes that identify project files.
        source: Configuration file the values were loaded from.
    """

    output: Path | None = None
    verbosity: Verbosity | None = None
    output_format: ReportFormat | None = None
    working_dir: Path | None = None
    root_project_name: str | None = None
    solution_suffixes: list[str] = field(default_factory=_default_solution_suffixes)
    project_suffixes: list[str] = field(default_factory=_default_project_suffixes)
    source: Path | None = None


class ReportConfigModel(BaseModel):
    """Pydantic model validating the ``buildreport.toml`` schema."""

    model_config = ConfigDict(extra="forbid")

    config_version: int = CONFIG_VERSION
    output: Path | None = None
    verbosity: Verbosity | None = None
    output_format: ReportFormat | None = None
    working_dir: Path | None = None
    root_project_name: str | None = None
    solution_suffixes: list[str] = Field(default_factory=_default_solution_suffixes)
    project_suffixes: list[str] = Field(default_factory=_default_project_suffixes)

    @field_validator("verbosity", mode="before")
    @classmethod
    def _coerce_verbosity(cls, value: object) -> Verbosity | None:
        if value is None or isinstance(value, Verbosity):
            return value
        if not isinstance(value, str):
            msg = "verbosity"
            raise ConfigFieldTypeError(msg)
        try:
            return Verbosity.from_str(value)
        except ValueError as exc:
            raise ConfigFieldChoiceError("verbosity", tuple(level.value for level in Verbosity)) from exc

    @field_validator("output_format", mode="before")
    @classmethod
    def _coerce_format(cls, value: object) -> ReportFormat | None:
        if value is None or isinstance(value, ReportFormat):
            return value
        if not isinstance(value, str):
            msg = "output_format"
            raise ConfigFieldTypeError(msg)
        try:
            return ReportFormat.from_str(value)
        except ValueError as exc:
            raise ConfigFieldChoiceError("output_format", tuple(fmt.value for fmt in ReportFormat)) from exc

    @field_validator("root_project_name", mode="before")
    @classmethod
    def _strip_root_name(cls, value: object) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip() or None
        msg = "root_project_name"
        raise ConfigFieldTypeError(msg)

    @field_validator("solution_suffixes", "project_suffixes", mode="before")
    @classmethod
    def _coerce_suffixes(cls, value: object) -> list[str]:
        return ensure_list(value) or []

    @model_validator(mode="after")
    def _normalise(self) -> ReportConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        self.solution_suffixes = _normalise_suffixes(self.solution_suffixes)
        self.project_suffixes = _normalise_suffixes(self.project_suffixes)
        return self


def model_to_dataclass(model: ReportConfigModel, *, source: Path | None = None) -> ReportConfig:
    return ReportConfig(
        output=model.output,
        verbosity=model.verbosity,
        output_format=model.output_format,
        working_dir=model.working_dir,
        root_project_name=model.root_project_name,
        solution_suffixes=list(model.solution_suffixes),
        project_suffixes=list(model.project_suffixes),
        source=source,
    )


__all__ = [
    "ConfigFieldChoiceError",
    "ConfigFieldTypeError",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "ReportConfig",
    "ReportConfigModel",
    "UnsupportedConfigVersionError",
    "ensure_list",
    "model_to_dataclass",
]
