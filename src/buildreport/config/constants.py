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

"""Default values and environment variable names for buildreport configuration."""

from __future__ import annotations

from typing import Final

from buildreport.core.model_types import ReportFormat, Verbosity

CONFIG_VERSION: Final[int] = 0
CONFIG_FILENAMES: Final[tuple[str, ...]] = ("buildreport.toml", ".buildreport.toml")
TOOL_SECTION: Final[str] = "buildreport"

DEFAULT_OUTPUT_FILENAME: Final[str] = "msbuild-output.xml"
DEFAULT_VERBOSITY: Final[Verbosity] = Verbosity.NORMAL
DEFAULT_FORMAT: Final[ReportFormat] = ReportFormat.XML

CONFIG_ENV: Final[str] = "BUILDREPORT_CONFIG"
OUTPUT_ENV: Final[str] = "BUILDREPORT_OUTPUT"
VERBOSITY_ENV: Final[str] = "BUILDREPORT_VERBOSITY"

PARAMETER_SEPARATOR: Final[str] = ";"

__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILENAMES",
    "CONFIG_VERSION",
    "DEFAULT_FORMAT",
    "DEFAULT_OUTPUT_FILENAME",
    "DEFAULT_VERBOSITY",
    "OUTPUT_ENV",
    "PARAMETER_SEPARATOR",
    "TOOL_SECTION",
    "VERBOSITY_ENV",
]
