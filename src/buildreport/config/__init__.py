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

"""Configuration management for buildreport.

Loads ``buildreport.toml`` files, validates them, and resolves the effective
report settings from CLI values, environment overrides and file values.
"""

from __future__ import annotations

from .loader import load_config, resolve_path_fields
from .models import (
    ConfigFieldChoiceError,
    ConfigFieldTypeError,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    ReportConfig,
    ReportConfigModel,
    UnsupportedConfigVersionError,
    ensure_list,
)
from .settings import ReportSettings, output_path_from_parameters, resolve_settings

__all__ = [
    "ConfigFieldChoiceError",
    "ConfigFieldTypeError",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "ReportConfig",
    "ReportConfigModel",
    "ReportSettings",
    "UnsupportedConfigVersionError",
    "ensure_list",
    "load_config",
    "output_path_from_parameters",
    "resolve_path_fields",
    "resolve_settings",
]
