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

"""Unit tests for Utilities Error Codes."""

from __future__ import annotations

from pathlib import Path

import pytest

from buildreport._internal.error_codes import error_code_catalog, error_code_for
from buildreport.config import ConfigFieldChoiceError, ConfigReadError, ConfigValidationError
from buildreport.exceptions import (
    BuildReportError,
    BuildReportTypeError,
    BuildReportValidationError,
    EventStreamError,
    LoggerClosedError,
    UnbalancedProjectEventError,
)

pytestmark = pytest.mark.unit


def test_error_code_for_known_hierarchy() -> None:
    assert error_code_for(BuildReportError("x")) == "BR000"
    assert error_code_for(BuildReportValidationError("x")) == "BR100"
    assert error_code_for(BuildReportTypeError("x")) == "BR101"
    assert error_code_for(ConfigValidationError("x")) == "BR110"
    assert error_code_for(ConfigFieldChoiceError("verbosity", ("quiet",))) == "BR112"
    assert error_code_for(ConfigReadError(Path("x.toml"), OSError("denied"))) == "BR114"
    assert error_code_for(EventStreamError(3, "bad")) == "BR200"
    assert error_code_for(UnbalancedProjectEventError()) == "BR301"
    assert error_code_for(LoggerClosedError()) == "BR302"


def test_error_code_for_unknown_defaults_to_base() -> None:
    class CustomError(RuntimeError):
        pass

    assert error_code_for(CustomError("x")) == "BR000"


def test_error_code_catalog_uniqueness() -> None:
    catalog = error_code_catalog()
    codes = list(catalog.values())
    assert len(set(codes)) == len(codes)
    assert catalog["buildreport.exceptions.BuildReportError"] == "BR000"
    assert catalog["buildreport.config.models.InvalidConfigFileError"] == "BR115"
