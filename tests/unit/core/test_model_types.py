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

"""Unit tests for core model enums and diagnostic types."""

from __future__ import annotations

import pytest

from buildreport.core.model_types import MessageImportance, ReportFormat, Verbosity
from buildreport.core.types import BuildError, BuildWarning

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("quiet", Verbosity.QUIET),
        ("Minimal", Verbosity.MINIMAL),
        (" n ", Verbosity.NORMAL),
        ("d", Verbosity.DETAILED),
        ("diag", Verbosity.DIAGNOSTIC),
    ],
)
def test_verbosity_from_str(raw: str, expected: Verbosity) -> None:
    assert Verbosity.from_str(raw) is expected


def test_verbosity_from_str_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown verbosity"):
        _ = Verbosity.from_str("loud")


def test_verbosity_order() -> None:
    levels = list(Verbosity)
    assert [level.rank for level in levels] == [0, 1, 2, 3, 4]
    assert Verbosity.MINIMAL.exceeds(Verbosity.QUIET)
    assert not Verbosity.QUIET.exceeds(Verbosity.QUIET)
    # string comparison would put "diagnostic" before "minimal"
    assert Verbosity.DIAGNOSTIC.exceeds(Verbosity.MINIMAL)


def test_message_thresholds() -> None:
    assert Verbosity.QUIET.message_threshold() is None
    assert Verbosity.MINIMAL.message_threshold() is None
    assert Verbosity.NORMAL.message_threshold() is MessageImportance.HIGH
    assert Verbosity.DETAILED.message_threshold() is MessageImportance.NORMAL
    assert Verbosity.DIAGNOSTIC.message_threshold() is MessageImportance.LOW


def test_importance_threshold_is_inclusive() -> None:
    assert MessageImportance.NORMAL.is_at_least(MessageImportance.NORMAL)
    assert MessageImportance.HIGH.is_at_least(MessageImportance.LOW)
    assert not MessageImportance.LOW.is_at_least(MessageImportance.NORMAL)


def test_importance_coerce() -> None:
    assert MessageImportance.coerce(MessageImportance.LOW) is MessageImportance.LOW
    assert MessageImportance.coerce(2) is MessageImportance.LOW
    assert MessageImportance.coerce("HIGH") is MessageImportance.HIGH
    for bad in (True, 3, -1, 1.5, "urgent"):
        with pytest.raises(ValueError, match="Unknown message importance"):
            _ = MessageImportance.coerce(bad)


def test_importance_label() -> None:
    assert [importance.label for importance in MessageImportance] == ["High", "Normal", "Low"]


def test_report_format_from_str() -> None:
    assert ReportFormat.from_str(" XML ") is ReportFormat.XML
    with pytest.raises(ValueError, match="Unknown report format"):
        _ = ReportFormat.from_str("yaml")


def test_diagnostic_from_raw_normalises_fields() -> None:
    error = BuildError.from_raw("CS1", None, "", 3, 4)
    assert error == BuildError(code="CS1", text="", file=None, line=3, column=4)
    assert isinstance(BuildWarning.from_raw(None, "w", "A.cs"), BuildWarning)
