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


"""Unit tests for CLI console output helpers."""

from __future__ import annotations

import pytest

from buildreport.cli.helpers import STATUS_TAG, echo, failure, status

pytestmark = [pytest.mark.unit, pytest.mark.cli]


def test_echo_writes_one_line_per_call(capsys: pytest.CaptureFixture[str]) -> None:
    echo("first")
    echo("second", err=True)
    captured = capsys.readouterr()
    assert captured.out == "first\n"
    assert captured.err == "second\n"


def test_status_lines_are_tagged(capsys: pytest.CaptureFixture[str]) -> None:
    status("Wrote report")
    assert capsys.readouterr().out == f"{STATUS_TAG} Wrote report\n"


def test_failure_goes_to_stderr_with_code(capsys: pytest.CaptureFixture[str]) -> None:
    failure("bad verbosity", code="BR112")
    failure("disk full")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == ["[buildreport] (BR112) bad verbosity", "[buildreport] disk full"]
