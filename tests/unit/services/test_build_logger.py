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

"""Unit tests for the build logger service."""

from __future__ import annotations

import json
import threading
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any

import pytest

from buildreport.config import ReportSettings
from buildreport.core.model_types import MessageImportance, ReportFormat, Verbosity
from buildreport.events import ErrorRaised, ProjectFinished, ProjectStarted
from buildreport.exceptions import LoggerClosedError, UnbalancedProjectEventError
from buildreport.services import BuildLogger
from buildreport.services import logger as logger_module

if TYPE_CHECKING:
    from pathlib import Path

    from buildreport.report import BuildReport

pytestmark = pytest.mark.unit


def _settings(
    output_path: Path,
    *,
    output_format: ReportFormat = ReportFormat.XML,
) -> ReportSettings:
    return ReportSettings(
        output_path=output_path,
        verbosity=Verbosity.NORMAL,
        output_format=output_format,
        working_dir="/work/repo",
    )


def test_shutdown_writes_xml_report(tmp_path: Path) -> None:
    build_logger = BuildLogger(_settings(tmp_path / "msbuild-output.xml"))
    build_logger.on_project_started("/work/repo/A.sln")
    build_logger.on_project_started("/work/repo/src/A/A.csproj")
    build_logger.on_error("CS1", "broken", "/work/repo/src/A/A.cs", 10, 2)
    assert build_logger.on_message("Build started.", MessageImportance.HIGH)
    build_logger.on_project_finished()
    build_logger.on_project_finished()

    report = build_logger.shutdown()

    assert build_logger.closed
    assert report.error_count == 1
    root = ET.fromstring((tmp_path / "msbuild-output.xml").read_bytes())
    assert root.attrib["solution_name"] == "A.sln"
    assert root.attrib["project_count"] == "3"
    error = root.find("project[@name='A.csproj']/error")
    assert error is not None
    assert error.attrib["dir"] == "src/A"
    assert error.attrib["pos"] == "(10, 2)"


def test_shutdown_writes_json_report(tmp_path: Path) -> None:
    output = tmp_path / "report.json"
    build_logger = BuildLogger(_settings(output, output_format=ReportFormat.JSON))
    _ = build_logger.feed([ProjectStarted("/work/repo/A.csproj"), ProjectFinished()])
    _ = build_logger.shutdown()
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["project_count"] == 2
    assert [project["name"] for project in payload["projects"]] == ["MSBuild", "A.csproj"]


def test_events_after_shutdown_are_rejected(tmp_path: Path) -> None:
    build_logger = BuildLogger(_settings(tmp_path / "out.xml"))
    _ = build_logger.shutdown()
    with pytest.raises(LoggerClosedError):
        build_logger.on_project_started("A.csproj")
    with pytest.raises(LoggerClosedError):
        build_logger.handle(ErrorRaised("E1", "late"))
    with pytest.raises(LoggerClosedError):
        _ = build_logger.shutdown()


def test_unbalanced_finish_propagates(tmp_path: Path) -> None:
    build_logger = BuildLogger(_settings(tmp_path / "out.xml"))
    with pytest.raises(UnbalancedProjectEventError):
        build_logger.on_project_finished()


def test_build_does_not_write(tmp_path: Path) -> None:
    output = tmp_path / "out.xml"
    build_logger = BuildLogger(_settings(output))
    build_logger.on_warning("W1", "warned")
    report = build_logger.build()
    assert report.warning_count == 1
    assert not output.exists()
    assert not build_logger.closed


def test_failed_write_propagates(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    _ = blocker.write_text("", encoding="utf-8")
    build_logger = BuildLogger(_settings(blocker / "report.xml"))
    with pytest.raises(OSError):  # noqa: PT011
        _ = build_logger.shutdown()


def test_concurrent_handlers_do_not_lose_events(tmp_path: Path) -> None:
    build_logger = BuildLogger(_settings(tmp_path / "out.xml"))
    per_thread = 200

    def _raise_warnings() -> None:
        for index in range(per_thread):
            build_logger.on_warning("W1", f"warning {index}")

    threads = [threading.Thread(target=_raise_warnings) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert build_logger.aggregator.root.warning_count == 4 * per_thread


def test_handler_racing_shutdown_is_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    build_logger = BuildLogger(_settings(tmp_path / "out.xml"))
    outcomes: list[str] = []
    racers: list[threading.Thread] = []
    real_build_report = logger_module.build_report

    def _late_error() -> None:
        try:
            build_logger.on_error("E1", "late")
        except LoggerClosedError:
            outcomes.append("rejected")
        else:
            outcomes.append("accepted")

    def _build_report_with_racer(*args: Any, **kwargs: Any) -> BuildReport:
        report = real_build_report(*args, **kwargs)
        racer = threading.Thread(target=_late_error)
        racer.start()
        racers.append(racer)
        return report

    monkeypatch.setattr(logger_module, "build_report", _build_report_with_racer)
    report = build_logger.shutdown()
    for racer in racers:
        racer.join()

    assert outcomes == ["rejected"]
    assert build_logger.aggregator.root.error_count == report.error_count == 0
