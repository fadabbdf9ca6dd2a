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

"""Unit tests for the buildreport command-line interface."""

from __future__ import annotations

import io
import json
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

import pytest

from buildreport import __version__
from buildreport.cli import CONFIG_TEMPLATE, app, main
from buildreport.compat import tomllib
from buildreport.config import ReportConfigModel

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = [pytest.mark.unit, pytest.mark.cli]

EVENTS: list[dict[str, object]] = [
    {"event": "project_started", "project_file": "{root}/A.sln"},
    {"event": "project_started", "project_file": "{root}/src/A/A.csproj"},
    {"event": "warning", "code": "CS0168", "message": "unused", "file": "{root}/src/A/A.cs", "line": 3, "column": 5},
    {"event": "message", "message": "Build started.", "importance": "high"},
    {"event": "project_finished"},
    {"event": "project_finished"},
]


def _event_lines(root: Path) -> str:
    lines: list[str] = []
    for event in EVENTS:
        resolved = {key: value.format(root=root) if isinstance(value, str) else value for key, value in event.items()}
        lines.append(json.dumps(resolved))
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BUILDREPORT_OUTPUT", "BUILDREPORT_VERBOSITY", "BUILDREPORT_LOG_FORMAT", "BUILDREPORT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _write_events(tmp_path: Path) -> Path:
    events = tmp_path / "events.jsonl"
    _ = events.write_text(_event_lines(tmp_path.resolve()), encoding="utf-8")
    return events


def test_main_requires_command() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = main([])
    assert excinfo.value.code == 2


def test_main_unknown_command() -> None:
    with pytest.raises(SystemExit):
        _ = main(["unknown"])


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"buildreport {__version__}"


def test_render_fails_on_missing_explicit_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    events = _write_events(tmp_path)
    output = tmp_path / "out" / "report.xml"

    exit_code = main(
        ["render", str(events), "--output", str(output), "--config", str(tmp_path / "none.toml")],
    )

    assert exit_code == 1
    assert "(BR114)" in capsys.readouterr().err
    assert not output.exists()


def test_render_with_defaults_from_search_dir(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    events = _write_events(tmp_path)

    assert main(["render", str(events), "--working-dir", str(tmp_path)]) == 0

    root = ET.fromstring((tmp_path / "msbuild-output.xml").read_bytes())
    assert root.attrib["solution_name"] == "A.sln"
    assert root.attrib["warning_count"] == "1"
    names = [project.attrib["name"] for project in root.findall("project")]
    assert names == ["A.csproj", "MSBuild", "A.sln"]
    message = root.find("project[@name='A.csproj']/message")
    assert message is not None
    assert message.attrib["importance"] == "High"
    assert "Wrote xml report" in capsys.readouterr().out


def test_render_relative_working_dir_strips_prefix(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    events = _write_events(tmp_path)

    assert main(["render", str(events), "-o", "out.xml", "--working-dir", "."]) == 0

    root = ET.fromstring((tmp_path / "out.xml").read_bytes())
    assert root.attrib["solution_dir"] == ""
    project = root.find("project[@name='A.csproj']")
    assert project is not None
    assert project.attrib["dir"] == "src/A"
    warning = project.find("warning")
    assert warning is not None
    assert warning.attrib["dir"] == "src/A"


def test_render_parameters_and_json_format(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    events = _write_events(tmp_path)

    exit_code = main(
        [
            "render",
            str(events),
            "--parameters",
            "build.json;ignored",
            "--format",
            "json",
            "--verbosity",
            "q",
            "--working-dir",
            str(tmp_path),
        ],
    )

    assert exit_code == 0
    payload = json.loads((tmp_path / "build.json").read_text(encoding="utf-8"))
    assert [project["name"] for project in payload["projects"]] == ["A.csproj"]
    assert payload["projects"][0]["messages"] == []


def test_render_reads_stdin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(_event_lines(tmp_path.resolve())))
    output = tmp_path / "stdin.xml"

    assert main(["render", "--output", str(output), "--working-dir", str(tmp_path)]) == 0
    assert ET.fromstring(output.read_bytes()).attrib["project_count"] == "3"


def test_render_reports_invalid_events(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.chdir(tmp_path)
    events = tmp_path / "events.jsonl"
    _ = events.write_text('{"event": "project_started", "project_file": "A.csproj"}\n{"event": "nope"}\n', encoding="utf-8")

    assert main(["render", str(events), "--output", str(tmp_path / "r.xml")]) == 1
    err = capsys.readouterr().err
    assert "(BR200)" in err
    assert "line 2" in err
    assert not (tmp_path / "r.xml").exists()


def test_render_reports_unbalanced_events(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.chdir(tmp_path)
    events = tmp_path / "events.jsonl"
    _ = events.write_text('{"event": "project_finished"}\n', encoding="utf-8")

    assert main(["render", str(events), "--output", str(tmp_path / "r.xml")]) == 1
    assert "(BR301)" in capsys.readouterr().err


def test_render_reports_missing_events_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["render", str(tmp_path / "missing.jsonl")]) == 1
    assert "I/O error" in capsys.readouterr().err


def test_init_writes_template(tmp_path: Path) -> None:
    target = tmp_path / "buildreport.toml"
    assert main(["init", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == CONFIG_TEMPLATE
    assert main(["init", str(target)]) == 1
    assert main(["init", str(target), "--force"]) == 0


def test_config_template_is_valid() -> None:
    model = ReportConfigModel.model_validate(tomllib.loads(CONFIG_TEMPLATE))
    assert model.config_version == 0


def test_write_config_template_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "buildreport.toml"
    assert app.write_config_template(target, force=False) == 0
    assert target.exists()
