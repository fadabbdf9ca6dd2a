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

"""JSON rendering for build reports, mirroring the XML element tree."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from buildreport.json import JSONMapping, JSONValue

    from .build import BuildReport, DiagnosticEntry, ProjectEntry


def _diagnostic_payloads(entries: Iterable[DiagnosticEntry]) -> list[JSONValue]:
    payloads: list[JSONValue] = []
    for entry in entries:
        payload: JSONMapping = {"code": entry.code, "message": entry.message}
        if entry.name is not None:
            payload["dir"] = entry.directory or ""
            payload["name"] = entry.name
            payload["pos"] = entry.position or ""
        payloads.append(payload)
    return payloads


def _project_payload(project: ProjectEntry) -> JSONMapping:
    return {
        "dir": project.directory,
        "name": project.name,
        "errors": _diagnostic_payloads(project.errors),
        "warnings": _diagnostic_payloads(project.warnings),
        "messages": [{"importance": message.importance, "text": message.text} for message in project.messages],
    }


def report_payload(report: BuildReport) -> JSONMapping:
    payload: JSONMapping = {}
    if report.solution_name is not None:
        payload["solution_name"] = report.solution_name
        payload["solution_dir"] = report.solution_dir or ""
    payload["project_count"] = report.project_count
    payload["warning_count"] = report.warning_count
    payload["error_count"] = report.error_count
    payload["projects"] = [_project_payload(project) for project in report.projects]
    return payload


def render_json(report: BuildReport, *, pretty: bool | None = None) -> str:
    indent = 2 if (report.pretty if pretty is None else pretty) else None
    return json.dumps(report_payload(report), indent=indent, ensure_ascii=False) + "\n"


__all__ = ["render_json", "report_payload"]
