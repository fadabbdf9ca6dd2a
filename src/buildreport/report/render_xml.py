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

"""XML rendering for build reports.

Document shape::

    <msbuild solution_name=".." solution_dir=".." project_count="3" warning_count="0" error_count="1">
      <project dir="src/App" name="App.csproj">
        <error code="CS0103" message=".." dir="" name="Program.cs" pos="(4, 9)" />
        <message importance="High">..</message>
      </project>
    </msbuild>
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .build import BuildReport, DiagnosticEntry, ProjectEntry

ROOT_TAG: Final[str] = "msbuild"
INDENT: Final[str] = "  "


def _append_diagnostics(parent: ET.Element, tag: str, entries: Iterable[DiagnosticEntry]) -> None:
    for entry in entries:
        element = ET.SubElement(parent, tag)
        element.set("code", entry.code)
        element.set("message", entry.message)
        if entry.name is not None:
            element.set("dir", entry.directory or "")
            element.set("name", entry.name)
            element.set("pos", entry.position or "")


def _project_element(parent: ET.Element, project: ProjectEntry) -> ET.Element:
    element = ET.SubElement(parent, "project")
    element.set("dir", project.directory)
    element.set("name", project.name)
    _append_diagnostics(element, "error", project.errors)
    _append_diagnostics(element, "warning", project.warnings)
    for message in project.messages:
        child = ET.SubElement(element, "message")
        child.set("importance", message.importance)
        child.text = message.text
    return element


def render_xml(report: BuildReport) -> ET.Element:
    """Build the report element tree."""
    root = ET.Element(ROOT_TAG)
    if report.solution_name is not None:
        root.set("solution_name", report.solution_name)
        root.set("solution_dir", report.solution_dir or "")
    root.set("project_count", str(report.project_count))
    root.set("warning_count", str(report.warning_count))
    root.set("error_count", str(report.error_count))
    for project in report.projects:
        _project_element(root, project)
    return root


def to_xml_bytes(report: BuildReport, *, pretty: bool | None = None) -> bytes:
    """Serialise the report as a UTF-8 XML document with declaration.

    Args:
        report: Report to render.
        pretty: Indent the document; defaults to the report's verbosity policy.
    """
    tree = ET.ElementTree(render_xml(report))
    if report.pretty if pretty is None else pretty:
        ET.indent(tree, space=INDENT)
    buffer = io.BytesIO()
    tree.write(buffer, encoding="utf-8", xml_declaration=True)
    return buffer.getvalue()


__all__ = ["ROOT_TAG", "render_xml", "to_xml_bytes"]
