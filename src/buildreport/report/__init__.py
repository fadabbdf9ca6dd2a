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

"""Build report model, renderers and writer."""

from __future__ import annotations

from .build import (
    BuildReport,
    DiagnosticEntry,
    MessageEntry,
    ProjectEntry,
    build_report,
    format_position,
    order_projects,
    should_list,
)
from .output import render_report, write_report
from .render_json import render_json, report_payload
from .render_xml import render_xml, to_xml_bytes

__all__ = [
    "BuildReport",
    "DiagnosticEntry",
    "MessageEntry",
    "ProjectEntry",
    "build_report",
    "format_position",
    "order_projects",
    "render_json",
    "render_report",
    "render_xml",
    "report_payload",
    "should_list",
    "to_xml_bytes",
    "write_report",
]
