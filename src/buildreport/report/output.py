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

"""Write rendered reports to a file or binary stream.

Write failures are not retried or recovered: the ``OSError`` reaches the caller
and no alternate output is produced.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from buildreport._internal.utils import consume
from buildreport.core.model_types import LogComponent, ReportFormat
from buildreport.logging import structured_extra

from .render_json import render_json
from .render_xml import to_xml_bytes

if TYPE_CHECKING:
    from .build import BuildReport

logger: logging.Logger = logging.getLogger("buildreport.report")


def render_report(report: BuildReport, fmt: ReportFormat | str = ReportFormat.XML) -> bytes:
    """Render ``report`` in the requested format as UTF-8 bytes."""
    selected = fmt if isinstance(fmt, ReportFormat) else ReportFormat.from_str(fmt)
    match selected:
        case ReportFormat.JSON:
            return render_json(report).encode("utf-8")
        case _:
            return to_xml_bytes(report)


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def write_report(
    report: BuildReport,
    destination: Path | BinaryIO,
    *,
    fmt: ReportFormat | str = ReportFormat.XML,
) -> None:
    """Render ``report`` and write it to ``destination``.

    Args:
        report: Report to write.
        destination: Output file path (parent directories are created) or an
            open binary stream.
        fmt: Output format.

    Raises:
        OSError: If the destination cannot be written.
    """
    content = render_report(report, fmt)
    if isinstance(destination, Path):
        _ensure_parent(destination)
        consume(destination.write_bytes(content))
        logger.info(
            "Wrote build report to %s",
            destination,
            extra=structured_extra(
                component=LogComponent.REPORT,
                path=destination,
                verbosity=report.verbosity,
                counts={
                    "projects": report.project_count,
                    "errors": report.error_count,
                    "warnings": report.warning_count,
                },
            ),
        )
        return
    consume(destination.write(content))
    destination.flush()


__all__ = ["render_report", "write_report"]
