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

"""Console output for the buildreport CLI.

Plain output goes through ``echo``. Status lines and failures are tagged with
``[buildreport]`` so they stand out in build logs that interleave several tools.
"""

from __future__ import annotations

import sys
from typing import Final

from buildreport._internal.utils import consume

STATUS_TAG: Final[str] = "[buildreport]"


def echo(message: str, *, err: bool = False) -> None:
    """Write one line to stdout, or to stderr when ``err`` is set."""
    stream = sys.stderr if err else sys.stdout
    consume(stream.write(f"{message}\n"))


def status(message: str, *, err: bool = False) -> None:
    echo(f"{STATUS_TAG} {message}", err=err)


def failure(message: str, *, code: str | None = None) -> None:
    """Report a handled failure on stderr, prefixed with its error code when known."""
    status(f"({code}) {message}" if code else message, err=True)


__all__ = ["STATUS_TAG", "echo", "failure", "status"]
