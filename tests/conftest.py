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

"""Pytest entry point that wires shared fixtures and markers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from buildreport.paths import PathNormalizer  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Iterator

WORKING_DIR = "/work/repo"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with the custom markers used by the test suite."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")


@pytest.fixture
def normalizer() -> PathNormalizer:
    """Normalizer rooted at a POSIX working directory that never exists on disk."""
    return PathNormalizer(working_dir=WORKING_DIR, separator="/")


@pytest.fixture(autouse=True)
def _reset_buildreport_logger() -> Iterator[None]:
    """Undo handler and propagation changes made by ``configure_logging``."""
    root = logging.getLogger("buildreport")
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate
