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

"""Unit tests for internal helpers."""

from __future__ import annotations

import pytest

from buildreport._internal.precedence import resolve_with_precedence
from buildreport._internal.utils import consume, dedupe_preserve

pytestmark = pytest.mark.unit


def test_consume_returns_none() -> None:
    assert consume(42) is None


def test_dedupe_preserve_keeps_first_occurrence() -> None:
    assert dedupe_preserve([".sln", ".slnx", ".sln"]) == [".sln", ".slnx"]


@pytest.mark.parametrize(
    ("cli", "env", "config", "expected"),
    [
        ("cli", "env", "config", "cli"),
        (None, "env", "config", "env"),
        (None, None, "config", "config"),
        (None, None, None, "default"),
    ],
)
def test_resolve_with_precedence(cli: str | None, env: str | None, config: str | None, expected: str) -> None:
    assert (
        resolve_with_precedence(cli_value=cli, env_value=env, config_value=config, default="default") == expected
    )
