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

"""Small helpers shared by internal modules."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["consume", "dedupe_preserve"]


def consume(value: object) -> None:
    """Explicitly discard a return value (e.g. ``write`` byte counts)."""
    _ = value


def dedupe_preserve(values: Iterable[str]) -> list[str]:
    """Return ``values`` without duplicates, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
