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

"""Display helpers for file paths reported by the build engine.

Build engines report absolute paths. Reports strip the working directory the
build was started from so they stay short and portable between machines.
Paths are handled as plain strings: they may come from another platform and
must never be resolved against the local filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, TypeVar

_SEPARATORS: Final[tuple[str, str]] = ("/", "\\")

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class PathNormalizer:
    """Strip a fixed working-directory prefix from reported paths.

    Attributes:
        working_dir: Directory captured once when the build started. Empty
            disables stripping.
        separator: Separator appended to ``working_dir`` to form the prefix.
    """

    working_dir: str
    separator: str = os.sep

    @classmethod
    def from_cwd(cls) -> PathNormalizer:
        return cls(working_dir=os.getcwd())

    @property
    def prefix(self) -> str:
        if not self.working_dir or self.working_dir.endswith(_SEPARATORS):
            return self.working_dir
        return self.working_dir + self.separator

    def normalize(self, path: T) -> T | str:
        """Return ``path`` relative to the working directory when it lies beneath it.

        Anything that is not a string, or does not start with the prefix, is
        returned unchanged.
        """
        if not isinstance(path, str):
            return path
        prefix = self.prefix
        if prefix and len(path) > len(prefix) and path.startswith(prefix):
            return path[len(prefix) :]
        return path


def split_location(path: str) -> tuple[str, str]:
    """Split ``path`` into its directory and base name.

    Both ``/`` and ``\\`` count as separators. A bare file name has an empty
    directory.

    Examples:
        >>> split_location("src/App/App.csproj")
        ('src/App', 'App.csproj')
        >>> split_location("MSBuild")
        ('', 'MSBuild')
        >>> split_location("C:\\\\a.cs")
        ('C:\\\\', 'a.cs')
    """
    index = max(path.rfind(separator) for separator in _SEPARATORS)
    if index < 0:
        return "", path
    directory = path[:index]
    if not directory or directory.endswith(":"):
        # root directories keep their separator
        directory = path[: index + 1]
    return directory, path[index + 1 :]


__all__ = ["PathNormalizer", "split_location"]
