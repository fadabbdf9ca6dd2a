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

"""Compatibility layer for modern typing features.

Stdlib versions are preferred at runtime; `typing_extensions` supplies the
backports on older interpreters and is always used under ``TYPE_CHECKING`` so
type checkers see one consistent API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing_extensions import Self, TypedDict, Unpack, override
else:
    try:
        from typing import TypedDict, override  # py>=3.12
    except ImportError:
        from typing_extensions import TypedDict, override

    try:
        from typing import Self, Unpack  # py>=3.11
    except ImportError:  # py<3.11
        from typing_extensions import Self, Unpack

__all__ = ["Self", "TypedDict", "Unpack", "override"]
