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

# ruff: noqa: ANN401

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from buildreport._internal.utils import consume

if TYPE_CHECKING:
    import argparse


class ArgumentRegistrar(Protocol):
    """Anything with ``ArgumentParser.add_argument``: parsers and argument groups."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action: ...


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser or argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


__all__ = ["ArgumentRegistrar", "register_argument"]
