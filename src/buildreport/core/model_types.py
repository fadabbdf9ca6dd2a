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

"""Model types and enumerations for buildreport.

This module defines the ordered levels that drive report filtering:

- Verbosity levels selected by the caller of the build
- Message importance levels attached to build messages
- Output, logging and event-kind enumerations
"""

from __future__ import annotations

from typing import Final

from buildreport.compat import StrEnum


class Verbosity(StrEnum):
    """Ordered report verbosity levels (quiet < minimal < normal < detailed < diagnostic).

    Members compare as strings, so ordering must go through ``rank`` or the
    helper methods rather than ``<``.

    Attributes:
        QUIET: Errors, warnings and the number of projects built.
        MINIMAL: Like quiet plus one entry for every project.
        NORMAL: Like minimal plus messages of high importance.
        DETAILED: Like normal plus messages of normal importance.
        DIAGNOSTIC: Like detailed plus messages of low importance.
    """

    QUIET = "quiet"
    MINIMAL = "minimal"
    NORMAL = "normal"
    DETAILED = "detailed"
    DIAGNOSTIC = "diagnostic"

    @classmethod
    def from_str(cls, raw: str) -> Verbosity:
        """Create a Verbosity from its name or an MSBuild-style abbreviation.

        Args:
            raw: Level name such as ``"normal"`` or a short form such as ``"diag"``.

        Returns:
            Verbosity enum value.

        Raises:
            ValueError: If the string does not match any verbosity level.
        """
        value = raw.strip().lower()
        value = _VERBOSITY_ALIASES.get(value, value)
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown verbosity '{raw}'"
            raise ValueError(msg) from exc

    @property
    def rank(self) -> int:
        """Position of this level in the verbosity order (quiet is 0)."""
        return _VERBOSITY_ORDER.index(self)

    def exceeds(self, other: Verbosity) -> bool:
        """Return True when this level is strictly more verbose than ``other``."""
        return self.rank > other.rank

    def message_threshold(self) -> MessageImportance | None:
        """Return the least important message kept at this level, or None when messages are dropped."""
        return _MESSAGE_THRESHOLDS[self]


class MessageImportance(StrEnum):
    """Importance of a build message; lower rank means more important.

    Attributes:
        HIGH: Always shown from normal verbosity upwards.
        NORMAL: Shown from detailed verbosity upwards.
        LOW: Only shown at diagnostic verbosity.
    """

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @classmethod
    def from_str(cls, raw: str) -> MessageImportance:
        """Create a MessageImportance from a string value.

        Args:
            raw: Importance name (case-insensitive) or its numeric rank.

        Returns:
            MessageImportance enum value.

        Raises:
            ValueError: If the string does not match any importance level.
        """
        value = raw.strip().lower()
        if value.isdigit():
            return cls.from_rank(int(value))
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown message importance '{raw}'"
            raise ValueError(msg) from exc

    @classmethod
    def from_rank(cls, rank: int) -> MessageImportance:
        """Create a MessageImportance from the numeric value build engines emit (0 = high)."""
        if 0 <= rank < len(_IMPORTANCE_ORDER):
            return _IMPORTANCE_ORDER[rank]
        msg = f"Unknown message importance rank {rank}"
        raise ValueError(msg)

    @classmethod
    def coerce(cls, raw: object) -> MessageImportance:
        """Coerce names, ranks or enum members to a MessageImportance.

        Raises:
            ValueError: If ``raw`` cannot be interpreted as an importance level.
        """
        if isinstance(raw, MessageImportance):
            return raw
        if isinstance(raw, bool):
            msg = f"Unknown message importance {raw!r}"
            raise ValueError(msg)
        if isinstance(raw, int):
            return cls.from_rank(raw)
        if isinstance(raw, str):
            return cls.from_str(raw)
        msg = f"Unknown message importance {raw!r}"
        raise ValueError(msg)

    @property
    def rank(self) -> int:
        """Ordinal of this importance; 0 is the most important."""
        return _IMPORTANCE_ORDER.index(self)

    @property
    def label(self) -> str:
        """Display label written into reports (``High``, ``Normal``, ``Low``)."""
        return self.value.capitalize()

    def is_at_least(self, threshold: MessageImportance) -> bool:
        """Return True when this importance is as important as ``threshold`` or more."""
        return self.rank <= threshold.rank


_VERBOSITY_ORDER: Final[tuple[Verbosity, ...]] = (
    Verbosity.QUIET,
    Verbosity.MINIMAL,
    Verbosity.NORMAL,
    Verbosity.DETAILED,
    Verbosity.DIAGNOSTIC,
)
_VERBOSITY_ALIASES: Final[dict[str, str]] = {
    "q": "quiet",
    "m": "minimal",
    "n": "normal",
    "d": "detailed",
    "diag": "diagnostic",
}
_IMPORTANCE_ORDER: Final[tuple[MessageImportance, ...]] = (
    MessageImportance.HIGH,
    MessageImportance.NORMAL,
    MessageImportance.LOW,
)
_MESSAGE_THRESHOLDS: Final[dict[Verbosity, MessageImportance | None]] = {
    Verbosity.QUIET: None,
    Verbosity.MINIMAL: None,
    Verbosity.NORMAL: MessageImportance.HIGH,
    Verbosity.DETAILED: MessageImportance.NORMAL,
    Verbosity.DIAGNOSTIC: MessageImportance.LOW,
}


class ReportFormat(StrEnum):
    XML = "xml"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> ReportFormat:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown report format '{raw}'"
            raise ValueError(msg) from exc


class LogFormat(StrEnum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    AGGREGATOR = "aggregator"
    REPORT = "report"
    CLI = "cli"
    CONFIG = "config"
    SERVICES = "services"

    @classmethod
    def from_str(cls, raw: str) -> LogComponent:
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log component '{raw}'"
            raise ValueError(msg) from exc


class EventKind(StrEnum):
    """Tags of the build events accepted on the JSON-lines stream."""

    PROJECT_STARTED = "project_started"
    PROJECT_FINISHED = "project_finished"
    ERROR = "error"
    WARNING = "warning"
    MESSAGE = "message"


__all__ = [
    "EventKind",
    "LogComponent",
    "LogFormat",
    "MessageImportance",
    "ReportFormat",
    "Verbosity",
]
