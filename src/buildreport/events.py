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

"""Build event variants and the JSON-lines event stream reader.

The aggregator consumes the five event variants defined here. Build engine
integrations either construct them directly or serialise them as one JSON
object per line, e.g.::

    {"event": "project_started", "project_file": "/src/App/App.csproj"}
    {"event": "error", "code": "CS0103", "message": "...", "file": "Program.cs", "line": 4, "column": 9}
    {"event": "message", "message": "Build started.", "importance": "high"}
    {"event": "project_finished"}
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Annotated, ClassVar, Final, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from buildreport.core.model_types import EventKind, MessageImportance
from buildreport.exceptions import EventStreamError


@dataclass(slots=True, frozen=True)
class ProjectStarted:
    kind: ClassVar[EventKind] = EventKind.PROJECT_STARTED

    project_file: str


@dataclass(slots=True, frozen=True)
class ProjectFinished:
    kind: ClassVar[EventKind] = EventKind.PROJECT_FINISHED

    project_file: str | None = None


@dataclass(slots=True, frozen=True)
class ErrorRaised:
    kind: ClassVar[EventKind] = EventKind.ERROR

    code: str | None
    message: str
    file: str | None = None
    line: int = 0
    column: int = 0


@dataclass(slots=True, frozen=True)
class WarningRaised:
    kind: ClassVar[EventKind] = EventKind.WARNING

    code: str | None
    message: str
    file: str | None = None
    line: int = 0
    column: int = 0


@dataclass(slots=True, frozen=True)
class MessageRaised:
    kind: ClassVar[EventKind] = EventKind.MESSAGE

    message: str
    importance: MessageImportance = MessageImportance.NORMAL


BuildEvent: TypeAlias = ProjectStarted | ProjectFinished | ErrorRaised | WarningRaised | MessageRaised


class _ProjectStartedModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: Literal["project_started"]
    project_file: str

    def to_event(self) -> BuildEvent:
        return ProjectStarted(project_file=self.project_file)


class _ProjectFinishedModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: Literal["project_finished"]
    project_file: str | None = None

    def to_event(self) -> BuildEvent:
        return ProjectFinished(project_file=self.project_file)


class _CodedModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    message: str = ""
    file: str | None = None
    line: int = 0
    column: int = 0


class _ErrorModel(_CodedModel):
    event: Literal["error"]

    def to_event(self) -> BuildEvent:
        return ErrorRaised(self.code, self.message, self.file, self.line, self.column)


class _WarningModel(_CodedModel):
    event: Literal["warning"]

    def to_event(self) -> BuildEvent:
        return WarningRaised(self.code, self.message, self.file, self.line, self.column)


class _MessageModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    event: Literal["message"]
    message: str = ""
    importance: MessageImportance = MessageImportance.NORMAL

    @field_validator("importance", mode="before")
    @classmethod
    def _coerce_importance(cls, value: object) -> MessageImportance:
        return MessageImportance.coerce(value)

    def to_event(self) -> BuildEvent:
        return MessageRaised(message=self.message, importance=self.importance)


_EventModel: TypeAlias = Annotated[
    _ProjectStartedModel | _ProjectFinishedModel | _ErrorModel | _WarningModel | _MessageModel,
    Field(discriminator="event"),
]
_EVENT_ADAPTER: Final[TypeAdapter[_EventModel]] = TypeAdapter(_EventModel)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}" if location else message


def parse_event(payload: Mapping[str, object], *, line_number: int = 0) -> BuildEvent:
    """Validate one serialised event mapping and return its event variant.

    Args:
        payload: Decoded JSON object with an ``event`` tag.
        line_number: Position of the record in its stream, used in error messages.

    Returns:
        The matching event variant.

    Raises:
        EventStreamError: If the mapping is not a valid build event.
    """
    try:
        model = _EVENT_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise EventStreamError(line_number, _first_error(exc)) from exc
    return model.to_event()


def read_events(lines: Iterable[str]) -> Iterator[BuildEvent]:
    """Yield build events from JSON lines, skipping blank lines.

    Raises:
        EventStreamError: On the first line that is not a JSON object describing a build event.
    """
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        try:
            payload: object = json.loads(line)
        except json.JSONDecodeError as exc:
            raise EventStreamError(line_number, exc.msg) from exc
        if not isinstance(payload, dict):
            raise EventStreamError(line_number, "expected a JSON object")
        yield parse_event(payload, line_number=line_number)


__all__ = [
    "BuildEvent",
    "ErrorRaised",
    "MessageRaised",
    "ProjectFinished",
    "ProjectStarted",
    "WarningRaised",
    "parse_event",
    "read_events",
]
