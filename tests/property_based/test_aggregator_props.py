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

"""Property-based tests for event aggregation and report ordering."""

from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import given
from hypothesis import strategies as st

from buildreport.aggregator import ROOT_PROJECT_NAME, Aggregator
from buildreport.core.model_types import MessageImportance, Verbosity
from buildreport.events import (
    BuildEvent,
    ErrorRaised,
    MessageRaised,
    ProjectFinished,
    ProjectStarted,
    WarningRaised,
)
from buildreport.paths import PathNormalizer
from buildreport.report import build_report

pytestmark = pytest.mark.property

PROJECT_FILES = ("A.sln", "A.csproj", "B.csproj", "C.csproj", "build.proj")


def _diagnostic() -> st.SearchStrategy[BuildEvent]:
    return st.one_of(
        st.builds(ErrorRaised, code=st.just("E1"), message=st.text(max_size=5)),
        st.builds(WarningRaised, code=st.just("W1"), message=st.text(max_size=5)),
        st.builds(MessageRaised, message=st.text(max_size=5), importance=st.sampled_from(list(MessageImportance))),
    )


@st.composite
def balanced_streams(draw: st.DrawFn, max_depth: int = 3) -> list[BuildEvent]:
    """Event streams whose start/finish events nest properly."""
    events: list[BuildEvent] = []
    depth = 0
    for _ in range(draw(st.integers(min_value=0, max_value=25))):
        choice = draw(st.sampled_from(("start", "finish", "diagnostic")))
        if choice == "start" and depth < max_depth:
            events.append(ProjectStarted(draw(st.sampled_from(PROJECT_FILES))))
            depth += 1
        elif choice == "finish" and depth > 0:
            events.append(ProjectFinished())
            depth -= 1
        else:
            events.append(draw(_diagnostic()))
    events.extend(ProjectFinished() for _ in range(depth))
    return events


def _expected_counts(events: list[BuildEvent], verbosity: Verbosity) -> dict[str, Counter[str]]:
    threshold = verbosity.message_threshold()
    scope: list[str] = []
    counts: dict[str, Counter[str]] = {ROOT_PROJECT_NAME: Counter()}
    for event in events:
        current = scope[-1] if scope else ROOT_PROJECT_NAME
        match event:
            case ProjectStarted(project_file=project_file):
                scope.append(project_file)
                counts.setdefault(project_file, Counter())
            case ProjectFinished():
                scope.pop()
            case ErrorRaised():
                counts[current]["errors"] += 1
            case WarningRaised():
                counts[current]["warnings"] += 1
            case MessageRaised(importance=importance):
                if threshold is not None and importance.rank <= threshold.rank:
                    counts[current]["messages"] += 1
    return counts


@given(events=balanced_streams(), verbosity=st.sampled_from(list(Verbosity)))
def test_diagnostics_are_attributed_to_innermost_project(events: list[BuildEvent], verbosity: Verbosity) -> None:
    aggregator = Aggregator(verbosity, normalizer=PathNormalizer(working_dir=""))
    assert aggregator.feed(events) == len(events)

    expected = _expected_counts(events, verbosity)
    assert [project.file for project in aggregator.projects] == list(expected)
    for project in aggregator.projects:
        counts = expected[project.file]
        assert project.error_count == counts["errors"]
        assert project.warning_count == counts["warnings"]
        assert project.message_count == counts["messages"]
    assert aggregator.depth == 0


@given(events=balanced_streams(), verbosity=st.sampled_from(list(Verbosity)))
def test_report_totals_and_ordering(events: list[BuildEvent], verbosity: Verbosity) -> None:
    aggregator = Aggregator(verbosity, normalizer=PathNormalizer(working_dir=""))
    _ = aggregator.feed(events)

    report = build_report(aggregator.projects, verbosity=verbosity, solution_path=aggregator.solution_path)

    assert report.project_count == len(aggregator.projects)
    assert report.error_count == sum(project.error_count for project in aggregator.projects)
    assert report.warning_count == sum(project.warning_count for project in aggregator.projects)
    by_name = {project.file: project for project in aggregator.projects}
    listed = [by_name[entry.name] for entry in report.projects]
    if report.build_has_errors:
        assert all(entry.warnings == () for entry in report.projects)
        start_order = [project for project in aggregator.projects if project in listed]
        assert listed == start_order
    else:
        warning_counts = [project.warning_count for project in listed]
        assert warning_counts == sorted(warning_counts, reverse=True)
    if not verbosity.exceeds(Verbosity.QUIET):
        assert all(project.error_count or project.warning_count for project in listed)
    else:
        assert len(listed) == len(aggregator.projects)
