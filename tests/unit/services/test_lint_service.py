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
"""Unit tests for the lint service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pragmacov.config import RunConfig
from pragmacov.core.model_types import AnnotationLevel, RunMode
from pragmacov.exceptions import SourceDecodeError, UnmatchedEndPragmaError
from pragmacov.services import check_file, lint_paths, run
from tests.fixtures.builders import build_coverage_report, build_uncovered, write_source
from tests.fixtures.stubs import RecordingSink, StubChangedFiles, StubCoverageProvider

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit

GAP_SOURCE = "// @flow\nconst x = JSON.parse(raw);\n"
SUPPRESSED_SOURCE = "// @flow\nconst x = JSON.parse(raw); // flow-uncovered-line\n"


def test_check_file_reports_gap_with_relative_path(tmp_path: Path) -> None:
    target = write_source(tmp_path, "src/app.js", GAP_SOURCE)
    provider = StubCoverageProvider({"app.js": build_coverage_report([build_uncovered(2)])})
    warnings = check_file(target, provider, root=tmp_path)
    assert [(warning.path, warning.start.line) for warning in warnings] == [("src/app.js", 2)]
    assert warnings[0].level is AnnotationLevel.FAILURE


def test_check_file_accepts_suppressed_gap(tmp_path: Path) -> None:
    target = write_source(tmp_path, "app.js", SUPPRESSED_SOURCE)
    provider = StubCoverageProvider({"app.js": build_coverage_report([build_uncovered(2)])})
    assert check_file(target, provider) == []


@pytest.mark.parametrize(
    "text",
    [
        "const x = JSON.parse(raw);\n",
        "// @flow\n/* flow-uncovered-file */\nconst x = JSON.parse(raw);\n",
    ],
)
def test_ineligible_files_skip_coverage(tmp_path: Path, text: str) -> None:
    target = write_source(tmp_path, "app.js", text)
    provider = StubCoverageProvider({"app.js": build_coverage_report([build_uncovered(1)])})
    assert check_file(target, provider) == []
    assert provider.calls == []


def test_fully_covered_file_skips_stale_checks(tmp_path: Path) -> None:
    target = write_source(tmp_path, "app.js", SUPPRESSED_SOURCE)
    provider = StubCoverageProvider()
    assert check_file(target, provider) == []
    assert provider.calls == ["app.js"]


def test_unmatched_close_is_fatal(tmp_path: Path) -> None:
    target = write_source(tmp_path, "app.js", "// @flow\n/* end flow-uncovered-block */\n")
    provider = StubCoverageProvider({"app.js": build_coverage_report([build_uncovered(1)])})
    with pytest.raises(UnmatchedEndPragmaError):
        check_file(target, provider)


def test_undecodable_file_raises_with_path(tmp_path: Path) -> None:
    target = tmp_path / "src" / "app.js"
    target.parent.mkdir()
    target.write_bytes(b"// @flow\n\xff\n")
    provider = StubCoverageProvider()
    with pytest.raises(SourceDecodeError) as excinfo:
        check_file(target, provider, root=tmp_path)
    assert excinfo.value.path == "src/app.js"
    assert provider.calls == []


@pytest.mark.parametrize("jobs", [1, 4])
def test_lint_paths_keeps_input_order(tmp_path: Path, jobs: int) -> None:
    names = [f"mod{index}.js" for index in range(6)]
    paths = [write_source(tmp_path, name, GAP_SOURCE) for name in names]
    provider = StubCoverageProvider({name: build_coverage_report([build_uncovered(2)]) for name in names})
    warnings = lint_paths(paths, provider, jobs=jobs, root=tmp_path)
    assert [warning.path for warning in warnings] == names


def test_run_direct_mode_emits_to_sink(tmp_path: Path) -> None:
    target = write_source(tmp_path, "app.js", GAP_SOURCE)
    config = RunConfig(mode=RunMode.DIRECT, paths=(target,), project_root=tmp_path)
    provider = StubCoverageProvider({"app.js": build_coverage_report([build_uncovered(2)])})
    sink = RecordingSink()

    outcome = run(config, provider=provider, sink=sink)

    assert outcome.files_checked == 1
    assert outcome.has_failures
    assert outcome.counts()[AnnotationLevel.FAILURE] == 1
    assert sink.batches == [outcome.warnings]


def test_run_changed_mode_filters_extensions(tmp_path: Path) -> None:
    script = write_source(tmp_path, "app.js", GAP_SOURCE)
    style = write_source(tmp_path, "app.css", "body {}\n")
    config = RunConfig(mode=RunMode.CHANGED, paths=(), project_root=tmp_path)
    provider = StubCoverageProvider({"app.js": build_coverage_report([build_uncovered(2)])})

    outcome = run(config, provider=provider, changed_files=StubChangedFiles([style, script]), sink=RecordingSink())

    assert outcome.files_checked == 1
    assert provider.calls == ["app.js"]


def test_run_without_changed_files_skips_sink(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config = RunConfig(mode=RunMode.CHANGED, paths=(), project_root=tmp_path)
    sink = RecordingSink()
    caplog.set_level("INFO", logger="pragmacov")

    outcome = run(config, provider=StubCoverageProvider(), changed_files=StubChangedFiles([]), sink=sink)

    assert outcome.files_checked == 0
    assert not outcome.has_failures
    assert sink.batches == []
    assert "No changed files" in caplog.text
