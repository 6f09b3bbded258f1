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
"""Tests for the pragmacov command-line entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pragmacov import __version__
from pragmacov.cli import main
from pragmacov.cli.app import EXIT_ERROR, EXIT_OK, EXIT_WARNINGS
from pragmacov.runtime import CommandOutput
from tests.fixtures.builders import build_flow_payload, write_source

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

pytestmark = [pytest.mark.unit, pytest.mark.cli]


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / ".flowconfig").write_text("[options]\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    for name in ("PRAGMACOV_FLOW_BIN", "PRAGMACOV_BASE_REF", "GITHUB_BASE_REF"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _fake_flow(monkeypatch: pytest.MonkeyPatch, ranges: list[tuple[int, int]]) -> None:
    def fake_run(args: Iterable[str], cwd: Path | None = None, *, allowed: set[str] | None = None) -> CommandOutput:
        return CommandOutput(
            args=list(args),
            stdout=build_flow_payload(ranges),
            stderr="",
            exit_code=0,
            duration_ms=2.0,
        )

    monkeypatch.setattr("pragmacov.coverage.flow.run_command", fake_run)


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == EXIT_OK
    assert capsys.readouterr().out == f"pragmacov {__version__}\n"


def test_direct_mode_prints_lint_records(
    project: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    write_source(project, "app.js", "// @flow\nconst x = JSON.parse(raw);\n")
    _fake_flow(monkeypatch, [(2, 2)])

    exit_code = main(["app.js"])

    out = capsys.readouterr().out.splitlines()
    assert exit_code == EXIT_WARNINGS
    assert len(out) == 1
    path, message, offset = out[0].split(":::")
    assert path == "app.js"
    assert message.startswith("The expression from 2:3-9 is not covered by flow!")
    assert offset == "40"


def test_clean_file_exits_zero(
    project: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    write_source(project, "app.js", "// @flow\nconst x = JSON.parse(raw); // flow-uncovered-line\n")
    _fake_flow(monkeypatch, [(2, 2)])

    assert main(["app.js", "--output", "json"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "[]"


def test_unmatched_close_exits_with_error(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_source(project, "app.js", "// @flow\nx();\n/* end flow-uncovered-block */\n")
    _fake_flow(monkeypatch, [(2, 2)])

    assert main(["app.js"]) == EXIT_ERROR


def test_invalid_threshold_exits_with_error(project: Path) -> None:
    assert main(["app.js", "--threshold", "2"]) == EXIT_ERROR


def test_invalid_config_exits_with_error(project: Path) -> None:
    (project / "pragmacov.toml").write_text("jobs = 0\n", encoding="utf-8")
    assert main(["app.js"]) == EXIT_ERROR


def test_missing_file_exits_with_error(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_flow(monkeypatch, [])
    assert main(["missing.js"]) == EXIT_ERROR


def test_invalid_output_choice_is_rejected(project: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["app.js", "--output", "xml"])
    assert excinfo.value.code == 2


def test_undecodable_file_exits_with_error(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (project / "app.js").write_bytes(b"// @flow\n\xff\n")
    _fake_flow(monkeypatch, [(2, 2)])
    assert main(["app.js"]) == EXIT_ERROR
