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
"""Tests for structured logging configuration."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from pragmacov.core.model_types import AnnotationLevel, LogComponent, LogFormat
from pragmacov.logging import LOG_LEVELS, configure_logging, structured_extra

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_configure_logging_json_emits_structured_logs(capsys: pytest.CaptureFixture[str]) -> None:
    config = configure_logging("json")
    assert config.format is LogFormat.JSON
    logger = logging.getLogger("pragmacov.coverage")
    logger.info(
        "flow finished",
        extra=structured_extra(
            LogComponent.COVERAGE,
            tool="flow",
            path="src/app.js",
            duration_ms=1.5,
            exit_code=0,
            counts={AnnotationLevel.FAILURE: 2},
        ),
    )
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("broken")

    lines = [line for line in capsys.readouterr().err.splitlines() if line]
    payload = json.loads(lines[-2])
    assert payload["message"] == "flow finished"
    assert payload["level"] == "info"
    assert payload["logger"] == "pragmacov.coverage"
    assert payload["component"] == "coverage"
    assert payload["tool"] == "flow"
    assert payload["path"] == "src/app.js"
    assert payload["duration_ms"] == 1.5
    assert payload["exit_code"] == 0
    assert payload["counts"] == {"failure": 2}
    assert "exc_info" in json.loads(lines[-1])


def test_configure_logging_respects_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert LOG_LEVELS == ("debug", "info", "warning", "error")
    config = configure_logging("text", log_level="warning")
    assert config.level == logging.WARNING
    logger = logging.getLogger("pragmacov")
    logger.info("ignored")
    logger.warning("recorded")
    captured = capsys.readouterr()
    assert "ignored" not in captured.err
    assert "[WARNING] recorded" in captured.err
    assert captured.out == ""


def test_configure_logging_honors_env_overrides(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PRAGMACOV_LOG_FORMAT", "json")
    monkeypatch.setenv("PRAGMACOV_LOG_LEVEL", "error")
    configure_logging()
    logger = logging.getLogger("pragmacov.cli")
    logger.warning("warned")
    logger.error("failed", extra=structured_extra(LogComponent.CLI, exit_code=2))
    lines = [line for line in capsys.readouterr().err.splitlines() if line]
    assert json.loads(lines[-1])["message"] == "failed"
    assert all("warned" not in line for line in lines)


def test_structured_extra_normalises_inputs(tmp_path: Path) -> None:
    extra = structured_extra(
        LogComponent.SCANNER,
        path=tmp_path / "app.js",
        line="7",  # type: ignore[arg-type]
        counts={},
        details={"blocks": 2},
    )
    assert extra["component"] is LogComponent.SCANNER
    assert "path" in extra and extra["path"].endswith("app.js")
    assert "line" in extra and extra["line"] == 7
    assert "counts" not in extra
    assert "details" in extra and extra["details"] == {"blocks": 2}


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(logging.ERROR, logging.ERROR), ("DEBUG", logging.DEBUG), ("verbose", logging.INFO)],
)
def test_configure_logging_resolves_numeric_and_named_levels(requested: str | int, expected: int) -> None:
    config = configure_logging("text", log_level=requested)
    assert config.level == expected
    assert logging.getLogger("pragmacov").level == expected
    assert logging.getLogger("pragmacov.reconcile").getEffectiveLevel() == expected
