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

"""Flow coverage provider.

Runs ``flow coverage --json <file>`` and converts the ``expressions`` section
of its output into a ``CoverageReport``. The payload is validated with
pydantic so that a malformed or truncated response is reported as missing
coverage data rather than silently treated as a clean file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Final, override

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pragmacov._internal.exceptions import CoverageUnavailableError
from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import LogComponent
from pragmacov.core.types import CoverageReport, SourcePosition, UncoveredRange
from pragmacov.runtime import run_command

from .base import CoverageProvider

if TYPE_CHECKING:
    from pragmacov.core.type_aliases import Command

logger: logging.Logger = logging.getLogger("pragmacov.coverage")

FLOW_NAME: Final[str] = "flow"

__all__ = ["FLOW_NAME", "FlowCoveragePayload", "FlowCoverageProvider", "parse_flow_coverage"]


class FlowPosition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line: int = Field(ge=0)
    column: int = 0
    offset: int | None = None

    def to_position(self) -> SourcePosition:
        return SourcePosition(line=self.line, column=self.column, offset=self.offset)


class FlowLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start: FlowPosition
    end: FlowPosition


class FlowExpressions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uncovered_count: int = Field(ge=0)
    covered_count: int = Field(default=0, ge=0)
    uncovered_locs: list[FlowLocation] = Field(default_factory=list)


class FlowCoveragePayload(BaseModel):
    """Subset of ``flow coverage --json`` output consumed by pragmacov."""

    model_config = ConfigDict(extra="ignore")

    expressions: FlowExpressions


def parse_flow_coverage(path: str | Path, payload: str) -> CoverageReport:
    """Parse raw ``flow coverage --json`` output.

    Args:
        path: File the payload describes, used in error messages.
        payload: Raw JSON text.

    Returns:
        CoverageReport with ranges in the order flow reported them.

    Raises:
        CoverageUnavailableError: If the payload is empty or fails validation.
    """
    if not payload.strip():
        raise CoverageUnavailableError(path, "flow produced no output")
    try:
        parsed = FlowCoveragePayload.model_validate_json(payload)
    except ValidationError as exc:
        raise CoverageUnavailableError(path, f"invalid flow output ({exc.error_count()} error(s))") from exc
    expressions = parsed.expressions
    ranges = tuple(
        UncoveredRange(start=loc.start.to_position(), end=loc.end.to_position())
        for loc in expressions.uncovered_locs
    )
    return CoverageReport(
        uncovered_count=expressions.uncovered_count,
        covered_count=expressions.covered_count,
        uncovered_ranges=ranges,
    )


class FlowCoverageProvider(CoverageProvider):
    """Coverage provider backed by the ``flow`` binary.

    Attributes:
        name: The provider identifier ``"flow"``.
        flow_bin: Path or name of the flow executable.
        cwd: Working directory for the flow process (the flow root).
    """

    name = FLOW_NAME

    def __init__(self, flow_bin: str = FLOW_NAME, cwd: Path | None = None) -> None:
        super().__init__()
        self.flow_bin = flow_bin
        self.cwd = cwd

    def _build_command(self, path: Path) -> Command:
        return [self.flow_bin, "coverage", "--json", str(path)]

    @override
    def coverage(self, path: Path) -> CoverageReport:
        """Run flow on ``path`` and parse its coverage report.

        Args:
            path: File to analyse.

        Returns:
            CoverageReport parsed from flow's JSON output.

        Raises:
            CoverageUnavailableError: If flow cannot be started or its output is unusable.
        """
        command = self._build_command(path)
        try:
            result = run_command(command, cwd=self.cwd, allowed={Path(self.flow_bin).name})
        except OSError as exc:
            raise CoverageUnavailableError(path, f"unable to run {self.flow_bin}: {exc}") from exc
        report = parse_flow_coverage(path, result.stdout)
        logger.debug(
            "flow reported %s uncovered expression(s)",
            report.uncovered_count,
            extra=structured_extra(
                LogComponent.COVERAGE,
                tool=FLOW_NAME,
                path=path,
                duration_ms=result.duration_ms,
                exit_code=result.exit_code,
            ),
        )
        return report
