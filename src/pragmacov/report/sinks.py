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

"""Warning sinks that render coverage warnings to a text stream.

Three formats are supported:

- ``text``: ``path:line:column: level: message`` for people reading a terminal;
- ``lint``: ``path:::message:::offset`` records for external linter drivers;
- ``json``: a JSON array of annotation objects for structured uploads.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Protocol, TextIO, override

from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import LogComponent, OutputFormat
from pragmacov.json import dumps

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pragmacov.core.types import CoverageWarning

logger: logging.Logger = logging.getLogger("pragmacov.report")

__all__ = ["JsonSink", "LintSink", "TextSink", "WarningSink", "build_sink"]


class WarningSink(Protocol):
    """Protocol for components that receive the ordered warning list."""

    def emit(self, warnings: Sequence[CoverageWarning]) -> None:
        """Deliver ``warnings`` in order."""
        ...  # pragma: no cover  # pylint: disable=unnecessary-ellipsis


class _StreamSink:
    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream if stream is not None else sys.stdout

    def _write_line(self, line: str) -> None:
        self.stream.write(f"{line}\n")


class TextSink(_StreamSink, WarningSink):
    """Human-readable listing, one warning per line."""

    @override
    def emit(self, warnings: Sequence[CoverageWarning]) -> None:
        for warning in warnings:
            self._write_line(
                f"{warning.path}:{warning.start.line}:{warning.start.column}: "
                f"{warning.level.value}: {warning.message}",
            )
        logger.debug(
            "Wrote %s warning(s)",
            len(warnings),
            extra=structured_extra(LogComponent.REPORT, details={"format": OutputFormat.TEXT}),
        )


class LintSink(_StreamSink, WarningSink):
    """``path:::message:::offset`` records consumed by external linter drivers."""

    @override
    def emit(self, warnings: Sequence[CoverageWarning]) -> None:
        for warning in warnings:
            self._write_line(f"{warning.path}:::{warning.message}:::{warning.offset}")


class JsonSink(_StreamSink, WarningSink):
    """JSON array of annotation objects."""

    @override
    def emit(self, warnings: Sequence[CoverageWarning]) -> None:
        self._write_line(dumps([warning.to_annotation() for warning in warnings]))


def build_sink(output_format: OutputFormat, stream: TextIO | None = None) -> WarningSink:
    """Return the sink that renders ``output_format``.

    Args:
        output_format: Selected output format.
        stream: Destination stream; defaults to ``sys.stdout``.

    Returns:
        WarningSink writing to ``stream``.
    """
    match output_format:
        case OutputFormat.LINT:
            return LintSink(stream)
        case OutputFormat.JSON:
            return JsonSink(stream)
        case _:
            return TextSink(stream)
