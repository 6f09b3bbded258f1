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

"""Core data classes for uncovered ranges, block ranges and warnings.

These are the value types handed between the pragma scanner, the coverage
reconciler, the coverage providers and the warning sinks. All of them are
immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .model_types import AnnotationLevel

if TYPE_CHECKING:
    from pragmacov.json import JSONMapping

__all__ = ["BlockRange", "CoverageReport", "CoverageWarning", "SourcePosition", "UncoveredRange"]


@dataclass(slots=True, frozen=True)
class SourcePosition:
    """A point in a source file.

    Attributes:
        line: 1-indexed line number.
        column: Column reported by the coverage tool (0 for whole-line anchors).
        offset: Byte offset from the start of the file, when known.
    """

    line: int
    column: int = 0
    offset: int | None = None


@dataclass(slots=True, frozen=True)
class UncoveredRange:
    """A contiguous source range the coverage tool judged type-unchecked."""

    start: SourcePosition
    end: SourcePosition

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    @property
    def lines(self) -> range:
        """Inclusive range of line numbers spanned by this range."""
        return range(self.start.line, self.end.line + 1)


@dataclass(slots=True, frozen=True, order=True)
class BlockRange:
    """Line span ``[start, end]`` covered by a block pragma pair.

    ``start`` and ``end`` are the marker lines themselves.
    """

    start: int
    end: int

    @property
    def inner_length(self) -> int:
        """Number of lines strictly between the open and close markers.

        This is the denominator of the over-broad block ratio. The marker lines
        are excluded from it because they never count as passable either, so a
        block whose two body lines are both covered scores ``2/2``.
        """
        return max(self.end - self.start - 1, 0)

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end

    def is_marker(self, line: int) -> bool:
        return line in {self.start, self.end}


@dataclass(slots=True, frozen=True)
class CoverageReport:
    """Coverage summary for a single file.

    Attributes:
        uncovered_count: Number of expressions the tool could not type-check.
        covered_count: Number of type-checked expressions.
        uncovered_ranges: Uncovered ranges in the order the tool reported them.
    """

    uncovered_count: int
    covered_count: int
    uncovered_ranges: tuple[UncoveredRange, ...] = ()


@dataclass(slots=True, frozen=True)
class CoverageWarning:
    """A single inconsistency between coverage data and suppression pragmas.

    Attributes:
        path: File the warning belongs to.
        start: Anchor start position.
        end: Anchor end position.
        level: Annotation level.
        message: Human-readable explanation and recommended fix.
        offset: Byte offset used by downstream reporters to address content.
    """

    path: str
    start: SourcePosition
    end: SourcePosition
    level: AnnotationLevel
    message: str
    offset: int

    def to_annotation(self) -> JSONMapping:
        """Render the warning as a reporting annotation payload.

        Returns:
            Mapping with ``path``, ``start``, ``end``, ``annotationLevel``,
            ``message`` and ``offset`` keys.
        """
        return {
            "path": self.path,
            "start": {"line": self.start.line, "column": self.start.column},
            "end": {"line": self.end.line, "column": self.end.column},
            "annotationLevel": self.level.value,
            "message": self.message,
            "offset": self.offset,
        }
