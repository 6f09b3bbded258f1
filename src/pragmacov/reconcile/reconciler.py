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

"""Cross-reference a suppression model against tool-reported uncovered ranges.

Warnings are produced in three passes:

- unmatched block pragmas, independent of coverage data;
- uncovered ranges that are not fully suppressed, in the tool's order, keeping
  only the first warning anchored at any given start line;
- suppressed lines the tool considers covered, judged per line outside blocks
  and per block (against ``threshold``) inside them.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from typing import TYPE_CHECKING, Final

from pragmacov._internal.exceptions import PragmacovValidationError
from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import AnnotationLevel, LogComponent
from pragmacov.core.types import CoverageWarning, SourcePosition
from pragmacov.pragmas.model import validate_block_order

from .messages import (
    over_broad_block_message,
    stale_line_message,
    uncovered_block_message,
    uncovered_line_message,
    unmatched_block_message,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pragmacov.core.types import BlockRange, UncoveredRange
    from pragmacov.pragmas.model import SuppressionModel

logger: logging.Logger = logging.getLogger("pragmacov.reconcile")

OVER_SUPPRESSION_THRESHOLD: Final[float] = 0.8

__all__ = ["OVER_SUPPRESSION_THRESHOLD", "collect_warnings"]


def collect_warnings(
    path: str,
    model: SuppressionModel,
    uncovered: Iterable[UncoveredRange],
    *,
    threshold: float = OVER_SUPPRESSION_THRESHOLD,
) -> list[CoverageWarning]:
    """Return every inconsistency between ``model`` and ``uncovered``.

    Args:
        path: File path attached to each warning.
        model: Suppression model built by the pragma scanner.
        uncovered: Uncovered ranges in the order the coverage tool reported them.
        threshold: Fraction of a block's inner lines that may be covered before
            the block is reported as mostly unnecessary.

    Returns:
        Warnings ordered as unmatched blocks, uncovered gaps, then stale
        suppressions in line order.

    Raises:
        PragmacovValidationError: If ``threshold`` is outside ``[0, 1]``.
        SuppressionModelError: If the model's block ranges are not sorted and disjoint.
    """
    if not 0.0 <= threshold <= 1.0:
        message = f"threshold must be between 0 and 1 (got {threshold})"
        raise PragmacovValidationError(message)
    validate_block_order(model.block_ranges)

    warnings = _unmatched_block_warnings(path, model)
    error_lines, gap_warnings = _uncovered_gap_warnings(path, model, uncovered)
    warnings.extend(gap_warnings)
    warnings.extend(_over_suppression_warnings(path, model, error_lines, threshold))

    counts = Counter(warning.level for warning in warnings)
    logger.debug(
        "Collected %s warning(s)",
        len(warnings),
        extra=structured_extra(LogComponent.RECONCILER, path=path, counts=counts),
    )
    return warnings


def _line_anchor(line: int) -> SourcePosition:
    return SourcePosition(line=line, column=0)


def _unmatched_block_warnings(path: str, model: SuppressionModel) -> list[CoverageWarning]:
    return [
        CoverageWarning(
            path=path,
            start=_line_anchor(block.start),
            end=_line_anchor(block.end),
            level=AnnotationLevel.FAILURE,
            message=unmatched_block_message(),
            offset=model.offset_of(block.start),
        )
        for block in model.unmatched_block_ranges
    ]


def _uncovered_gap_warnings(
    path: str,
    model: SuppressionModel,
    uncovered: Iterable[UncoveredRange],
) -> tuple[set[int], list[CoverageWarning]]:
    error_lines: set[int] = set()
    warned: set[int] = set()
    warnings: list[CoverageWarning] = []
    for loc in uncovered:
        # Lines carry a real error even when the warning itself is deduplicated.
        error_lines.update(loc.lines)
        if loc.start.line in warned:
            continue
        if loc.is_single_line:
            if model.is_suppressed(loc.start.line):
                continue
            message = uncovered_line_message(loc.start, loc.end)
        else:
            if all(model.is_suppressed(line) for line in loc.lines):
                continue
            message = uncovered_block_message(loc.start, loc.end)
        warned.add(loc.start.line)
        offset = loc.start.offset if loc.start.offset is not None else model.offset_of(loc.start.line)
        warnings.append(
            CoverageWarning(
                path=path,
                start=loc.start,
                end=loc.end,
                level=AnnotationLevel.FAILURE,
                message=message,
                offset=offset,
            ),
        )
    return error_lines, warnings


def _over_suppression_warnings(
    path: str,
    model: SuppressionModel,
    error_lines: set[int],
    threshold: float,
) -> list[CoverageWarning]:
    warnings: list[CoverageWarning] = []
    queue: deque[BlockRange] = deque(model.block_ranges)
    current = queue.popleft() if queue else None
    passable = 0
    # Open markers of unmatched blocks are already reported as unmatched.
    unmatched_markers = {block.start for block in model.unmatched_block_ranges}
    for line in range(1, model.total_lines + 1):
        stale_candidate = model.is_suppressed(line) and line not in error_lines
        if stale_candidate and line not in unmatched_markers:
            if current is not None and current.contains(line):
                if not current.is_marker(line):
                    passable += 1
            else:
                warnings.append(
                    CoverageWarning(
                        path=path,
                        start=_line_anchor(line),
                        end=_line_anchor(line),
                        level=AnnotationLevel.FAILURE,
                        message=stale_line_message(line),
                        offset=model.offset_of(line),
                    ),
                )
        if current is not None and line == current.end:
            length = current.inner_length
            if length > 0 and passable / length > threshold:
                warnings.append(
                    CoverageWarning(
                        path=path,
                        start=_line_anchor(current.start),
                        end=_line_anchor(current.end),
                        level=AnnotationLevel.FAILURE,
                        message=over_broad_block_message(current, threshold),
                        offset=model.offset_of(current.start),
                    ),
                )
            passable = 0
            current = queue.popleft() if queue else None
    return warnings
