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

"""Single-pass scanner that builds a suppression model from raw file text.

Each line is checked, in order, for:

1. a block-open marker (supersedes any open block; ends processing of the line),
2. a block-close marker (fatal when no block is open; ends processing of the line),
3. a same-line pragma or a pending next-line pragma from the previous line,
4. membership in an open block,
5. a next-line pragma, which arms suppression of the following line.

Steps 3 and 5 compose: a line suppressed by the previous line's next-line
pragma can itself arm the line after it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import LogComponent

from .block_state import BlockTracker
from .model import SuppressionModel
from .patterns import is_block_close, is_block_open, is_line_pragma, is_next_line_pragma

if TYPE_CHECKING:
    from os import PathLike

    from pragmacov.core.types import BlockRange

logger: logging.Logger = logging.getLogger("pragmacov.pragmas")

__all__ = ["scan_pragmas"]


def scan_pragmas(path: str | PathLike[str], text: str) -> SuppressionModel:
    """Scan ``text`` for ignore pragmas and build its suppression model.

    Args:
        path: File the text was read from; used for error messages and logging.
        text: Full file contents.

    Returns:
        SuppressionModel describing suppressed lines, block ranges, unmatched
        blocks and the line offset table.

    Raises:
        UnmatchedEndPragmaError: If a block-close marker appears with no open block.
    """
    path_str = str(path)
    tracker = BlockTracker(path_str)
    suppressed: set[int] = set()
    blocks: list[BlockRange] = []
    unmatched: list[BlockRange] = []
    offsets: list[int] = [0]
    running_offset = 0
    suppress_next = False

    lines = text.split("\n")
    for number, line in enumerate(lines, start=1):
        offsets.append(running_offset)
        running_offset += len(line.encode("utf-8")) + 1

        if is_block_open(line):
            superseded = tracker.open(number)
            if superseded is not None:
                unmatched.append(superseded)
            suppressed.add(number)
            continue
        if is_block_close(line):
            blocks.append(tracker.close(number))
            suppressed.add(number)
            continue

        if suppress_next or is_line_pragma(line):
            suppress_next = False
            suppressed.add(number)
        elif tracker.in_block:
            suppressed.add(number)
        suppress_next = is_next_line_pragma(line)

    total_lines = len(lines)
    unterminated = tracker.finish(total_lines)
    if unterminated is not None:
        logger.debug(
            "Block opened at line %s is never closed",
            unterminated.start,
            extra=structured_extra(LogComponent.SCANNER, path=path_str, line=unterminated.start),
        )
        unmatched.append(unterminated)

    model = SuppressionModel(
        path=path_str,
        suppressed_lines=frozenset(suppressed),
        block_ranges=tuple(blocks),
        unmatched_block_ranges=tuple(unmatched),
        line_offsets=tuple(offsets),
        total_lines=total_lines,
    )
    logger.debug(
        "Scanned %s lines (%s suppressed, %s blocks, %s unmatched)",
        total_lines,
        len(model.suppressed_lines),
        len(model.block_ranges),
        len(model.unmatched_block_ranges),
        extra=structured_extra(LogComponent.SCANNER, path=path_str),
    )
    return model
