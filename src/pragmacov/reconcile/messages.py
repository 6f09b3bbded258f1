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

"""Warning message catalogue."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pragmacov.pragmas.patterns import (
    BLOCK_CLOSE_PRAGMA,
    BLOCK_OPEN_PRAGMA,
    LINE_PRAGMA,
    NEXT_LINE_PRAGMA,
)

if TYPE_CHECKING:
    from pragmacov.core.types import BlockRange, SourcePosition

__all__ = [
    "over_broad_block_message",
    "stale_line_message",
    "uncovered_block_message",
    "uncovered_line_message",
    "unmatched_block_message",
]


def unmatched_block_message() -> str:
    return f"Unmatched {BLOCK_OPEN_PRAGMA}"


def uncovered_line_message(start: SourcePosition, end: SourcePosition) -> str:
    return (
        f"The expression from {start.line}:{start.column}-{end.column} is not covered by flow! "
        f"If it's unavoidable, put '{LINE_PRAGMA}' at the end of the line "
        f"or '{NEXT_LINE_PRAGMA}' on the line above"
    )


def uncovered_block_message(start: SourcePosition, end: SourcePosition) -> str:
    return (
        f"The expression from {start.line}:{start.column}-{end.line}:{end.column} "
        "is not covered by flow! If it's unavoidable, surround the expression in "
        f"'{BLOCK_OPEN_PRAGMA}' and '{BLOCK_CLOSE_PRAGMA}'"
    )


def stale_line_message(line: int) -> str:
    return (
        f"The expression in line {line} is covered by flow! You should remove any "
        f"'{LINE_PRAGMA}' or '{BLOCK_OPEN_PRAGMA}' comments applying to this line."
    )


def over_broad_block_message(block: BlockRange, threshold: float) -> str:
    percent = math.floor(threshold * 100)
    return (
        f"More than {percent}% of lines in the 'flow-uncovered-block' from lines "
        f"{block.start}-{block.end} are covered by flow! You should remove this comment "
        f"from the entire block and instead cover individual lines using '{LINE_PRAGMA}'."
    )
