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

"""Per-file suppression model produced by the pragma scanner."""

from __future__ import annotations

from dataclasses import dataclass, field

from pragmacov._internal.exceptions import SuppressionModelError
from pragmacov.core.types import BlockRange

__all__ = ["SuppressionModel", "validate_block_order"]


def _default_offsets() -> tuple[int, ...]:
    return (0,)


@dataclass(slots=True, frozen=True)
class SuppressionModel:
    """Which lines and blocks of a file are covered by ignore pragmas.

    Attributes:
        path: File the model was built from.
        suppressed_lines: Lines suppressed by a same-line pragma, a preceding
            next-line pragma, or membership in a block (markers included).
        block_ranges: Well-formed block pragma pairs in file order.
        unmatched_block_ranges: Blocks superseded by another open marker, or
            left open at end of file.
        line_offsets: ``line_offsets[i]`` is the byte offset at which line ``i``
            starts; index 0 is a sentinel equal to 0.
        total_lines: Number of lines scanned.
    """

    path: str
    suppressed_lines: frozenset[int] = frozenset()
    block_ranges: tuple[BlockRange, ...] = ()
    unmatched_block_ranges: tuple[BlockRange, ...] = ()
    line_offsets: tuple[int, ...] = field(default_factory=_default_offsets)
    total_lines: int = 0

    def is_suppressed(self, line: int) -> bool:
        return line in self.suppressed_lines

    def offset_of(self, line: int) -> int:
        """Return the byte offset of the start of ``line`` (clamped to the table)."""
        if line < 0:
            return 0
        if line >= len(self.line_offsets):
            return self.line_offsets[-1]
        return self.line_offsets[line]


def validate_block_order(blocks: tuple[BlockRange, ...]) -> None:
    """Ensure block ranges are well-formed, disjoint and strictly increasing.

    Args:
        blocks: Block ranges in the order they will be consumed.

    Raises:
        SuppressionModelError: If any block is inverted or overlaps its predecessor.
    """
    previous: BlockRange | None = None
    for block in blocks:
        if block.start > block.end:
            message = f"Block range {block.start}-{block.end} ends before it starts"
            raise SuppressionModelError(message)
        if previous is not None and block.start <= previous.end:
            message = (
                f"Block range {block.start}-{block.end} overlaps or precedes "
                f"{previous.start}-{previous.end}"
            )
            raise SuppressionModelError(message)
        previous = block
