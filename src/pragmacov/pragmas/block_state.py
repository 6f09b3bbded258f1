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

"""Two-state machine tracking block-suppression pragmas.

The tracker is either ``IDLE`` or ``IN_BLOCK``. Opening a block while one is
already open supersedes it (the superseded block is reported as unmatched);
closing a block while idle is fatal.
"""

from __future__ import annotations

from enum import StrEnum

from pragmacov._internal.exceptions import UnmatchedEndPragmaError
from pragmacov.core.types import BlockRange

__all__ = ["BlockState", "BlockTracker"]


class BlockState(StrEnum):
    IDLE = "idle"
    IN_BLOCK = "in_block"


class BlockTracker:
    """Track block-open/close pragmas for a single file scan.

    Attributes:
        path: File being scanned, used in error messages.
        state: Current machine state.
        block_start: Line of the currently open block marker, or ``None``.
    """

    __slots__ = ("block_start", "path", "state")

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path
        self.state = BlockState.IDLE
        self.block_start: int | None = None

    @property
    def in_block(self) -> bool:
        return self.state is BlockState.IN_BLOCK

    def open(self, line: int) -> BlockRange | None:
        """Open a block at ``line``.

        Args:
            line: 1-indexed line of the open marker.

        Returns:
            The superseded block ``[previous_start, line - 1]`` when a block was
            already open, otherwise ``None``.
        """
        superseded: BlockRange | None = None
        if self.in_block and self.block_start is not None:
            superseded = BlockRange(self.block_start, line - 1)
        self.state = BlockState.IN_BLOCK
        self.block_start = line
        return superseded

    def close(self, line: int) -> BlockRange:
        """Close the open block at ``line``.

        Args:
            line: 1-indexed line of the close marker.

        Returns:
            The completed block ``[block_start, line]``.

        Raises:
            UnmatchedEndPragmaError: If no block is open.
        """
        if not self.in_block or self.block_start is None:
            raise UnmatchedEndPragmaError(self.path, line)
        block = BlockRange(self.block_start, line)
        self.state = BlockState.IDLE
        self.block_start = None
        return block

    def finish(self, last_line: int) -> BlockRange | None:
        """Return the unterminated block at end of input, if any."""
        if not self.in_block or self.block_start is None:
            return None
        return BlockRange(self.block_start, max(last_line, self.block_start))
