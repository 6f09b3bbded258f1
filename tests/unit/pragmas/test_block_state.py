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

"""Unit tests for the block pragma state machine."""

from __future__ import annotations

import pytest

from pragmacov.core.types import BlockRange
from pragmacov.exceptions import UnmatchedEndPragmaError
from pragmacov.pragmas.block_state import BlockState, BlockTracker

pytestmark = [pytest.mark.unit, pytest.mark.scanner]


def test_tracker_starts_idle() -> None:
    tracker = BlockTracker("app.js")
    assert tracker.state is BlockState.IDLE
    assert not tracker.in_block
    assert tracker.finish(10) is None


def test_open_then_close_returns_block() -> None:
    tracker = BlockTracker("app.js")
    assert tracker.open(3) is None
    assert tracker.state is BlockState.IN_BLOCK
    assert tracker.close(7) == BlockRange(3, 7)
    assert tracker.state is BlockState.IDLE
    assert tracker.block_start is None


def test_reopen_supersedes_open_block() -> None:
    tracker = BlockTracker("app.js")
    tracker.open(2)
    superseded = tracker.open(6)
    assert superseded == BlockRange(2, 5)
    assert tracker.block_start == 6
    assert tracker.close(9) == BlockRange(6, 9)


def test_close_while_idle_is_fatal() -> None:
    tracker = BlockTracker("src/app.js")
    with pytest.raises(UnmatchedEndPragmaError) as excinfo:
        tracker.close(4)
    assert excinfo.value.line == 4
    assert excinfo.value.path == "src/app.js"
    assert "unmatched end ignore pragma" in str(excinfo.value)


def test_close_after_close_is_fatal() -> None:
    tracker = BlockTracker("app.js")
    tracker.open(1)
    tracker.close(2)
    with pytest.raises(UnmatchedEndPragmaError):
        tracker.close(3)


def test_finish_reports_unterminated_block() -> None:
    tracker = BlockTracker("app.js")
    tracker.open(4)
    assert tracker.finish(12) == BlockRange(4, 12)
