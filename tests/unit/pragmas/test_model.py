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
"""Unit tests for the suppression model."""

from __future__ import annotations

import pytest

from pragmacov.core.types import BlockRange
from pragmacov.exceptions import SuppressionModelError
from pragmacov.pragmas import SuppressionModel
from pragmacov.pragmas.model import validate_block_order

pytestmark = [pytest.mark.unit, pytest.mark.scanner]


def test_offset_of_clamps_to_table() -> None:
    model = SuppressionModel(path="app.js", line_offsets=(0, 0, 5, 9), total_lines=3)
    assert model.offset_of(2) == 5
    assert model.offset_of(-1) == 0
    assert model.offset_of(40) == 9


def test_block_range_inner_length() -> None:
    assert BlockRange(3, 7).inner_length == 3
    assert BlockRange(3, 4).inner_length == 0
    assert BlockRange(3, 7).is_marker(7)
    assert not BlockRange(3, 7).contains(8)


def test_validate_block_order_accepts_disjoint_blocks() -> None:
    validate_block_order((BlockRange(1, 3), BlockRange(4, 9)))


@pytest.mark.parametrize(
    "blocks",
    [
        (BlockRange(5, 2),),
        (BlockRange(1, 4), BlockRange(4, 6)),
        (BlockRange(6, 8), BlockRange(1, 3)),
    ],
)
def test_validate_block_order_rejects_invalid_blocks(blocks: tuple[BlockRange, ...]) -> None:
    with pytest.raises(SuppressionModelError):
        validate_block_order(blocks)
