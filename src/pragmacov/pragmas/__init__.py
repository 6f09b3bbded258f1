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

"""Ignore-pragma scanning."""

from __future__ import annotations

from .block_state import BlockState, BlockTracker
from .model import SuppressionModel, validate_block_order
from .scanner import scan_pragmas

__all__ = [
    "BlockState",
    "BlockTracker",
    "SuppressionModel",
    "scan_pragmas",
    "validate_block_order",
]
