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

"""Decide whether a file should be reconciled at all."""

from __future__ import annotations

from enum import StrEnum

from pragmacov.pragmas.patterns import FILE_OPT_OUT_PRAGMA, TYPE_CHECK_MARKER

__all__ = ["Eligibility", "check_eligibility"]


class Eligibility(StrEnum):
    """Outcome of the per-file eligibility check.

    Attributes:
        ELIGIBLE: The file is type-checked and should be reconciled.
        OPTED_OUT: The file carries the whole-file opt-out pragma on its own line.
        UNCHECKED: The file lacks the type-checking marker.
    """

    ELIGIBLE = "eligible"
    OPTED_OUT = "opted_out"
    UNCHECKED = "unchecked"


def check_eligibility(text: str) -> Eligibility:
    """Classify ``text`` for reconciliation.

    The opt-out check wins over the type-checking marker.

    Args:
        text: Full file contents.

    Returns:
        The eligibility of the file.
    """
    if FILE_OPT_OUT_PRAGMA in text.split("\n"):
        return Eligibility.OPTED_OUT
    if TYPE_CHECK_MARKER not in text:
        return Eligibility.UNCHECKED
    return Eligibility.ELIGIBLE
