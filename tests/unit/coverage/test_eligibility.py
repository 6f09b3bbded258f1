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
"""Unit tests for file eligibility."""

from __future__ import annotations

import pytest

from pragmacov.coverage import Eligibility, check_eligibility

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("// @flow\nconst x = 1;\n", Eligibility.ELIGIBLE),
        ("/**\n * @flow strict\n */\nconst x = 1;\n", Eligibility.ELIGIBLE),
        ("const x = 1;\n", Eligibility.UNCHECKED),
        ("// @flow\n/* flow-uncovered-file */\nconst x = 1;\n", Eligibility.OPTED_OUT),
        ("/* flow-uncovered-file */\nconst x = 1;\n", Eligibility.OPTED_OUT),
    ],
)
def test_check_eligibility(text: str, expected: Eligibility) -> None:
    assert check_eligibility(text) is expected


def test_opt_out_marker_must_be_its_own_line() -> None:
    text = "// @flow\nconst x = 1; /* flow-uncovered-file */\n"
    assert check_eligibility(text) is Eligibility.ELIGIBLE
