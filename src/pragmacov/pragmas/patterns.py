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

"""Ignore-pragma surface syntax.

Pragmas are recognised as plain-text line patterns; the scanned language is
never parsed. These patterns must stay byte-compatible with the comments
already present in checked codebases.
"""

from __future__ import annotations

import re
from typing import Final

__all__ = [
    "BLOCK_CLOSE_PATTERN",
    "BLOCK_CLOSE_PRAGMA",
    "BLOCK_OPEN_PATTERN",
    "BLOCK_OPEN_PRAGMA",
    "FILE_OPT_OUT_PRAGMA",
    "LINE_PRAGMA",
    "LINE_PRAGMA_PATTERN",
    "NEXT_LINE_PRAGMA",
    "NEXT_LINE_PRAGMA_PATTERN",
    "TYPE_CHECK_MARKER",
    "is_block_close",
    "is_block_open",
    "is_line_pragma",
    "is_next_line_pragma",
]

LINE_PRAGMA: Final[str] = "// flow-uncovered-line"
NEXT_LINE_PRAGMA: Final[str] = "// flow-next-uncovered-line"
BLOCK_OPEN_PRAGMA: Final[str] = "/* flow-uncovered-block */"
BLOCK_CLOSE_PRAGMA: Final[str] = "/* end flow-uncovered-block */"
FILE_OPT_OUT_PRAGMA: Final[str] = "/* flow-uncovered-file */"
TYPE_CHECK_MARKER: Final[str] = "@flow"

# Trailing text after the token is allowed so authors can explain the pragma.
LINE_PRAGMA_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(//\s*flow-uncovered-line[\s:]?.*|/\*\s*flow-uncovered-line(\s+[^*]*)?\*/)",
)
NEXT_LINE_PRAGMA_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(//\s*flow-(next-uncovered|uncovered-next)-line"
    r"|/\*\s*flow-(next-uncovered|uncovered-next)-line(\s+[^*]*)?\*/)",
)
BLOCK_OPEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*/\* flow-uncovered-block \*/")
BLOCK_CLOSE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*/\* end flow-uncovered-block \*/")


def is_block_open(line: str) -> bool:
    return BLOCK_OPEN_PATTERN.match(line) is not None


def is_block_close(line: str) -> bool:
    return BLOCK_CLOSE_PATTERN.match(line) is not None


def is_line_pragma(line: str) -> bool:
    return LINE_PRAGMA_PATTERN.search(line) is not None


def is_next_line_pragma(line: str) -> bool:
    return NEXT_LINE_PRAGMA_PATTERN.search(line) is not None
