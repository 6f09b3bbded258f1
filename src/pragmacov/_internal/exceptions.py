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

"""Common exception hierarchy for pragmacov."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "ChangedFilesError",
    "CoverageUnavailableError",
    "PragmacovError",
    "PragmacovValidationError",
    "SourceDecodeError",
    "SuppressionModelError",
    "UnmatchedEndPragmaError",
]


class PragmacovError(Exception):
    """Base error for all pragmacov exceptions."""


class PragmacovValidationError(PragmacovError, ValueError):
    """Raised when input data fails validation checks."""


class UnmatchedEndPragmaError(PragmacovError):
    """Raised when a block-close pragma appears without an open block.

    This is the one malformed-input condition that aborts analysis of a file.
    """

    def __init__(self, path: str | Path, line: int) -> None:
        """Initialise the error with the offending location.

        Args:
            path: File being scanned.
            line: 1-indexed line of the unmatched close pragma.
        """
        self.path = str(path)
        self.line = line
        super().__init__(f"{self.path}:{line}: unmatched end ignore pragma")


class SuppressionModelError(PragmacovValidationError):
    """Raised when a suppression model violates its block ordering invariant."""


class CoverageUnavailableError(PragmacovError):
    """Raised when the coverage tool produced no usable data for a file."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Coverage data unavailable for {self.path}: {reason}")


class ChangedFilesError(PragmacovError):
    """Raised when version control cannot list the changed files."""


class SourceDecodeError(PragmacovError):
    """Raised when a source file is not valid UTF-8."""

    def __init__(self, path: str | Path, error: UnicodeDecodeError) -> None:
        self.path = str(path)
        self.error = error
        super().__init__(f"{self.path}: not valid UTF-8 ({error.reason} at byte {error.start})")
