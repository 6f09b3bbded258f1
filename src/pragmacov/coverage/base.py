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

"""Base protocol for coverage data providers.

A provider turns a file path into a ``CoverageReport``: how many expressions
the type checker could not cover, and where they are. Builtin providers wrap
an external tool; tests and embedders can supply their own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from pragmacov.core.types import CoverageReport

__all__ = ["CoverageProvider"]


class CoverageProvider(Protocol):
    """Protocol implemented by every coverage data provider.

    Attributes:
        name: Short identifier used in logs (e.g. ``"flow"``).
    """

    name: str

    # ignore JUSTIFIED: protocol method must document the CoverageReport contract beyond
    # the return annotation
    def coverage(self, path: Path) -> CoverageReport:  # pylint: disable=redundant-returns-doc
        """Return coverage data for ``path``.

        Args:
            path: File to analyse.

        Returns:
            CoverageReport: Uncovered count and uncovered ranges in the tool's
            reporting order.

        Raises:
            CoverageUnavailableError: If the tool produced no usable data.
        """
        ...  # pragma: no cover  # pylint: disable=unnecessary-ellipsis
