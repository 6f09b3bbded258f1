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

"""Model enumerations for pragmacov.

This module defines the string-valued enumerations used throughout pragmacov:

- Annotation levels attached to emitted warnings
- Logging components and formats
- Output formats understood by the warning sinks
- Run modes selected when the run configuration is resolved
"""

from __future__ import annotations

from enum import StrEnum

__all__ = ["AnnotationLevel", "LogComponent", "LogFormat", "OutputFormat", "RunMode"]


class AnnotationLevel(StrEnum):
    """Severity attached to a coverage warning.

    Attributes:
        WARNING: Advisory finding.
        FAILURE: Finding that should fail the check.
    """

    WARNING = "warning"
    FAILURE = "failure"


class LogComponent(StrEnum):
    """Logical components used to tag structured log records."""

    CLI = "cli"
    CONFIG = "config"
    SCANNER = "scanner"
    RECONCILER = "reconciler"
    COVERAGE = "coverage"
    VCS = "vcs"
    REPORT = "report"
    SERVICES = "services"


class LogFormat(StrEnum):
    """Supported log output formats."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class OutputFormat(StrEnum):
    """Formats understood by the warning sinks.

    Attributes:
        TEXT: Human-readable ``path:line:column`` listing.
        LINT: One ``path:::message:::offset`` record per warning, consumed by
            external linter drivers.
        JSON: Array of annotation objects.
    """

    TEXT = "text"
    LINT = "lint"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> OutputFormat:
        """Create an OutputFormat enum from a string value.

        Args:
            raw: String representation of the output format.

        Returns:
            OutputFormat enum value.

        Raises:
            ValueError: If the string does not match any OutputFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown output format '{raw}'"
            raise ValueError(msg) from exc


class RunMode(StrEnum):
    """How the set of files to check is chosen.

    Attributes:
        DIRECT: Files were passed explicitly on the command line.
        CHANGED: Files are discovered from version control.
    """

    DIRECT = "direct"
    CHANGED = "changed"
