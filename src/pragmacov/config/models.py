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

"""Configuration models and errors for pragmacov.

The on-disk configuration is validated with a pydantic model. The values the
core consumes are resolved once, at the CLI boundary, into the frozen
``RunConfig`` dataclass (see ``pragmacov.config.resolve``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pragmacov._internal.exceptions import PragmacovValidationError
from pragmacov.core.model_types import OutputFormat, RunMode
from pragmacov.reconcile import OVER_SUPPRESSION_THRESHOLD

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_FLOW_BIN: Final[str] = "flow"
DEFAULT_BASE_REF: Final[str] = "origin/main"
DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (".js", ".jsx", ".mjs")

__all__ = [
    "DEFAULT_BASE_REF",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_FLOW_BIN",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "RunConfig",
]


class ConfigValidationError(PragmacovValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid pragmacov configuration in {path}: {error}")


def _default_extensions() -> list[str]:
    return list(DEFAULT_EXTENSIONS)


class ConfigModel(BaseModel):
    """Schema of ``pragmacov.toml`` / ``[tool.pragmacov]``."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    flow_bin: str = DEFAULT_FLOW_BIN
    base_ref: str = DEFAULT_BASE_REF
    extensions: list[str] = Field(default_factory=_default_extensions)
    threshold: float = Field(default=OVER_SUPPRESSION_THRESHOLD, ge=0.0, le=1.0)
    output_format: OutputFormat | None = None
    jobs: int = Field(default=1, ge=1)

    @field_validator("flow_bin", "base_ref")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            message = "must not be empty"
            raise ValueError(message)
        return text

    @field_validator("extensions")
    @classmethod
    def _normalise_extensions(cls, value: list[str]) -> list[str]:
        result: list[str] = []
        for item in value:
            text = item.strip().lower()
            if not text:
                continue
            ext = text if text.startswith(".") else f".{text}"
            if ext not in result:
                result.append(ext)
        if not result:
            message = "at least one extension is required"
            raise ValueError(message)
        return result


@dataclass(slots=True, frozen=True)
class RunConfig:
    """Fully resolved settings for a single pragmacov run.

    Attributes:
        mode: ``DIRECT`` when files were given explicitly, ``CHANGED`` otherwise.
        paths: Explicit files to check (empty in ``CHANGED`` mode).
        project_root: Directory subprocesses run in.
        flow_bin: Flow executable.
        base_ref: Ref used to discover changed files.
        extensions: Suffixes of files considered in ``CHANGED`` mode.
        threshold: Over-suppression threshold for block pragmas.
        output_format: Warning sink format.
        jobs: Number of files checked concurrently.
        config_path: Configuration file the settings were loaded from, if any.
    """

    mode: RunMode
    paths: tuple[Path, ...]
    project_root: Path
    flow_bin: str = DEFAULT_FLOW_BIN
    base_ref: str = DEFAULT_BASE_REF
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    threshold: float = OVER_SUPPRESSION_THRESHOLD
    output_format: OutputFormat = OutputFormat.TEXT
    jobs: int = 1
    config_path: Path | None = None
