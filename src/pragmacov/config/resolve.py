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

"""Resolve CLI arguments, environment and configuration into a ``RunConfig``.

Precedence for every setting is: CLI flag, then environment variable, then
configuration file, then built-in default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pragmacov.core.model_types import OutputFormat, RunMode

from .models import ConfigValidationError, RunConfig

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .loader import LoadedConfig

FLOW_BIN_ENV: Final[str] = "PRAGMACOV_FLOW_BIN"
BASE_REF_ENV: Final[str] = "PRAGMACOV_BASE_REF"
GITHUB_BASE_REF_ENV: Final[str] = "GITHUB_BASE_REF"

__all__ = [
    "BASE_REF_ENV",
    "FLOW_BIN_ENV",
    "GITHUB_BASE_REF_ENV",
    "CliOverrides",
    "resolve_run_config",
]


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Values supplied on the command line; ``None`` means "not given"."""

    paths: tuple[str, ...] = ()
    flow_bin: str | None = None
    base_ref: str | None = None
    output_format: OutputFormat | None = None
    threshold: float | None = None
    jobs: int | None = None


def _env_base_ref(environ: Mapping[str, str]) -> str | None:
    if value := environ.get(BASE_REF_ENV, "").strip():
        return value
    if value := environ.get(GITHUB_BASE_REF_ENV, "").strip():
        return value if value.startswith("origin/") else f"origin/{value}"
    return None


def _resolve_paths(raw_paths: Sequence[str], cwd: Path) -> tuple[Path, ...]:
    resolved: list[Path] = []
    for raw in raw_paths:
        path = Path(raw)
        candidate = path if path.is_absolute() else cwd / path
        if candidate not in resolved:
            resolved.append(candidate)
    return tuple(resolved)


def resolve_run_config(
    overrides: CliOverrides,
    loaded: LoadedConfig,
    *,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> RunConfig:
    """Merge CLI overrides, environment and file configuration.

    Args:
        overrides: Values given on the command line.
        loaded: Loaded file configuration (or defaults).
        environ: Environment mapping; defaults to ``os.environ``.
        cwd: Directory relative CLI paths are resolved against.

    Returns:
        RunConfig passed explicitly to the lint service.

    Raises:
        ConfigValidationError: If a CLI override is out of range.
    """
    env = os.environ if environ is None else environ
    base_dir = cwd or Path.cwd()
    file_config = loaded.config

    if overrides.threshold is not None and not 0.0 <= overrides.threshold <= 1.0:
        message = f"--threshold must be between 0 and 1 (got {overrides.threshold})"
        raise ConfigValidationError(message)
    if overrides.jobs is not None and overrides.jobs < 1:
        message = f"--jobs must be at least 1 (got {overrides.jobs})"
        raise ConfigValidationError(message)

    paths = _resolve_paths(overrides.paths, base_dir)
    mode = RunMode.DIRECT if paths else RunMode.CHANGED
    default_format = OutputFormat.LINT if mode is RunMode.DIRECT else OutputFormat.TEXT

    return RunConfig(
        mode=mode,
        paths=paths,
        project_root=loaded.root,
        flow_bin=overrides.flow_bin or env.get(FLOW_BIN_ENV, "").strip() or file_config.flow_bin,
        base_ref=overrides.base_ref or _env_base_ref(env) or file_config.base_ref,
        extensions=tuple(file_config.extensions),
        threshold=overrides.threshold if overrides.threshold is not None else file_config.threshold,
        output_format=overrides.output_format or file_config.output_format or default_format,
        jobs=overrides.jobs or file_config.jobs,
        config_path=loaded.path,
    )
