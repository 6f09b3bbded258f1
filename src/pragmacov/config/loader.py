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

"""Configuration loading for pragmacov.

Configuration is read from ``pragmacov.toml``, ``.pragmacov.toml`` or the
``[tool.pragmacov]`` table of ``pyproject.toml`` in the project root, using
the first file that carries pragmacov settings. An explicit path bypasses the
search.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import LogComponent
from pragmacov.runtime import resolve_project_root

from .models import ConfigModel, ConfigReadError, InvalidConfigFileError

logger: logging.Logger = logging.getLogger("pragmacov.config")

__all__ = ["LoadedConfig", "load_config"]


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Validated configuration model.
        root: Directory the configuration applies to.
        path: Filesystem path the configuration was loaded from, or None when
            defaults are used.
    """

    root: Path
    config: ConfigModel = field(default_factory=ConfigModel)
    path: Path | None = None


def load_config(explicit_path: Path | None = None, *, start: Path | None = None) -> LoadedConfig:
    """Load pragmacov configuration from a TOML file or fall back to defaults.

    Args:
        explicit_path: Optional explicit configuration file. When provided, only
            this file is considered and it must define pragmacov settings.
        start: Directory to start the project-root search from (defaults to cwd).

    Returns:
        LoadedConfig with the validated model and its origin.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed.
        InvalidConfigFileError: If a candidate file fails validation.
    """
    if explicit_path is not None:
        candidate = explicit_path if explicit_path.is_absolute() else (Path.cwd() / explicit_path).resolve()
        loaded = _load_candidate(candidate, explicit=True)
        if loaded is None:
            raise ConfigReadError(candidate, FileNotFoundError(candidate))
        return loaded

    root = resolve_project_root(start)
    for name in ("pragmacov.toml", ".pragmacov.toml", "pyproject.toml"):
        loaded = _load_candidate(root / name, explicit=False)
        if loaded is not None:
            return loaded
    logger.debug(
        "No pragmacov configuration found; using defaults",
        extra=structured_extra(LogComponent.CONFIG, path=root),
    )
    return LoadedConfig(root=root)


def _load_candidate(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    if not candidate.is_file():
        return None
    try:
        raw_map = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define pragmacov configuration"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None
    try:
        model = ConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    logger.debug(
        "Loaded configuration from %s",
        candidate,
        extra=structured_extra(LogComponent.CONFIG, path=candidate),
    )
    return LoadedConfig(root=candidate.parent.resolve(), config=model, path=candidate.resolve())


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the pragmacov table from a parsed TOML document.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when a pyproject.toml has no pragmacov table.

    Raises:
        InvalidConfigFileError: If ``[tool.pragmacov]`` exists but is not a table.
    """
    tool_section = raw_map.get("tool")
    section: object | None = None
    if isinstance(tool_section, dict):
        section = cast("dict[str, object]", tool_section).get("pragmacov")
        if section is not None and not isinstance(section, dict):
            message = "[tool.pragmacov] must be a TOML table"
            raise InvalidConfigFileError(candidate, ValueError(message))
    if isinstance(section, dict):
        return cast("dict[str, object]", section)
    if candidate.name == "pyproject.toml":
        return None
    return {key: value for key, value in raw_map.items() if key != "tool"}
