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

"""Filesystem helpers for locating project roots."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Literal

from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import LogComponent

logger: logging.Logger = logging.getLogger("pragmacov.internal.paths")

__all__ = ["ROOT_MARKERS", "RootMarker", "resolve_project_root"]

type RootMarker = Literal["pragmacov.toml", ".pragmacov.toml", "pyproject.toml", ".flowconfig", ".git"]

ROOT_MARKERS: Final[tuple[RootMarker, ...]] = (
    "pragmacov.toml",
    ".pragmacov.toml",
    "pyproject.toml",
    ".flowconfig",
    ".git",
)


def resolve_project_root(start: Path | None = None) -> Path:
    """Walk upwards from ``start`` until a directory carrying a root marker is found.

    Args:
        start: Directory (or file) to start from. Defaults to the working directory.

    Returns:
        The first ancestor containing one of ``ROOT_MARKERS``, or ``start``
        itself when none is found.

    Raises:
        FileNotFoundError: If an explicit ``start`` does not exist.
    """
    base = (start or Path.cwd()).resolve()
    if base.is_file():
        base = base.parent

    for candidate in (base, *base.parents):
        for marker in ROOT_MARKERS:
            if (candidate / marker).exists():
                return candidate

    if start is not None and not base.exists():
        message = f"Provided project root {start} does not exist."
        raise FileNotFoundError(message)
    logger.debug(
        "No project markers found; using %s as project root",
        base,
        extra=structured_extra(LogComponent.CONFIG, path=base),
    )
    return base
