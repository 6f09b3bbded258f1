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


"""Structured logging utilities shared across pragmacov components."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final, Literal, TypedDict, Unpack, cast, override

from pragmacov.core.model_types import AnnotationLevel, LogComponent, LogFormat
from pragmacov.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "pragmacov"
LOG_FORMAT_ENV: Final[str] = "PRAGMACOV_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "PRAGMACOV_LOG_LEVEL"
TEXT_LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(format_.value for format_ in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = (
    "debug",
    "info",
    "warning",
    "error",
)
STRUCTURED_FIELDS: Final[tuple[str, ...]] = (
    "component",
    "tool",
    "path",
    "line",
    "duration_ms",
    "counts",
    "exit_code",
    "details",
)
_LEVEL_VALUES: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Resolved logging configuration."""

    format: LogFormat
    level: int


class JSONLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


def _resolve_format(preferred: LogFormat | str | None) -> LogFormat:
    value = preferred if preferred is not None else os.getenv(LOG_FORMAT_ENV)
    if not value:
        return LogFormat.TEXT
    return value if isinstance(value, LogFormat) else LogFormat.from_str(value)


def _resolve_level(preferred: str | int | None) -> int:
    value = preferred if preferred is not None else os.getenv(LOG_LEVEL_ENV)
    if isinstance(value, int):
        return value
    # Unknown names fall back to info.
    return _LEVEL_VALUES.get((value or "").strip().lower(), logging.INFO)


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Configure the ``pragmacov`` logger tree.

    Log records go to stderr so that warning output on stdout stays parseable.
    Child loggers (``pragmacov.cli``, ``pragmacov.coverage`` and so on) inherit
    the level and handler of the root ``pragmacov`` logger.

    Args:
        log_format: Desired log output format. ``None`` falls back to the
            ``PRAGMACOV_LOG_FORMAT`` environment variable or ``text``.
        log_level: Preferred verbosity (string or numeric). ``None`` consults
            ``PRAGMACOV_LOG_LEVEL`` or defaults to ``info``.

    Returns:
        The selected format and numeric level.
    """
    selected_format = _resolve_format(log_format)
    level = _resolve_level(log_level)

    handler = logging.StreamHandler()
    if selected_format is LogFormat.JSON:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False
    return LogConfig(format=selected_format, level=level)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Structured logging extras accepted by pragmacov log records."""

    tool: str
    path: str
    line: int
    duration_ms: float
    counts: Mapping[AnnotationLevel | str, int]
    exit_code: int
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    tool: str
    path: str | os.PathLike[str]
    line: int
    duration_ms: float
    counts: Mapping[AnnotationLevel | str, int]
    exit_code: int
    details: Mapping[str, object]


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Return a ``logging.extra`` payload, dropping unset and empty fields."""
    extra: StructuredLogExtra = {"component": component}
    if (tool := kwargs.get("tool")) is not None:
        extra["tool"] = str(tool)
    if (path := kwargs.get("path")) is not None:
        extra["path"] = os.fspath(path)
    if (line := kwargs.get("line")) is not None:
        extra["line"] = int(line)
    if (duration_ms := kwargs.get("duration_ms")) is not None:
        extra["duration_ms"] = float(duration_ms)
    if counts := kwargs.get("counts"):
        extra["counts"] = dict(counts)
    if (exit_code := kwargs.get("exit_code")) is not None:
        extra["exit_code"] = int(exit_code)
    if details := kwargs.get("details"):
        extra["details"] = dict(details)
    return extra


__all__ = [
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
