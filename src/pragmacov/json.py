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

"""Canonical JSON types and helpers used across pragmacov.

This module defines the JSON value shapes and generic helpers for working
with JSON-compatible data. It intentionally has no dependencies on
logging, configuration, or CLI layers to keep the dependency graph
simple and acyclic.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "dumps",
    "normalize_enums_for_json",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]
JSONList = list[JsonValue]


def normalize_enums_for_json(value: object) -> JSONValue:
    """Recursively convert Enum keys/values to their string payloads for JSON serialisation.

    Args:
        value: Arbitrary Python object hierarchy that may include `Enum`
            instances, mappings, or sequences.

    Returns:
        A JSON-compatible structure (built from `dict`/`list`/primitives)
        with all enum keys and values replaced by their `.value` payloads.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return cast("JSONValue", obj.value)
        if isinstance(obj, dict):
            mapping_obj = cast("dict[object, object]", obj)
            result: dict[str, JSONValue] = {}
            for key, raw_val in mapping_obj.items():
                norm_key = str(key.value) if isinstance(key, Enum) else str(key)
                result[norm_key] = _convert(raw_val)
            return result
        if isinstance(obj, (list, tuple)):
            items = cast("list[object] | tuple[object, ...]", obj)
            return [_convert(item) for item in items]
        if isinstance(obj, (str, int, float, bool)) or obj is None:
            return cast("JSONValue", obj)
        return str(obj)

    return _convert(value)


def dumps(value: object, *, indent: int | None = 2) -> str:
    """Serialise ``value`` to JSON after normalising enums.

    Args:
        value: Payload to serialise.
        indent: Indentation passed to :func:`json.dumps`.

    Returns:
        JSON document as a string.
    """
    return json.dumps(normalize_enums_for_json(value), indent=indent, ensure_ascii=False)
