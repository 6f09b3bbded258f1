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

"""Configuration models, loading and run-config resolution."""

from __future__ import annotations

from .loader import LoadedConfig, load_config
from .models import (
    DEFAULT_BASE_REF,
    DEFAULT_EXTENSIONS,
    DEFAULT_FLOW_BIN,
    ConfigModel,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    RunConfig,
)
from .resolve import CliOverrides, resolve_run_config

__all__ = [
    "DEFAULT_BASE_REF",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_FLOW_BIN",
    "CliOverrides",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "LoadedConfig",
    "RunConfig",
    "load_config",
    "resolve_run_config",
]
