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

"""pragmacov - type-coverage ignore pragma reconciliation.

Scans source files for ignore pragmas, cross-references them with the
uncovered ranges reported by a type-coverage tool, and reports unsuppressed
gaps, stale suppressions and over-broad block suppressions.
"""

from __future__ import annotations

from pragmacov.exceptions import (
    ChangedFilesError,
    CoverageUnavailableError,
    PragmacovError,
    PragmacovValidationError,
    SourceDecodeError,
    SuppressionModelError,
    UnmatchedEndPragmaError,
)

from .config import RunConfig, load_config, resolve_run_config
from .core.model_types import AnnotationLevel, OutputFormat, RunMode
from .core.types import BlockRange, CoverageReport, CoverageWarning, SourcePosition, UncoveredRange
from .coverage import CoverageProvider, FlowCoverageProvider
from .pragmas import SuppressionModel, scan_pragmas
from .reconcile import OVER_SUPPRESSION_THRESHOLD, collect_warnings
from .services import LintOutcome, check_file, lint_paths, run

__all__ = [
    "OVER_SUPPRESSION_THRESHOLD",
    "AnnotationLevel",
    "BlockRange",
    "ChangedFilesError",
    "CoverageProvider",
    "CoverageReport",
    "CoverageUnavailableError",
    "CoverageWarning",
    "FlowCoverageProvider",
    "LintOutcome",
    "OutputFormat",
    "PragmacovError",
    "PragmacovValidationError",
    "RunConfig",
    "RunMode",
    "SourceDecodeError",
    "SourcePosition",
    "SuppressionModel",
    "SuppressionModelError",
    "UncoveredRange",
    "UnmatchedEndPragmaError",
    "__version__",
    "check_file",
    "collect_warnings",
    "lint_paths",
    "load_config",
    "resolve_run_config",
    "run",
    "scan_pragmas",
]

__version__ = "0.1.0"
