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

"""Lint orchestration: per-file scan-then-reconcile and whole-run coordination.

``check_file`` is the per-file pipeline. ``lint_paths`` fans it out over many
files (optionally on a thread pool; each file's analysis holds no shared
state). ``run`` selects the files for a resolved ``RunConfig`` and hands the
warnings to a sink.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from pragmacov._internal.exceptions import SourceDecodeError
from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import AnnotationLevel, LogComponent, RunMode
from pragmacov.coverage import Eligibility, FlowCoverageProvider, check_eligibility
from pragmacov.pragmas import scan_pragmas
from pragmacov.reconcile import OVER_SUPPRESSION_THRESHOLD, collect_warnings
from pragmacov.report import build_sink
from pragmacov.vcs import GitChangedFilesProvider, filter_by_extension

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pragmacov.config import RunConfig
    from pragmacov.core.types import CoverageWarning
    from pragmacov.coverage import CoverageProvider
    from pragmacov.report import WarningSink
    from pragmacov.vcs import ChangedFilesProvider

logger: logging.Logger = logging.getLogger("pragmacov.services")

__all__ = ["LintOutcome", "check_file", "lint_paths", "run"]


def _default_warnings() -> list[CoverageWarning]:
    return []


@dataclass(slots=True)
class LintOutcome:
    """Result of a lint run.

    Attributes:
        files_checked: Files handed to the per-file pipeline.
        warnings: All warnings, grouped by file in input order.
    """

    files_checked: int = 0
    warnings: list[CoverageWarning] = field(default_factory=_default_warnings)

    @property
    def has_failures(self) -> bool:
        return any(warning.level is AnnotationLevel.FAILURE for warning in self.warnings)

    def counts(self) -> Counter[AnnotationLevel]:
        return Counter(warning.level for warning in self.warnings)


def _display_path(path: Path, root: Path | None) -> str:
    if root is None:
        return str(path)
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return str(path)


def check_file(
    path: Path,
    provider: CoverageProvider,
    *,
    threshold: float = OVER_SUPPRESSION_THRESHOLD,
    root: Path | None = None,
) -> list[CoverageWarning]:
    """Reconcile one file's ignore pragmas against its coverage data.

    Files that opt out, are not type-checked, or have no uncovered
    expressions produce no warnings; their pragmas are not checked for
    staleness.

    Args:
        path: File to check.
        provider: Source of coverage data.
        threshold: Over-suppression threshold for block pragmas.
        root: Directory warning paths are reported relative to.

    Returns:
        Ordered warnings for the file.

    Raises:
        UnmatchedEndPragmaError: If the file has a block-close pragma with no open block.
        CoverageUnavailableError: If the provider cannot produce coverage data.
        SourceDecodeError: If the file is not valid UTF-8.
        OSError: If the file cannot be read.
    """
    display = _display_path(path, root)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SourceDecodeError(display, exc) from exc
    eligibility = check_eligibility(text)
    if eligibility is not Eligibility.ELIGIBLE:
        logger.debug(
            "Skipping %s (%s)",
            display,
            eligibility.value,
            extra=structured_extra(LogComponent.SERVICES, path=display),
        )
        return []

    report = provider.coverage(path)
    if not report.uncovered_count:
        logger.debug(
            "Skipping %s (fully covered)",
            display,
            extra=structured_extra(LogComponent.SERVICES, path=display, tool=provider.name),
        )
        return []

    model = scan_pragmas(display, text)
    return collect_warnings(display, model, report.uncovered_ranges, threshold=threshold)


def lint_paths(
    paths: Sequence[Path],
    provider: CoverageProvider,
    *,
    threshold: float = OVER_SUPPRESSION_THRESHOLD,
    jobs: int = 1,
    root: Path | None = None,
) -> list[CoverageWarning]:
    """Run ``check_file`` over ``paths`` and concatenate the results in input order.

    Args:
        paths: Files to check.
        provider: Source of coverage data.
        threshold: Over-suppression threshold for block pragmas.
        jobs: Maximum number of files checked concurrently.
        root: Directory warning paths are reported relative to.

    Returns:
        Warnings grouped per file, in the order of ``paths``.

    Raises:
        PragmacovError: The first fatal error raised by any file aborts the run.
    """

    def _check(path: Path) -> list[CoverageWarning]:
        return check_file(path, provider, threshold=threshold, root=root)

    warnings: list[CoverageWarning] = []
    if jobs <= 1 or len(paths) <= 1:
        for path in paths:
            warnings.extend(_check(path))
        return warnings
    with ThreadPoolExecutor(max_workers=jobs) as executor:
        for file_warnings in executor.map(_check, paths):
            warnings.extend(file_warnings)
    return warnings


def _select_paths(config: RunConfig, changed_files: ChangedFilesProvider | None) -> list[Path]:
    if config.mode is RunMode.DIRECT:
        return list(config.paths)
    provider = changed_files or GitChangedFilesProvider(config.base_ref, cwd=config.project_root)
    return filter_by_extension(provider.changed_files(), config.extensions)


def run(
    config: RunConfig,
    *,
    provider: CoverageProvider | None = None,
    changed_files: ChangedFilesProvider | None = None,
    sink: WarningSink | None = None,
) -> LintOutcome:
    """Execute a full lint run for ``config``.

    Args:
        config: Resolved run configuration.
        provider: Coverage provider; defaults to flow with ``config.flow_bin``.
        changed_files: Changed-files provider used in ``CHANGED`` mode;
            defaults to git against ``config.base_ref``.
        sink: Destination for the warnings; defaults to the sink for
            ``config.output_format`` writing to stdout.

    Returns:
        LintOutcome describing the run.
    """
    start = time.perf_counter()
    paths = _select_paths(config, changed_files)
    outcome = LintOutcome(files_checked=len(paths))
    if not paths:
        logger.info("No changed files", extra=structured_extra(LogComponent.SERVICES))
        return outcome

    coverage_provider = provider or FlowCoverageProvider(config.flow_bin, cwd=config.project_root)
    outcome.warnings = lint_paths(
        paths,
        coverage_provider,
        threshold=config.threshold,
        jobs=config.jobs,
        root=config.project_root,
    )
    (sink or build_sink(config.output_format)).emit(outcome.warnings)
    logger.info(
        "Checked %s file(s); %s warning(s)",
        outcome.files_checked,
        len(outcome.warnings),
        extra=structured_extra(
            LogComponent.SERVICES,
            tool=coverage_provider.name,
            duration_ms=(time.perf_counter() - start) * 1000,
            counts=outcome.counts(),
            details={"mode": config.mode},
        ),
    )
    return outcome
