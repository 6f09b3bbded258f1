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

"""CLI entry point for pragmacov.

With file arguments the given files are checked directly and warnings are
printed as ``path:::message:::offset`` records by default. Without file
arguments the files changed since the base ref are checked.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pragmacov import __version__
from pragmacov._internal.exceptions import PragmacovError
from pragmacov._internal.logging_utils import structured_extra
from pragmacov.config import CliOverrides, load_config, resolve_run_config
from pragmacov.core.model_types import LogComponent, OutputFormat
from pragmacov.logging import LOG_FORMATS, LOG_LEVELS, configure_logging
from pragmacov.services import run

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: logging.Logger = logging.getLogger("pragmacov.cli")

EXIT_OK: Final[int] = 0
EXIT_WARNINGS: Final[int] = 1
EXIT_ERROR: Final[int] = 2

__all__ = ["EXIT_ERROR", "EXIT_OK", "EXIT_WARNINGS", "main"]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the pragmacov command-line interface.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: ``0`` when no warnings were produced, ``1`` when failures were
        reported, ``2`` when the run aborted on a fatal error.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        sys.stdout.write(f"pragmacov {__version__}\n")
        return EXIT_OK
    configure_logging(args.log_format, log_level=args.log_level)

    overrides = CliOverrides(
        paths=tuple(args.files),
        flow_bin=args.flow_bin,
        base_ref=args.base_ref,
        output_format=OutputFormat.from_str(args.output) if args.output else None,
        threshold=args.threshold,
        jobs=args.jobs,
    )
    try:
        loaded = load_config(args.config)
        config = resolve_run_config(overrides, loaded)
        outcome = run(config)
    except (PragmacovError, OSError) as exc:
        logger.error(  # noqa: TRY400 - traceback adds nothing for user-facing errors
            "%s",
            exc,
            extra=structured_extra(LogComponent.CLI, details={"error": type(exc).__name__}),
        )
        return EXIT_ERROR
    return EXIT_WARNINGS if outcome.has_failures else EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pragmacov CLI.

    Returns:
        argparse.ArgumentParser: Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="pragmacov",
        description=(
            "Reconcile type-coverage ignore pragmas against the uncovered ranges "
            "reported by flow."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Files to check. When omitted, files changed since --base-ref are checked.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Explicit configuration file.")
    parser.add_argument("--flow-bin", default=None, help="Flow executable (default: flow).")
    parser.add_argument(
        "--base-ref",
        default=None,
        help="Git ref changed files are compared against (default: origin/main).",
    )
    parser.add_argument(
        "--output",
        choices=[item.value for item in OutputFormat],
        default=None,
        help="Warning output format (default: lint with files, text otherwise).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Fraction of covered lines above which a block pragma is reported (default: 0.8).",
    )
    parser.add_argument("--jobs", type=int, default=None, help="Files checked concurrently.")
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Select logging output format (human-readable text or structured JSON).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Set verbosity of logged events.",
    )
    parser.add_argument("--version", action="store_true", help="Print the version and exit.")
    return parser
