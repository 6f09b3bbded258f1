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

"""Discover files changed relative to a base ref using git."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol, override

from pragmacov._internal.exceptions import ChangedFilesError
from pragmacov._internal.logging_utils import structured_extra
from pragmacov.core.model_types import LogComponent
from pragmacov.runtime import run_command

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pragmacov.core.type_aliases import Command, GitRef

logger: logging.Logger = logging.getLogger("pragmacov.vcs")

GIT: Final[str] = "git"

__all__ = ["ChangedFilesProvider", "GitChangedFilesProvider", "filter_by_extension"]


class ChangedFilesProvider(Protocol):
    """Protocol for components that list files changed in the working tree."""

    def changed_files(self) -> list[Path]:
        """Return changed files as paths relative to the provider's root."""
        ...  # pragma: no cover  # pylint: disable=unnecessary-ellipsis


class GitChangedFilesProvider(ChangedFilesProvider):
    """List files that differ between the merge base of ``base_ref`` and the work tree.

    Deleted files are excluded since there is nothing left to scan.

    Attributes:
        base_ref: Ref the current branch is compared against.
        cwd: Directory git runs in; returned paths are relative to the repository root
            and resolved against it.
    """

    def __init__(self, base_ref: GitRef | str, cwd: Path | None = None) -> None:
        super().__init__()
        self.base_ref = base_ref
        self.cwd = cwd

    def _git(self, *args: str) -> str:
        command: Command = [GIT, *args]
        try:
            result = run_command(command, cwd=self.cwd, allowed={GIT})
        except OSError as exc:
            message = f"Unable to run git: {exc}"
            raise ChangedFilesError(message) from exc
        if result.exit_code != 0:
            detail = result.stderr.strip() or f"exit code {result.exit_code}"
            message = f"git {' '.join(args)} failed: {detail}"
            raise ChangedFilesError(message)
        return result.stdout

    def merge_base(self) -> str:
        output = self._git("merge-base", str(self.base_ref), "HEAD").strip()
        if not output:
            message = f"No merge base between {self.base_ref} and HEAD"
            raise ChangedFilesError(message)
        return output

    def repository_root(self) -> Path:
        return Path(self._git("rev-parse", "--show-toplevel").strip())

    @override
    def changed_files(self) -> list[Path]:
        """Return files changed since the merge base, in git's order.

        Returns:
            Absolute paths of added, copied, modified, renamed or type-changed files.

        Raises:
            ChangedFilesError: If any git invocation fails.
        """
        base = self.merge_base()
        root = self.repository_root()
        output = self._git("diff", "--name-only", "--diff-filter=d", base)
        files = [root / line.strip() for line in output.splitlines() if line.strip()]
        logger.info(
            "Found %s changed file(s) since %s",
            len(files),
            self.base_ref,
            extra=structured_extra(LogComponent.VCS, tool=GIT, details={"merge_base": base}),
        )
        return files


def filter_by_extension(paths: Iterable[Path], extensions: Sequence[str]) -> list[Path]:
    """Keep only ``paths`` whose suffix is listed in ``extensions``.

    Args:
        paths: Candidate paths.
        extensions: Accepted suffixes including the leading dot (e.g. ``".js"``).

    Returns:
        Matching paths in their original order.
    """
    accepted = {ext.lower() for ext in extensions}
    return [path for path in paths if path.suffix.lower() in accepted]
