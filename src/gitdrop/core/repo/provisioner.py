# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import shutil
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from gitdrop.core.exceptions import FileSystemError, GitError, remote_access_denied
from gitdrop.core.git_commands.git_commands import GitCommands
from gitdrop.core.git_interface.interface import GitInterface
from gitdrop.core.git_interface.SubprocessGitInterface import SubprocessGitInterface
from gitdrop.core.schedule.models import Author

_ACCESS_MARKERS = (
    "Authentication failed",
    "Repository not found",
    "not found",
    "does not exist",
    "Could not read from remote repository",
)

_EMPTY_REMOTE_MARKERS = (
    "empty repository",
    "did not match any file",
    "Remote branch",
    "nothing to fetch",
)


class RepoProvisioner:
    """
    Produce a local working copy of a remote.

    The working copy holds the remote's current tracked content, or is a
    freshly initialized repository with the remote registered as origin
    when the remote has no history yet.
    """

    def __init__(
        self,
        remote: str,
        git_factory: Callable[[Path], GitInterface] = SubprocessGitInterface,
        prefix: str = "gitdrop-",
    ):
        self.remote = remote
        self.git_factory = git_factory
        self.prefix = prefix
        self.work_dir: Path | None = None

    def setup(self, author: Author | None = None) -> Path:
        self.work_dir = Path(tempfile.mkdtemp(prefix=self.prefix))
        commands = GitCommands(self.git_factory(self.work_dir))

        try:
            commands.clone(self.remote, self.work_dir)
        except GitError as e:
            output = f"{e.message}\n{e.details or ''}"
            # "Remote branch X not found" means empty, so check that first
            is_empty = any(marker in output for marker in _EMPTY_REMOTE_MARKERS)
            if not is_empty and any(marker in output for marker in _ACCESS_MARKERS):
                self.cleanup()
                raise remote_access_denied(self.remote) from e

            if not is_empty:
                self.cleanup()
                raise

            logger.debug(f"Remote {self.remote} is empty, initializing a fresh repo")
            commands.init()
            commands.add_remote("origin", self.remote)

        if author is not None:
            commands.apply_author(author.name, author.email)

        logger.debug(f"Working copy ready at {self.work_dir}")
        return self.work_dir

    def copy_files(self, source_dir: Path, files: Sequence[str]) -> None:
        """Copy source-relative files into the working copy."""
        if self.work_dir is None:
            raise FileSystemError("Working copy has not been set up")

        missing: list[str] = []
        for rel_path in files:
            src = source_dir / rel_path
            dest = self.work_dir / rel_path

            if not src.is_file():
                missing.append(rel_path)
                continue

            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)

        if missing:
            raise FileSystemError(
                f"Missing source files in {source_dir}",
                "\n".join(f"  - {f}" for f in missing),
            )

    def cleanup(self) -> None:
        if self.work_dir is not None and self.work_dir.exists():
            shutil.rmtree(self.work_dir, ignore_errors=True)
            logger.debug(f"Removed working copy {self.work_dir}")
