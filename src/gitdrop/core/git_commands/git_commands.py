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

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from gitdrop.core.exceptions import GitError
from gitdrop.core.git_interface.interface import GitInterface

_PUSH_REJECTED_MARKERS = ("rejected", "non-fast-forward")


class GitCommands:
    """Thin, intention-revealing wrappers around the git porcelain gitdrop needs."""

    def __init__(self, git: GitInterface):
        self.git = git

    # -------------------------------
    # Working copy setup
    # -------------------------------

    def clone(self, remote: str, destination: Path, depth: int | None = 1) -> None:
        """Clone remote into destination (which may be an existing empty directory)."""
        args = ["clone"]
        if depth is not None:
            args += ["--depth", str(depth)]
        args += [remote, str(destination)]
        self.git.run_git_text(args, cwd=destination.parent)

    def init(self) -> None:
        self.git.run_git_text(["init"])

    def add_remote(self, name: str, url: str) -> None:
        self.git.run_git_text(["remote", "add", name, url])

    def set_config(self, key: str, value: str) -> None:
        self.git.run_git_text(["config", key, value])

    def apply_author(self, name: str, email: str) -> None:
        logger.debug(f"Setting commit author to {name} <{email}>")
        self.set_config("user.name", name)
        self.set_config("user.email", email)

    # -------------------------------
    # Commit flow
    # -------------------------------

    def stage(self, files: Sequence[str]) -> None:
        if not files:
            return
        self.git.run_git_text(["add", "--"] + list(files))

    def unstage(self, files: Sequence[str]) -> None:
        """Drop files from the index, keeping the working tree as is."""
        if not files:
            return
        self.git.run_git_text(["reset", "-q", "--"] + list(files))

    def staged_files(self) -> list[str]:
        """Return the paths currently staged in the index."""
        output = self.git.run_git_text(["diff", "--cached", "--name-only"])
        return [line for line in output.splitlines() if line.strip()]

    def head_hash(self) -> str:
        return self.git.run_git_text(["rev-parse", "HEAD"]).strip()

    def commit(self, message: str) -> str:
        """Commit the index and return the new commit hash."""
        self.git.run_git_text(["commit", "-m", message])
        return self.head_hash()

    def push(self, remote: str = "origin") -> None:
        try:
            self.git.run_git_text(["push", "--set-upstream", remote, "HEAD"])
        except GitError as e:
            output = f"{e.message}\n{e.details or ''}"
            if any(marker in output for marker in _PUSH_REJECTED_MARKERS):
                raise GitError(
                    "Push rejected - remote has diverged. Re-run gitdrop to re-clone and retry.",
                    e.details,
                ) from e
            raise
