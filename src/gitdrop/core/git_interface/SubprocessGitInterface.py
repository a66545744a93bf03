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

import subprocess
from pathlib import Path

from loguru import logger

from gitdrop.core.exceptions import GitError, git_not_found

from .interface import GitInterface

_TRUNCATE = 2000


def _truncate(text: str) -> str:
    return text[:_TRUNCATE] + ("...(truncated)" if len(text) > _TRUNCATE else "")


class SubprocessGitInterface(GitInterface):
    def __init__(self, repo_path: str | Path) -> None:
        # Ensure repo_path is a Path object for consistency
        if isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path)

    def run_git_text(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Running git text command: {' '.join(cmd)} cwd={effective_cwd}")
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=True,
                env=env,
                cwd=effective_cwd,
            )
        except FileNotFoundError as e:
            raise git_not_found() from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.debug(
                f"Git text command failed: {' '.join(e.cmd)} code={e.returncode} stderr={_truncate(stderr)}"
            )
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr or (e.stdout or "").strip(),
            ) from e

        if result.stdout:
            logger.debug(f"git stdout (text): {_truncate(result.stdout)}")
        if result.stderr:
            logger.debug(f"git stderr (text): {_truncate(result.stderr)}")
        logger.debug(f"git returncode: {result.returncode}")
        return result.stdout
