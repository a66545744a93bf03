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
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def require_git():
    if shutil.which("git") is None:
        pytest.skip("git executable not available")


def _run_git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return result.stdout


@pytest.fixture
def run_git():
    return _run_git


@pytest.fixture
def git_identity(tmp_path, monkeypatch):
    """Give git a private global config with a committer identity."""
    config = tmp_path / "gitconfig"
    config.write_text(
        "[user]\n\tname = gitdrop tests\n\temail = tests@gitdrop.invalid\n"
        "[init]\n\tdefaultBranch = main\n"
    )
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for key in ("GIT_AUTHOR_NAME", "GIT_AUTHOR_EMAIL", "GIT_COMMITTER_NAME", "GIT_COMMITTER_EMAIL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def bare_remote(tmp_path, require_git, git_identity) -> Path:
    """An empty bare repository usable as a push/clone target."""
    remote = tmp_path / "remote.git"
    remote.mkdir()
    _run_git(remote, "init", "--bare", "--initial-branch=main")
    return remote


@pytest.fixture
def seeded_remote(tmp_path, bare_remote, write_tree) -> Path:
    """A bare remote holding one commit with README.md and src/app.py."""
    seed = tmp_path / "seed"
    seed.mkdir()
    _run_git(seed, "init", "--initial-branch=main")
    write_tree(seed, {"README.md": "# demo\n", "src/app.py": "print('v1')\n"})
    _run_git(seed, "add", ".")
    _run_git(seed, "commit", "-m", "Initial commit")
    _run_git(seed, "remote", "add", "origin", str(bare_remote))
    _run_git(seed, "push", "origin", "main")
    return bare_remote
