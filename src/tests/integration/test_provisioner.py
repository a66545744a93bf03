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

import pytest

from gitdrop.core.exceptions import RemoteAccessError
from gitdrop.core.repo.provisioner import RepoProvisioner
from gitdrop.core.schedule.models import Author


def test_clone_of_seeded_remote(seeded_remote, run_git):
    provisioner = RepoProvisioner(str(seeded_remote))
    try:
        work_dir = provisioner.setup(Author(name="Ada", email="ada@example.com"))

        assert (work_dir / "README.md").read_text() == "# demo\n"
        assert (work_dir / "src" / "app.py").exists()
        assert run_git(work_dir, "config", "user.name").strip() == "Ada"
        assert run_git(work_dir, "config", "user.email").strip() == "ada@example.com"
    finally:
        provisioner.cleanup()

    assert not work_dir.exists()


def test_empty_remote_gets_origin(bare_remote, run_git):
    provisioner = RepoProvisioner(str(bare_remote))
    try:
        work_dir = provisioner.setup()

        assert (work_dir / ".git").is_dir()
        assert run_git(work_dir, "remote", "get-url", "origin").strip() == str(bare_remote)
    finally:
        provisioner.cleanup()


def test_missing_remote_is_an_access_error(tmp_path, git_identity):
    provisioner = RepoProvisioner(str(tmp_path / "does-not-exist.git"))

    with pytest.raises(RemoteAccessError):
        provisioner.setup()

    assert not provisioner.work_dir.exists()
