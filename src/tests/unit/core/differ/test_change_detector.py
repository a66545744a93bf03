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

from gitdrop.core.differ.change_detector import (
    detect_changed_files,
    hash_file,
    iter_source_files,
)
from gitdrop.core.exceptions import FileSystemError

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def source(tmp_path, write_tree):
    return write_tree(
        tmp_path / "source",
        {
            "README.md": "# demo\n",
            "src/app.py": "print('v2')\n",
            "src/util/helpers.py": "x = 1\n",
            "node_modules/pkg/index.js": "noise\n",
            ".git/HEAD": "ref: refs/heads/main\n",
            "docs/__pycache__/x.pyc": "noise\n",
        },
    )


@pytest.fixture
def reference(tmp_path, write_tree):
    return write_tree(
        tmp_path / "reference",
        {
            "README.md": "# demo\n",
            "src/app.py": "print('v1')\n",
            "only_in_reference.txt": "gone\n",
        },
    )


# -----------------------------------------------------------------------------
# Walking
# -----------------------------------------------------------------------------


def test_iter_source_files_skips_noise_directories(source):
    files = list(iter_source_files(source))

    assert files == ["README.md", "src/app.py", "src/util/helpers.py"]


def test_iter_source_files_is_deterministic(source):
    assert list(iter_source_files(source)) == list(iter_source_files(source))


def test_hash_file_matches_for_identical_content(tmp_path, write_tree):
    write_tree(tmp_path, {"a.txt": "same", "b.txt": "same", "c.txt": "other"})

    assert hash_file(tmp_path / "a.txt") == hash_file(tmp_path / "b.txt")
    assert hash_file(tmp_path / "a.txt") != hash_file(tmp_path / "c.txt")


# -----------------------------------------------------------------------------
# Detection
# -----------------------------------------------------------------------------


def test_detects_new_and_modified_files_only(source, reference):
    changed = detect_changed_files(source, reference)

    # README.md is unchanged, deletions are never reported
    assert changed == ["src/app.py", "src/util/helpers.py"]


def test_everything_is_new_against_empty_reference(source, tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()

    assert detect_changed_files(source, empty) == [
        "README.md",
        "src/app.py",
        "src/util/helpers.py",
    ]


def test_identical_trees_have_no_changes(tmp_path, write_tree):
    files = {"a.txt": "1", "dir/b.txt": "2"}
    left = write_tree(tmp_path / "left", files)
    right = write_tree(tmp_path / "right", files)

    assert detect_changed_files(left, right) == []


def test_directory_in_reference_where_source_has_file(tmp_path, write_tree):
    source = write_tree(tmp_path / "s", {"thing": "file"})
    reference = write_tree(tmp_path / "r", {"thing/inner.txt": "dir"})

    assert detect_changed_files(source, reference) == ["thing"]


def test_missing_source_directory_raises(tmp_path):
    with pytest.raises(FileSystemError):
        detect_changed_files(tmp_path / "missing", tmp_path)
