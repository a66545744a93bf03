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

import hashlib
import os
from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from gitdrop.constants import NOISE_DIRECTORIES
from gitdrop.core.exceptions import FileSystemError

_READ_BLOCK = 1 << 16


def iter_source_files(root: Path, current: Path | None = None) -> Iterator[str]:
    """
    Yield posix-style paths (relative to root) of every regular file under root.

    Entries are visited in name order so repeated walks of an unchanged tree
    produce identical output. Noise directories are skipped. Errors from
    unreadable directories propagate.
    """
    current = root if current is None else current
    with os.scandir(current) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in NOISE_DIRECTORIES:
                continue
            yield from iter_source_files(root, Path(entry.path))
        elif entry.is_file():
            yield Path(entry.path).relative_to(root).as_posix()


def hash_file(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(_READ_BLOCK), b""):
            digest.update(block)
    return digest.hexdigest()


def detect_changed_files(source_root: Path, reference_root: Path) -> list[str]:
    """
    Return the paths under source_root that are new or differ from reference_root.

    The comparison is one-way: files only present in reference_root are
    never reported, so deletions are not detected.
    """
    source_root = Path(source_root)
    reference_root = Path(reference_root)
    if not source_root.is_dir():
        raise FileSystemError(f"Source directory not found: {source_root}")

    changed: list[str] = []
    total = 0
    for rel_path in iter_source_files(source_root):
        total += 1
        reference = reference_root / rel_path
        if not reference.is_file():
            changed.append(rel_path)
        elif hash_file(source_root / rel_path) != hash_file(reference):
            changed.append(rel_path)

    logger.debug(f"Change detection: scanned={total} changed={len(changed)}")
    return changed
