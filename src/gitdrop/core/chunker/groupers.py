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

import posixpath
from collections.abc import Sequence

from gitdrop.constants import NO_EXTENSION_BUCKET, ROOT_BUCKET, ROOT_LABEL

from .interface import FileGroup, FileGrouper


class KeyedGrouper(FileGrouper):
    """Groups files by a key derived from each path, preserving insertion order."""

    def key_for(self, path: str) -> str:
        raise NotImplementedError

    def make_group(self, key: str) -> FileGroup:
        raise NotImplementedError

    def group(self, files: Sequence[str]) -> list[FileGroup]:
        # dicts keep insertion order, so the first occurrence of a key fixes its position
        groups: dict[str, FileGroup] = {}
        for path in files:
            key = self.key_for(path)
            if key not in groups:
                groups[key] = self.make_group(key)
            groups[key].files.append(path)
        return list(groups.values())


class PerFileGrouper(FileGrouper):
    def group(self, files: Sequence[str]) -> list[FileGroup]:
        return [FileGroup(key=path, label=path, files=[path]) for path in files]


class PerExtensionGrouper(KeyedGrouper):
    def key_for(self, path: str) -> str:
        ext = posixpath.splitext(path)[1]
        return ext or NO_EXTENSION_BUCKET

    def make_group(self, key: str) -> FileGroup:
        return FileGroup(key=key, label=f"*{key} files")


class PerDirectoryGrouper(KeyedGrouper):
    def key_for(self, path: str) -> str:
        parts = path.split("/")
        return parts[0] if len(parts) > 1 else ROOT_BUCKET

    def make_group(self, key: str) -> FileGroup:
        if key == ROOT_BUCKET:
            return FileGroup(key=key, label=ROOT_LABEL)
        return FileGroup(key=key, label=key, directory=key)


GROUPERS: dict[str, type[FileGrouper]] = {
    "per-file": PerFileGrouper,
    "per-directory": PerDirectoryGrouper,
    "per-extension": PerExtensionGrouper,
}
