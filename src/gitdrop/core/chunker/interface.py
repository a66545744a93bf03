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

"""
FileGrouper interface

A grouper splits a flat, ordered list of changed paths into the groups that
will each become one commit.

Responsibilities:
- Assign every path to exactly one group
- Keep groups in first-occurrence order of their key and files in input order
- Provide a display label per group

Notes:
- Groupers never write commit messages; that is the job of a MessageStrategy,
  so message heuristics can change without touching grouping.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field


@dataclass
class FileGroup:
    key: str
    label: str
    files: list[str] = field(default_factory=list)
    # set when the group stands for a real top-level directory
    directory: str | None = None


# (files, directory) -> commit message
MessageStrategy = Callable[[Sequence[str], str | None], str]


class FileGrouper(ABC):
    @abstractmethod
    def group(self, files: Sequence[str]) -> list[FileGroup]:
        """Return the groups of files, in first-occurrence order."""
