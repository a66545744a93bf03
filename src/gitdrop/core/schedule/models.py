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
Data model shared by the planning side and the execution daemon.

Planning types (CommitChunk, ScheduledCommit) are plain frozen dataclasses.
Persisted artifacts (Schedule, CommitResult) are pydantic models whose JSON
form uses camelCase keys.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ChunkStrategy = Literal["per-file", "per-directory", "per-extension"]
PushStrategy = Literal["immediate", "batch"]


@dataclass(frozen=True)
class CommitChunk:
    """
    A named group of changed files committed together as one unit.
    """

    files: tuple[str, ...]
    label: str
    message: str


@dataclass(frozen=True)
class ScheduledCommit:
    chunk: CommitChunk
    scheduled_time: datetime


class CommitState(Enum):
    PENDING = "pending"
    ARMED = "armed"
    FIRED = "fired"
    COMMITTED = "committed"
    SKIPPED = "skipped"
    ERRORED = "errored"


class _Artifact(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Author(_Artifact):
    name: str
    email: str


class ScheduleRecord(_Artifact):
    scheduled_time: datetime
    files: list[str]
    message: str


class Schedule(_Artifact):
    """The persisted, self-contained job description consumed by the daemon."""

    id: str
    remote: str
    source_dir: str
    work_dir: str
    author: Author | None = None
    push_strategy: PushStrategy = "immediate"
    log_file: str
    commits: list[ScheduleRecord]


class CommitResult(_Artifact):
    """Outcome of firing one scheduled commit."""

    message: str
    files: list[str]
    scheduled_time: datetime
    executed_at: datetime
    commit_hash: str = ""
    success: bool
    error: str | None = None
