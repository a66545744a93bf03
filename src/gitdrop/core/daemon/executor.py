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

from datetime import datetime

from loguru import logger

from gitdrop.constants import NOTHING_STAGED_MESSAGE
from gitdrop.core.git_commands.git_commands import GitCommands
from gitdrop.core.schedule.models import CommitResult, ScheduleRecord


def _now() -> datetime:
    return datetime.now().astimezone()


class CommitExecutor:
    """Stages and commits one schedule record in the daemon's working copy."""

    def __init__(self, git_commands: GitCommands):
        self.git_commands = git_commands

    def execute(self, record: ScheduleRecord) -> CommitResult:
        """
        Stage the record's files and commit them.

        Returns an unsuccessful result without a hash when nothing ended up
        staged. Git failures propagate to the caller.
        """
        self.git_commands.stage(record.files)

        staged = self.git_commands.staged_files()
        if not staged:
            logger.debug(f"Nothing staged for {record.files}")
            return self.failure(record, NOTHING_STAGED_MESSAGE)

        commit_hash = self.git_commands.commit(record.message)
        return CommitResult(
            message=record.message,
            files=record.files,
            scheduled_time=record.scheduled_time,
            executed_at=_now(),
            commit_hash=commit_hash,
            success=True,
        )

    def unstage(self, record: ScheduleRecord) -> None:
        self.git_commands.unstage(record.files)

    def push(self) -> None:
        self.git_commands.push("origin")

    @staticmethod
    def failure(record: ScheduleRecord, error: str) -> CommitResult:
        return CommitResult(
            message=record.message,
            files=record.files,
            scheduled_time=record.scheduled_time,
            executed_at=_now(),
            commit_hash="",
            success=False,
            error=error,
        )
