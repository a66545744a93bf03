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

import json
import shutil
import signal
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from loguru import logger

from gitdrop.core.daemon.completion import CompletionTracker
from gitdrop.core.daemon.executor import CommitExecutor
from gitdrop.core.daemon.task_scheduler import TaskHandle, TaskScheduler
from gitdrop.core.exceptions import GitdropError, GitError
from gitdrop.core.git_commands.git_commands import GitCommands
from gitdrop.core.git_interface.SubprocessGitInterface import SubprocessGitInterface
from gitdrop.core.schedule.models import (
    CommitResult,
    CommitState,
    Schedule,
    ScheduleRecord,
)
from gitdrop.core.schedule.store import interrupted_path_for, results_path_for
from gitdrop.core.utils.time_utils import format_time


class DaemonInterrupted(Exception):
    """Unwinds the scheduler loop after an interrupt or terminate signal."""


@dataclass
class ScheduledTask:
    index: int
    record: ScheduleRecord
    state: CommitState = CommitState.PENDING
    handle: TaskHandle | None = None


def _describe(error: Exception) -> str:
    if isinstance(error, GitdropError) and error.details:
        return f"{error.message}: {error.details}"
    return str(error)


class ScheduleDaemon:
    """
    Fires every commit of a schedule at its wall-clock time.

    All run state (tasks, results, completion count) lives on the instance
    and is shared with the firing callbacks through `self`.
    """

    def __init__(
        self,
        schedule: Schedule,
        schedule_path: Path,
        git_commands: GitCommands | None = None,
        scheduler: TaskScheduler | None = None,
    ):
        self.schedule = schedule
        self.schedule_path = Path(schedule_path)
        self.work_dir = Path(schedule.work_dir)
        self.git_commands = git_commands or GitCommands(
            SubprocessGitInterface(self.work_dir)
        )
        self.executor = CommitExecutor(self.git_commands)
        self.scheduler = scheduler or TaskScheduler()

        self.tasks = [
            ScheduledTask(index=i, record=record)
            for i, record in enumerate(schedule.commits, start=1)
        ]
        self.results: list[CommitResult] = []
        self.tracker = CompletionTracker(len(self.tasks), self._finalize)
        self.finalized = False
        self.interrupted_by: int | None = None
        self._firing = False

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def results_file(self) -> Path:
        return results_path_for(self.schedule.log_file)

    @property
    def interrupted_file(self) -> Path:
        return interrupted_path_for(self.schedule.log_file)

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGINT, self.request_stop)
        signal.signal(signal.SIGTERM, self.request_stop)

    def run(self) -> int:
        logger.info(
            f"Daemon started for schedule {self.schedule.id} - {self.total} commit(s) queued"
        )

        # a signal may land at any point from here on
        try:
            if self.schedule.author is not None:
                self.git_commands.apply_author(
                    self.schedule.author.name, self.schedule.author.email
                )

            self.arm()
            # an empty schedule finalizes right away
            self.tracker.check()

            self.scheduler.run()
        except DaemonInterrupted:
            pass

        if self.interrupted_by is not None and not self.finalized:
            self._record_interruption()
        return 0

    def arm(self) -> None:
        for task in self.tasks:
            fire_at = task.record.scheduled_time
            task.handle = self.scheduler.schedule_at(fire_at, self._fire, task)
            task.state = CommitState.ARMED
            logger.info(
                f'Scheduled commit {task.index}/{self.total}: "{task.record.message}" at {format_time(fire_at)}'
            )

    def request_stop(self, signum: int, frame=None) -> None:
        """Signal handler: cancel everything still pending, skip finalization."""
        if self.finalized or self.interrupted_by is not None:
            return

        self.interrupted_by = signum
        cancelled = self.scheduler.cancel_all()
        logger.info(
            f"Daemon interrupted by {signal.Signals(signum).name} - cancelled {cancelled} pending commit(s)"
        )
        if not self._firing:
            raise DaemonInterrupted(signal.Signals(signum).name)

    # -------------------------------
    # Firing
    # -------------------------------

    def _fire(self, task: ScheduledTask) -> None:
        self._firing = True
        try:
            task.state = CommitState.FIRED
            logger.info(
                f'Firing commit {task.index}/{self.total}: "{task.record.message}"'
            )
            self.results.append(self._execute(task))

            if self.interrupted_by is None:
                self.tracker.mark_done()
        finally:
            self._firing = False

    def _execute(self, task: ScheduledTask) -> CommitResult:
        record = task.record
        try:
            result = self.executor.execute(record)
        except (GitError, OSError) as e:
            task.state = CommitState.ERRORED
            logger.error(f"  Error: {_describe(e)}")
            self._unstage(record)
            return CommitExecutor.failure(record, _describe(e))

        if not result.success:
            task.state = CommitState.SKIPPED
            logger.info(f"  Skipped: {result.error}")
            return result

        task.state = CommitState.COMMITTED
        logger.info(f'  Committed: {result.commit_hash} - "{result.message}"')

        if self.schedule.push_strategy == "immediate":
            logger.info("  Pushing...")
            try:
                self.executor.push()
            except (GitError, OSError) as e:
                task.state = CommitState.ERRORED
                error = f"Push failed after committing {result.commit_hash[:7]}: {_describe(e)}"
                logger.error(f"  Error: {error}")
                return CommitExecutor.failure(record, error)
            logger.info("  Push complete.")

        return result

    def _unstage(self, record: ScheduleRecord) -> None:
        # leftovers in the index would land in the next firing's commit
        try:
            self.executor.unstage(record)
        except (GitError, OSError) as e:
            logger.warning(f"  Warning: could not unstage {record.files}: {_describe(e)}")

    # -------------------------------
    # Completion
    # -------------------------------

    def _finalize(self) -> None:
        self.finalized = True

        if self.schedule.push_strategy == "batch":
            logger.info("Pushing all commits...")
            try:
                self.executor.push()
                logger.info("Push complete.")
            except (GitError, OSError) as e:
                logger.error(f"Push failed: {_describe(e)}")

        self._write_json(
            self.results_file, [result.to_json_dict() for result in self.results]
        )
        logger.info(f"Done. Results written to {self.results_file}")

        try:
            shutil.rmtree(self.work_dir)
            logger.info("Temp working directory cleaned up.")
        except OSError as e:
            logger.warning(f"Warning: could not clean up temp dir {self.work_dir}: {e}")

        self.schedule_path.unlink(missing_ok=True)

    def _record_interruption(self) -> None:
        marker = {
            "interruptedAt": datetime.now().astimezone().isoformat(),
            "signal": signal.Signals(self.interrupted_by).name,
            "workDir": str(self.work_dir),
            "scheduleFile": str(self.schedule_path),
            "completed": len(self.results),
            "total": self.total,
            "results": [result.to_json_dict() for result in self.results],
        }
        self._write_json(self.interrupted_file, marker)

        logger.warning(f"Partial results written to {self.interrupted_file}")
        logger.warning(f"Working directory left in place: {self.work_dir}")
        logger.warning(f"Schedule file left in place: {self.schedule_path}")
        logger.warning(f"Run 'gitdrop clean {self.schedule.id}' to remove them.")

    @staticmethod
    def _write_json(path: Path, data) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
