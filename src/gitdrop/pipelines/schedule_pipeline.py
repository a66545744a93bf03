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

import random
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from loguru import logger

from gitdrop.constants import DAEMON_MODULE
from gitdrop.context import ResolvedConfig
from gitdrop.core.chunker.chunker import chunk_files
from gitdrop.core.differ.change_detector import detect_changed_files
from gitdrop.core.distributor.time_distributor import (
    distribute_chunks,
    partition_by_time,
)
from gitdrop.core.logging.utils import time_block
from gitdrop.core.repo.provisioner import RepoProvisioner
from gitdrop.core.schedule.models import CommitChunk, Schedule, ScheduledCommit
from gitdrop.core.schedule.store import ScheduleStore, build_schedule, new_schedule_id


@dataclass
class SchedulePlan:
    changed_files: list[str] = field(default_factory=list)
    chunks: list[CommitChunk] = field(default_factory=list)
    scheduled: list[ScheduledCommit] = field(default_factory=list)
    future: list[ScheduledCommit] = field(default_factory=list)
    past: list[ScheduledCommit] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.changed_files

    @property
    def future_files(self) -> list[str]:
        return [path for item in self.future for path in item.chunk.files]


def plan_schedule(
    config: ResolvedConfig,
    work_dir: Path,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> SchedulePlan:
    """
    Diff the source directory against a working copy and spread the resulting
    commits across the configured window.
    """
    with time_block("Change detection"):
        changed = detect_changed_files(config.source_dir, work_dir)

    if not changed:
        return SchedulePlan()

    chunks = chunk_files(changed, config.chunk_by)
    scheduled = distribute_chunks(
        chunks, config.window_start, config.window_end, rng
    )
    partitioned = partition_by_time(scheduled, now)

    logger.debug(
        f"Planned {len(scheduled)} commit(s): "
        f"{len(partitioned.future)} upcoming, {len(partitioned.past)} already elapsed"
    )

    return SchedulePlan(
        changed_files=changed,
        chunks=chunks,
        scheduled=scheduled,
        future=partitioned.future,
        past=partitioned.past,
    )


def stage_schedule(
    config: ResolvedConfig,
    plan: SchedulePlan,
    provisioner: RepoProvisioner,
    store: ScheduleStore,
) -> tuple[Schedule, Path]:
    """
    Copy the files of every upcoming commit into the working copy and persist
    the schedule the daemon will execute.
    """
    provisioner.copy_files(config.source_dir, plan.future_files)

    schedule_id = new_schedule_id()
    store.ensure_dirs()
    schedule = build_schedule(
        schedule_id,
        plan.future,
        remote=config.remote,
        source_dir=config.source_dir,
        work_dir=provisioner.work_dir,
        log_file=store.log_path(schedule_id),
        push_strategy=config.push_strategy,
        author=config.author,
    )
    return schedule, store.save(schedule)


def launch_daemon(schedule_path: Path) -> subprocess.Popen:
    """Start the daemon in its own session so it outlives this process."""
    cmd = [sys.executable, "-m", DAEMON_MODULE, str(schedule_path)]
    logger.debug(f"Launching daemon: {' '.join(cmd)}")
    return subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
