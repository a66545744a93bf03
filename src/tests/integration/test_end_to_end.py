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
import random
from datetime import date, datetime

from gitdrop.context import GitdropConfig, resolve_config
from gitdrop.core.daemon.daemon import ScheduleDaemon
from gitdrop.core.daemon.task_scheduler import TaskScheduler
from gitdrop.core.repo.provisioner import RepoProvisioner
from gitdrop.core.schedule.store import ScheduleStore
from gitdrop.pipelines.schedule_pipeline import plan_schedule, stage_schedule


def run_pipeline(tmp_path, remote, source, push_strategy, clock_factory):
    config = resolve_config(
        GitdropConfig(
            remote=str(remote),
            source_dir=str(source),
            chunk_by="per-directory",
            push_strategy=push_strategy,
            author_name="Ada",
            author_email="ada@example.com",
        ),
        today=date(2025, 3, 14),
    )
    provisioner = RepoProvisioner(config.remote)
    work_dir = provisioner.setup(config.author)
    plan = plan_schedule(config, work_dir, now=config.window_start, rng=random.Random(5))
    store = ScheduleStore(tmp_path / "home")
    schedule, schedule_path = stage_schedule(config, plan, provisioner, store)

    clock = clock_factory(config.window_start)
    scheduler = TaskScheduler(timefunc=clock.time, delayfunc=clock.sleep)
    daemon = ScheduleDaemon(ScheduleStore.load(schedule_path), schedule_path, scheduler=scheduler)
    return daemon, schedule, schedule_path, work_dir


class Clock:
    def __init__(self, start: datetime):
        self.now = start.timestamp()

    def time(self):
        return self.now

    def sleep(self, seconds):
        self.now += max(seconds, 0)


def test_full_run_against_seeded_remote(tmp_path, seeded_remote, write_tree, run_git):
    source = write_tree(
        tmp_path / "project",
        {
            "README.md": "# demo\n",
            "src/app.py": "print('v2')\n",
            "docs/guide.md": "guide\n",
            "package.json": "{}\n",
        },
    )

    daemon, schedule, schedule_path, work_dir = run_pipeline(
        tmp_path, seeded_remote, source, "immediate", Clock
    )
    assert [c.message for c in schedule.commits] == [
        "Update docs",
        "Update package.json",
        "Update src",
    ]

    assert daemon.run() == 0

    results = json.loads(daemon.results_file.read_text())
    assert [r["success"] for r in results] == [True, True, True]

    log = run_git(seeded_remote, "log", "--format=%s|%an", "main").splitlines()
    assert log == [
        "Update src|Ada",
        "Update package.json|Ada",
        "Update docs|Ada",
        "Initial commit|gitdrop tests",
    ]
    assert not work_dir.exists()
    assert not schedule_path.exists()


def test_unchanged_file_is_skipped_and_batch_pushed(tmp_path, bare_remote, write_tree, run_git):
    source = write_tree(
        tmp_path / "project",
        {"a/one.txt": "1\n", "b/two.txt": "2\n"},
    )

    daemon, schedule, schedule_path, work_dir = run_pipeline(
        tmp_path, bare_remote, source, "batch", Clock
    )
    # someone already committed a/ in the working copy, so its firing has nothing to stage
    run_git(work_dir, "add", "a/one.txt")
    run_git(work_dir, "commit", "-m", "pre-existing")

    assert daemon.run() == 0

    results = json.loads(daemon.results_file.read_text())
    assert [r["success"] for r in results] == [False, True]
    assert results[0]["commitHash"] == ""
    assert "No changes detected" in results[0]["error"]

    branch = run_git(bare_remote, "for-each-ref", "--format=%(refname:short)", "refs/heads").split()
    assert len(branch) == 1
    log = run_git(bare_remote, "log", "--format=%s", branch[0]).splitlines()
    assert log == ["Update b", "pre-existing"]
    assert not work_dir.exists()


def test_six_files_in_two_directories_make_two_commits(tmp_path, bare_remote, write_tree, run_git):
    source = write_tree(
        tmp_path / "project",
        {
            "src/a.py": "a\n",
            "src/b.py": "b\n",
            "src/c.py": "c\n",
            "docs/one.md": "1\n",
            "docs/two.md": "2\n",
            "docs/three.md": "3\n",
        },
    )

    daemon, schedule, schedule_path, work_dir = run_pipeline(
        tmp_path, bare_remote, source, "immediate", Clock
    )

    assert [c.message for c in schedule.commits] == ["Update docs", "Update src"]
    assert sorted(f for c in schedule.commits for f in c.files) == sorted(
        ["src/a.py", "src/b.py", "src/c.py", "docs/one.md", "docs/two.md", "docs/three.md"]
    )
    times = [c.scheduled_time for c in schedule.commits]
    assert times == sorted(times)
    assert times[0] < times[1]
    window_start = datetime(2025, 3, 14, 9, 0).astimezone()
    window_end = datetime(2025, 3, 14, 17, 0).astimezone()
    assert all(window_start <= t <= window_end for t in times)

    assert daemon.run() == 0

    branch = run_git(bare_remote, "for-each-ref", "--format=%(refname:short)", "refs/heads").split()
    log = run_git(bare_remote, "log", "--format=%s", branch[0]).splitlines()
    assert log == ["Update src", "Update docs"]
