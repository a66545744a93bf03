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

from datetime import timedelta

from gitdrop.core.daemon.completion import CompletionTracker
from gitdrop.core.daemon.task_scheduler import TaskScheduler


def make_scheduler(clock):
    return TaskScheduler(timefunc=clock.time, delayfunc=clock.sleep)


def test_tasks_fire_in_time_order(fake_clock, base_time):
    scheduler = make_scheduler(fake_clock)
    fired = []

    scheduler.schedule_at(base_time + timedelta(minutes=30), fired.append, "late")
    scheduler.schedule_at(base_time, fired.append, "early")
    scheduler.schedule_at(base_time + timedelta(minutes=5), fired.append, "middle")
    scheduler.run()

    assert fired == ["early", "middle", "late"]
    assert fake_clock.now >= (base_time + timedelta(minutes=30)).timestamp()


def test_overdue_tasks_fire_immediately(fake_clock, base_time):
    scheduler = make_scheduler(fake_clock)
    fired = []

    scheduler.schedule_at(base_time - timedelta(hours=2), fired.append, 1)
    scheduler.schedule_at(base_time - timedelta(hours=1), fired.append, 2)
    scheduler.run()

    assert fired == [1, 2]
    assert all(s <= 0 for s in fake_clock.sleeps)


def test_cancel_single_task(fake_clock, base_time):
    scheduler = make_scheduler(fake_clock)
    fired = []

    keep = scheduler.schedule_at(base_time, fired.append, "keep")
    drop = scheduler.schedule_at(base_time, fired.append, "drop")

    assert scheduler.cancel(drop)
    assert not scheduler.cancel(drop)
    scheduler.run()

    assert fired == ["keep"]
    assert not scheduler.cancel(keep)


def test_cancel_all_reports_count(fake_clock, base_time):
    scheduler = make_scheduler(fake_clock)
    fired = []
    for i in range(4):
        scheduler.schedule_at(base_time + timedelta(minutes=i), fired.append, i)

    assert scheduler.pending == 4
    assert scheduler.cancel_all() == 4
    assert scheduler.pending == 0
    scheduler.run()

    assert fired == []


def test_cancel_all_from_inside_a_task(fake_clock, base_time):
    scheduler = make_scheduler(fake_clock)
    fired = []

    def first():
        fired.append("first")
        scheduler.cancel_all()

    scheduler.schedule_at(base_time, first)
    scheduler.schedule_at(base_time + timedelta(minutes=1), fired.append, "second")
    scheduler.run()

    assert fired == ["first"]


# -----------------------------------------------------------------------------
# CompletionTracker
# -----------------------------------------------------------------------------


def test_tracker_fires_once_at_total():
    calls = []
    tracker = CompletionTracker(2, lambda: calls.append("done"))

    tracker.mark_done()
    assert calls == []
    tracker.mark_done()
    tracker.mark_done()
    tracker.check()

    assert calls == ["done"]
    assert tracker.done


def test_tracker_with_zero_total_fires_on_check():
    calls = []
    tracker = CompletionTracker(0, lambda: calls.append("done"))

    tracker.check()
    tracker.check()

    assert calls == ["done"]
