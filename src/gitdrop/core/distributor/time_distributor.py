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
Spread commits across a time window so they look like incremental work.

Jitter strategy:
  - Time jitter: up to 20% of the interval between commits, capped at
    18 minutes, so gaps look irregular (47 min, 1h 23min, 58min) instead of
    robotic (1h 00min, 1h 00min, 1h 00min). The draw is biased slightly
    negative: people tend to commit a little before a mental deadline.
  - Seconds jitter: 0-59 seconds so timestamps don't land on :00.

The cap keeps adjacent base slots from crossing and keeps commits near the
window. The final sort is only a safety net.
"""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from loguru import logger

from gitdrop.constants import JITTER_RATIO, MAX_JITTER_SECONDS
from gitdrop.core.schedule.models import CommitChunk, ScheduledCommit

# uniform draw bounds for the jitter factor; mean is -0.075
JITTER_LOW = -1.0
JITTER_HIGH = 0.85


def jitter_cap(interval: timedelta) -> timedelta:
    """Largest allowed deviation from a base slot, before seconds jitter."""
    return min(interval * JITTER_RATIO, timedelta(seconds=MAX_JITTER_SECONDS))


def distribute_evenly(
    start: datetime, end: datetime, n: int, rng: random.Random | None = None
) -> list[datetime]:
    """Return n strictly ascending timestamps spread across [start, end]."""
    if n < 0:
        raise ValueError(f"Cannot distribute a negative number of commits: {n}")
    if n == 0:
        return []

    rng = rng or random.Random()

    if n == 1:
        mid = start + (end - start) / 2
        return [mid.replace(second=rng.randint(0, 59), microsecond=0)]

    # n+1 gaps so commits don't bunch at the edges
    interval = (end - start) / (n + 1)
    cap = jitter_cap(interval)

    times: list[datetime] = []
    for i in range(1, n + 1):
        base = start + interval * i
        jitter = cap * rng.uniform(JITTER_LOW, JITTER_HIGH)
        seconds_jitter = timedelta(seconds=rng.randint(0, 59))
        times.append((base + jitter + seconds_jitter).replace(microsecond=0))

    times.sort()
    # very short windows can still collide once truncated to whole seconds
    for i in range(1, len(times)):
        if times[i] <= times[i - 1]:
            times[i] = times[i - 1] + timedelta(seconds=1)
    return times


def distribute_chunks(
    chunks: Sequence[CommitChunk],
    start: datetime,
    end: datetime,
    rng: random.Random | None = None,
) -> list[ScheduledCommit]:
    """Assign each chunk a wall-clock firing time inside [start, end]."""
    times = distribute_evenly(start, end, len(chunks), rng)
    logger.debug(f"Distributed {len(chunks)} chunk(s) between {start} and {end}")
    return [
        ScheduledCommit(chunk=chunk, scheduled_time=when)
        for chunk, when in zip(chunks, times, strict=True)
    ]


@dataclass
class PartitionedCommits:
    future: list[ScheduledCommit] = field(default_factory=list)
    past: list[ScheduledCommit] = field(default_factory=list)


def partition_by_time(
    scheduled: Sequence[ScheduledCommit], now: datetime | None = None
) -> PartitionedCommits:
    """Split commits into those still ahead of `now` and those already elapsed."""
    now = now or datetime.now().astimezone()
    result = PartitionedCommits()
    for item in scheduled:
        if item.scheduled_time > now:
            result.future.append(item)
        else:
            result.past.append(item)
    return result
