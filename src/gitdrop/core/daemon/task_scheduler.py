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

import sched
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from loguru import logger


@dataclass
class TaskHandle:
    event: sched.Event
    fire_at: datetime


class TaskScheduler:
    """
    Holds many independent, cancelable timed tasks and runs them one at a time.

    Backed by `sched.scheduler`, so every task runs on the calling thread and
    firings never overlap. A task whose time passed while another task was
    running fires as soon as that task returns.
    """

    def __init__(
        self,
        timefunc: Callable[[], float] = time.time,
        delayfunc: Callable[[float], object] = time.sleep,
    ):
        self._scheduler = sched.scheduler(timefunc, delayfunc)
        self._handles: list[TaskHandle] = []

    def schedule_at(self, fire_at: datetime, action: Callable, *args) -> TaskHandle:
        event = self._scheduler.enterabs(fire_at.timestamp(), 1, action, args)
        handle = TaskHandle(event=event, fire_at=fire_at)
        self._handles.append(handle)
        return handle

    def cancel(self, handle: TaskHandle) -> bool:
        try:
            self._scheduler.cancel(handle.event)
        except ValueError:
            # already fired or cancelled
            return False
        return True

    def cancel_all(self) -> int:
        cancelled = sum(1 for handle in self._handles if self.cancel(handle))
        self._handles.clear()
        if cancelled:
            logger.debug(f"Cancelled {cancelled} pending task(s)")
        return cancelled

    @property
    def pending(self) -> int:
        return len(self._scheduler.queue)

    def run(self) -> None:
        """Block until every task has fired or been cancelled."""
        self._scheduler.run()
