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

"""Background process that fires scheduled commits."""

from .completion import CompletionTracker
from .daemon import DaemonInterrupted, ScheduleDaemon, ScheduledTask
from .executor import CommitExecutor
from .task_scheduler import TaskHandle, TaskScheduler

__all__ = [
    "CommitExecutor",
    "CompletionTracker",
    "DaemonInterrupted",
    "ScheduleDaemon",
    "ScheduledTask",
    "TaskHandle",
    "TaskScheduler",
]
