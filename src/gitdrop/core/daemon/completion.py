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

from collections.abc import Callable


class CompletionTracker:
    """Counts completion events and triggers `on_complete` exactly once."""

    def __init__(self, total: int, on_complete: Callable[[], None]):
        self.total = total
        self.completed = 0
        self._on_complete = on_complete
        self._triggered = False

    @property
    def done(self) -> bool:
        return self._triggered

    def mark_done(self) -> None:
        self.completed += 1
        self.check()

    def check(self) -> None:
        if not self._triggered and self.completed >= self.total:
            self._triggered = True
            self._on_complete()
