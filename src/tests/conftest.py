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

from datetime import datetime, timedelta
from pathlib import Path

import pytest
from loguru import logger


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


class FakeClock:
    """A clock for sched.scheduler that jumps forward instead of sleeping."""

    def __init__(self, start: datetime):
        self.now = start.timestamp()
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if seconds > 0:
            self.now += seconds


@pytest.fixture(autouse=True)
def quiet_logger():
    # keep loguru sinks from leaking between tests
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def write_tree():
    """Create files (relative path -> text content) under a root directory."""
    return _write_tree


@pytest.fixture
def base_time() -> datetime:
    return datetime(2025, 3, 14, 9, 0).astimezone()


@pytest.fixture
def fake_clock(base_time) -> FakeClock:
    return FakeClock(base_time - timedelta(minutes=1))
