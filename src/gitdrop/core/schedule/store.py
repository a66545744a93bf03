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
import secrets
import time
from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from gitdrop.core.exceptions import ScheduleError, schedule_not_found

from .models import Author, CommitResult, PushStrategy, Schedule, ScheduleRecord, ScheduledCommit


def new_schedule_id() -> str:
    """Hex epoch seconds plus a short random suffix, e.g. '671a2c3fb1e4'."""
    return f"{int(time.time()):x}{secrets.token_hex(2)}"


def build_schedule(
    schedule_id: str,
    scheduled: Sequence[ScheduledCommit],
    *,
    remote: str,
    source_dir: Path,
    work_dir: Path,
    log_file: Path,
    push_strategy: PushStrategy,
    author: Author | None = None,
) -> Schedule:
    return Schedule(
        id=schedule_id,
        remote=remote,
        source_dir=str(source_dir),
        work_dir=str(work_dir),
        author=author,
        push_strategy=push_strategy,
        log_file=str(log_file),
        commits=[
            ScheduleRecord(
                scheduled_time=item.scheduled_time,
                files=list(item.chunk.files),
                message=item.chunk.message,
            )
            for item in scheduled
        ],
    )


def results_path_for(log_file: str | Path) -> Path:
    log_file = Path(log_file)
    return log_file.with_name(f"{log_file.stem}-results.json")


def interrupted_path_for(log_file: str | Path) -> Path:
    log_file = Path(log_file)
    return log_file.with_name(f"{log_file.stem}-interrupted.json")


class ScheduleStore:
    """
    On-disk layout for schedules and everything the daemon leaves behind.

    home/
      schedules/<id>.json
      logs/<id>.log
      logs/<id>-results.json
      logs/<id>-interrupted.json
    """

    def __init__(self, home: Path):
        self.home = Path(home)
        self.schedule_dir = self.home / "schedules"
        self.log_dir = self.home / "logs"

    def ensure_dirs(self) -> None:
        self.schedule_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def schedule_path(self, schedule_id: str) -> Path:
        return self.schedule_dir / f"{schedule_id}.json"

    def log_path(self, schedule_id: str) -> Path:
        return self.log_dir / f"{schedule_id}.log"

    def results_path(self, schedule_id: str) -> Path:
        return results_path_for(self.log_path(schedule_id))

    def interrupted_path(self, schedule_id: str) -> Path:
        return interrupted_path_for(self.log_path(schedule_id))

    def save(self, schedule: Schedule) -> Path:
        self.ensure_dirs()
        path = self.schedule_path(schedule.id)
        path.write_text(
            json.dumps(schedule.to_json_dict(), indent=2), encoding="utf-8"
        )
        logger.debug(f"Saved schedule {schedule.id} to {path}")
        return path

    @staticmethod
    def load(path: Path) -> Schedule:
        path = Path(path)
        if not path.is_file():
            raise schedule_not_found(str(path))
        try:
            return Schedule.model_validate_json(path.read_text(encoding="utf-8"))
        except (PydanticValidationError, UnicodeDecodeError) as e:
            raise ScheduleError(f"Cannot parse schedule file: {path}", str(e)) from e
        except OSError as e:
            raise ScheduleError(f"Cannot read schedule file: {path}", str(e)) from e

    def list_ids(self) -> list[str]:
        """Ids with a schedule, results or interrupted marker, oldest first."""
        ids = {p.stem for p in self.schedule_dir.glob("*.json")}
        for suffix in ("-results.json", "-interrupted.json"):
            ids.update(
                p.name[: -len(suffix)] for p in self.log_dir.glob(f"*{suffix}")
            )
        return sorted(ids)

    def load_results(self, schedule_id: str) -> list[CommitResult] | None:
        path = self.results_path(schedule_id)
        if not path.is_file():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        return [CommitResult.model_validate(item) for item in data]

    def load_interrupted(self, schedule_id: str) -> dict | None:
        path = self.interrupted_path(schedule_id)
        if not path.is_file():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def read_log_tail(self, schedule_id: str, lines: int = 10) -> list[str]:
        path = self.log_path(schedule_id)
        if not path.is_file():
            return []
        content = path.read_text(encoding="utf-8").strip()
        return content.splitlines()[-lines:] if content else []
