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

import shutil
from pathlib import Path

import inquirer
import typer
from loguru import logger

from gitdrop.commands.common import get_store
from gitdrop.commands.status import resolve_id
from gitdrop.core.exceptions import FileSystemError, ScheduleError, handle_gitdrop_exception
from gitdrop.core.schedule.store import ScheduleStore
from gitdrop.core.ui.theme import themed


def leftover_paths(store: ScheduleStore, schedule_id: str) -> list[Path]:
    """Working copy and schedule file still on disk for `schedule_id`."""
    schedule_path = store.schedule_path(schedule_id)
    work_dir: str | None = None

    marker = store.load_interrupted(schedule_id)
    if marker is not None:
        work_dir = marker.get("workDir")

    if work_dir is None:
        try:
            work_dir = store.load(schedule_path).work_dir
        except ScheduleError:
            work_dir = None

    paths = []
    if work_dir and Path(work_dir).exists():
        paths.append(Path(work_dir))
    if schedule_path.exists():
        paths.append(schedule_path)
    return paths


def remove_paths(paths: list[Path]) -> None:
    failed = []
    for path in paths:
        try:
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink(missing_ok=True)
            logger.debug(f"Removed {path}")
        except OSError as e:
            failed.append(f"  - {path}: {e}")

    if failed:
        raise FileSystemError("Could not remove every leftover path", "\n".join(failed))


def main(
    schedule_id: str = typer.Argument(..., help="Schedule id or prefix to clean up."),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Remove without asking for confirmation"
    ),
) -> None:
    """
    Remove the working copy and schedule left by an interrupted or crashed daemon.

    Logs and results are kept so 'gitdrop status' still reports the run.

    Examples:
        gitdrop clean 671a2c
        gitdrop clean 671a2c --yes
    """
    with handle_gitdrop_exception():
        store = get_store()
        found = resolve_id(store, schedule_id)
        paths = leftover_paths(store, found)

        if not paths:
            logger.info(f"Nothing to clean for {found}")
            return

        for path in paths:
            logger.info(f"  {themed('muted', str(path))}")

        if store.load_interrupted(found) is None and store.load_results(found) is None:
            logger.warning(
                themed("warn", f"{found} has no interrupted marker, its daemon may still be running")
            )

        if not yes and not inquirer.confirm(
            f"Remove {len(paths)} leftover path(s) for {found}?", default=False
        ):
            logger.info("Aborted")
            return

        remove_paths(paths)
        logger.info(f"{themed('success', 'Cleaned')} {found}")
