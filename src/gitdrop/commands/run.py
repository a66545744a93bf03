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

from pathlib import Path

import inquirer
import typer
from loguru import logger

from gitdrop.commands.common import get_store, load_resolved_config, print_plan
from gitdrop.core.exceptions import handle_gitdrop_exception
from gitdrop.core.logging.utils import time_block
from gitdrop.core.repo.provisioner import RepoProvisioner
from gitdrop.core.ui.theme import themed
from gitdrop.core.utils.time_utils import format_time
from gitdrop.pipelines.schedule_pipeline import (
    launch_daemon,
    plan_schedule,
    stage_schedule,
)


def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a custom config file"
    ),
    remote: str | None = typer.Option(None, "--remote", help="Git remote URL"),
    source_dir: str | None = typer.Option(
        None, "--source-dir", help="Local project directory"
    ),
    start: str | None = typer.Option(None, "--start", help="Window start (HH:MM)"),
    end: str | None = typer.Option(None, "--end", help="Window end (HH:MM)"),
    date: str | None = typer.Option(None, "--date", help="Window day (YYYY-MM-DD)"),
    chunk_by: str | None = typer.Option(
        None, "--chunk-by", help="per-directory, per-file or per-extension"
    ),
    push_strategy: str | None = typer.Option(
        None, "--push-strategy", help="immediate or batch"
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Schedule without asking for confirmation"
    ),
) -> None:
    """
    Schedule today's commits and start the background daemon.

    Examples:
        gitdrop run
        gitdrop run --start 13:00 --end 18:00 --push-strategy batch --yes
    """
    with handle_gitdrop_exception():
        resolved = load_resolved_config(
            ctx,
            "run",
            config,
            remote=remote,
            source_dir=source_dir,
            window_start=start,
            window_end=end,
            window_date=date,
            chunk_by=chunk_by,
            push_strategy=push_strategy,
        )

        logger.info(f"Cloning {resolved.remote}...")
        provisioner = RepoProvisioner(resolved.remote)
        work_dir = provisioner.setup(resolved.author)

        # the daemon owns the working copy once it is launched
        handed_off = False
        try:
            with time_block("Planning"):
                plan = plan_schedule(resolved, work_dir)

            if plan.empty:
                logger.info("No changes detected, the remote is up to date")
                return

            print_plan(resolved, plan)

            if not plan.future:
                logger.error(
                    themed("error", "Every commit falls before now, nothing to schedule")
                )
                logger.info("Pick a later window with --start/--end or --date")
                raise typer.Exit(1)

            if not yes and not inquirer.confirm(
                f"Schedule {len(plan.future)} commit(s)?", default=True
            ):
                logger.info("Aborted")
                return

            store = get_store()
            schedule, schedule_path = stage_schedule(resolved, plan, provisioner, store)
            process = launch_daemon(schedule_path)
            handed_off = True
        finally:
            if not handed_off:
                provisioner.cleanup()

        first = schedule.commits[0].scheduled_time
        last = schedule.commits[-1].scheduled_time
        logger.info(
            f"{themed('success', 'Scheduled')} {len(schedule.commits)} commit(s) "
            f"as {themed('primary', schedule.id)} (daemon pid {process.pid})"
        )
        logger.info(f"{themed('label', 'First:')} {format_time(first)}")
        logger.info(f"{themed('label', 'Last:')}  {format_time(last)}")
        logger.info(f"{themed('label', 'Log:')}   {schedule.log_file}")
        logger.info(f"Check progress with 'gitdrop status {schedule.id}'")
