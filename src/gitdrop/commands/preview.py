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

import typer
from loguru import logger

from gitdrop.commands.common import load_resolved_config, print_plan
from gitdrop.core.exceptions import handle_gitdrop_exception
from gitdrop.core.logging.utils import time_block
from gitdrop.core.repo.provisioner import RepoProvisioner
from gitdrop.pipelines.schedule_pipeline import plan_schedule


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
) -> None:
    """
    Show the commits gitdrop would make, without scheduling anything.

    Examples:
        gitdrop preview
        gitdrop preview --start 10:00 --end 12:30 --chunk-by per-file
    """
    with handle_gitdrop_exception():
        resolved = load_resolved_config(
            ctx,
            "preview",
            config,
            remote=remote,
            source_dir=source_dir,
            window_start=start,
            window_end=end,
            window_date=date,
            chunk_by=chunk_by,
            push_strategy=push_strategy,
        )

        logger.info(f"Cloning {resolved.remote} to compare against...")
        provisioner = RepoProvisioner(resolved.remote)
        try:
            work_dir = provisioner.setup()
            with time_block("Planning"):
                plan = plan_schedule(resolved, work_dir)
        finally:
            provisioner.cleanup()

        if plan.empty:
            logger.info("No changes detected, the remote is up to date")
            return

        print_plan(resolved, plan)
