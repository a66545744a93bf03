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

from gitdrop.constants import GITDROP_HOME
from gitdrop.context import GlobalOptions, ResolvedConfig, load_gitdrop_config, resolve_config
from gitdrop.core.logging.logging import setup_logger
from gitdrop.core.schedule.models import ScheduledCommit
from gitdrop.core.schedule.store import ScheduleStore
from gitdrop.core.ui.theme import themed
from gitdrop.core.utils.time_utils import format_date, format_time
from gitdrop.pipelines.schedule_pipeline import SchedulePlan


def get_store() -> ScheduleStore:
    return ScheduleStore(GITDROP_HOME)


def load_resolved_config(
    ctx: typer.Context,
    command_name: str,
    custom_config_path: Path | None,
    **overrides,
) -> ResolvedConfig:
    options: GlobalOptions = ctx.obj or GlobalOptions()

    config, used_sources, _ = load_gitdrop_config(
        custom_config_path,
        verbose=options.verbose or None,
        silent=options.silent or None,
        **overrides,
    )

    # config files and env may turn on verbose/silent after the callback ran
    if (config.verbose, config.silent) != (options.verbose, options.silent):
        setup_logger(command_name, debug=config.verbose, silent=config.silent)

    logger.debug(f"Used {used_sources} to build config")
    return resolve_config(config)


def describe_commit(index: int, total: int, item: ScheduledCommit, skipped: bool = False) -> str:
    files = item.chunk.files
    shown = ", ".join(files[:3])
    if len(files) > 3:
        shown += f" (+{len(files) - 3} more)"

    prefix = f"{themed('skip', '[SKIP]')} " if skipped else ""
    when = themed("muted" if skipped else "value", format_time(item.scheduled_time))
    return (
        f"  {prefix}{index}/{total}  {when}  "
        f"{themed('primary', item.chunk.message)}\n"
        f"      {themed('muted', shown)}"
    )


def print_plan(config: ResolvedConfig, plan: SchedulePlan) -> None:
    past = {id(item) for item in plan.past}
    total = len(plan.scheduled)

    logger.info(
        f"{themed('label', 'Window:')} {format_date(config.day)} "
        f"{format_time(config.window_start)} - {format_time(config.window_end)}"
    )
    logger.info(
        f"{themed('label', 'Changed files:')} {len(plan.changed_files)}  "
        f"{themed('label', 'Commits:')} {total}  "
        f"{themed('label', 'Push:')} {config.push_strategy}"
    )
    for index, item in enumerate(plan.scheduled, start=1):
        logger.info(describe_commit(index, total, item, skipped=id(item) in past))

    if plan.past:
        logger.warning(
            themed(
                "warn",
                f"{len(plan.past)} commit(s) fall before now and will be skipped",
            )
        )
