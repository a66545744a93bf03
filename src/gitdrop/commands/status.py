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

from datetime import datetime

import typer
from loguru import logger

from gitdrop.commands.common import get_store
from gitdrop.core.exceptions import ScheduleError, ValidationError, handle_gitdrop_exception
from gitdrop.core.schedule.models import CommitResult
from gitdrop.core.schedule.store import ScheduleStore
from gitdrop.core.ui.theme import themed
from gitdrop.core.utils.time_utils import format_time


def match_ids(store: ScheduleStore, prefix: str | None) -> list[str]:
    ids = store.list_ids()
    if prefix is None:
        return ids
    return [schedule_id for schedule_id in ids if schedule_id.startswith(prefix)]


def resolve_id(store: ScheduleStore, prefix: str) -> str:
    """Exactly one schedule id must start with `prefix`."""
    matches = match_ids(store, prefix)
    if not matches:
        raise ValidationError(f"No schedule matches '{prefix}'")
    if len(matches) > 1:
        raise ValidationError(
            f"'{prefix}' is ambiguous",
            "Matches: " + ", ".join(matches),
        )
    return matches[0]


def describe_result(result: CommitResult) -> str:
    if result.success:
        mark = themed("success", "✓")
        detail = themed("hash", result.commit_hash[:7])
    else:
        mark = themed("error", "✗")
        detail = themed("muted", result.error or "failed")
    return (
        f"  {mark} {format_time(result.scheduled_time)}  {result.message}  {detail}"
    )


def print_complete(schedule_id: str, results: list[CommitResult]) -> None:
    ok = sum(1 for r in results if r.success)
    logger.info(
        f"{themed('primary', schedule_id)}  {themed('success', 'Complete')}  "
        f"{ok}/{len(results)} committed"
    )
    for result in results:
        logger.info(describe_result(result))


def print_interrupted(schedule_id: str, marker: dict) -> None:
    results = [CommitResult.model_validate(item) for item in marker.get("results", [])]
    logger.info(
        f"{themed('primary', schedule_id)}  {themed('warn', 'Interrupted')}  "
        f"{len(results)}/{marker.get('total', '?')} fired before "
        f"{marker.get('signal', 'a signal')} at {marker.get('interruptedAt', '?')}"
    )
    for result in results:
        logger.info(describe_result(result))
    logger.info(f"  {themed('label', 'Working copy:')} {marker.get('workDir')}")
    logger.info(f"  {themed('label', 'Schedule:')}     {marker.get('scheduleFile')}")
    logger.info(f"  Run 'gitdrop clean {schedule_id}' to remove them")


def print_running(store: ScheduleStore, schedule_id: str) -> None:
    try:
        schedule = store.load(store.schedule_path(schedule_id))
    except ScheduleError as e:
        logger.info(f"{themed('primary', schedule_id)}  {themed('error', 'Unknown')}")
        logger.info(f"  {e.message}")
        return

    now = datetime.now().astimezone()
    pending = [c for c in schedule.commits if c.scheduled_time > now]
    logger.info(
        f"{themed('primary', schedule_id)}  {themed('info', 'Running')}  "
        f"{len(schedule.commits) - len(pending)}/{len(schedule.commits)} due"
    )
    for commit in pending:
        logger.info(
            f"  {themed('muted', '…')} {format_time(commit.scheduled_time)}  {commit.message}"
        )

    tail = store.read_log_tail(schedule_id)
    if tail:
        logger.info(f"  {themed('label', 'Recent log:')}")
        for line in tail:
            logger.info(f"    {themed('muted', line)}")


def show_status(store: ScheduleStore, schedule_id: str) -> None:
    results = store.load_results(schedule_id)
    if results is not None:
        print_complete(schedule_id, results)
        return

    marker = store.load_interrupted(schedule_id)
    if marker is not None:
        print_interrupted(schedule_id, marker)
        return

    print_running(store, schedule_id)


def main(
    schedule_id: str | None = typer.Argument(
        None, help="Schedule id or prefix. Shows every schedule when omitted."
    ),
) -> None:
    """
    Show the state of scheduled runs.

    Examples:
        gitdrop status
        gitdrop status 671a2c
    """
    with handle_gitdrop_exception():
        store = get_store()
        ids = match_ids(store, schedule_id)

        if not ids:
            if schedule_id is None:
                logger.info("No schedules found")
            else:
                raise ValidationError(f"No schedule matches '{schedule_id}'")
            return

        for index, found in enumerate(ids):
            if index:
                logger.info("")
            show_status(store, found)
