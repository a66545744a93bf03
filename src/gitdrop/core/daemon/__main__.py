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

"""
gitdrop daemon entry point.

Started detached by `gitdrop run` as:
    python -m gitdrop.core.daemon <schedule-file>
"""

from pathlib import Path

import typer
from loguru import logger

from gitdrop.core.daemon.daemon import ScheduleDaemon
from gitdrop.core.exceptions import GitdropError, ScheduleError
from gitdrop.core.logging.logging import setup_daemon_logger
from gitdrop.core.schedule.store import ScheduleStore
from gitdrop.runtimeutil import ensure_utf8_output

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
)


@app.command()
def main(
    schedule_file: Path = typer.Argument(
        ..., help="Schedule JSON written by 'gitdrop run'"
    ),
) -> None:
    """Fire every commit of a schedule at its scheduled time."""
    setup_daemon_logger()

    try:
        schedule = ScheduleStore.load(schedule_file)
    except ScheduleError as e:
        logger.error(f"[gitdrop-daemon] {e.message}")
        raise typer.Exit(1)

    setup_daemon_logger(Path(schedule.log_file))

    daemon = ScheduleDaemon(schedule, schedule_file)
    daemon.install_signal_handlers()

    try:
        exit_code = daemon.run()
    except GitdropError as e:
        logger.error(f"[FATAL] {e.message}")
        if e.details:
            logger.error(f"[FATAL] {e.details}")
        raise typer.Exit(1)

    raise typer.Exit(exit_code)


def run_daemon():
    ensure_utf8_output()
    app(prog_name="gitdrop-daemon")


if __name__ == "__main__":
    run_daemon()
