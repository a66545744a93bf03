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
Logging configuration for gitdrop.

The CLI logs to the console and to a rotating debug file under the user log
directory. The daemon logs each event as one bracketed-timestamp line in the
schedule's own log file.
"""

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger
from rich.console import Console

from gitdrop.constants import LOG_DIR


def setup_logger(command_name: str, debug: bool = False, silent: bool = False) -> Path:
    """
    Set up logging for a CLI command.

    Args:
        command_name: Name of the command being executed
        debug: Show debug output on the console
        silent: Do not log to the console at all

    Returns:
        Path to the log file
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    logfile = LOG_DIR / f"{command_name}_{timestamp}.log"

    # Clear existing sinks so we don't double-log across runs
    logger.remove()

    if not silent:
        console = Console(highlight=False)

        def console_sink(message):
            console.print(
                message.record["message"].rstrip("\n"), markup=False, soft_wrap=True
            )

        logger.add(
            console_sink, level="DEBUG" if debug else "INFO", format="{message}"
        )

    logger.add(
        logfile,
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}",
        rotation="5 MB",
        retention="7 days",
        catch=True,
    )

    logger.debug(f"Initialized logger for {command_name} -> {logfile}")
    return logfile


def _daemon_format(record) -> str:
    record["extra"]["iso"] = record["time"].isoformat(timespec="milliseconds")
    return "[{extra[iso]}] {message}\n{exception}"


def setup_daemon_logger(log_file: Path | None = None) -> None:
    """
    Log daemon events as `[<ISO-8601>] message` lines.

    Before the schedule is loaded there is no log file, so events go to
    stderr only.
    """
    logger.remove()
    if log_file is None:
        logger.add(sys.stderr, level="INFO", format=_daemon_format)
        return

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logger.add(log_file, level="INFO", format=_daemon_format, mode="a", catch=True)
    logger.add(sys.stdout, level="INFO", format=_daemon_format)
