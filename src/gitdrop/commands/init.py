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

from gitdrop.constants import CONFIG_FILENAME
from gitdrop.core.exceptions import ConfigurationError, handle_gitdrop_exception
from gitdrop.core.ui.theme import themed

CONFIG_TEMPLATE = """\
# gitdrop configuration
# Values here can be overridden by GITDROP_* environment variables and CLI flags.

# Remote to publish to. Embed a token for auth:
#   https://<TOKEN>@github.com/user/repo.git
remote = "https://github.com/user/repo.git"

# Local project directory, the source of truth
source_dir = "."

# Commit window for today (HH:MM, local time)
window_start = "09:00"
window_end = "17:00"

# Day of the window (YYYY-MM-DD), defaults to today
# window_date = "2025-01-31"

# per-directory | per-file | per-extension
chunk_by = "per-directory"

# immediate: push after every commit | batch: push once at the end
push_strategy = "immediate"

# Optional author identity for the generated commits
# author_name = "Your Name"
# author_email = "you@example.com"
"""


def write_template(output: Path) -> Path:
    if output.exists():
        raise ConfigurationError(
            f"{output} already exists",
            "Remove it first or choose another path",
        )
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    return output


def main(
    output: Path = typer.Argument(
        Path(CONFIG_FILENAME), help="Where to write the config template."
    ),
) -> None:
    """
    Write a commented gitdropconfig.toml template.

    Examples:
        gitdrop init
        gitdrop init ~/configs/blog.toml
    """
    with handle_gitdrop_exception():
        path = write_template(output)
        logger.info(f"{themed('success', 'Created')} {path}")
        logger.info("Edit it, then run 'gitdrop preview' to see the schedule")
