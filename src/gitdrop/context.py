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

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

from pydantic import StringConstraints

from gitdrop.constants import ENV_APP_PREFIX, GLOBAL_CONFIG_FILE, LOCAL_CONFIG_FILE
from gitdrop.core.config.config_loader import ConfigLoader
from gitdrop.core.exceptions import ValidationError, path_not_found
from gitdrop.core.schedule.models import Author, ChunkStrategy, PushStrategy
from gitdrop.core.utils.time_utils import apply_hhmm, parse_date

HHMM = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\d{2}:\d{2}$")]
ISODate = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^\d{4}-\d{2}-\d{2}$")]
NonEmpty = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Email = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")]


@dataclass
class GitdropConfig:
    remote: NonEmpty
    source_dir: NonEmpty
    window_start: HHMM = "09:00"
    window_end: HHMM = "17:00"
    window_date: ISODate | None = None
    chunk_by: ChunkStrategy = "per-directory"
    push_strategy: PushStrategy = "immediate"
    author_name: NonEmpty | None = None
    author_email: Email | None = None
    verbose: bool = False
    silent: bool = False

    descriptions = {
        "remote": "Git remote URL (embed a token for auth: https://<TOKEN>@github.com/user/repo.git)",
        "source_dir": "Path to your local project, the source of truth",
        "window_start": "Start of the commit window (HH:MM)",
        "window_end": "End of the commit window (HH:MM)",
        "window_date": "Day of the window (YYYY-MM-DD), defaults to today",
        "chunk_by": "How to group files into commits: per-directory, per-file or per-extension",
        "push_strategy": "immediate (push after every commit) or batch (push once at the end)",
        "author_name": "Override the git author name shown on commits",
        "author_email": "Override the git author email shown on commits",
        "verbose": "Enable verbose logging output",
        "silent": "Do not output any text to the console",
    }

    @property
    def author(self) -> Author | None:
        if self.author_name and self.author_email:
            return Author(name=self.author_name, email=self.author_email)
        return None


@dataclass(frozen=True)
class ResolvedConfig:
    """A GitdropConfig with every relative value pinned down."""

    config: GitdropConfig
    source_dir: Path
    day: date
    window_start: datetime
    window_end: datetime

    @property
    def remote(self) -> str:
        return self.config.remote

    @property
    def chunk_by(self) -> ChunkStrategy:
        return self.config.chunk_by

    @property
    def push_strategy(self) -> PushStrategy:
        return self.config.push_strategy

    @property
    def author(self) -> Author | None:
        return self.config.author


def resolve_config(config: GitdropConfig, today: date | None = None) -> ResolvedConfig:
    source_dir = Path(config.source_dir).expanduser().resolve()
    if not source_dir.is_dir():
        raise path_not_found(str(source_dir))

    if config.window_date:
        day = parse_date(config.window_date)
    else:
        day = today or date.today()

    window_start = apply_hhmm(day, config.window_start)
    window_end = apply_hhmm(day, config.window_end)

    if window_end <= window_start:
        raise ValidationError(
            f"window_end ({config.window_end}) must be after window_start ({config.window_start})"
        )

    if bool(config.author_name) != bool(config.author_email):
        raise ValidationError(
            "author_name and author_email must be set together",
        )

    return ResolvedConfig(
        config=config,
        source_dir=source_dir,
        day=day,
        window_start=window_start,
        window_end=window_end,
    )


@dataclass(frozen=True)
class GlobalOptions:
    """Flags given to the top-level `gitdrop` callback."""

    verbose: bool = False
    silent: bool = False


def load_gitdrop_config(custom_config_path: Path | None = None, **input_args):
    """Merge every config source into a GitdropConfig. None-valued args are not overrides."""
    config_args = {key: item for key, item in input_args.items() if item is not None}

    return ConfigLoader.get_full_config(
        GitdropConfig,
        config_args,
        local_config_path=LOCAL_CONFIG_FILE,
        env_app_prefix=ENV_APP_PREFIX,
        global_config_path=GLOBAL_CONFIG_FILE,
        custom_config_path=custom_config_path,
    )
