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

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_path, user_log_path

APP_NAME = "gitdrop"
ENV_APP_PREFIX = APP_NAME.upper() + "_"
LOG_DIR = Path(user_log_path(appname=APP_NAME))

CONFIG_FILENAME = "gitdropconfig.toml"

GLOBAL_CONFIG_FILE = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
LOCAL_CONFIG_FILE = Path(CONFIG_FILENAME)

# where schedules, daemon logs and results live
GITDROP_HOME = Path(os.environ.get("GITDROP_HOME") or user_data_path(APP_NAME))

DAEMON_MODULE = "gitdrop.core.daemon"

# directories never walked by the change detector
NOISE_DIRECTORIES = frozenset(
    {
        ".git",
        "node_modules",
        ".next",
        "dist",
        "build",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
    }
)

# basenames (lowercase) that mark a group as project configuration
PROJECT_METADATA_FILES = frozenset(
    {
        "package.json",
        "tsconfig.json",
        "pyproject.toml",
        "setup.py",
        "setup.cfg",
        "requirements.txt",
        "cargo.toml",
        "go.mod",
        "pom.xml",
        "build.gradle",
        ".gitignore",
        ".env",
        "readme.md",
        "makefile",
        "dockerfile",
    }
)

ROOT_BUCKET = "."
ROOT_LABEL = "root"
NO_EXTENSION_BUCKET = "misc"

JITTER_RATIO = 0.20
MAX_JITTER_SECONDS = 18 * 60

NOTHING_STAGED_MESSAGE = (
    "No changes detected - files may already be identical to remote HEAD"
)
