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

import posixpath
from collections.abc import Sequence

from gitdrop.constants import PROJECT_METADATA_FILES


def is_project_metadata(path: str) -> bool:
    return posixpath.basename(path).lower() in PROJECT_METADATA_FILES


def infer_message(files: Sequence[str], directory: str | None = None) -> str:
    """
    Synthesize a plausible commit message from file names alone.

    This is a naming heuristic, not a summary of the change.
    """
    if directory:
        return f"Update {directory}"

    if len(files) == 1:
        return f"Update {posixpath.basename(files[0])}"

    if any(is_project_metadata(f) for f in files):
        return "Update project config"

    return f"Update {len(files)} files"
