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

from collections.abc import Sequence

from loguru import logger

from gitdrop.core.exceptions import ChunkingError, ValidationError
from gitdrop.core.schedule.models import ChunkStrategy, CommitChunk

from .groupers import GROUPERS
from .interface import FileGrouper, MessageStrategy
from .messages import infer_message


class Chunker:
    """Turns changed files into ordered commit chunks."""

    def __init__(
        self, grouper: FileGrouper, message_strategy: MessageStrategy = infer_message
    ):
        self.grouper = grouper
        self.message_strategy = message_strategy

    def chunk(self, files: Sequence[str]) -> list[CommitChunk]:
        if not files:
            return []

        known = set(files)
        chunks = []
        for group in self.grouper.group(files):
            if not group.files:
                continue
            unknown = [f for f in group.files if f not in known]
            if unknown:
                raise ChunkingError(
                    f"Group '{group.label}' contains files that were not changed",
                    ", ".join(unknown),
                )
            chunks.append(
                CommitChunk(
                    files=tuple(group.files),
                    label=group.label,
                    message=self.message_strategy(group.files, group.directory),
                )
            )

        logger.debug(f"Chunking: files={len(files)} chunks={len(chunks)}")
        return chunks


def create_chunker(
    strategy: ChunkStrategy = "per-directory",
    message_strategy: MessageStrategy = infer_message,
) -> Chunker:
    grouper_cls = GROUPERS.get(strategy)
    if grouper_cls is None:
        raise ValidationError(
            f"Unknown chunk strategy: {strategy}",
            f"Expected one of: {', '.join(GROUPERS)}",
        )
    return Chunker(grouper_cls(), message_strategy)


def chunk_files(
    files: Sequence[str], strategy: ChunkStrategy = "per-directory"
) -> list[CommitChunk]:
    return create_chunker(strategy).chunk(files)
