"""Walk a cloned repository and index every accepted file."""

from __future__ import annotations

import os
import pathlib

from loguru import logger

from repovector.core.errors import RepoVectorError, WalkError
from repovector.schemas import CodeChunk, WalkStats
from repovector.services.chunker import DEFAULT_MAX_CHUNK_CHARS, split_into_chunks
from repovector.services.file_classifier import (
    MAX_DEFAULT_BYTES,
    classify_content,
    classify_directory,
    classify_file,
)
from repovector.services.languages import language_for_path
from repovector.services.ports import EmbeddingPort, VectorStorePort


class RepositoryWalker:
    """Indexes the files of a repository tree one chunk at a time."""

    def __init__(
        self,
        embedder: EmbeddingPort,
        store: VectorStorePort,
        max_file_bytes: int = MAX_DEFAULT_BYTES,
        max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.max_file_bytes = max_file_bytes
        self.max_chunk_chars = max_chunk_chars

    async def walk(self, root: str | os.PathLike, repository: str, branch: str) -> WalkStats:
        """Walk ``root`` in path order and store the chunks of accepted files.

        Failures on single files or chunks are logged and skipped.

        Args:
            root: Repository checkout to walk.
            repository: Canonical ``owner/name`` of the repository.
            branch: Branch the checkout belongs to.

        Returns:
            Counters for this walk.

        Raises:
            WalkError: If ``root`` cannot be listed.
        """
        root_path = pathlib.Path(root)
        stats = WalkStats()

        try:
            entries = self._list_dir(root_path)
        except OSError as e:
            raise WalkError(f"Cannot walk repository root {root_path}: {e}") from e

        logger.info(f"Walking {root_path} for {repository}@{branch}")
        await self._walk_entries(entries, root_path, repository, branch, stats)

        logger.info(
            f"Directory processing complete. Total files: {stats.files_seen}, "
            f"Skipped: {stats.skipped}, Processed: {stats.processed}, "
            f"Chunks stored: {stats.chunks_stored}"
        )
        return stats

    @staticmethod
    def _list_dir(path: pathlib.Path) -> list[os.DirEntry]:
        with os.scandir(path) as it:
            return sorted(it, key=lambda entry: entry.name)

    async def _walk_entries(
        self,
        entries: list[os.DirEntry],
        root: pathlib.Path,
        repository: str,
        branch: str,
        stats: WalkStats,
    ) -> None:
        for entry in entries:
            stats.files_seen += 1
            path = pathlib.Path(entry.path)
            rel = path.relative_to(root).as_posix()

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.warning(f"Error accessing path {rel}: {e}")
                stats.skipped += 1
                continue

            if is_dir:
                decision = classify_directory(entry.name)
                if not decision.include:
                    logger.debug(f"Skipping {decision.reason} directory: {rel}")
                    stats.skipped += 1
                    if decision.prune:
                        continue
                try:
                    children = self._list_dir(path)
                except OSError as e:
                    logger.warning(f"Error reading directory {rel}: {e}")
                    stats.skipped += 1
                    continue
                await self._walk_entries(children, root, repository, branch, stats)
                continue

            if await self._process_file(path, rel, repository, branch, stats):
                stats.processed += 1
                if stats.processed % 10 == 0:
                    logger.info(f"Processed {stats.processed} files so far...")
            else:
                stats.skipped += 1

    async def _process_file(
        self,
        path: pathlib.Path,
        rel: str,
        repository: str,
        branch: str,
        stats: WalkStats,
    ) -> bool:
        """Index one file; return False when it is skipped."""
        decision = classify_file(rel)
        if not decision.include:
            logger.debug(f"Skipping {decision.reason} file: {rel}")
            return False

        try:
            raw = path.read_bytes()
        except OSError as e:
            logger.warning(f"Error reading file {rel}: {e}")
            return False

        decision = classify_content(raw, self.max_file_bytes)
        if not decision.include:
            logger.debug(f"Skipping {decision.reason} file: {rel} ({len(raw)} bytes)")
            return False

        content = raw.decode("utf-8", errors="replace")
        chunks = split_into_chunks(content, self.max_chunk_chars)
        if not chunks:
            logger.debug(f"Skipping empty file: {rel}")
            return False

        language = language_for_path(rel)
        logger.debug(f"Processing file {rel} ({language}, {len(chunks)} chunks)")

        stored = 0
        failed = 0
        for i, text in enumerate(chunks):
            if not text.strip():
                continue
            try:
                embedding = await self.embedder.embed(text)
                await self.store.store(
                    CodeChunk(
                        content=text,
                        file_path=rel,
                        repository=repository,
                        branch=branch,
                        language=language,
                        chunk_index=i,
                        embedding=embedding,
                    )
                )
            except RepoVectorError as e:
                logger.warning(f"Failed to index chunk {i} of {rel}: {e}")
                stats.chunks_failed += 1
                failed += 1
                continue

            stats.chunks_stored += 1
            stored += 1
            if i % 10 == 0:
                logger.debug(f"Indexed chunk {i} for file: {rel}")

        if not stored and not failed:
            logger.debug(f"Skipping whitespace-only file: {rel}")
        return stored > 0 and failed == 0
