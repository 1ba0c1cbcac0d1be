"""Repository ingestion: clone, walk, embed and store."""

from __future__ import annotations

import asyncio
import pathlib
import shutil
import tempfile
from collections.abc import Callable
from typing import Any

from loguru import logger

from repovector.core.utils import bytes_human, repository_from_url
from repovector.schemas import IngestRequest
from repovector.services.chunker import DEFAULT_MAX_CHUNK_CHARS
from repovector.services.file_classifier import MAX_DEFAULT_BYTES
from repovector.services.git import git_clone
from repovector.services.ports import EmbeddingPort, VectorStorePort
from repovector.services.walker import RepositoryWalker

CloneFn = Callable[[str, str, str], None]


class IngestionService:
    """Service for indexing repositories into the vector store."""

    def __init__(
        self,
        embedder: EmbeddingPort,
        store: VectorStorePort,
        clone: CloneFn = git_clone,
        max_file_bytes: int = MAX_DEFAULT_BYTES,
        max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS,
    ) -> None:
        """Initialize the ingestion service.

        Args:
            embedder: Embedding capability.
            store: Vector store capability.
            clone: Callable cloning ``(repo_url, dest_dir, branch)``.
            max_file_bytes: Maximum file size in bytes to include.
            max_chunk_chars: Maximum characters per chunk.
        """
        self.store = store
        self.clone = clone
        self.walker = RepositoryWalker(
            embedder,
            store,
            max_file_bytes=max_file_bytes,
            max_chunk_chars=max_chunk_chars,
        )
        logger.info(
            f"Initialized IngestionService with max file size: "
            f"{bytes_human(max_file_bytes)}, chunk size: {max_chunk_chars} chars"
        )

    async def index_repository(self, request: IngestRequest) -> dict[str, Any]:
        """Clone a repository into a private temporary directory and index it.

        The temporary directory is removed whether indexing succeeds or not.

        Args:
            request: Validated ingestion request.

        Returns:
            Repository identity, branch and walk counters.

        Raises:
            ValidationError: If the repository identity cannot be derived.
            CloneError: If cloning fails.
            WalkError: If the checkout cannot be walked.
            VectorStoreError: If clearing previous data fails.
        """
        repository = repository_from_url(request.repo_url)
        branch = request.branch

        tmpdir = tempfile.mkdtemp(prefix="repovector_")
        repo_dir = pathlib.Path(tmpdir, "repo")

        try:
            logger.info(f"Indexing repository: {request.repo_url}, branch: {branch}")
            await asyncio.to_thread(self.clone, request.repo_url, str(repo_dir), branch)
            logger.info(f"Cloned repository to: {repo_dir}")

            if request.clear_existing:
                deleted = await self.store.delete_repository(repository, branch)
                if deleted:
                    logger.info(
                        f"Cleared {deleted} existing records for {repository}@{branch}"
                    )

            stats = await self.walker.walk(repo_dir, repository, branch)

        finally:
            shutil.rmtree(tmpdir, ignore_errors=True)
            logger.debug(f"Cleaned up temporary directory: {tmpdir}")

        return {
            "repository": repository,
            "branch": branch,
            "stats": stats.as_dict(),
        }
