"""pgvector-backed storage and similarity search for code chunks."""

from __future__ import annotations

import hashlib
from datetime import datetime

import numpy as np
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import delete, select

from repovector.core.errors import ValidationError, VectorStoreError
from repovector.core.utils import sanitize_text_for_postgres
from repovector.models import CodeChunkRecord, tz
from repovector.schemas import CodeChunk
from repovector.services.ranker import rank_results


def chunk_id(chunk: CodeChunk) -> str:
    """Stable id of a chunk: one row per repository, branch, file and position."""
    key = "\0".join(
        [chunk.repository, chunk.branch, chunk.file_path, str(chunk.chunk_index)]
    )
    return hashlib.sha1(key.encode("utf-8")).hexdigest()


def create_engine(database_url: str) -> AsyncEngine:
    """Create an async database engine."""
    if "+psycopg://" in database_url:
        database_url = database_url.replace("+psycopg://", "+psycopg_async://")

    return create_async_engine(
        database_url,
        echo=False,
        pool_size=20,
        max_overflow=40,
        pool_pre_ping=True,
    )


def record_to_chunk(record: CodeChunkRecord | None) -> CodeChunk | None:
    """Convert a stored row to a result chunk, without its embedding."""
    if record is None or record.embedding is None:
        return None
    return CodeChunk(
        content=record.content,
        file_path=record.file_path,
        repository=record.repository,
        branch=record.branch,
        language=record.language,
        chunk_index=record.chunk_index,
    )


class PgVectorStore:
    """Vector store on PostgreSQL with the pgvector extension."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        logger.info("Initialized PgVectorStore")

    @classmethod
    def from_url(cls, database_url: str) -> PgVectorStore:
        return cls(create_engine(database_url))

    async def store(self, chunk: CodeChunk) -> None:
        """Insert or replace one embedded chunk.

        Raises:
            ValidationError: If content is empty or the embedding is missing.
            VectorStoreError: If the database write fails.
        """
        if not chunk.content:
            raise ValidationError("Cannot store chunk with empty content")
        if chunk.embedding is None or len(chunk.embedding) == 0:
            raise ValidationError(f"Chunk of {chunk.file_path} has no embedding")

        now = datetime.now(tz)
        record = CodeChunkRecord(
            id=chunk_id(chunk),
            repository=chunk.repository,
            branch=chunk.branch,
            file_path=chunk.file_path,
            language=chunk.language,
            chunk_index=chunk.chunk_index,
            content=sanitize_text_for_postgres(chunk.content),
            embedding=chunk.embedding,
            created_at=now,
            updated_at=now,
        )

        try:
            async with AsyncSession(self.engine) as session:
                await session.merge(record)
                await session.commit()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to store chunk: {e}") from e

        logger.debug(
            f"Stored chunk {chunk.chunk_index} of {chunk.file_path} "
            f"for repository {chunk.repository}"
        )

    async def search(
        self, vector: np.ndarray, repository: str, branch: str, limit: int
    ) -> list[CodeChunk]:
        """Return up to ``limit`` nearest chunks of one repository branch.

        Results are ordered by cosine distance and then re-ranked so that
        important files come first.

        Raises:
            ValidationError: If the vector is empty or limit is not positive.
            VectorStoreError: If the query fails.
        """
        if vector is None or len(vector) == 0:
            raise ValidationError("Search vector is empty")
        if limit <= 0:
            raise ValidationError(f"Search limit must be positive, got {limit}")

        logger.info(
            f"Searching repository={repository}, branch={branch} with limit={limit}"
        )

        statement = (
            select(CodeChunkRecord)
            .where(CodeChunkRecord.repository == repository)
            .where(CodeChunkRecord.branch == branch)
            .order_by(CodeChunkRecord.embedding.cosine_distance(vector))
            .limit(limit)
        )

        try:
            async with AsyncSession(self.engine) as session:
                result = await session.execute(statement)
                records = result.scalars().all()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Search failed: {e}") from e

        logger.info(f"Query returned {len(records)} matches")
        return rank_results(record_to_chunk(record) for record in records)

    async def delete_repository(self, repository: str, branch: str) -> int:
        """Delete all chunks of a repository branch.

        Returns:
            Number of records deleted.
        """
        statement = (
            delete(CodeChunkRecord)
            .where(CodeChunkRecord.repository == repository)
            .where(CodeChunkRecord.branch == branch)
        )
        try:
            async with AsyncSession(self.engine) as session:
                result = await session.execute(statement)
                await session.commit()
        except SQLAlchemyError as e:
            raise VectorStoreError(f"Failed to delete repository data: {e}") from e

        deleted_count = result.rowcount
        logger.info(f"Deleted {deleted_count} records for {repository}@{branch}")
        return deleted_count

    async def close(self) -> None:
        """Close the database engine and cleanup resources."""
        await self.engine.dispose()
        logger.info("PgVectorStore closed")
