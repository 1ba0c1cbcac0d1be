"""Capabilities the services consume from vendor SDKs.

Production adapters live in ``embeddings``, ``vector_store`` and ``summary``;
tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np

from repovector.schemas import CodeChunk


class EmbeddingPort(Protocol):
    async def embed(self, text: str) -> np.ndarray:
        """Return a float32 embedding for ``text``.

        Raises:
            EmbeddingError: On empty input or vendor failure.
        """
        ...


class VectorStorePort(Protocol):
    async def store(self, chunk: CodeChunk) -> None:
        """Persist one embedded chunk.

        Raises:
            ValidationError: On empty content or missing embedding.
            VectorStoreError: On vendor failure.
        """
        ...

    async def search(
        self, vector: np.ndarray, repository: str, branch: str, limit: int
    ) -> list[CodeChunk]:
        """Return up to ``limit`` ranked chunks of ``(repository, branch)``.

        Raises:
            ValidationError: On an empty vector or non-positive limit.
            VectorStoreError: On vendor failure.
        """
        ...

    async def delete_repository(self, repository: str, branch: str) -> int:
        """Remove every chunk of ``(repository, branch)``; return the count."""
        ...


class SummaryPort(Protocol):
    async def summarize(self, chunks: list[CodeChunk], query: str) -> str:
        """Answer ``query`` from ``chunks``.

        Raises:
            SummaryError: On vendor failure.
        """
        ...
