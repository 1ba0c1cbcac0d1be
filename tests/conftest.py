"""Shared fakes for the embedding, vector store and summary capabilities."""

from __future__ import annotations

import numpy as np
import pytest

from repovector.core.errors import EmbeddingError, ValidationError
from repovector.schemas import CodeChunk
from repovector.services.ranker import rank_results


class FakeEmbedder:
    """Returns a fixed vector; fails for texts containing ``fail_marker``."""

    def __init__(self, fail_marker: str | None = None) -> None:
        self.fail_marker = fail_marker
        self.calls: list[str] = []

    async def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        if not text or not text.strip():
            raise EmbeddingError("Cannot generate embedding for empty text")
        if self.fail_marker and self.fail_marker in text:
            raise EmbeddingError("vendor unavailable")
        return np.array([0.1, 0.2, 0.3], dtype=np.float32)


class FakeStore:
    """In-memory store; ``search`` ranks the preset ``matches``."""

    def __init__(self, matches: list[CodeChunk | None] | None = None) -> None:
        self.stored: list[CodeChunk] = []
        self.matches = matches or []
        self.deleted: list[tuple[str, str]] = []
        self.search_calls: list[tuple[str, str, int]] = []

    async def store(self, chunk: CodeChunk) -> None:
        if not chunk.content:
            raise ValidationError("Cannot store chunk with empty content")
        if chunk.embedding is None or len(chunk.embedding) == 0:
            raise ValidationError("missing embedding")
        self.stored.append(chunk)

    async def search(
        self, vector: np.ndarray, repository: str, branch: str, limit: int
    ) -> list[CodeChunk]:
        if vector is None or len(vector) == 0:
            raise ValidationError("Search vector is empty")
        if limit <= 0:
            raise ValidationError("Search limit must be positive")
        self.search_calls.append((repository, branch, limit))
        return rank_results(self.matches[:limit])

    async def delete_repository(self, repository: str, branch: str) -> int:
        self.deleted.append((repository, branch))
        before = len(self.stored)
        self.stored = [
            c
            for c in self.stored
            if (c.repository, c.branch) != (repository, branch)
        ]
        return before - len(self.stored)


class FakeSummarizer:
    def __init__(self, answer: str = "It is a web shop.", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[tuple[list[CodeChunk], str]] = []

    async def summarize(self, chunks: list[CodeChunk], query: str) -> str:
        self.calls.append((list(chunks), query))
        if self.error:
            raise self.error
        return self.answer


def make_chunk(file_path: str, content: str = "package main\n\nfunc main() {}") -> CodeChunk:
    return CodeChunk(
        content=content,
        file_path=file_path,
        repository="acme/widgets",
        branch="main",
        language="Go",
    )


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def summarizer() -> FakeSummarizer:
    return FakeSummarizer()
