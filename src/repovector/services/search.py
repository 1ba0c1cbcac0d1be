"""Query path: embed, retrieve, re-rank and summarize."""

from __future__ import annotations

from loguru import logger

from repovector.schemas import CodeChunk, SearchRequest, SearchSummary
from repovector.services.ports import EmbeddingPort, SummaryPort, VectorStorePort
from repovector.services.ranker import filter_for_summary


class SearchService:
    """Semantic search over indexed repositories."""

    def __init__(
        self,
        embedder: EmbeddingPort,
        store: VectorStorePort,
        summarizer: SummaryPort,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.summarizer = summarizer

    async def search(self, request: SearchRequest) -> list[CodeChunk]:
        """Return up to ``request.limit`` chunks, important files first.

        Raises:
            EmbeddingError: If the query cannot be embedded.
            VectorStoreError: If the store query fails.
        """
        vector = await self.embedder.embed(request.query)
        chunks = await self.store.search(
            vector, request.repository, request.branch, request.limit
        )
        logger.info(f"Found {len(chunks)} chunks from vector store")
        return chunks

    async def search_with_summary(self, request: SearchRequest) -> SearchSummary:
        """Search, keep the top relevant chunks and summarize them.

        Raises:
            EmbeddingError: If the query cannot be embedded.
            VectorStoreError: If the store query fails.
            SummaryError: If summary generation fails.
        """
        chunks = await self.search(request)
        top_chunks = filter_for_summary(chunks)
        logger.info(
            f"Summarizing {len(top_chunks)} of {len(chunks)} chunks "
            f"for query: {request.query!r}"
        )

        summary = await self.summarizer.summarize(top_chunks, request.query)

        return SearchSummary(
            chunks=top_chunks,
            summary=summary,
            metadata={
                "repository": request.repository,
                "branch": request.branch,
                "query": request.query,
            },
        )
