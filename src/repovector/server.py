"""MCP server for repository indexing and semantic code search.

Exposes the indexing and search services as tools via the Model Context
Protocol, so AI assistants like Claude Code, Cursor and VS Code agents can
index a GitHub repository and ask questions about it.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from loguru import logger

from repovector.core.config import get_settings
from repovector.core.errors import RepoVectorError
from repovector.core.logging import configure_logging
from repovector.schemas import (
    DEFAULT_BRANCH,
    DEFAULT_LIMIT,
    ApiResponse,
    IngestRequest,
    SearchRequest,
)
from repovector.services.embeddings import EmbeddingService
from repovector.services.ingestion import IngestionService
from repovector.services.search import SearchService
from repovector.services.summary import SummaryService
from repovector.services.vector_store import PgVectorStore

SERVER_NAME = "repovector"
SERVER_VERSION = "0.1.0"

mcp = FastMCP(SERVER_NAME)


@dataclass
class Services:
    ingestion: IngestionService
    search: SearchService


@lru_cache
def get_services() -> Services:
    """Wire the services from settings on first use."""
    settings = get_settings()
    embedder = EmbeddingService(
        settings.EMBEDDING_MODEL,
        api_key=settings.API_KEY,
        api_base=settings.API_BASE,
    )
    store = PgVectorStore.from_url(str(settings.SQLALCHEMY_DATABASE_URI))
    summarizer = SummaryService(
        settings.CHAT_MODEL,
        api_key=settings.API_KEY,
        api_base=settings.API_BASE,
        temperature=settings.SUMMARY_TEMPERATURE,
        max_tokens=settings.SUMMARY_MAX_TOKENS,
    )
    return Services(
        ingestion=IngestionService(
            embedder,
            store,
            max_file_bytes=settings.MAX_FILE_BYTES,
            max_chunk_chars=settings.MAX_CHUNK_CHARS,
        ),
        search=SearchService(embedder, store, summarizer),
    )


def failure(error: RepoVectorError) -> dict[str, Any]:
    logger.error(f"{type(error).__name__}: {error}")
    return ApiResponse(success=False, message=str(error)).model_dump()


async def search_code(
    query: str,
    repository: str,
    branch: str = DEFAULT_BRANCH,
    limit: int = DEFAULT_LIMIT,
) -> dict[str, Any]:
    """Search an indexed repository for code related to a query.

    Args:
        query: What you are looking for, in natural language or code terms.
        repository: Repository as "owner/name".
        branch: Indexed branch (default "main").
        limit: Maximum number of chunks to return (default 10).

    Returns:
        {success, data: {chunks}, message} with important files ranked first.
    """
    try:
        request = SearchRequest.parse(
            query=query, repository=repository, branch=branch, limit=limit
        )
        chunks = await get_services().search.search(request)
    except RepoVectorError as e:
        return failure(e)

    return ApiResponse(
        success=True,
        data={"chunks": [chunk.to_dict() for chunk in chunks]},
        message=f"Found {len(chunks)} chunks",
    ).model_dump()


async def search_with_summary(
    query: str,
    repository: str,
    branch: str = DEFAULT_BRANCH,
    limit: int = DEFAULT_LIMIT,
) -> dict[str, Any]:
    """Search an indexed repository and answer the query from the best matches.

    Args:
        query: Question about the repository.
        repository: Repository as "owner/name".
        branch: Indexed branch (default "main").
        limit: Number of candidates retrieved before filtering (default 10).

    Returns:
        {success, data: {chunks, summary, metadata}, message}.
    """
    try:
        request = SearchRequest.parse(
            query=query, repository=repository, branch=branch, limit=limit
        )
        result = await get_services().search.search_with_summary(request)
    except RepoVectorError as e:
        return failure(e)

    return ApiResponse(
        success=True, data=result.to_dict(), message="Summary generated"
    ).model_dump()


async def index_repository(repo_url: str, branch: str = DEFAULT_BRANCH) -> dict[str, Any]:
    """Clone a GitHub repository and index its files for search.

    Args:
        repo_url: Clone URL, e.g. https://github.com/owner/name.
        branch: Branch to index (default "main").

    Returns:
        {success, data: {repository, branch, stats}, message}.
    """
    try:
        request = IngestRequest.parse(repoUrl=repo_url, branch=branch)
        result = await get_services().ingestion.index_repository(request)
    except RepoVectorError as e:
        return failure(e)

    return ApiResponse(
        success=True, data=result, message="Repository indexed successfully"
    ).model_dump()


async def health() -> dict[str, Any]:
    """Report server name, version and available tools."""
    return ApiResponse(
        success=True,
        data={
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "capabilities": [
                "search_code",
                "search_with_summary",
                "index_repository",
            ],
        },
        message="ok",
    ).model_dump()


mcp.tool()(search_code)
mcp.tool()(search_with_summary)
mcp.tool()(index_repository)
mcp.tool()(health)


def main() -> None:
    load_dotenv()
    configure_logging(get_settings().LOG_LEVEL)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
