#!/usr/bin/env python3
"""CLI tool for cloning a GitHub repository and indexing it."""

import argparse
import asyncio
import sys

from dotenv import load_dotenv
from loguru import logger

from repovector.core.config import Settings, get_settings
from repovector.core.logging import configure_logging
from repovector.schemas import DEFAULT_BRANCH, IngestRequest
from repovector.services.embeddings import EmbeddingService
from repovector.services.ingestion import IngestionService
from repovector.services.vector_store import PgVectorStore


async def index_and_report(
    settings: Settings,
    repo_url: str,
    branch: str,
    max_file_size: int,
    chunk_chars: int,
    clear_existing: bool,
) -> int:
    """Index a repository and return the number of stored chunks.

    Args:
        settings: Loaded settings with vendor and database configuration.
        repo_url: URL of the GitHub repository to index.
        branch: Branch to index.
        max_file_size: Maximum file size in bytes to include.
        chunk_chars: Maximum characters per chunk.
        clear_existing: Delete previously indexed chunks of the branch first.

    Returns:
        Number of chunks stored.

    Raises:
        RepoVectorError: If cloning, walking or storage fails.
    """
    store = PgVectorStore.from_url(str(settings.SQLALCHEMY_DATABASE_URI))
    embedder = EmbeddingService(
        settings.EMBEDDING_MODEL,
        api_key=settings.API_KEY,
        api_base=settings.API_BASE,
    )
    ingestion_service = IngestionService(
        embedder,
        store,
        max_file_bytes=max_file_size,
        max_chunk_chars=chunk_chars,
    )

    try:
        request = IngestRequest.parse(
            repoUrl=repo_url, branch=branch, clear_existing=clear_existing
        )
        result = await ingestion_service.index_repository(request)
        logger.info(f"Repository stats: {result['stats']}")
        return result["stats"]["chunks_stored"]

    except Exception as e:
        logger.error(f"Failed to index repository: {e}")
        raise

    finally:
        await store.close()


def main() -> int:
    """Run the indexing CLI."""
    load_dotenv()
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Clone a GitHub repository and index its contents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Index the default branch
  %(prog)s https://github.com/owner/repo

  # Index another branch with a 50KB file size ceiling
  %(prog)s https://github.com/owner/repo --branch develop --max-bytes 51200
        """,
    )

    parser.add_argument(
        "repo_url",
        help="GitHub repository URL (e.g., https://github.com/owner/repo)",
    )

    parser.add_argument(
        "--branch",
        default=DEFAULT_BRANCH,
        help=f"Branch to index (default: {DEFAULT_BRANCH})",
    )

    parser.add_argument(
        "--max-bytes",
        type=int,
        default=settings.MAX_FILE_BYTES,
        help=f"Maximum file size in bytes to include (default: {settings.MAX_FILE_BYTES})",
    )

    parser.add_argument(
        "--chunk-chars",
        type=int,
        default=settings.MAX_CHUNK_CHARS,
        help=f"Maximum characters per chunk (default: {settings.MAX_CHUNK_CHARS})",
    )

    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Do not delete previously indexed chunks of this branch",
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Log level (default: {settings.LOG_LEVEL})",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if not args.repo_url.startswith(("https://github.com/", "git@github.com:")):
        logger.error(
            "Invalid repository URL. Must start with "
            "'https://github.com/' or 'git@github.com:'"
        )
        return 1

    try:
        num_indexed = asyncio.run(
            index_and_report(
                settings,
                args.repo_url,
                args.branch,
                args.max_bytes,
                args.chunk_chars,
                not args.keep_existing,
            )
        )

        if num_indexed > 0:
            logger.success(f"Successfully indexed {num_indexed} chunks")
            return 0
        else:
            logger.warning("No chunks were indexed")
            return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
