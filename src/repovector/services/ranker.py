"""Re-ranking and filtering of vector search matches."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from repovector.schemas import CodeChunk

# Entry points, manifests and conventional source-layout directories
IMPORTANT_MARKERS = (
    "main.go",
    "README.md",
    "go.mod",
    "handlers/",
    "models/",
    "routes/",
    "controllers/",
    "services/",
)

# Path fragments never worth summarizing
IGNORED_PATH_MARKERS = (".git/", "var/folders")

MIN_SUMMARY_CONTENT_CHARS = 10
SUMMARY_TOP_N = 3


def is_important(file_path: str) -> bool:
    return any(marker in file_path for marker in IMPORTANT_MARKERS)


def rank_results(matches: Iterable[CodeChunk | None]) -> list[CodeChunk]:
    """Move important-file matches ahead of the others.

    Both partitions keep the relevance order the store returned. Matches
    without content or path are dropped.

    Args:
        matches: Relevance-ordered matches from the vector store.

    Returns:
        Important matches followed by the remaining matches.
    """
    prioritized: list[CodeChunk] = []
    others: list[CodeChunk] = []

    for i, match in enumerate(matches):
        if match is None or not match.content or not match.file_path:
            logger.debug(f"Match {i} has no vector or metadata, dropping it")
            continue
        if is_important(match.file_path):
            prioritized.append(match)
        else:
            others.append(match)

    return prioritized + others


def filter_for_summary(
    chunks: Iterable[CodeChunk], top_n: int = SUMMARY_TOP_N
) -> list[CodeChunk]:
    """Select the chunks forwarded to the summarizer.

    Drops version-control paths and chunks with almost no content, then keeps
    the first ``top_n``.
    """
    selected: list[CodeChunk] = []
    if top_n <= 0:
        return selected

    for chunk in chunks:
        if chunk.file_path.startswith(".git") or any(
            marker in chunk.file_path for marker in IGNORED_PATH_MARKERS
        ):
            continue
        if len(chunk.content.strip()) < MIN_SUMMARY_CONTENT_CHARS:
            continue
        selected.append(chunk)
        if len(selected) == top_n:
            break
    return selected
