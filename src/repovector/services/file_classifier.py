"""Decide which repository entries are indexed and which are skipped."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

# Maximum file size to include (whole content, in bytes)
MAX_DEFAULT_BYTES = 100_000

# Number of leading bytes inspected by the binary content sniff
SNIFF_BYTES = 1000

# Binary file extensions to skip
BINARY_EXTENSIONS = {
    # images
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".bmp",
    ".svg",
    ".ico",
    # archives
    ".zip",
    ".tar",
    ".gz",
    ".bz2",
    ".xz",
    ".7z",
    ".rar",
    # documents
    ".pdf",
    ".doc",
    ".docx",
    ".xls",
    ".xlsx",
    ".ppt",
    ".pptx",
    # audio / video
    ".mp3",
    ".mp4",
    ".mov",
    ".avi",
    ".mkv",
    ".wav",
    ".ogg",
    ".flac",
    # fonts
    ".ttf",
    ".otf",
    ".eot",
    ".woff",
    ".woff2",
    # executables and libraries
    ".so",
    ".dll",
    ".dylib",
    ".class",
    ".jar",
    ".exe",
    ".bin",
}

# Version-control metadata directories, pruned with their whole subtree.
# Any directory named ".git*" (.github, .gitlab) is pruned as well.
VCS_DIRECTORIES = {".git", ".hg", ".svn"}
VCS_DIRECTORY_PREFIX = ".git"

VCS_INDEX_FILENAME = "DIRC"
VCS_LOCK_MARKER = "index.lock"


@dataclass(frozen=True)
class SkipDecision:
    """Decision about whether to include a repository entry."""

    include: bool
    reason: str  # "ok" | "hidden" | "vcs" | "binary" | "too_large" | "binary_content"
    prune: bool = False  # directories only: do not descend


INCLUDE = SkipDecision(include=True, reason="ok")


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def is_vcs_path(rel_path: str) -> bool:
    """Check a relative path for version-control internals.

    Redundant with pruning VCS directories during the walk; also guards
    callers that classify bare paths.
    """
    return (
        ".git/" in rel_path
        or rel_path.startswith(".git")
        or rel_path == VCS_INDEX_FILENAME
        or VCS_LOCK_MARKER in rel_path
    )


def has_binary_extension(rel_path: str) -> bool:
    ext = posixpath.splitext(rel_path)[1].lower()
    return ext in BINARY_EXTENSIONS


def contains_binary_data(content: bytes) -> bool:
    """Sniff the first ``SNIFF_BYTES`` bytes for NUL or non-ASCII bytes.

    This is a heuristic: UTF-8 text with non-ASCII characters is reported as
    binary too.
    """
    return any(b == 0 or b > 127 for b in content[:SNIFF_BYTES])


def classify_directory(name: str) -> SkipDecision:
    """Classify a directory by its base name."""
    if name in VCS_DIRECTORIES or name.startswith(VCS_DIRECTORY_PREFIX):
        return SkipDecision(include=False, reason="vcs", prune=True)
    if is_hidden(name):
        return SkipDecision(include=False, reason="hidden")
    return INCLUDE


def classify_file(rel_path: str) -> SkipDecision:
    """Classify a file by its path alone, before reading it."""
    if is_hidden(posixpath.basename(rel_path)):
        return SkipDecision(include=False, reason="hidden")
    if has_binary_extension(rel_path):
        return SkipDecision(include=False, reason="binary")
    if is_vcs_path(rel_path):
        return SkipDecision(include=False, reason="vcs")
    return INCLUDE


def classify_content(content: bytes, max_bytes: int = MAX_DEFAULT_BYTES) -> SkipDecision:
    """Classify a file by its full content."""
    if len(content) > max_bytes:
        return SkipDecision(include=False, reason="too_large")
    if contains_binary_data(content):
        return SkipDecision(include=False, reason="binary_content")
    return INCLUDE


def should_skip(
    rel_path: str,
    is_dir: bool,
    content: bytes | None = None,
    max_bytes: int = MAX_DEFAULT_BYTES,
) -> SkipDecision:
    """Classify a repository entry.

    Args:
        rel_path: Path relative to the repository root, "/"-separated.
        is_dir: Whether the entry is a directory.
        content: File content, when already read. Without it only the
            path-based checks run.
        max_bytes: Size ceiling for file content.

    Returns:
        SkipDecision for the entry.
    """
    if is_dir:
        return classify_directory(posixpath.basename(rel_path))

    decision = classify_file(rel_path)
    if not decision.include or content is None:
        return decision
    return classify_content(content, max_bytes)
