import re

from repovector.core.errors import ValidationError


def sanitize_text_for_postgres(text: str | None) -> str | None:
    """Remove NUL bytes from text to make it compatible with PostgreSQL.

    PostgreSQL text fields cannot contain NUL (0x00) bytes. The binary sniff
    only inspects the head of a file, so NUL bytes can still reach storage
    from further down.

    Args:
        text: The text to sanitize, or None.

    Returns:
        Sanitized text with NUL bytes removed, or None if input was None.
    """
    if text is None:
        return None
    return text.replace("\x00", "")


def bytes_human(num_bytes: float) -> str:
    """Convert bytes to human-readable format.

    Args:
        num_bytes: Number of bytes.

    Returns:
        Human-readable string (e.g., "1.5 KB").
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if num_bytes < 1024.0:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.1f} TB"


def repository_from_url(repo_url: str) -> str:
    """Derive the canonical ``owner/name`` identity of a repository URL.

    The last two non-empty path segments are used as owner and name, and a
    trailing ``.git`` is stripped from the name. scp-style URLs
    (``git@github.com:owner/name.git``) are split on the colon as well.

    Args:
        repo_url: Clone URL of the repository.

    Returns:
        The ``owner/name`` string.

    Raises:
        ValidationError: If owner or name cannot be derived.
    """
    segments = [s for s in re.split(r"[/:]", repo_url.strip()) if s]
    if len(segments) < 2:
        raise ValidationError(f"Cannot derive repository from URL: {repo_url!r}")

    owner, name = segments[-2], segments[-1]
    name = name.removesuffix(".git")
    if not owner or not name:
        raise ValidationError(f"Cannot derive repository from URL: {repo_url!r}")

    return f"{owner}/{name}"
