"""Line-bounded text chunking."""

DEFAULT_MAX_CHUNK_CHARS = 1000


def split_into_chunks(content: str, max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS) -> list[str]:
    """Split text into chunks on line boundaries.

    Lines are accumulated while the chunk, including its separating newlines,
    stays within ``max_chunk_chars``. A line that alone exceeds the limit
    becomes its own chunk and is never cut. Joining the result with ``"\\n"``
    reproduces ``content`` exactly.

    Args:
        content: Text to split.
        max_chunk_chars: Maximum characters per chunk.

    Returns:
        Ordered list of chunks; empty for empty content.

    Raises:
        ValueError: If max_chunk_chars is smaller than 1.
    """
    if max_chunk_chars < 1:
        raise ValueError(f"max_chunk_chars must be positive, got {max_chunk_chars}")
    if not content:
        return []

    chunks: list[str] = []
    current: list[str] = []
    current_size = 0  # characters in current, plus one separator per line

    for line in content.split("\n"):
        line_size = len(line)
        if current and current_size + line_size > max_chunk_chars:
            chunks.append("\n".join(current))
            current = [line]
            current_size = line_size + 1
        else:
            current.append(line)
            current_size += line_size + 1

    if current:
        chunks.append("\n".join(current))

    return chunks
